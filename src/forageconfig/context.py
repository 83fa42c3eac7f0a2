"""Configuration context.

Owns the registry, the value sources and the runtime selection. A host
builds one context at startup and passes it to every module config; code
that does not care can share the lazily created default context.

Usage:
    context = ConfigContext.from_env()
    config = DataSourceConfig("ds1", context=context)
    url = config.jdbc_url()
"""

import logging
import os
import re
import threading
from importlib import resources
from pathlib import Path
from typing import Callable, Mapping, Optional, Union

from .interfaces import RuntimeType, ValueSource
from .properties import parse_properties, read_properties
from .registry import ConfigRegistry
from .sources import (
    EnvironmentSource,
    PropertiesSource,
    create_runtime_source,
    detect_runtime,
)

logger = logging.getLogger(__name__)

CONFIG_DIR_PROPERTY = "forage.config.dir"
CONFIG_DIR_ENV_VAR = "FORAGE_CONFIG_DIR"

NAMED_PROPERTY_REGEXP = r"forage\.(.+)\.%s\..+"

HostSettings = Union[Mapping[str, str], Callable[[str], Optional[str]]]


class ConfigContext:
    """Everything needed to resolve configuration for one process.

    Args:
        environ: Environment mapping (defaults to ``os.environ``).
        system_properties: Process-level properties.
        runtime: Host runtime; probed once when not given.
        host_settings: Settings handed in by the host runtime.
        working_dir: Directory used for relative file lookups.
        resource_package: Package searched for module files before the
            packaged defaults.
    """

    def __init__(
        self,
        environ: Optional[Mapping[str, str]] = None,
        system_properties: Optional[dict[str, str]] = None,
        runtime: Optional[RuntimeType] = None,
        host_settings: Optional[HostSettings] = None,
        working_dir: Optional[Union[str, Path]] = None,
        resource_package: Optional[str] = None,
    ):
        self.environ = environ
        self.system_properties: dict[str, str] = (
            system_properties if system_properties is not None else {}
        )
        self.runtime = runtime if runtime is not None else detect_runtime()
        self.working_dir = Path(working_dir) if working_dir is not None else None
        self.resource_package = resource_package

        sources: list[ValueSource] = [
            EnvironmentSource(environ),
            PropertiesSource(self.system_properties),
        ]
        runtime_source = create_runtime_source(
            self.runtime, directory=self.working_dir, host_settings=host_settings
        )
        if runtime_source is not None:
            sources.append(runtime_source)
        self.registry = ConfigRegistry(sources)
        logger.debug("Config context created for runtime %s", self.runtime.value)

    @classmethod
    def from_env(cls) -> "ConfigContext":
        """Create a context bound to the real process environment."""
        return cls()

    @classmethod
    def for_testing(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        system_properties: Optional[dict[str, str]] = None,
        runtime: RuntimeType = RuntimeType.MAIN,
        host_settings: Optional[HostSettings] = None,
        working_dir: Optional[Union[str, Path]] = None,
        resource_package: Optional[str] = None,
    ) -> "ConfigContext":
        """Create an isolated context that ignores the real environment."""
        return cls(
            environ=environ if environ is not None else {},
            system_properties=system_properties,
            runtime=runtime,
            host_settings=host_settings,
            working_dir=working_dir,
            resource_package=resource_package,
        )

    def _env(self, key: str) -> Optional[str]:
        environ = os.environ if self.environ is None else self.environ
        return environ.get(key)

    def _cwd(self) -> Path:
        return self.working_dir if self.working_dir is not None else Path.cwd()

    def config_dir(self) -> Optional[Path]:
        configured = self.system_properties.get(CONFIG_DIR_PROPERTY) or self._env(CONFIG_DIR_ENV_VAR)
        return Path(configured) if configured else None

    def locate_file(self, file_name: str, package: Optional[str] = None):
        """Find a module's flat file.

        Lookup order: configured directory, working directory, the
        resource package, then the packaged default of ``package``.

        Returns:
            A ``Path`` or ``importlib.resources`` traversable, or None.
        """
        config_dir = self.config_dir()
        if config_dir is not None:
            candidate = config_dir / file_name
            if candidate.is_file():
                return candidate

        candidate = self._cwd() / file_name
        if candidate.is_file():
            return candidate

        for package_name in (self.resource_package, package):
            if not package_name:
                continue
            try:
                resource = resources.files(package_name).joinpath(file_name)
            except ModuleNotFoundError:
                logger.debug("Resource package %s not importable", package_name)
                continue
            if resource.is_file():
                return resource
        return None

    def read_file(self, file_name: str, package: Optional[str] = None) -> dict[str, str]:
        location = self.locate_file(file_name, package)
        if location is None:
            logger.debug("No %s found", file_name)
            return {}
        logger.info("Loading configuration from %s", location)
        if isinstance(location, Path):
            return read_properties(location)
        return parse_properties(location.read_text(encoding="utf-8"))

    def load_file(
        self,
        file_name: str,
        register: Callable[[str, str], None],
        package: Optional[str] = None,
    ) -> None:
        """Feed every entry of a module's flat file to ``register``."""
        for key, value in self.read_file(file_name, package).items():
            register(key, value)

    def read_prefixes(
        self, file_name: str, pattern: str, package: Optional[str] = None
    ) -> set[str]:
        """Collect group 1 of ``pattern`` over all keys of a module file."""
        regexp = re.compile(pattern)
        prefixes = set()
        for key in self.read_file(file_name, package):
            match = regexp.search(key)
            if match:
                prefixes.add(match.group(1))
        return prefixes


def named_property_pattern(key: str) -> str:
    return NAMED_PROPERTY_REGEXP % re.escape(key)


_default_context: Optional[ConfigContext] = None
_default_lock = threading.Lock()


def get_default_context() -> ConfigContext:
    """Return the process-wide context, creating it on first use."""
    global _default_context
    with _default_lock:
        if _default_context is None:
            _default_context = ConfigContext.from_env()
        return _default_context


def set_default_context(context: Optional[ConfigContext]) -> None:
    """Replace (or with None, drop) the process-wide context."""
    global _default_context
    with _default_lock:
        _default_context = context
