"""Value sources consulted when resolving a parameter.

Resolution walks, in order: environment variables, process properties,
the single runtime settings source selected for the host, and finally
the module's flat file.
"""

import functools
import importlib.util
import logging
import os
from pathlib import Path
from typing import Callable, Mapping, Optional, Union

from .interfaces import KeyForm, RuntimeType, ValueSource
from .properties import read_properties

logger = logging.getLogger(__name__)

RUNTIME_ENV_VAR = "FORAGE_RUNTIME"

# Host integration packages whose presence selects a runtime.
# Checked in this order; the first importable one wins.
RUNTIME_MARKERS: tuple[tuple[RuntimeType, str], ...] = (
    (RuntimeType.SPRING_BOOT, "forage_springboot"),
    (RuntimeType.QUARKUS, "forage_quarkus"),
)

APPLICATION_PROPERTIES = "application.properties"


class EnvironmentSource(ValueSource):
    """Operating system environment variables."""

    key_form = KeyForm.ENV

    def __init__(self, environ: Optional[Mapping[str, str]] = None):
        self._environ = environ

    def probe(self, key: str) -> Optional[str]:
        environ = os.environ if self._environ is None else self._environ
        return environ.get(key)


class PropertiesSource(ValueSource):
    """Process-level key/value properties held in memory."""

    def __init__(self, properties: Optional[Mapping[str, str]] = None):
        self.properties = properties if properties is not None else {}

    def probe(self, key: str) -> Optional[str]:
        return self.properties.get(key)


class MappingSource(ValueSource):
    """Settings exposed by a host as a mapping or a lookup callable."""

    def __init__(self, lookup: Union[Mapping[str, str], Callable[[str], Optional[str]]]):
        if callable(lookup):
            self._lookup = lookup
        else:
            self._lookup = lookup.get

    def probe(self, key: str) -> Optional[str]:
        return self._lookup(key)


class FlatFileSource(ValueSource):
    """A flat property file, read lazily on first probe."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._values: Optional[dict[str, str]] = None

    @property
    def name(self) -> str:
        return f"{type(self).__name__}({self.path})"

    def values(self) -> dict[str, str]:
        if self._values is None:
            if self.path.is_file():
                logger.debug("Loading %s", self.path)
                self._values = read_properties(self.path)
            else:
                self._values = {}
        return self._values

    def probe(self, key: str) -> Optional[str]:
        return self.values().get(key)


class ApplicationPropertiesSource(FlatFileSource):
    """``application.properties`` of a standalone or Spring Boot host."""

    def __init__(self, directory: Optional[Union[str, Path]] = None):
        directory = Path(directory) if directory is not None else Path.cwd()
        super().__init__(directory / APPLICATION_PROPERTIES)


@functools.lru_cache(maxsize=1)
def detect_runtime() -> RuntimeType:
    """Probe once for the host runtime.

    An explicit ``FORAGE_RUNTIME`` wins; otherwise marker packages are
    looked up, and a process without any marker runs as ``MAIN``.
    """
    explicit = os.environ.get(RUNTIME_ENV_VAR)
    if explicit:
        runtime = RuntimeType.parse(explicit)
        logger.info("Runtime %s selected by %s", runtime.value, RUNTIME_ENV_VAR)
        return runtime

    for runtime, marker in RUNTIME_MARKERS:
        if importlib.util.find_spec(marker) is not None:
            logger.info("Runtime %s detected through %s", runtime.value, marker)
            return runtime
    return RuntimeType.MAIN


def create_runtime_source(
    runtime: RuntimeType,
    directory: Optional[Union[str, Path]] = None,
    host_settings: Optional[Union[Mapping[str, str], Callable[[str], Optional[str]]]] = None,
) -> Optional[ValueSource]:
    """Build the runtime settings source for ``runtime``.

    Quarkus-style hosts hand their settings in through ``host_settings``;
    without them there is no runtime source for that host.
    """
    if runtime is RuntimeType.QUARKUS:
        if host_settings is None:
            return None
        return MappingSource(host_settings)
    if host_settings is not None:
        return MappingSource(host_settings)
    return ApplicationPropertiesSource(directory)
