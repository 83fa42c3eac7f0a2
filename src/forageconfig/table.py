"""Per-module parameter tables and the module config base class.

Each integration module declares its parameters once, unprefixed, in a
``ModuleParameterTable``. Named instances get their own copies of every
entry through :meth:`ModuleParameterTable.register`, so one module can be
configured zero, one or many times in the same process.
"""

import logging
import re
import threading
from dataclasses import dataclass
from datetime import timedelta
from enum import Enum
from typing import Optional

from .context import ConfigContext, get_default_context, named_property_pattern
from .exceptions import InvalidConfigValueError, MissingConfigError
from .identity import ParameterIdentity, normalize_prefix, to_property_form
from .registry import ConfigRegistry

logger = logging.getLogger(__name__)

PARAMETER_TYPES = (
    "string", "integer", "double", "boolean", "duration",
    "password", "bean-name", "prefix",
)

TRUE_VALUES = ("true", "1", "yes", "on")
FALSE_VALUES = ("false", "0", "no", "off")

_ISO_DURATION = re.compile(
    r"^P(?:(?P<days>\d+(?:\.\d+)?)D)?"
    r"(?:T(?:(?P<hours>\d+(?:\.\d+)?)H)?"
    r"(?:(?P<minutes>\d+(?:\.\d+)?)M)?"
    r"(?:(?P<seconds>\d+(?:\.\d+)?)S)?)?$",
    re.IGNORECASE,
)


class ConfigTag(Enum):
    """Grouping hint for tools that render configuration forms."""
    COMMON = "COMMON"
    SECURITY = "SECURITY"
    ADVANCED = "ADVANCED"


@dataclass(frozen=True)
class ParameterSpec:
    """Declared metadata of a parameter."""
    description: Optional[str] = None
    label: Optional[str] = None
    default: Optional[str] = None
    type: str = "string"
    required: bool = False
    tag: ConfigTag = ConfigTag.COMMON

    def __post_init__(self):
        if self.type not in PARAMETER_TYPES:
            raise ValueError(
                f"Invalid parameter type: {self.type}. "
                f"Valid options: {', '.join(PARAMETER_TYPES)}"
            )


def parse_duration(raw: str) -> Optional[timedelta]:
    """Parse ISO-8601 durations (``PT30S``) or bare seconds (``30``)."""
    text = raw.strip()
    if re.fullmatch(r"\d+", text):
        return timedelta(seconds=int(text))
    match = _ISO_DURATION.match(text)
    if not match or text.upper() in ("P", "PT"):
        return None
    parts = {k: float(v) for k, v in match.groupdict().items() if v}
    return timedelta(**parts)


class ModuleParameterTable:
    """Parameters declared by one integration module.

    Canonical entries are declared once at import time. Prefixed entries
    are derived from them with :meth:`expand` and inserted by
    :meth:`register`.
    """

    def __init__(self, module: str):
        self.module = module
        self._entries: dict[ParameterIdentity, ParameterSpec] = {}
        self._lock = threading.RLock()

    def declare(
        self,
        base_name: str,
        description: Optional[str] = None,
        label: Optional[str] = None,
        default: Optional[str] = None,
        type: str = "string",
        required: bool = False,
        tag: ConfigTag = ConfigTag.COMMON,
    ) -> ParameterIdentity:
        """Declare a canonical parameter and return its identity."""
        identity = ParameterIdentity(self.module, base_name)
        spec = ParameterSpec(description, label, default, type, required, tag)
        with self._lock:
            if identity in self._entries:
                raise ValueError(f"Parameter already declared: {base_name}")
            self._entries[identity] = spec
        return identity

    def canonical_entries(self) -> dict[ParameterIdentity, ParameterSpec]:
        with self._lock:
            return {k: v for k, v in self._entries.items() if k.prefix is None}

    def expand(self, prefix: Optional[str]) -> dict[ParameterIdentity, ParameterSpec]:
        """Return the canonical entries re-keyed under ``prefix``."""
        prefix = normalize_prefix(prefix)
        canonical = self.canonical_entries()
        if prefix is None:
            return canonical
        return {identity.with_prefix(prefix): spec for identity, spec in canonical.items()}

    def register(self, prefix: Optional[str]) -> None:
        """Add the entries of instance ``prefix``; no-op if already present."""
        prefix = normalize_prefix(prefix)
        if prefix is None:
            return
        with self._lock:
            for identity, spec in self.expand(prefix).items():
                self._entries.setdefault(identity, spec)

    def entries(self, prefix: Optional[str] = None) -> dict[ParameterIdentity, ParameterSpec]:
        """Entries belonging to instance ``prefix`` (None for the default one)."""
        prefix = normalize_prefix(prefix)
        with self._lock:
            return {k: v for k, v in self._entries.items() if k.prefix == prefix}

    def all_entries(self) -> dict[ParameterIdentity, ParameterSpec]:
        with self._lock:
            return dict(self._entries)

    def prefixes(self) -> set[str]:
        with self._lock:
            return {k.prefix for k in self._entries if k.prefix is not None}

    def spec(self, identity: ParameterIdentity) -> ParameterSpec:
        with self._lock:
            spec = self._entries.get(identity) or self._entries.get(identity.canonical())
        if spec is None:
            raise KeyError(f"Unknown parameter for {self.module}: {identity.name()}")
        return spec

    def find(self, prefix: Optional[str], key: str) -> Optional[ParameterIdentity]:
        """Find the entry of instance ``prefix`` that ``key`` names.

        Keys are compared in property form, so a file written with
        ``forage.myDS.jdbc.url`` still finds the ``myDS`` entry.
        """
        candidate = to_property_form(key.strip())
        for identity in self.entries(prefix):
            if identity.match(candidate):
                return identity
        return None

    def load_overrides(self, registry: ConfigRegistry, prefix: Optional[str] = None) -> int:
        """Resolve every entry of instance ``prefix`` into ``registry``.

        Returns:
            Number of entries a source had a value for.
        """
        loaded = 0
        for identity in self.entries(prefix):
            if registry.load(identity):
                loaded += 1
        logger.debug(
            "Loaded %d overrides for %s (prefix=%s)", loaded, self.module, prefix
        )
        return loaded

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, identity: ParameterIdentity) -> bool:
        with self._lock:
            return identity in self._entries


class ModuleConfig:
    """Base class for an integration module's configuration.

    Subclasses set ``table`` and expose typed accessor methods built on
    the ``_get_*`` helpers. Construction registers the instance prefix,
    loads the module's flat file, then applies overrides from the value
    sources. Missing required values are reported when an accessor is
    called, not here.
    """

    table: ModuleParameterTable

    def __init__(self, prefix: Optional[str] = None, context: Optional[ConfigContext] = None):
        self.prefix = normalize_prefix(prefix)
        self.context = context if context is not None else get_default_context()

        self.table.register(self.prefix)
        self.context.load_file(self.file_name(), self.register, package=self._package())
        self.table.load_overrides(self.context.registry, self.prefix)

    @property
    def name(self) -> str:
        return self.table.module

    @property
    def registry(self) -> ConfigRegistry:
        return self.context.registry

    def file_name(self) -> str:
        return f"{self.name}.properties"

    def _package(self) -> str:
        return type(self).__module__.rpartition(".")[0] or type(self).__module__

    def register(self, key: str, value: str) -> None:
        """Store a file entry if it names a parameter of this instance."""
        identity = self.table.find(self.prefix, key)
        if identity is not None:
            self.registry.set(identity, value)

    def identity(self, parameter: ParameterIdentity) -> ParameterIdentity:
        return parameter.with_prefix(self.prefix)

    def discover_instances(self, factory_key: str) -> set[str]:
        """Instance names configured for ``factory_key`` in the module file."""
        return self.context.read_prefixes(
            self.file_name(), named_property_pattern(factory_key), package=self._package()
        )

    def _get_str(self, parameter: ParameterIdentity) -> Optional[str]:
        identity = self.identity(parameter)
        value = self.registry.get(identity)
        if value is None:
            return self.table.spec(identity).default
        return value

    def _require_str(self, parameter: ParameterIdentity, message: Optional[str] = None) -> str:
        value = self._get_str(parameter)
        if value is None:
            identity = self.identity(parameter)
            raise MissingConfigError(
                message or f"Missing {identity.name()} (or {identity.env_name()}) configuration",
                identity,
            )
        return value

    def _convert(self, parameter: ParameterIdentity, required: bool, expected: str, convert):
        raw = self._require_str(parameter) if required else self._get_str(parameter)
        if raw is None:
            return None
        try:
            return convert(raw.strip())
        except ValueError as e:
            raise InvalidConfigValueError(self.identity(parameter), raw, expected) from e

    def _get_int(self, parameter: ParameterIdentity, required: bool = False) -> Optional[int]:
        return self._convert(parameter, required, "integer", int)

    def _get_float(self, parameter: ParameterIdentity, required: bool = False) -> Optional[float]:
        return self._convert(parameter, required, "double", float)

    def _get_bool(self, parameter: ParameterIdentity, required: bool = False) -> Optional[bool]:
        def convert(raw: str) -> bool:
            lowered = raw.lower()
            if lowered in TRUE_VALUES:
                return True
            if lowered in FALSE_VALUES:
                return False
            raise ValueError(raw)
        return self._convert(parameter, required, "boolean", convert)

    def _get_duration(self, parameter: ParameterIdentity, required: bool = False) -> Optional[timedelta]:
        def convert(raw: str) -> timedelta:
            duration = parse_duration(raw)
            if duration is None:
                raise ValueError(raw)
            return duration
        return self._convert(parameter, required, "duration", convert)
