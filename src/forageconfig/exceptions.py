"""Exception types raised by the configuration engine."""

from typing import Optional


class ForageConfigError(Exception):
    """Base class for configuration errors."""


class MissingConfigError(ForageConfigError):
    """A required parameter has no value and no default."""

    def __init__(self, message: str, identity=None):
        super().__init__(message)
        self.identity = identity


class InvalidConfigValueError(ForageConfigError, ValueError):
    """A raw value could not be converted to the requested type."""

    def __init__(self, identity, raw_value: str, expected: str):
        self.identity = identity
        self.raw_value = raw_value
        self.expected = expected
        name = identity.name() if hasattr(identity, "name") else str(identity)
        super().__init__(
            f"Invalid {expected} value for '{name}': {raw_value!r}"
        )


class CatalogError(ForageConfigError):
    """The catalog could not be loaded or is inconsistent."""


class ConfigFileError(ForageConfigError):
    """A configuration file could not be read or written."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path
