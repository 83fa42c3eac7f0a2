"""Forage configuration engine.

Gives every integration parameter a stable identity, resolves values
from environment, process properties, runtime settings and flat files,
and rewrites flat configuration files for the companion tooling.
"""

__version__ = "0.1.0"

from .context import ConfigContext, get_default_context
from .exceptions import (
    CatalogError,
    ConfigFileError,
    ForageConfigError,
    InvalidConfigValueError,
    MissingConfigError,
)
from .identity import ParameterIdentity
from .interfaces import RuntimeType, ValueSource
from .registry import ConfigRegistry
from .table import ConfigTag, ModuleConfig, ModuleParameterTable, ParameterSpec

__all__ = [
    "CatalogError",
    "ConfigContext",
    "ConfigFileError",
    "ConfigRegistry",
    "ConfigTag",
    "ForageConfigError",
    "InvalidConfigValueError",
    "MissingConfigError",
    "ModuleConfig",
    "ModuleParameterTable",
    "ParameterIdentity",
    "ParameterSpec",
    "RuntimeType",
    "ValueSource",
    "get_default_context",
]
