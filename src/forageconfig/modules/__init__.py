"""Integration module configurations built on the engine."""

from .jdbc import DataSourceConfig
from .jms import ConnectionFactoryConfig
from .ollama import OllamaConfig

__all__ = ["ConnectionFactoryConfig", "DataSourceConfig", "OllamaConfig"]
