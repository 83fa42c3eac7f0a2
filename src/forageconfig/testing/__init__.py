"""Testing utilities for the configuration engine."""

from .mocks import RecordingSource, StaticSource
from .fixtures import isolated_context, write_properties

__all__ = [
    "RecordingSource",
    "StaticSource",
    "isolated_context",
    "write_properties",
]
