"""Resolved configuration values.

The registry maps a ``ParameterIdentity`` (or a plain string key) to its
resolved value. ``load`` walks the value sources in precedence order and
caches the first non-empty answer; ``set`` always overwrites. Once a
value is cached, ``get`` never goes back to the sources.
"""

import logging
import threading
from typing import Iterable, Optional, Union

from .identity import ParameterIdentity
from .interfaces import ValueSource

logger = logging.getLogger(__name__)

RegistryKey = Union[ParameterIdentity, str]


class ConfigRegistry:
    """Thread-safe store of resolved values.

    Args:
        sources: Value sources, highest precedence first.
    """

    def __init__(self, sources: Optional[Iterable[ValueSource]] = None):
        self._sources: list[ValueSource] = list(sources or [])
        self._values: dict[RegistryKey, str] = {}
        self._lock = threading.RLock()

    @property
    def sources(self) -> list[ValueSource]:
        return list(self._sources)

    def add_source(self, source: ValueSource) -> None:
        """Append a source with the lowest precedence so far."""
        with self._lock:
            self._sources.append(source)

    def resolve(self, identity: ParameterIdentity) -> Optional[str]:
        """Probe the sources without touching the cache."""
        for source in self._sources:
            value = source.lookup(identity)
            if value is not None:
                logger.debug("Resolved %s from %s", identity.name(), source.name)
                return value
        return None

    def load(self, identity: ParameterIdentity) -> bool:
        """Resolve ``identity`` and cache the value when one is found.

        Returns:
            True if a value was found and cached.
        """
        value = self.resolve(identity)
        if value is None:
            return False
        with self._lock:
            self._values[identity] = value
        return True

    def get(self, key: RegistryKey) -> Optional[str]:
        with self._lock:
            return self._values.get(key)

    def set(self, key: RegistryKey, value: str) -> None:
        with self._lock:
            self._values[key] = value

    def get_direct(self, key: str) -> Optional[str]:
        return self.get(key)

    def set_direct(self, key: str, value: str) -> None:
        self.set(key, value)

    def remove(self, key: RegistryKey) -> None:
        with self._lock:
            self._values.pop(key, None)

    def entries(self) -> dict[RegistryKey, str]:
        """Snapshot of all cached values."""
        with self._lock:
            return dict(self._values)

    def clear(self) -> None:
        with self._lock:
            self._values.clear()

    def __contains__(self, key: RegistryKey) -> bool:
        with self._lock:
            return key in self._values

    def __len__(self) -> int:
        with self._lock:
            return len(self._values)
