"""Abstract interfaces for the configuration engine.

These define the contracts that value sources implement. The registry
only depends on these, so hosts can plug in their own settings objects.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional


class RuntimeType(Enum):
    """Host runtime the process is embedded in.

    Selects which runtime settings source is consulted after the
    environment and process properties.
    """
    SPRING_BOOT = "springboot"
    QUARKUS = "quarkus"
    MAIN = "main"

    @classmethod
    def parse(cls, value: str) -> "RuntimeType":
        normalized = value.strip().lower().replace("-", "").replace("_", "")
        for member in cls:
            if member.value == normalized:
                return member
        raise ValueError(
            f"Invalid runtime: {value}. "
            f"Valid options: {', '.join(m.value for m in cls)}"
        )


class KeyForm(Enum):
    """Which external form of a parameter name a source is probed with."""
    ENV = "env"
    PROPERTY = "property"


class ValueSource(ABC):
    """A place configuration values can be read from."""

    key_form: KeyForm = KeyForm.PROPERTY

    @property
    def name(self) -> str:
        return type(self).__name__

    @abstractmethod
    def probe(self, key: str) -> Optional[str]:
        """Return the raw value for ``key``, or None when absent."""
        pass

    def lookup(self, identity) -> Optional[str]:
        """Probe using the identity's form for this source.

        Empty and whitespace-only values count as absent.
        """
        if self.key_form is KeyForm.ENV:
            key = identity.env_name()
        else:
            key = identity.property_name()
        value = self.probe(key)
        if value is None or not value.strip():
            return None
        return value
