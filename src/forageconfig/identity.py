"""Parameter identity and external name derivation.

A ``ParameterIdentity`` names one configuration parameter of one
integration module, optionally scoped to a named instance. The instance
prefix is spliced right after the ``forage.`` root token, so that the
``url`` parameter of the ``ds1`` instance of the jdbc module reads
``forage.ds1.jdbc.url`` as a flat property and ``FORAGE_DS1_JDBC_URL``
as an environment variable.
"""

from dataclasses import dataclass
from typing import Optional

ROOT_TOKEN = "forage."

# Both become "_" in the environment form
RESERVED_CHARACTERS = ("_", "-")


def normalize_prefix(prefix: Optional[str]) -> Optional[str]:
    """Treat an empty or blank prefix the same as no prefix."""
    if prefix is None:
        return None
    prefix = prefix.strip()
    return prefix or None


def splice(base_name: str, prefix: Optional[str]) -> str:
    """Insert ``prefix`` after the root token of ``base_name``.

    Names that do not start with the root token get the prefix prepended.
    """
    prefix = normalize_prefix(prefix)
    if prefix is None:
        return base_name
    if base_name.startswith(ROOT_TOKEN):
        return f"{ROOT_TOKEN}{prefix}.{base_name[len(ROOT_TOKEN):]}"
    return f"{prefix}.{base_name}"


def to_env_form(name: str) -> str:
    return name.replace(".", "_").replace("-", "_").upper()


def to_property_form(name: str) -> str:
    return name.replace("_", ".").lower()


@dataclass(frozen=True)
class ParameterIdentity:
    """Identity of a configuration parameter.

    Two identities are equal when module, base name and prefix are all
    equal, which makes them usable as registry keys.

    Attributes:
        module: Name of the owning integration module.
        base_name: Canonical (unprefixed) parameter name.
        prefix: Instance prefix, ``None`` for the default instance.
    """
    module: str
    base_name: str
    prefix: Optional[str] = None

    def __post_init__(self):
        if not self.base_name or not self.base_name.strip():
            raise ValueError("base_name must not be empty")
        # frozen dataclass: normalize through object.__setattr__
        object.__setattr__(self, "prefix", normalize_prefix(self.prefix))
        for label, value in (("base_name", self.base_name), ("prefix", self.prefix)):
            if value and any(c in value for c in RESERVED_CHARACTERS):
                raise ValueError(
                    f"{label} '{value}' must not contain '_' or '-'; "
                    "use '.' to separate words"
                )

    def name(self) -> str:
        """Spliced name with its original casing."""
        return splice(self.base_name, self.prefix)

    def env_name(self) -> str:
        return to_env_form(self.name())

    def property_name(self) -> str:
        return to_property_form(self.name())

    def match(self, candidate: str) -> bool:
        """True iff ``candidate`` is exactly this parameter's property form."""
        return candidate == self.property_name()

    def with_prefix(self, prefix: Optional[str]) -> "ParameterIdentity":
        """Return the same parameter scoped to ``prefix``.

        The new prefix replaces the current one rather than nesting.
        """
        return ParameterIdentity(self.module, self.base_name, prefix)

    def as_named(self, prefix: Optional[str]) -> "ParameterIdentity":
        """Alias of :meth:`with_prefix`."""
        return self.with_prefix(prefix)

    def canonical(self) -> "ParameterIdentity":
        if self.prefix is None:
            return self
        return ParameterIdentity(self.module, self.base_name)

    def __str__(self) -> str:
        return self.name()
