"""Work out which factory, instance and bean kind a flat key belongs to.

Rules are tried in order and the first match wins:

1. ``<factory>.<property>``
2. ``<bean kind>.<property>``
3. ``<instance>.<factory>.<property>``
4. ``<instance>.<bean kind>.<property>``
5. ``<bean property alias>.<...>``, where the whole key is the property
6. ``<instance>.<bean property alias>.<...>``

A literal factory key is therefore never mistaken for an instance name,
and a bean kind is never mistaken for one either.
"""

from dataclasses import dataclass
from typing import Optional

from ..catalog import Catalog
from ..identity import ROOT_TOKEN


@dataclass(frozen=True)
class ParsedKey:
    """Classification of one flat key.

    Attributes:
        factory_type: Catalog factory key.
        property_name: Remaining parameter name, never empty.
        instance_name: Instance label, None for the default instance.
        bean_kind: Bean kind named in the key, if any.
        segment: The factory or bean token the key was matched on; None
            when the key was matched through a property alias.
    """
    factory_type: str
    property_name: str
    instance_name: Optional[str] = None
    bean_kind: Optional[str] = None
    segment: Optional[str] = None

    def canonical_key(self, instance_name: Optional[str] = None) -> str:
        """``forage.[instance.][segment.]property``."""
        parts = [ROOT_TOKEN.rstrip(".")]
        if instance_name:
            parts.append(instance_name)
        if self.segment:
            parts.append(self.segment)
        parts.append(self.property_name)
        return ".".join(parts)


def normalize_key(key: str) -> str:
    """Strip the root token."""
    if key.startswith(ROOT_TOKEN):
        return key[len(ROOT_TOKEN):]
    return key


class KeyClassifier:
    def __init__(self, catalog: Catalog):
        self.catalog = catalog

    def classify(self, key: str) -> Optional[ParsedKey]:
        """Classify ``key`` (with or without the root token).

        Returns:
            The parsed key, or None when it is not a recognized
            configuration key.
        """
        key = normalize_key(key.strip())
        first, dot, rest = key.partition(".")
        if not dot or not first or not rest:
            return None

        if self.catalog.is_factory(first):
            return ParsedKey(first.lower(), rest, segment=first)

        factory = self.catalog.factory_for_bean(first)
        if factory is not None:
            return ParsedKey(factory, rest, bean_kind=first, segment=first)

        second, dot, remainder = rest.partition(".")
        if dot and second and remainder:
            if self.catalog.is_factory(second):
                return ParsedKey(second.lower(), remainder, instance_name=first, segment=second)

            factory = self.catalog.factory_for_bean(second)
            if factory is not None:
                return ParsedKey(
                    factory, remainder, instance_name=first, bean_kind=second, segment=second
                )

        factory = self.catalog.factory_for_property_prefix(first)
        if factory is not None:
            return ParsedKey(factory, key)

        if dot and second and remainder:
            factory = self.catalog.factory_for_property_prefix(second)
            if factory is not None:
                return ParsedKey(factory, rest, instance_name=first)

        return None
