"""Lookup index over the catalog document."""

import logging
from dataclasses import dataclass
from typing import Optional

from ..exceptions import CatalogError
from ..identity import ROOT_TOKEN
from .models import CatalogDocument, ConditionalBeanGroup, ConfigEntry, Factory

logger = logging.getLogger(__name__)

VARIANT_NAMES = ("base", "springboot", "quarkus")


def factory_key_from_property(name: Optional[str]) -> Optional[str]:
    """``forage.jdbc.url`` -> ``jdbc``."""
    if not name or not name.startswith(ROOT_TOKEN):
        return None
    remaining = name[len(ROOT_TOKEN):]
    head, dot, _ = remaining.partition(".")
    return head if dot and head else None


def property_prefix_from_config_name(name: Optional[str]) -> Optional[str]:
    """Short alias a bean exposes its properties under.

    ``forage.google.api.key`` -> ``google``; ``forage.model.name`` -> ``model``.
    """
    if not name or not name.startswith(ROOT_TOKEN):
        return None
    remaining = name[len(ROOT_TOKEN):]
    before_last, dot, _ = remaining.rpartition(".")
    if not dot or not before_last:
        return None
    alias, dot, _ = before_last.rpartition(".")
    if dot and alias:
        return alias
    head, dot, _ = remaining.partition(".")
    return head if dot and head else None


@dataclass(frozen=True)
class FactoryMetadata:
    """Indexed view of one catalog factory."""
    key: str
    factory: Factory
    prefix_property_name: Optional[str] = None

    @property
    def name(self) -> str:
        return self.factory.name

    @property
    def factory_type(self) -> Optional[str]:
        return self.factory.factory_type

    @property
    def properties_file(self) -> Optional[str]:
        return self.factory.properties_file

    @property
    def config_entries(self) -> list[ConfigEntry]:
        return self.factory.config_entries

    @property
    def short_prefix_key(self) -> Optional[str]:
        """Key naming the instance, without the root token (``jdbc.name``)."""
        if not self.prefix_property_name or not self.prefix_property_name.startswith(ROOT_TOKEN):
            return None
        return self.prefix_property_name[len(ROOT_TOKEN):]


class Catalog:
    """Read-only lookups over factories, bean kinds and coordinates.

    Bean kinds are matched case-insensitively; factory keys are
    normalized to lower case.
    """

    def __init__(self, document: CatalogDocument):
        self.document = document
        self._factories: dict[str, FactoryMetadata] = {}
        self._bean_factory: dict[str, str] = {}
        self._bean_feature: dict[str, str] = {}
        self._bean_gavs: dict[str, list[str]] = {}
        self._prefix_bean: dict[str, str] = {}
        self._index()

    def _index(self) -> None:
        for factory in self.document.factories:
            prefix_property = None
            key = None
            for entry in factory.config_entries:
                if entry.type == "prefix":
                    prefix_property = entry.name
                    key = factory_key_from_property(entry.name)
            if key is None and factory.config_entries:
                key = factory_key_from_property(factory.config_entries[0].name)
            if key is None:
                logger.warning("Skipping catalog factory without a key: %s", factory.name)
                continue
            key = key.lower()
            if key in self._factories:
                raise CatalogError(f"Duplicate factory key in catalog: {key}")
            self._factories[key] = FactoryMetadata(key, factory, prefix_property)

            for feature in factory.beans_by_feature:
                for bean in feature.beans:
                    self._index_bean(key, feature.feature, bean)

    def _index_bean(self, factory_key: str, feature: str, bean) -> None:
        bean_name = bean.name.lower()
        owner = self._bean_factory.get(bean_name)
        if owner is not None and owner != factory_key:
            raise CatalogError(
                f"Bean kind '{bean.name}' declared by both {owner} and {factory_key}"
            )
        self._bean_factory[bean_name] = factory_key
        self._bean_feature[bean_name] = feature
        if bean.gav:
            gavs = self._bean_gavs.setdefault(bean_name, [])
            if bean.gav not in gavs:
                gavs.append(bean.gav)
        for entry in bean.config_entries:
            alias = property_prefix_from_config_name(entry.name)
            if alias:
                self._prefix_bean[alias.lower()] = bean.name
                break

    def factory(self, key: Optional[str]) -> Optional[FactoryMetadata]:
        if key is None:
            return None
        return self._factories.get(key.lower())

    def factories(self) -> list[FactoryMetadata]:
        return list(self._factories.values())

    def is_factory(self, key: Optional[str]) -> bool:
        return self.factory(key) is not None

    def factory_for_bean(self, bean_name: Optional[str]) -> Optional[str]:
        if not bean_name:
            return None
        return self._bean_factory.get(bean_name.lower())

    def is_bean(self, bean_name: Optional[str]) -> bool:
        return self.factory_for_bean(bean_name) is not None

    def bean_for_property_prefix(self, prefix: Optional[str]) -> Optional[str]:
        if not prefix:
            return None
        return self._prefix_bean.get(prefix.lower())

    def factory_for_property_prefix(self, prefix: Optional[str]) -> Optional[str]:
        return self.factory_for_bean(self.bean_for_property_prefix(prefix))

    def bean_feature(self, bean_name: Optional[str]) -> Optional[str]:
        if not bean_name:
            return None
        return self._bean_feature.get(bean_name.lower())

    def bean_gavs(self, bean_name: Optional[str]) -> list[str]:
        if not bean_name:
            return []
        return list(self._bean_gavs.get(bean_name.lower(), []))

    def variant_gav(self, factory_key: str, variant: str) -> Optional[str]:
        metadata = self.factory(factory_key)
        if metadata is None or metadata.factory.variants is None:
            return None
        found = metadata.factory.variants.get(variant)
        return found.gav if found is not None else None

    def conditional_beans(self, factory_key: Optional[str]) -> list[ConditionalBeanGroup]:
        metadata = self.factory(factory_key)
        return list(metadata.factory.conditional_beans) if metadata else []

    def properties_file(self, factory_key: str) -> Optional[str]:
        metadata = self.factory(factory_key)
        return metadata.properties_file if metadata else None

    def display_name(self, factory_key: str) -> str:
        metadata = self.factory(factory_key)
        return metadata.name if metadata else f"{factory_key} factory"
