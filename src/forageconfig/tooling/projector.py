"""Group a flat input batch into per-factory property sets."""

import logging
from dataclasses import dataclass, field
from typing import Mapping, Optional

from ..catalog import Catalog
from .classifier import KeyClassifier, normalize_key

logger = logging.getLogger(__name__)

# Metadata keys, first non-blank match wins. Never written out.
BEAN_NAME_KEYS = ("forage.bean.name", "bean.name", "forage.name", "name")
KIND_KEYS = ("kind", "forage.kind", "type", "forage.type")

DEPENDENCIES = "camel.jbang.dependencies"
DEPENDENCIES_MAIN = "camel.jbang.dependencies.main"
DEPENDENCIES_SPRING_BOOT = "camel.jbang.dependencies.spring-boot"
DEPENDENCIES_QUARKUS = "camel.jbang.dependencies.quarkus"
DEPENDENCY_KEYS = (
    DEPENDENCIES,
    DEPENDENCIES_MAIN,
    DEPENDENCIES_SPRING_BOOT,
    DEPENDENCIES_QUARKUS,
)

# Factory variant -> dependency list key it feeds
VARIANT_DEPENDENCY_KEYS = (
    ("base", DEPENDENCIES_MAIN),
    ("springboot", DEPENDENCIES_SPRING_BOOT),
    ("quarkus", DEPENDENCIES_QUARKUS),
)


@dataclass
class FactoryConfig:
    """Properties projected for one factory type."""
    factory_type: str
    bean_name: Optional[str] = None
    kind: Optional[str] = None
    properties: dict[str, str] = field(default_factory=dict)


def _add_unique(items: list[str], value: Optional[str]) -> None:
    if value and value not in items:
        items.append(value)


@dataclass
class DependencySet:
    """Coordinates required per deployment target, insertion ordered."""
    base: list[str] = field(default_factory=list)
    main: list[str] = field(default_factory=list)
    spring_boot: list[str] = field(default_factory=list)
    quarkus: list[str] = field(default_factory=list)

    def by_key(self) -> dict[str, list[str]]:
        """Lists keyed by their dependency property name."""
        return {
            DEPENDENCIES: self.base,
            DEPENDENCIES_MAIN: self.main,
            DEPENDENCIES_SPRING_BOOT: self.spring_boot,
            DEPENDENCIES_QUARKUS: self.quarkus,
        }

    def add(self, key: str, coordinate: Optional[str]) -> None:
        _add_unique(self.by_key()[key], coordinate)

    def is_empty(self) -> bool:
        return not any(self.by_key().values())

    def as_result(self) -> dict[str, list[str]]:
        return {
            "baseDependencies": list(self.base),
            "mainDependencies": list(self.main),
            "springBootDependencies": list(self.spring_boot),
            "quarkusDependencies": list(self.quarkus),
        }


def _first_value(raw: Mapping[str, str], keys: tuple[str, ...]) -> Optional[str]:
    for key in keys:
        value = raw.get(key)
        if value is not None and value.strip():
            return value.strip()
    return None


class ConfigProjector:
    """Turn raw ``key -> value`` input into ``FactoryConfig`` groups."""

    def __init__(self, catalog: Catalog):
        self.catalog = catalog
        self.classifier = KeyClassifier(catalog)

    def _short_prefix_key(self, factory_type: str) -> Optional[str]:
        metadata = self.catalog.factory(factory_type)
        return metadata.short_prefix_key if metadata else None

    def _local_names(self, raw: Mapping[str, str]) -> dict[str, str]:
        # A factory's own name property (e.g. jdbc.name) names its group
        names: dict[str, str] = {}
        for key, value in raw.items():
            parsed = self.classifier.classify(key)
            if parsed is None or value is None or not value.strip():
                continue
            if normalize_key(key.strip()) == self._short_prefix_key(parsed.factory_type):
                names[parsed.factory_type] = value.strip()
        return names

    def project(self, raw: Mapping[str, str]) -> dict[str, FactoryConfig]:
        """Group ``raw`` by factory type, preserving input order.

        Keys that cannot be classified are skipped.
        """
        global_name = _first_value(raw, BEAN_NAME_KEYS)
        global_kind = _first_value(raw, KIND_KEYS)
        kind_factory = self.catalog.factory_for_bean(global_kind)
        local_names = self._local_names(raw)

        configs: dict[str, FactoryConfig] = {}
        for key, value in raw.items():
            if key in BEAN_NAME_KEYS or key in KIND_KEYS:
                continue
            parsed = self.classifier.classify(key)
            if parsed is None:
                logger.debug("Skipping unrecognized key %s", key)
                continue

            factory_type = parsed.factory_type
            instance = local_names.get(factory_type) or global_name or parsed.instance_name
            if kind_factory == factory_type:
                kind = global_kind
            else:
                kind = parsed.bean_kind or (global_kind if kind_factory is None else None)

            config = configs.get(factory_type)
            if config is None:
                config = FactoryConfig(factory_type, instance, kind)
                configs[factory_type] = config
            elif config.kind is None and kind:
                config.kind = kind

            if normalize_key(key.strip()) == self._short_prefix_key(factory_type):
                continue
            config.properties[parsed.canonical_key(instance)] = value

        return configs

    def collect_dependencies(self, configs: Mapping[str, FactoryConfig]) -> DependencySet:
        """Coordinates needed by the projected factories."""
        dependencies = DependencySet()
        for factory_type, config in configs.items():
            for gav in self.catalog.bean_gavs(config.kind):
                dependencies.add(DEPENDENCIES, gav)
            for variant, key in VARIANT_DEPENDENCY_KEYS:
                dependencies.add(key, self.catalog.variant_gav(factory_type, variant))
        return dependencies
