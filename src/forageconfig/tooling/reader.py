"""List the beans a directory's configuration would create."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

from ..catalog import Catalog
from ..catalog.index import FactoryMetadata
from ..identity import ROOT_TOKEN
from ..properties import read_properties
from .classifier import KeyClassifier
from .results import BeanInfo, ConditionalBeanInfo, ErrorResult, FileStrategy, ReadResult
from .writer import APPLICATION_PROPERTIES

logger = logging.getLogger(__name__)

KIND_PROPERTIES = ("db.kind", "kind")

FEATURE_JAVA_TYPES = {
    "Chat Model": "dev.langchain4j.model.chat.ChatLanguageModel",
    "Memory": "dev.langchain4j.memory.ChatMemory",
}


@dataclass
class InstanceProperties:
    factory_type: str
    instance_name: Optional[str] = None
    bean_kind: Optional[str] = None
    properties: dict[str, str] = field(default_factory=dict)


def _lower_first(value: str) -> str:
    return value[:1].lower() + value[1:]


class ConfigReader:
    """Scans a directory and describes the configured beans."""

    def __init__(
        self,
        catalog: Catalog,
        directory: Union[str, Path],
        strategy: FileStrategy = FileStrategy.APPLICATION,
        factory_filter: Optional[str] = None,
    ):
        self.catalog = catalog
        self.directory = Path(directory)
        self.strategy = strategy
        self.factory_filter = factory_filter
        self.classifier = KeyClassifier(catalog)

    def find_files(self) -> list[Path]:
        """Property files of this strategy anywhere below the directory."""
        if self.strategy is FileStrategy.APPLICATION:
            names = {APPLICATION_PROPERTIES}
        else:
            names = {m.properties_file for m in self.catalog.factories() if m.properties_file}

        def wanted(path: Path) -> bool:
            if path.name in names:
                return True
            return (
                self.strategy is FileStrategy.FORAGE
                and path.name.startswith("forage-")
                and path.name.endswith(".properties")
            )

        return sorted(p for p in self.directory.rglob("*") if p.is_file() and wanted(p))

    def read(self) -> Union[ReadResult, ErrorResult]:
        directory = str(self.directory.absolute())
        if not self.directory.is_dir():
            return ErrorResult(error=f"Directory does not exist: {directory}")

        files = self.find_files()
        if not files:
            return ReadResult(
                message="No Forage properties files found",
                directory=directory,
                bean_count=0,
            )

        beans: list[BeanInfo] = []
        for path in files:
            beans.extend(self.parse_file(path))

        if self.factory_filter:
            wanted = self.factory_filter.lower()
            beans = [b for b in beans if b.factory_type.lower() == wanted]

        return ReadResult(directory=directory, bean_count=len(beans), beans=beans)

    def group_instances(self, properties: dict[str, str]) -> list[InstanceProperties]:
        """Group ``forage.`` keys by factory, instance and bean kind."""
        instances: dict[tuple, InstanceProperties] = {}
        for key, value in properties.items():
            if not key.startswith(ROOT_TOKEN):
                continue
            parsed = self.classifier.classify(key)
            if parsed is None:
                continue
            group = (parsed.factory_type, parsed.instance_name or "default", parsed.bean_kind)
            instance = instances.get(group)
            if instance is None:
                instance = InstanceProperties(
                    parsed.factory_type, parsed.instance_name, parsed.bean_kind
                )
                instances[group] = instance
            instance.properties[parsed.property_name] = value
        return list(instances.values())

    def parse_file(self, path: Path) -> list[BeanInfo]:
        logger.debug("Reading %s", path)
        instances = self.group_instances(read_properties(path))
        return [self._bean_info(instance, path) for instance in instances]

    def _bean_info(self, instance: InstanceProperties, path: Path) -> BeanInfo:
        metadata = self.catalog.factory(instance.factory_type)
        conditional = self._conditional_beans(instance)
        return BeanInfo(
            name=self._bean_name(instance, metadata),
            kind=self._bean_kind(instance),
            java_type=self._java_type(instance, metadata),
            source_file=str(path.absolute()),
            configuration=dict(instance.properties),
            conditional_beans=conditional or None,
            factory_type=instance.factory_type,
        )

    @staticmethod
    def _bean_name(instance: InstanceProperties, metadata: Optional[FactoryMetadata]) -> str:
        if instance.instance_name:
            return instance.instance_name
        if metadata is None:
            return instance.factory_type
        if not metadata.factory_type:
            return metadata.key
        return _lower_first(metadata.factory_type.rpartition(".")[2])

    @staticmethod
    def _bean_kind(instance: InstanceProperties) -> Optional[str]:
        if instance.bean_kind:
            return instance.bean_kind
        for name in KIND_PROPERTIES:
            if instance.properties.get(name):
                return instance.properties[name]
        return None

    def _java_type(self, instance: InstanceProperties, metadata: Optional[FactoryMetadata]) -> str:
        if metadata is None:
            return "Unknown"
        feature = self.catalog.bean_feature(instance.bean_kind)
        if feature:
            if "." in feature:
                return feature
            return FEATURE_JAVA_TYPES.get(feature, feature)
        return metadata.factory_type or metadata.name

    def _conditional_beans(self, instance: InstanceProperties) -> list[ConditionalBeanInfo]:
        factory_prefix = f"{instance.factory_type}."

        def local(name: str) -> str:
            return name[len(factory_prefix):] if name.startswith(factory_prefix) else name

        beans: list[ConditionalBeanInfo] = []
        for group in self.catalog.conditional_beans(instance.factory_type):
            if group.config_entry:
                value = instance.properties.get(local(group.config_entry))
                if value is None or value.strip().lower() != "true":
                    continue
            for bean in group.beans:
                if bean.name:
                    name = bean.name
                elif bean.name_from_config:
                    key = local(bean.name_from_config)
                    name = instance.properties.get(key, key)
                else:
                    name = group.id
                beans.append(ConditionalBeanInfo(
                    name=name, java_type=bean.java_type, description=bean.description
                ))
        return beans
