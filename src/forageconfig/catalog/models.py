"""Pydantic models of the catalog document.

Field aliases follow the camelCase keys the catalog generator emits.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class _CatalogModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class ConfigEntry(_CatalogModel):
    """A configuration parameter a factory or bean accepts."""
    name: str
    type: str = "string"
    description: Optional[str] = None
    required: bool = False
    default_value: Optional[str] = Field(default=None, alias="defaultValue")
    label: Optional[str] = None
    config_tag: Optional[str] = Field(default=None, alias="configTag")


class Variant(_CatalogModel):
    """One deployment variant of a factory."""
    class_name: Optional[str] = Field(default=None, alias="className")
    gav: Optional[str] = None


class Variants(_CatalogModel):
    base: Optional[Variant] = None
    springboot: Optional[Variant] = None
    quarkus: Optional[Variant] = None

    def get(self, variant: str) -> Optional[Variant]:
        return {
            "base": self.base,
            "springboot": self.springboot,
            "quarkus": self.quarkus,
        }.get(variant.lower())


class Bean(_CatalogModel):
    """A selectable implementation (bean kind) of a factory."""
    name: str
    description: Optional[str] = None
    class_name: Optional[str] = Field(default=None, alias="className")
    gav: Optional[str] = None
    config_entries: list[ConfigEntry] = Field(default_factory=list, alias="configEntries")


class FeatureBeans(_CatalogModel):
    feature: str
    beans: list[Bean] = Field(default_factory=list)


class ConditionalBean(_CatalogModel):
    name: Optional[str] = None
    name_from_config: Optional[str] = Field(default=None, alias="nameFromConfig")
    java_type: Optional[str] = Field(default=None, alias="javaType")
    description: Optional[str] = None


class ConditionalBeanGroup(_CatalogModel):
    """Beans created when a factory property is enabled."""
    id: str
    description: Optional[str] = None
    config_entry: Optional[str] = Field(default=None, alias="configEntry")
    beans: list[ConditionalBean] = Field(default_factory=list)


class Factory(_CatalogModel):
    """A factory type: one pluggable integration category."""
    name: str
    factory_type: Optional[str] = Field(default=None, alias="factoryType")
    description: Optional[str] = None
    properties_file: Optional[str] = Field(default=None, alias="propertiesFile")
    variants: Optional[Variants] = None
    config_entries: list[ConfigEntry] = Field(default_factory=list, alias="configEntries")
    beans_by_feature: list[FeatureBeans] = Field(default_factory=list, alias="beansByFeature")
    conditional_beans: list[ConditionalBeanGroup] = Field(
        default_factory=list, alias="conditionalBeans"
    )


class CatalogDocument(_CatalogModel):
    version: Optional[str] = None
    factories: list[Factory] = Field(default_factory=list)
