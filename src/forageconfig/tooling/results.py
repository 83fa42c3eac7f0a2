"""JSON envelopes printed by the config commands."""

from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class FileStrategy(str, Enum):
    """Which files configuration is read from and written to."""
    APPLICATION = "application"
    FORAGE = "forage"

    @classmethod
    def parse(cls, value: Optional[str]) -> "FileStrategy":
        if value is None:
            return cls.APPLICATION
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise ValueError(
                f"Invalid strategy: {value}. Valid options: 'application', 'forage'"
            ) from None


class _Result(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    def to_json_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class ErrorResult(_Result):
    success: bool = False
    error: str


class FactoryWriteResult(_Result):
    success: bool = True
    properties_file: str = Field(..., alias="propertiesFile")
    operation: str
    message: str
    bean_name: Optional[str] = Field(default=None, alias="beanName")
    kind: Optional[str] = None


class DependencySummary(_Result):
    base_dependencies: list[str] = Field(default_factory=list, alias="baseDependencies")
    main_dependencies: list[str] = Field(default_factory=list, alias="mainDependencies")
    spring_boot_dependencies: list[str] = Field(default_factory=list, alias="springBootDependencies")
    quarkus_dependencies: list[str] = Field(default_factory=list, alias="quarkusDependencies")


class WriteSummary(_Result):
    success: bool = True
    factories: dict[str, Union[FactoryWriteResult, DependencySummary]]


class DeletedFileResult(_Result):
    success: bool = True
    properties_file: str = Field(..., alias="propertiesFile")
    deleted_properties: int = Field(..., alias="deletedProperties")
    message: str


class DependencyCleanup(_Result):
    removed_dependencies: list[str] = Field(default_factory=list, alias="removedDependencies")
    count: int = 0


class DeleteResult(_Result):
    success: bool = True
    operation: str = "delete"
    instance_name: str = Field(..., alias="instanceName")
    results: dict[str, Union[DeletedFileResult, DependencyCleanup]]


class ConditionalBeanInfo(_Result):
    name: str
    java_type: Optional[str] = Field(default=None, alias="javaType")
    description: Optional[str] = None


class BeanInfo(_Result):
    name: str
    kind: Optional[str] = None
    java_type: str = Field(..., alias="javaType")
    source_file: str = Field(..., alias="sourceFile")
    configuration: dict[str, str] = Field(default_factory=dict)
    conditional_beans: Optional[list[ConditionalBeanInfo]] = Field(
        default=None, alias="conditionalBeans"
    )
    factory_type: str = Field(..., exclude=True)


class ReadResult(_Result):
    success: bool = True
    message: Optional[str] = None
    directory: str
    bean_count: int = Field(..., alias="beanCount")
    beans: list[BeanInfo] = Field(default_factory=list)


CommandResult = Union[ErrorResult, FactoryWriteResult, DependencySummary, WriteSummary, DeleteResult, ReadResult]
