"""Write and delete configuration in a target directory.

Writes project the input batch, apply each factory's properties to its
file and merge the required dependency coordinates into
``application.properties``. Files are written one after another; a
failure part way through leaves the earlier files updated.
"""

import logging
from pathlib import Path
from typing import Mapping, Optional, Union

from ..catalog import Catalog
from .mutator import FileMutator
from .projector import ConfigProjector
from .results import (
    DeletedFileResult,
    DeleteResult,
    DependencyCleanup,
    DependencySummary,
    ErrorResult,
    FactoryWriteResult,
    FileStrategy,
    WriteSummary,
)

logger = logging.getLogger(__name__)

APPLICATION_PROPERTIES = "application.properties"

NO_FACTORY_MESSAGE = (
    "Could not detect factory type from configuration keys. "
    "Keys should follow the pattern 'forage.{factoryType}.{property}' or '{factoryType}.{property}' "
    "(e.g., 'forage.jdbc.url', 'jdbc.url', 'forage.jms.broker.url', 'jms.broker.url')."
)


class ConfigWriter:
    """Applies write and delete operations to one directory."""

    def __init__(
        self,
        catalog: Catalog,
        directory: Union[str, Path],
        strategy: FileStrategy = FileStrategy.APPLICATION,
    ):
        self.catalog = catalog
        self.directory = Path(directory)
        self.strategy = strategy
        self.projector = ConfigProjector(catalog)
        self.mutator = FileMutator(catalog)

    def file_name_for(self, factory_type: str) -> Optional[str]:
        if self.strategy is FileStrategy.APPLICATION:
            return APPLICATION_PROPERTIES
        return self.catalog.properties_file(factory_type)

    def existing_files(self) -> list[Path]:
        """Files of this strategy that exist in the directory."""
        if self.strategy is FileStrategy.APPLICATION:
            names = [APPLICATION_PROPERTIES]
        else:
            names = sorted({
                m.properties_file for m in self.catalog.factories() if m.properties_file
            })
        return [self.directory / n for n in names if (self.directory / n).is_file()]

    def write(self, raw: Mapping[str, str]):
        """Project ``raw`` and apply it.

        Returns:
            The single factory result, a ``WriteSummary`` when several
            results exist, or an ``ErrorResult``.
        """
        if not raw:
            return ErrorResult(error="Empty configuration provided.")

        configs = self.projector.project(raw)
        if not configs:
            return ErrorResult(error=NO_FACTORY_MESSAGE)

        self.directory.mkdir(parents=True, exist_ok=True)
        results: dict = {}
        for factory_type, config in configs.items():
            file_name = self.file_name_for(factory_type)
            if file_name is None:
                logger.warning("No properties file known for factory %s", factory_type)
                continue
            path = self.directory / file_name
            display_name = self.catalog.display_name(factory_type)
            operation = self.mutator.apply(path, config.properties, display_name)
            results[factory_type] = FactoryWriteResult(
                properties_file=str(path.absolute()),
                operation=operation,
                message=f"Successfully {operation}d configuration for {display_name}",
                bean_name=config.bean_name,
                kind=config.kind,
            )

        dependencies = self.projector.collect_dependencies(configs)
        if not dependencies.is_empty():
            self.mutator.merge_dependencies(self.directory / APPLICATION_PROPERTIES, dependencies)
            results["dependencies"] = DependencySummary(**dependencies.as_result())

        if len(results) == 1:
            return next(iter(results.values()))
        return WriteSummary(factories=results)

    def delete(self, instance_name: Optional[str]):
        """Remove an instance and prune dependencies nothing uses any more."""
        if instance_name is None or not instance_name.strip():
            return ErrorResult(error="Instance name (--name) is required for delete operation.")
        instance_name = instance_name.strip()
        if (
            self.catalog.is_factory(instance_name)
            or self.catalog.is_bean(instance_name)
            or self.catalog.bean_for_property_prefix(instance_name)
        ):
            return ErrorResult(
                error=f"'{instance_name}' is a factory type or bean kind, not an instance name"
            )

        files = self.existing_files()
        results: dict = {}
        deleted_types: set[str] = set()
        deleted_factory_types: set[str] = set()
        for path in files:
            deleted = self.mutator.delete_instance(path, instance_name)
            if not deleted.keys:
                continue
            deleted_types |= deleted.types
            deleted_factory_types |= deleted.factory_types
            results[path.name] = DeletedFileResult(
                properties_file=str(path.absolute()),
                deleted_properties=len(deleted.keys),
                message=f"Deleted configuration for instance '{instance_name}'",
            )

        if not results:
            return ErrorResult(error=f"No configuration found for instance '{instance_name}'")

        cleanup = self._prune(files, deleted_types, deleted_factory_types)
        if cleanup is not None:
            results["dependencyCleanup"] = cleanup
        return DeleteResult(instance_name=instance_name, results=results)

    def _prune(
        self,
        files: list[Path],
        deleted_types: set[str],
        deleted_factory_types: set[str],
    ) -> Optional[DependencyCleanup]:
        app_properties = self.directory / APPLICATION_PROPERTIES
        if not app_properties.is_file():
            return None
        remaining = self.mutator.configured_types(files)
        unused = self.mutator.unused_coordinates(deleted_types, deleted_factory_types, remaining)
        if not unused:
            return None
        removed = self.mutator.remove_dependencies(app_properties, unused)
        if not removed:
            return None
        return DependencyCleanup(removed_dependencies=removed, count=len(removed))
