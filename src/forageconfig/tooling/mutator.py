"""Rewrite flat property files without disturbing unrelated content.

Every operation reads the whole file, computes the new lines in memory
and writes the whole file back. Comments, blank lines and keys the
operation does not own keep their exact text and position.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Mapping, Optional

from ..catalog import Catalog
from ..identity import ROOT_TOKEN
from ..properties import format_line, read_lines, split_line, write_lines
from .classifier import KeyClassifier
from .projector import DEPENDENCY_KEYS, VARIANT_DEPENDENCY_KEYS, DependencySet

logger = logging.getLogger(__name__)

GENERATED_BY = "# Generated by forageconfig"
KIND_SUFFIXES = (".db.kind", ".kind")


@dataclass
class DeletedInstance:
    """What :meth:`FileMutator.delete_instance` removed from one file."""
    keys: list[str] = field(default_factory=list)
    types: set[str] = field(default_factory=set)
    factory_types: set[str] = field(default_factory=set)


def _kind_value(key: str, value: str) -> Optional[str]:
    if value and key.endswith(KIND_SUFFIXES):
        return value.lower()
    return None


class FileMutator:
    """File operations of the write command."""

    def __init__(self, catalog: Catalog):
        self.catalog = catalog
        self.classifier = KeyClassifier(catalog)

    def apply(
        self,
        path: Path,
        properties: Mapping[str, str],
        title: Optional[str] = None,
    ) -> str:
        """Write ``properties`` into ``path``.

        Matching keys are replaced in place, new keys are appended.

        Returns:
            ``"create"`` if the file did not exist, else ``"update"``.
        """
        path = Path(path)
        if not path.exists():
            lines = [f"# Forage {title or 'Configuration'} Configuration", GENERATED_BY, ""]
            lines.extend(format_line(k, v) for k, v in properties.items())
            write_lines(path, lines)
            logger.info("Created %s", path)
            return "create"

        pending = dict(properties)
        updated: list[str] = []
        for line in read_lines(path):
            parsed = split_line(line)
            if parsed is not None and parsed[0] in pending:
                key = parsed[0]
                updated.append(format_line(key, pending.pop(key)))
            else:
                updated.append(line)
        updated.extend(format_line(k, v) for k, v in pending.items())
        write_lines(path, updated)
        logger.info("Updated %s", path)
        return "update"

    def delete_instance(self, path: Path, instance_name: str) -> DeletedInstance:
        """Remove every ``forage.<instance_name>.`` key from ``path``.

        The file is only rewritten when something matched.
        """
        prefix = f"{ROOT_TOKEN}{instance_name}."
        lines = read_lines(path)
        deleted = DeletedInstance()
        kept: list[str] = []
        for line in lines:
            parsed = split_line(line)
            if parsed is None or not parsed[0].startswith(prefix):
                kept.append(line)
                continue
            key, value = parsed
            deleted.keys.append(key)
            classified = self.classifier.classify(key)
            if classified is not None:
                deleted.types.add(classified.factory_type)
                deleted.factory_types.add(classified.factory_type)
                if classified.bean_kind:
                    deleted.types.add(classified.bean_kind.lower())
            kind = _kind_value(key, value)
            if kind:
                deleted.types.add(kind)

        if deleted.keys:
            write_lines(path, kept)
            logger.info("Deleted %d keys of %s from %s", len(deleted.keys), instance_name, path)
        return deleted

    def configured_types(self, paths: Iterable[Path]) -> set[str]:
        """Factory types and bean kinds still referenced by ``forage.`` keys."""
        types: set[str] = set()
        for path in paths:
            if not Path(path).is_file():
                continue
            for line in read_lines(path):
                parsed = split_line(line)
                if parsed is None or not parsed[0].startswith(ROOT_TOKEN):
                    continue
                key, value = parsed
                classified = self.classifier.classify(key)
                if classified is not None:
                    types.add(classified.factory_type)
                    if classified.bean_kind:
                        types.add(classified.bean_kind.lower())
                kind = _kind_value(key, value)
                if kind:
                    types.add(kind)
        return types

    def merge_dependencies(self, path: Path, dependencies: DependencySet) -> None:
        """Union ``dependencies`` into the dependency list keys of ``path``."""
        path = Path(path)
        lines = read_lines(path) if path.exists() else []
        merged: dict[str, list[str]] = {key: [] for key in DEPENDENCY_KEYS}
        for line in lines:
            parsed = split_line(line)
            if parsed is not None and parsed[0] in merged:
                for coordinate in parsed[1].split(","):
                    if coordinate.strip() and coordinate.strip() not in merged[parsed[0]]:
                        merged[parsed[0]].append(coordinate.strip())
        for key, coordinates in dependencies.by_key().items():
            for coordinate in coordinates:
                if coordinate not in merged[key]:
                    merged[key].append(coordinate)
        write_lines(path, self._rewrite_dependency_lines(lines, merged))

    def remove_dependencies(self, path: Path, coordinates: set[str]) -> list[str]:
        """Drop ``coordinates`` from every dependency list of ``path``.

        Returns:
            The coordinates actually removed; the file is left untouched
            when nothing was.
        """
        lines = read_lines(path)
        remaining: dict[str, list[str]] = {key: [] for key in DEPENDENCY_KEYS}
        removed: list[str] = []
        for line in lines:
            parsed = split_line(line)
            if parsed is None or parsed[0] not in remaining:
                continue
            for coordinate in parsed[1].split(","):
                coordinate = coordinate.strip()
                if not coordinate:
                    continue
                if coordinate in coordinates:
                    if coordinate not in removed:
                        removed.append(coordinate)
                elif coordinate not in remaining[parsed[0]]:
                    remaining[parsed[0]].append(coordinate)
        if not removed:
            return []
        write_lines(path, self._rewrite_dependency_lines(lines, remaining, append_missing=False))
        logger.info("Removed %d unused dependencies from %s", len(removed), path)
        return removed

    def unused_coordinates(
        self,
        deleted_types: set[str],
        deleted_factory_types: set[str],
        remaining_types: set[str],
    ) -> set[str]:
        """Coordinates no remaining instance needs any more."""
        unused: set[str] = set()
        for deleted_type in deleted_types:
            if deleted_type not in remaining_types:
                unused.update(self.catalog.bean_gavs(deleted_type))
        for factory_type in deleted_factory_types:
            in_use = any(
                t == factory_type or self.catalog.factory_for_bean(t) == factory_type
                for t in remaining_types
            )
            if in_use:
                continue
            for variant, _ in VARIANT_DEPENDENCY_KEYS:
                gav = self.catalog.variant_gav(factory_type, variant)
                if gav:
                    unused.add(gav)
        return unused

    @staticmethod
    def _rewrite_dependency_lines(
        lines: list[str],
        values: dict[str, list[str]],
        append_missing: bool = True,
    ) -> list[str]:
        # Empty lists are dropped rather than written as "key="
        seen: set[str] = set()
        updated: list[str] = []
        for line in lines:
            parsed = split_line(line)
            if parsed is None or parsed[0] not in values:
                updated.append(line)
                continue
            key = parsed[0]
            if key not in seen and values[key]:
                updated.append(format_line(key, ",".join(values[key])))
            seen.add(key)
        if append_missing:
            for key, coordinates in values.items():
                if key not in seen and coordinates:
                    updated.append(format_line(key, ",".join(coordinates)))
        return updated
