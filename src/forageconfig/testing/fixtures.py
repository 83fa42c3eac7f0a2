"""Helpers for building isolated contexts and property files."""

from pathlib import Path
from typing import Optional

from ..context import ConfigContext
from ..interfaces import RuntimeType


def isolated_context(
    working_dir: Path,
    environ: Optional[dict[str, str]] = None,
    system_properties: Optional[dict[str, str]] = None,
    runtime: RuntimeType = RuntimeType.MAIN,
    host_settings: Optional[dict[str, str]] = None,
) -> ConfigContext:
    """A context rooted at ``working_dir`` that ignores the real environment."""
    return ConfigContext.for_testing(
        environ=environ or {},
        system_properties=system_properties,
        runtime=runtime,
        host_settings=host_settings,
        working_dir=working_dir,
    )


def write_properties(path: Path, *lines: str) -> Path:
    """Write ``lines`` to ``path`` (newline terminated) and return it."""
    path.write_text("".join(f"{line}\n" for line in lines), encoding="utf-8")
    return path
