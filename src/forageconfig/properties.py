"""Flat ``key=value`` property file helpers.

Files are always read fully and written fully, never streamed, so a
failed read leaves the file on disk untouched.
"""

import logging
from pathlib import Path
from typing import Optional

from .exceptions import ConfigFileError

logger = logging.getLogger(__name__)

COMMENT_MARKERS = ("#", "!")
SEPARATORS = "=:"


def is_comment_or_blank(line: str) -> bool:
    stripped = line.strip()
    return not stripped or stripped.startswith(COMMENT_MARKERS)


def find_separator(line: str) -> int:
    """Index of the first ``=`` or ``:`` in ``line``, -1 when there is none."""
    for i, ch in enumerate(line):
        if ch in SEPARATORS:
            return i
    return -1


def split_line(line: str) -> Optional[tuple[str, str]]:
    """Split an assignment line into ``(key, value)``.

    Returns None for comments, blank lines and lines without a key
    before the first ``=`` or ``:``.
    """
    if is_comment_or_blank(line):
        return None
    index = find_separator(line)
    if index <= 0:
        return None
    key = line[:index].strip()
    if not key:
        return None
    return key, line[index + 1:].strip()


def format_line(key: str, value: str) -> str:
    return f"{key}={value}"


def _logical_lines(text: str) -> list[str]:
    # A trailing backslash continues the value on the next line
    logical: list[str] = []
    pending = ""
    for raw in text.splitlines():
        if pending:
            raw = raw.lstrip()
        elif is_comment_or_blank(raw):
            continue
        if raw.endswith("\\") and not raw.endswith("\\\\"):
            pending += raw[:-1]
            continue
        logical.append(pending + raw)
        pending = ""
    if pending:
        logical.append(pending)
    return logical


def parse_properties(text: str) -> dict[str, str]:
    """Parse property file content into an ordered dict.

    Accepts ``=`` or ``:`` as separator; later duplicates win.
    """
    result: dict[str, str] = {}
    for line in _logical_lines(text):
        stripped = line.strip()
        cut = find_separator(stripped)
        if cut < 0:
            key, value = stripped, ""
        else:
            key, value = stripped[:cut].strip(), stripped[cut + 1:].strip()
        if key:
            result[key] = value
    return result


def read_properties(path: Path) -> dict[str, str]:
    return parse_properties(read_text(path))


def read_text(path: Path) -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigFileError(f"Failed to read {path}: {e}", str(path)) from e


def read_lines(path: Path) -> list[str]:
    return read_text(path).splitlines()


def write_lines(path: Path, lines: list[str]) -> None:
    """Replace the whole content of ``path`` with ``lines``."""
    content = "".join(f"{line}\n" for line in lines)
    try:
        Path(path).write_text(content, encoding="utf-8")
    except OSError as e:
        raise ConfigFileError(f"Failed to write {path}: {e}", str(path)) from e
    logger.debug("Wrote %d lines to %s", len(lines), path)
