"""路徑處理工具。"""

from __future__ import annotations

import os
from pathlib import Path


def occupied_key(path: Path | str) -> str:
    """Comparison key for destination paths claimed within one run."""
    return os.path.normcase(os.path.abspath(os.fspath(path)))


def to_entry_name(parts: list[str]) -> str:
    """Join path components into an archive entry name (always '/'-separated)."""
    return "/".join(part.replace("\\", "/").strip("/") for part in parts if part)


def has_archive_suffix(path: Path, extensions: list[str]) -> bool:
    suffix = path.suffix.lower()
    return any(suffix == ext.lower() for ext in extensions)


def is_bare_filename(name: str) -> bool:
    """True when ``name`` is a single path component with no directory part."""
    if not name or name in {".", ".."}:
        return False
    if "/" in name or "\\" in name:
        return False
    return Path(name).name == name and not Path(name).is_absolute()
