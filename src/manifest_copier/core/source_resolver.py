"""Classify a manifest source as a plain file or an archive entry."""

from __future__ import annotations

import zipfile
from pathlib import Path
from typing import Optional

from ..config import ConfigManager
from ..models import ResolvedSource
from ..utils import path_utils
from ..utils.logger import get_logger


class SourceResolver:
    def __init__(self, config: ConfigManager | None = None, logger=None) -> None:
        self.config = config or ConfigManager()
        self.logger = logger or get_logger(self.__class__.__name__)
        self.archive_extensions = list(self.config.get("archive.extensions", [".zip"]))
        self.case_insensitive = bool(self.config.get("archive.case_insensitive_lookup", False))

    def resolve(self, raw: str) -> Optional[ResolvedSource]:
        """Return the resolved source, or ``None`` when nothing matches.

        ``a/b.zip/inner/c.txt`` resolves to entry ``inner/c.txt`` of
        ``a/b.zip`` when that entry exists. The walk goes up one component at
        a time and stops at the filesystem root.
        """
        path = Path(raw)
        if path.is_file():
            return ResolvedSource.plain_file(path)

        inner_parts: list[str] = []
        current = path
        while current.parent != current:
            inner_parts.insert(0, current.name)
            current = current.parent
            if not current.is_file() or not path_utils.has_archive_suffix(current, self.archive_extensions):
                continue
            entry_name = path_utils.to_entry_name(inner_parts)
            found = self._lookup_entry(current, entry_name)
            if found is not None:
                return ResolvedSource.archive_entry(current, found)

        return None

    def _lookup_entry(self, container: Path, entry_name: str) -> Optional[str]:
        try:
            with zipfile.ZipFile(container, "r") as archive:
                names = archive.namelist()
        except (OSError, zipfile.BadZipFile) as exc:
            self.logger.debug(f"Cannot open archive {container}: {exc}")
            return None

        if entry_name in names:
            return entry_name
        if self.case_insensitive:
            folded = entry_name.casefold()
            for name in names:
                if name.casefold() == folded:
                    return name
        return None
