"""解析後的來源：一般檔案或壓縮檔內的項目。"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional


class SourceKind(str, Enum):
    PLAIN_FILE = "PLAIN_FILE"
    ARCHIVE_ENTRY = "ARCHIVE_ENTRY"


@dataclass(frozen=True)
class ResolvedSource:
    """Closed two-case variant tagged by ``kind``.

    ``path`` is the file itself for ``PLAIN_FILE`` and the container archive
    for ``ARCHIVE_ENTRY``; ``entry_path`` is only set for archive entries and
    always uses forward slashes.
    """

    kind: SourceKind
    path: Path
    entry_path: Optional[str] = None

    @classmethod
    def plain_file(cls, path: Path) -> "ResolvedSource":
        return cls(kind=SourceKind.PLAIN_FILE, path=path)

    @classmethod
    def archive_entry(cls, container_path: Path, entry_path: str) -> "ResolvedSource":
        return cls(kind=SourceKind.ARCHIVE_ENTRY, path=container_path, entry_path=entry_path)

    @property
    def is_archive_entry(self) -> bool:
        return self.kind == SourceKind.ARCHIVE_ENTRY

    @property
    def base_name(self) -> str:
        if self.kind == SourceKind.ARCHIVE_ENTRY:
            return (self.entry_path or "").rsplit("/", 1)[-1]
        return self.path.name

    def describe(self) -> str:
        if self.kind == SourceKind.ARCHIVE_ENTRY:
            return f"{self.path}::{self.entry_path}"
        return str(self.path)

    def to_dict(self) -> dict[str, object]:
        return {
            "kind": self.kind.value,
            "path": str(self.path),
            "entry_path": self.entry_path,
        }
