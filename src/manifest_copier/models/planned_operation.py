"""已規劃的單筆操作。"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .resolved_source import ResolvedSource, SourceKind


@dataclass(frozen=True)
class PlannedOperation:
    raw_source: str
    resolved_source: ResolvedSource
    final_destination_path: Path
    base_name: str

    @property
    def action(self) -> str:
        if self.resolved_source.kind == SourceKind.ARCHIVE_ENTRY:
            return "EXTRACT"
        return "COPY"

    def to_dict(self) -> dict[str, object]:
        return {
            "action": self.action,
            "raw_source": self.raw_source,
            "resolved_source": self.resolved_source.to_dict(),
            "final_destination_path": str(self.final_destination_path),
            "base_name": self.base_name,
        }
