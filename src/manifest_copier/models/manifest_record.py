"""Manifest 單列記錄。"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ManifestRecord:
    raw_source: str
    destination_dir: str
    preferred_name: Optional[str] = None
    line_number: Optional[int] = None

    @property
    def has_source(self) -> bool:
        return bool(self.raw_source and self.raw_source.strip())

    @property
    def has_destination(self) -> bool:
        return bool(self.destination_dir and self.destination_dir.strip())

    @property
    def has_preferred_name(self) -> bool:
        return bool(self.preferred_name and self.preferred_name.strip())
