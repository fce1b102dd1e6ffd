"""Turn one manifest record into a concrete operation."""

from __future__ import annotations

from pathlib import Path

from ..models import ManifestRecord, PlannedOperation, ResolvedSource
from ..utils import path_utils
from .name_allocator import NameAllocator, OccupiedSet


class OperationPlanner:
    def __init__(self, allocator: NameAllocator | None = None) -> None:
        self.allocator = allocator or NameAllocator()

    def plan(
        self,
        record: ManifestRecord,
        resolved_source: ResolvedSource,
        occupied: OccupiedSet,
    ) -> PlannedOperation:
        if record.has_preferred_name:
            base_name = str(record.preferred_name).strip()
            if not path_utils.is_bare_filename(base_name):
                raise ValueError(f"Preferred name must be a plain file name: {base_name!r}")
        else:
            base_name = resolved_source.base_name

        destination_dir = Path(record.destination_dir.strip())
        final_name = self.allocator.allocate(destination_dir, base_name, occupied)
        return PlannedOperation(
            raw_source=record.raw_source,
            resolved_source=resolved_source,
            final_destination_path=destination_dir / final_name,
            base_name=base_name,
        )
