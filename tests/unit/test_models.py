from pathlib import Path

import pytest

from manifest_copier.models import (
    Batch,
    CompletedOperation,
    ErrorLevel,
    ManifestRecord,
    PlannedOperation,
    ProcessError,
    ResolvedSource,
    SourceKind,
)


def test_resolved_source_variants() -> None:
    plain = ResolvedSource.plain_file(Path("/in/a.txt"))
    entry = ResolvedSource.archive_entry(Path("/in/b.zip"), "deep/dir/c.txt")

    assert plain.kind == SourceKind.PLAIN_FILE
    assert plain.is_archive_entry is False
    assert entry.is_archive_entry is True
    assert entry.base_name == "c.txt"
    assert entry.describe().endswith("b.zip::deep/dir/c.txt")
    assert entry.to_dict()["kind"] == "ARCHIVE_ENTRY"


def test_planned_operation_serialization() -> None:
    operation = PlannedOperation(
        raw_source="/in/b.zip/c.txt",
        resolved_source=ResolvedSource.archive_entry(Path("/in/b.zip"), "c.txt"),
        final_destination_path=Path("/out/c.txt"),
        base_name="c.txt",
    )
    data = operation.to_dict()
    assert data["action"] == "EXTRACT"
    assert data["resolved_source"]["entry_path"] == "c.txt"


def test_manifest_record_blank_checks() -> None:
    record = ManifestRecord(raw_source=" ", destination_dir="/out", preferred_name="  ")
    assert record.has_source is False
    assert record.has_destination is True
    assert record.has_preferred_name is False


def test_batch_round_trip() -> None:
    batch = Batch(
        id=1700000000000000000,
        timestamp="2026-10-18 09:30:00",
        operations=(CompletedOperation(source="a", destination="b"),),
    )
    assert Batch.from_dict(batch.to_dict()) == batch


@pytest.mark.parametrize(
    "payload",
    [
        [],
        {"id": "1", "timestamp": "t", "operations": []},
        {"id": True, "timestamp": "t", "operations": []},
        {"id": 1, "timestamp": "t", "operations": {}},
        {"id": 1, "timestamp": "t", "operations": [{"source": "a"}]},
        {"id": 1, "timestamp": "t", "operations": ["a"]},
    ],
)
def test_batch_from_dict_rejects_bad_shapes(payload) -> None:
    with pytest.raises((KeyError, ValueError)):
        Batch.from_dict(payload)


def test_error_record_levels() -> None:
    error = ProcessError(
        code="W-NOT-FOUND",
        level=ErrorLevel.WARNING,
        message="source not found",
        file_path="missing.txt",
    )
    data = error.to_dict()
    assert data["level"] == "W"
