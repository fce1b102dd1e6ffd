import json
import shutil
import zipfile
from pathlib import Path
from unittest.mock import patch

from manifest_copier.config import ConfigManager
from manifest_copier.core import BatchRunner, HistoryStore
from manifest_copier.models import EventType, ManifestRecord


def _runner(tmp_path: Path, config: ConfigManager | None = None, events: list | None = None) -> BatchRunner:
    store = HistoryStore(tmp_path / "history.json", config)
    callback = events.append if events is not None else None
    return BatchRunner(store, config, event_callback=callback)


def test_run_copies_and_records_batch(tmp_path: Path) -> None:
    src = tmp_path / "in" / "a.txt"
    src.parent.mkdir()
    src.write_text("a", encoding="utf-8")
    dest = tmp_path / "out"

    result = _runner(tmp_path).run([ManifestRecord(str(src), str(dest))])

    assert (dest / "a.txt").read_text(encoding="utf-8") == "a"
    assert result.batch is not None
    assert [op.destination for op in result.batch.operations] == [str(dest / "a.txt")]
    assert len(json.loads((tmp_path / "history.json").read_text(encoding="utf-8"))) == 1


def test_run_skips_blank_fields(tmp_path: Path) -> None:
    events = []
    records = [
        ManifestRecord("   ", str(tmp_path / "out")),
        ManifestRecord(str(tmp_path / "a.txt"), "  "),
    ]

    result = _runner(tmp_path, events=events).run(records)

    assert len(result.skipped) == 2
    assert [error.code for error in result.errors.errors] == ["W-NO-SOURCE", "W-NO-DEST"]
    assert all(event.event_type == EventType.SKIPPED for event in events)
    assert result.batch is None
    assert not (tmp_path / "history.json").exists()


def test_run_skips_unresolved_source(tmp_path: Path) -> None:
    result = _runner(tmp_path).run([ManifestRecord(str(tmp_path / "missing.txt"), str(tmp_path / "out"))])

    assert len(result.skipped) == 1
    assert result.errors.get_by_code("W-NOT-FOUND")
    assert not (tmp_path / "out").exists()


def test_run_skips_when_directory_cannot_be_created(tmp_path: Path) -> None:
    src = tmp_path / "a.txt"
    src.write_text("a", encoding="utf-8")
    blocker = tmp_path / "blocker"
    blocker.write_text("i am a file", encoding="utf-8")
    config = ConfigManager()
    config.set("retry.max_retries", 0)

    result = _runner(tmp_path, config).run([ManifestRecord(str(src), str(blocker / "sub"))])

    assert len(result.skipped) == 1
    assert result.errors.get_by_code("W-MKDIR")


def test_run_creates_missing_directories(tmp_path: Path) -> None:
    src = tmp_path / "a.txt"
    src.write_text("a", encoding="utf-8")
    dest = tmp_path / "deep" / "er" / "out"
    events = []

    _runner(tmp_path, events=events).run([ManifestRecord(str(src), str(dest))])

    assert (dest / "a.txt").exists()
    assert EventType.DIR_CREATED in [event.event_type for event in events]


def test_run_collision_with_existing_and_in_batch(tmp_path: Path) -> None:
    dest = tmp_path / "out"
    dest.mkdir()
    (dest / "report.pdf").write_text("existing", encoding="utf-8")
    first = tmp_path / "one" / "report.pdf"
    second = tmp_path / "two" / "report.pdf"
    for index, path in enumerate((first, second), start=1):
        path.parent.mkdir()
        path.write_text(f"source {index}", encoding="utf-8")

    result = _runner(tmp_path).run(
        [ManifestRecord(str(first), str(dest)), ManifestRecord(str(second), str(dest))]
    )

    assert [Path(op.destination).name for op in result.completed] == ["report_1.pdf", "report_2.pdf"]
    assert (dest / "report.pdf").read_text(encoding="utf-8") == "existing"
    assert (dest / "report_1.pdf").read_text(encoding="utf-8") == "source 1"
    assert (dest / "report_2.pdf").read_text(encoding="utf-8") == "source 2"


def test_run_extracts_archive_entry(tmp_path: Path) -> None:
    container = tmp_path / "archive.zip"
    with zipfile.ZipFile(container, "w") as archive:
        archive.writestr("inner/file.txt", "zipped")
    raw = f"{container}/inner/file.txt"
    dest = tmp_path / "out"

    result = _runner(tmp_path).run([ManifestRecord(raw, str(dest), "renamed.txt")])

    assert (dest / "renamed.txt").read_text(encoding="utf-8") == "zipped"
    assert result.completed[0].source == raw


def test_failed_destination_stays_reserved(tmp_path: Path) -> None:
    src = tmp_path / "a.txt"
    src.write_text("a", encoding="utf-8")
    dest = tmp_path / "out"
    config = ConfigManager()
    config.set("retry.max_retries", 0)

    real_copy2 = shutil.copy2
    calls = {"count": 0}

    def flaky_copy2(src_path, dst_path, *args, **kwargs):
        calls["count"] += 1
        if calls["count"] == 1:
            raise PermissionError("denied")
        return real_copy2(src_path, dst_path, *args, **kwargs)

    with patch("manifest_copier.utils.file_ops.shutil.copy2", side_effect=flaky_copy2):
        result = _runner(tmp_path, config).run(
            [ManifestRecord(str(src), str(dest)), ManifestRecord(str(src), str(dest))]
        )

    assert len(result.failed) == 1
    assert result.failed[0].error_code == "E-COPY"
    assert [Path(op.destination).name for op in result.completed] == ["a_1.txt"]
    assert result.batch is not None
    assert len(result.batch.operations) == 1


def test_failed_destination_released_when_configured(tmp_path: Path) -> None:
    src = tmp_path / "a.txt"
    src.write_text("a", encoding="utf-8")
    dest = tmp_path / "out"
    config = ConfigManager()
    config.set("retry.max_retries", 0)
    config.set("runner.reserve_failed_destinations", False)

    real_copy2 = shutil.copy2
    calls = {"count": 0}

    def flaky_copy2(src_path, dst_path, *args, **kwargs):
        calls["count"] += 1
        if calls["count"] == 1:
            raise PermissionError("denied")
        return real_copy2(src_path, dst_path, *args, **kwargs)

    with patch("manifest_copier.utils.file_ops.shutil.copy2", side_effect=flaky_copy2):
        result = _runner(tmp_path, config).run(
            [ManifestRecord(str(src), str(dest)), ManifestRecord(str(src), str(dest))]
        )

    assert [Path(op.destination).name for op in result.completed] == ["a.txt"]


def test_preview_changes_nothing(tmp_path: Path) -> None:
    src = tmp_path / "a.txt"
    src.write_text("a", encoding="utf-8")
    dest = tmp_path / "out"
    events = []

    result = _runner(tmp_path, events=events).run(
        [ManifestRecord(str(src), str(dest)), ManifestRecord(str(src), str(dest))],
        preview=True,
    )

    assert not dest.exists()
    assert not (tmp_path / "history.json").exists()
    assert result.batch is None
    assert [Path(op.destination).name for op in result.completed] == ["a.txt", "a_1.txt"]
    event_types = [event.event_type for event in events]
    assert event_types.count(EventType.WOULD_CREATE_DIR) == 1
    assert event_types.count(EventType.WOULD_COPY) == 2


def test_all_failures_record_no_batch(tmp_path: Path) -> None:
    container = tmp_path / "archive.zip"
    with zipfile.ZipFile(container, "w") as archive:
        archive.writestr("a.txt", "a")
    dest = tmp_path / "out"

    with patch.object(zipfile.ZipFile, "getinfo", side_effect=KeyError("a.txt")):
        result = _runner(tmp_path).run([ManifestRecord(f"{container}/a.txt", str(dest))])

    assert result.failed[0].error_code == "E-ENTRY-VANISHED"
    assert result.batch is None
    assert not (tmp_path / "history.json").exists()


def _write_damaged_deflated_zip(container: Path, entry: str) -> None:
    with zipfile.ZipFile(container, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        archive.writestr(entry, b"payload " * 500)
    with zipfile.ZipFile(container) as archive:
        info = archive.getinfo(entry)
    data = bytearray(container.read_bytes())
    start = info.header_offset + 30 + len(info.filename.encode("utf-8")) + len(info.extra)
    # 0x07 starts a deflate block with an invalid block type
    data[start:start + 8] = b"\x07" * 8
    container.write_bytes(bytes(data))


def test_damaged_entry_does_not_abort_run(tmp_path: Path) -> None:
    good = tmp_path / "good.txt"
    good.write_text("good", encoding="utf-8")
    container = tmp_path / "bundle.zip"
    _write_damaged_deflated_zip(container, "doc.bin")
    dest = tmp_path / "out"
    config = ConfigManager()
    config.set("retry.max_retries", 0)

    result = _runner(tmp_path, config).run(
        [
            ManifestRecord(str(good), str(dest)),
            ManifestRecord(f"{container}/doc.bin", str(dest)),
        ]
    )

    assert [op.destination for op in result.completed] == [str(dest / "good.txt")]
    assert result.failed[0].error_code == "E-EXTRACT"
    assert result.batch is not None
    history = json.loads((tmp_path / "history.json").read_text(encoding="utf-8"))
    assert [op["destination"] for op in history[-1]["operations"]] == [str(dest / "good.txt")]


def test_preferred_name_with_directory_part_is_skipped(tmp_path: Path) -> None:
    src = tmp_path / "a.txt"
    src.write_text("a", encoding="utf-8")
    dest = tmp_path / "out"
    dest.mkdir()
    elsewhere = tmp_path / "elsewhere" / "escaped.txt"
    records = [
        ManifestRecord(str(src), str(dest), str(elsewhere)),
        ManifestRecord(str(src), str(dest), "../sibling.txt"),
        ManifestRecord(str(src), str(dest), "sub/x.txt"),
        ManifestRecord(str(src), str(dest), ".."),
    ]

    result = _runner(tmp_path).run(records)

    assert len(result.skipped) == 4
    assert [error.code for error in result.errors.errors] == ["W-BAD-NAME"] * 4
    assert result.batch is None
    assert not elsewhere.exists()
    assert not (tmp_path / "sibling.txt").exists()
    assert list(dest.iterdir()) == []
