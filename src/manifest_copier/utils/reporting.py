"""執行事件與摘要的主控台輸出。"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..models import ErrorLevel, RunEvent

if TYPE_CHECKING:
    from ..core.batch_runner import RunResult
    from ..core.undo import UndoResult

LEVEL_TAGS = {
    ErrorLevel.INFO: "OK",
    ErrorLevel.WARNING: "WARN",
    ErrorLevel.ERROR: "ERROR",
}


def format_event(event: RunEvent) -> str:
    tag = LEVEL_TAGS.get(event.level, event.level.value)
    return f"[{tag}] {event.message}"


def build_run_summary(result: "RunResult") -> str:
    if result.preview:
        return (
            "Preview done. "
            f"Planned: {len(result.completed)}, "
            f"Failed: {len(result.failed)}, "
            f"Skipped: {len(result.skipped)}. "
            "No files or history were changed."
        )
    summary = (
        "Copy done. "
        f"Succeeded: {len(result.completed)}, "
        f"Failed: {len(result.failed)}, "
        f"Skipped: {len(result.skipped)}"
    )
    if result.batch is not None:
        summary += f". Batch ID: {result.batch.id}"
    return summary


def build_undo_summary(result: "UndoResult") -> str:
    if result.batch is None:
        return "Nothing to undo."
    label = "Undo preview" if result.preview else "Undo done"
    verb = "Would delete" if result.preview else "Deleted"
    return (
        f"{label} for batch {result.batch.id} ({result.batch.timestamp}). "
        f"{verb}: {len(result.removed)}, "
        f"Already gone: {len(result.missing)}, "
        f"Failed: {len(result.failed)}"
    )
