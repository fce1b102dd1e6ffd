"""Drive a manifest through planning, execution and history recording."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional

from ..config import ConfigManager
from ..models import (
    Batch,
    CompletedOperation,
    ErrorLevel,
    EventType,
    ManifestRecord,
    PlannedOperation,
)
from ..utils import file_ops, path_utils
from ..utils.error_handler import ErrorHandler
from ..utils.logger import get_logger
from .events import EventCallback, EventRecorder
from .executor import ExecutionResult, OperationExecutor
from .history import HistoryStore
from .name_allocator import OccupiedSet
from .planner import OperationPlanner
from .source_resolver import SourceResolver

_SUCCESS_EVENTS = {
    "COPIED": EventType.COPIED,
    "EXTRACTED": EventType.EXTRACTED,
    "WOULD_COPY": EventType.WOULD_COPY,
    "WOULD_EXTRACT": EventType.WOULD_EXTRACT,
}


@dataclass
class RunResult:
    preview: bool
    planned: list[PlannedOperation] = field(default_factory=list)
    completed: list[CompletedOperation] = field(default_factory=list)
    failed: list[ExecutionResult] = field(default_factory=list)
    skipped: list[ManifestRecord] = field(default_factory=list)
    batch: Optional[Batch] = None
    errors: ErrorHandler = field(default_factory=ErrorHandler)


class BatchRunner:
    def __init__(
        self,
        history: HistoryStore,
        config: ConfigManager | None = None,
        logger=None,
        event_callback: Optional[EventCallback] = None,
        resolver: SourceResolver | None = None,
        planner: OperationPlanner | None = None,
        executor: OperationExecutor | None = None,
    ) -> None:
        self.history = history
        self.config = config or ConfigManager()
        self.logger = logger or get_logger(self.__class__.__name__)
        self.event_callback = event_callback
        self.resolver = resolver or SourceResolver(self.config)
        self.planner = planner or OperationPlanner()
        self.executor = executor or OperationExecutor(self.config)
        self.reserve_failed = bool(self.config.get("runner.reserve_failed_destinations", True))

    def run(self, records: Iterable[ManifestRecord], preview: bool = False) -> RunResult:
        """Process records strictly in order; each sees the names claimed before it."""
        recorder = EventRecorder(self.event_callback)
        result = RunResult(preview=preview, errors=recorder.errors)
        occupied = OccupiedSet()
        announced_dirs: set[str] = set()

        for record in records:
            self._process_record(record, preview, occupied, announced_dirs, result, recorder)

        if not preview and result.completed:
            result.batch = self.history.append(result.completed)
            if result.batch is not None:
                recorder.emit(
                    EventType.BATCH_RECORDED,
                    ErrorLevel.INFO,
                    f"Recorded batch {result.batch.id} ({len(result.completed)} file(s))",
                )
        return result

    def _process_record(
        self,
        record: ManifestRecord,
        preview: bool,
        occupied: OccupiedSet,
        announced_dirs: set[str],
        result: RunResult,
        recorder: EventRecorder,
    ) -> None:
        if not record.has_source:
            self._skip(record, result, recorder, "W-NO-SOURCE", f"{self._where(record)}missing source, skipped")
            return
        if not record.has_destination:
            message = f"{self._where(record)}missing destination for {record.raw_source}, skipped"
            self._skip(record, result, recorder, "W-NO-DEST", message)
            return
        if record.has_preferred_name and not path_utils.is_bare_filename(str(record.preferred_name).strip()):
            message = f"{self._where(record)}new name is not a plain file name: {record.preferred_name!r}, skipped"
            self._skip(record, result, recorder, "W-BAD-NAME", message)
            return

        resolved = self.resolver.resolve(record.raw_source.strip())
        if resolved is None:
            self._skip(record, result, recorder, "W-NOT-FOUND", f"{self._where(record)}source not found: {record.raw_source}")
            return

        destination_dir = Path(record.destination_dir.strip())
        if not self._ensure_directory(destination_dir, preview, announced_dirs, recorder):
            self._skip(
                record, result, recorder, "W-MKDIR", f"{self._where(record)}cannot create destination {destination_dir}"
            )
            return

        operation = self.planner.plan(record, resolved, occupied)
        result.planned.append(operation)
        execution = self.executor.execute(operation, preview=preview)
        destination = str(operation.final_destination_path)

        if execution.completed is not None:
            occupied.add(operation.final_destination_path)
            result.completed.append(execution.completed)
            recorder.emit(
                _SUCCESS_EVENTS[execution.status],
                ErrorLevel.INFO,
                f"{execution.status}: {resolved.describe()} -> {destination}",
                source=record.raw_source,
                destination=destination,
            )
            return

        if self.reserve_failed:
            occupied.add(operation.final_destination_path)
        result.failed.append(execution)
        recorder.emit(
            EventType.FAILED,
            ErrorLevel.ERROR,
            f"{operation.action} failed: {resolved.describe()} -> {destination} ({execution.error_message})",
            source=record.raw_source,
            destination=destination,
            code=execution.error_code,
        )

    def _ensure_directory(
        self,
        directory: Path,
        preview: bool,
        announced_dirs: set[str],
        recorder: EventRecorder,
    ) -> bool:
        if directory.is_dir():
            return True
        if preview:
            if str(directory) not in announced_dirs:
                announced_dirs.add(str(directory))
                recorder.emit(
                    EventType.WOULD_CREATE_DIR,
                    ErrorLevel.INFO,
                    f"Would create directory: {directory}",
                    destination=str(directory),
                )
            return True

        outcome = file_ops.safe_makedirs(directory, config=self.config, logger=self.logger)
        if not outcome.success:
            self.logger.warning(f"MKDIR FAILED: {directory} ({outcome.error_message})")
            return False
        recorder.emit(
            EventType.DIR_CREATED,
            ErrorLevel.INFO,
            f"Created directory: {directory}",
            destination=str(directory),
        )
        return True

    def _skip(
        self,
        record: ManifestRecord,
        result: RunResult,
        recorder: EventRecorder,
        code: str,
        message: str,
    ) -> None:
        self.logger.warning(message)
        result.skipped.append(record)
        recorder.emit(
            EventType.SKIPPED,
            ErrorLevel.WARNING,
            message,
            source=record.raw_source or None,
            destination=record.destination_dir or None,
            code=code,
        )

    def _where(self, record: ManifestRecord) -> str:
        if record.line_number is None:
            return ""
        return f"line {record.line_number}: "
