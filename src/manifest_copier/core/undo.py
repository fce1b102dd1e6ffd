"""Undo the most recent recorded batch."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from ..config import ConfigManager
from ..models import Batch, CompletedOperation, ErrorLevel, EventType
from ..utils import file_ops
from ..utils.error_handler import ErrorHandler
from ..utils.logger import get_logger
from .events import EventCallback, EventRecorder
from .history import HistoryStore


@dataclass
class UndoResult:
    batch: Optional[Batch]
    preview: bool = False
    removed: list[CompletedOperation] = field(default_factory=list)
    missing: list[CompletedOperation] = field(default_factory=list)
    failed: list[CompletedOperation] = field(default_factory=list)
    errors: ErrorHandler = field(default_factory=ErrorHandler)

    @property
    def nothing_to_undo(self) -> bool:
        return self.batch is None


class UndoEngine:
    def __init__(
        self,
        history: HistoryStore,
        config: ConfigManager | None = None,
        logger=None,
        event_callback: Optional[EventCallback] = None,
    ) -> None:
        self.history = history
        self.config = config or ConfigManager()
        self.logger = logger or get_logger(self.__class__.__name__)
        self.event_callback = event_callback

    def undo_last(self, preview: bool = False) -> UndoResult:
        """Delete every destination of the newest batch, best effort per file.

        The batch leaves the history before any file is touched. In preview
        mode the history and filesystem are left as they are.
        """
        recorder = EventRecorder(self.event_callback)
        batch = self.history.peek_last() if preview else self.history.pop_last()
        result = UndoResult(batch=batch, preview=preview, errors=recorder.errors)

        if batch is None:
            recorder.emit(
                EventType.NOTHING_TO_UNDO,
                ErrorLevel.INFO,
                "Nothing to undo",
                code="I-NOTHING-TO-UNDO",
            )
            return result

        self.logger.info(f"Undoing batch {batch.id} from {batch.timestamp} ({len(batch.operations)} file(s))")
        for operation in batch.operations:
            self._undo_operation(operation, preview, result, recorder)
        return result

    def _undo_operation(
        self,
        operation: CompletedOperation,
        preview: bool,
        result: UndoResult,
        recorder: EventRecorder,
    ) -> None:
        destination = Path(operation.destination)
        if not (destination.exists() or destination.is_symlink()):
            self.logger.warning(f"ALREADY GONE: {destination}")
            result.missing.append(operation)
            recorder.emit(
                EventType.ALREADY_GONE,
                ErrorLevel.WARNING,
                f"Already gone: {destination}",
                source=operation.source,
                destination=operation.destination,
                code="W-UNDO-MISSING",
            )
            return

        if preview:
            result.removed.append(operation)
            recorder.emit(
                EventType.WOULD_DELETE,
                ErrorLevel.INFO,
                f"Would delete: {destination}",
                source=operation.source,
                destination=operation.destination,
            )
            return

        removal = file_ops.safe_remove(destination, config=self.config, logger=self.logger)
        if not removal.success:
            self.logger.error(f"DELETE FAILED: {destination} ({removal.error_message})")
            result.failed.append(operation)
            recorder.emit(
                EventType.DELETE_FAILED,
                ErrorLevel.ERROR,
                f"Could not delete {destination}: {removal.error_message}",
                source=operation.source,
                destination=operation.destination,
                code="E-UNDO",
            )
            return

        self.logger.info(f"DELETED: {destination}")
        result.removed.append(operation)
        recorder.emit(
            EventType.DELETED,
            ErrorLevel.INFO,
            f"Deleted: {destination}",
            source=operation.source,
            destination=operation.destination,
        )
