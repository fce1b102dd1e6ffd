"""Persistent batch history backing the undo command.

The whole log is a JSON array of batches that is re-read and rewritten in
full on every mutation. Nothing is cached between calls. Two processes
mutating the same log at once can lose a batch; the tool assumes a single
running instance per log file and does not lock.
"""

from __future__ import annotations

import json
import shutil
from pathlib import Path
from typing import Any, Iterable, Optional

from ..config import ConfigManager
from ..models import Batch, CompletedOperation
from ..utils import time_utils
from ..utils.logger import get_logger


class HistoryStore:
    def __init__(self, history_path: Path, config: ConfigManager | None = None, logger=None) -> None:
        self.history_path = history_path
        self.config = config or ConfigManager()
        self.logger = logger or get_logger(self.__class__.__name__)

    def load(self) -> list[Batch]:
        batches, _ = self._load()
        return batches

    def append(self, operations: Iterable[CompletedOperation]) -> Optional[Batch]:
        """Record one batch; an empty operation list records nothing."""
        ops = tuple(operations)
        if not ops:
            return None

        batches, corrupt = self._load()
        if corrupt:
            self._preserve_corrupt_log()
        previous_id = max((batch.id for batch in batches), default=None)
        batch = Batch(
            id=time_utils.next_batch_id(previous_id),
            timestamp=time_utils.get_history_timestamp(),
            operations=ops,
        )
        batches.append(batch)
        self._save(batches)
        self.logger.info(f"Recorded batch {batch.id} with {len(ops)} operation(s) in {self.history_path}")
        return batch

    def pop_last(self) -> Optional[Batch]:
        """Remove and return the newest batch, persisting the shorter log at once."""
        batches, _ = self._load()
        if not batches:
            return None
        last = batches.pop()
        self._save(batches)
        return last

    def peek_last(self) -> Optional[Batch]:
        batches = self.load()
        return batches[-1] if batches else None

    def _load(self) -> tuple[list[Batch], bool]:
        if not self.history_path.exists():
            return [], False

        try:
            text = self.history_path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            self.logger.warning(f"History log is not valid UTF-8, treating as empty: {self.history_path} ({exc})")
            return [], True
        if not text.strip():
            return [], False

        try:
            data: Any = json.loads(text)
        except json.JSONDecodeError as exc:
            self.logger.warning(f"History log is unreadable, treating as empty: {self.history_path} ({exc})")
            return [], True

        if isinstance(data, dict):
            data = [data]
        if not isinstance(data, list):
            self.logger.warning(
                f"History log has unexpected type {type(data).__name__}, treating as empty: {self.history_path}"
            )
            return [], True

        try:
            return [Batch.from_dict(item) for item in data], False
        except (KeyError, TypeError, ValueError) as exc:
            self.logger.warning(f"History log has a malformed batch, treating as empty: {self.history_path} ({exc})")
            return [], True

    def _save(self, batches: list[Batch]) -> None:
        indent = self.config.get("history.indent", 2)
        self.history_path.parent.mkdir(parents=True, exist_ok=True)
        temp_path = self.history_path.with_name(self.history_path.name + ".tmp")
        with temp_path.open("w", encoding="utf-8") as handle:
            json.dump([batch.to_dict() for batch in batches], handle, ensure_ascii=False, indent=indent)
            handle.write("\n")
        temp_path.replace(self.history_path)

    def _preserve_corrupt_log(self) -> None:
        backup_path = self.history_path.with_name(self.history_path.name + ".corrupt")
        try:
            shutil.copy2(self.history_path, backup_path)
            self.logger.warning(f"Saved unreadable history log to {backup_path}")
        except OSError as exc:
            self.logger.warning(f"Could not back up unreadable history log {self.history_path}: {exc}")
