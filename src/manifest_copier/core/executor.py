"""Execute planned copy/extract operations."""

from __future__ import annotations

from dataclasses import dataclass
import zipfile
import zlib
from typing import Optional

from ..config import ConfigManager
from ..models import CompletedOperation, PlannedOperation, SourceKind
from ..utils import file_ops
from ..utils.logger import get_logger


@dataclass
class ExecutionResult:
    operation: PlannedOperation
    status: str
    completed: Optional[CompletedOperation] = None
    error_code: Optional[str] = None
    error_message: Optional[str] = None
    retry_count: int = 0

    @property
    def success(self) -> bool:
        return self.completed is not None


class OperationExecutor:
    def __init__(self, config: ConfigManager | None = None, logger=None) -> None:
        self.config = config or ConfigManager()
        self.logger = logger or get_logger(self.__class__.__name__)

    def execute(self, operation: PlannedOperation, preview: bool = False) -> ExecutionResult:
        if preview:
            return self._preview(operation)
        if operation.resolved_source.kind == SourceKind.ARCHIVE_ENTRY:
            return self._extract(operation)
        return self._copy(operation)

    def _preview(self, operation: PlannedOperation) -> ExecutionResult:
        status = "WOULD_EXTRACT" if operation.resolved_source.kind == SourceKind.ARCHIVE_ENTRY else "WOULD_COPY"
        return ExecutionResult(
            operation=operation,
            status=status,
            completed=self._completed(operation),
        )

    def _copy(self, operation: PlannedOperation) -> ExecutionResult:
        src_path = operation.resolved_source.path
        dst_path = operation.final_destination_path
        result = file_ops.safe_copy2(src_path, dst_path, config=self.config, logger=self.logger)
        if not result.success:
            self.logger.error(f"COPY FAILED: {src_path} -> {dst_path} ({result.error_message})")
            return ExecutionResult(
                operation=operation,
                status="ERROR",
                error_code="E-COPY",
                error_message=result.error_message,
                retry_count=result.retry_count,
            )

        self.logger.info(f"COPIED: {src_path} -> {dst_path}")
        return ExecutionResult(
            operation=operation,
            status="COPIED",
            completed=self._completed(operation),
            retry_count=result.retry_count,
        )

    def _extract(self, operation: PlannedOperation) -> ExecutionResult:
        source = operation.resolved_source
        dst_path = operation.final_destination_path
        entry_name = source.entry_path or ""
        try:
            result = file_ops.safe_extract_entry(
                source.path,
                entry_name,
                dst_path,
                config=self.config,
                logger=self.logger,
            )
        except KeyError:
            message = f"Entry {entry_name} no longer exists in {source.path}"
            self.logger.error(f"EXTRACT FAILED: {message}")
            return ExecutionResult(
                operation=operation,
                status="ERROR",
                error_code="E-ENTRY-VANISHED",
                error_message=message,
            )
        except (zipfile.BadZipFile, zlib.error, EOFError, RuntimeError, NotImplementedError) as exc:
            self.logger.error(f"EXTRACT FAILED: {source.describe()} -> {dst_path} ({exc})")
            return ExecutionResult(
                operation=operation,
                status="ERROR",
                error_code="E-EXTRACT",
                error_message=str(exc),
            )

        if not result.success:
            self.logger.error(f"EXTRACT FAILED: {source.describe()} -> {dst_path} ({result.error_message})")
            return ExecutionResult(
                operation=operation,
                status="ERROR",
                error_code="E-EXTRACT",
                error_message=result.error_message,
                retry_count=result.retry_count,
            )

        self.logger.info(f"EXTRACTED: {source.describe()} -> {dst_path}")
        return ExecutionResult(
            operation=operation,
            status="EXTRACTED",
            completed=self._completed(operation),
            retry_count=result.retry_count,
        )

    def _completed(self, operation: PlannedOperation) -> CompletedOperation:
        return CompletedOperation(
            source=operation.raw_source,
            destination=str(operation.final_destination_path),
        )
