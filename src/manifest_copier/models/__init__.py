"""資料模型模組。"""

from .batch import Batch, CompletedOperation
from .error_record import ErrorLevel, ProcessError
from .manifest_record import ManifestRecord
from .planned_operation import PlannedOperation
from .resolved_source import ResolvedSource, SourceKind
from .run_event import EventType, RunEvent

__all__ = [
    "Batch",
    "CompletedOperation",
    "ErrorLevel",
    "ProcessError",
    "ManifestRecord",
    "PlannedOperation",
    "ResolvedSource",
    "SourceKind",
    "EventType",
    "RunEvent",
]
