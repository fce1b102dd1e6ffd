"""核心流程模組。"""

from .batch_runner import BatchRunner, RunResult
from .events import EventRecorder
from .executor import ExecutionResult, OperationExecutor
from .history import HistoryStore
from .manifest_reader import read_manifest
from .name_allocator import NameAllocator, OccupiedSet
from .planner import OperationPlanner
from .source_resolver import SourceResolver
from .undo import UndoEngine, UndoResult

__all__ = [
    "BatchRunner",
    "RunResult",
    "EventRecorder",
    "ExecutionResult",
    "OperationExecutor",
    "HistoryStore",
    "read_manifest",
    "NameAllocator",
    "OccupiedSet",
    "OperationPlanner",
    "SourceResolver",
    "UndoEngine",
    "UndoResult",
]
