"""執行期結構化事件模型。"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional

from .error_record import ErrorLevel


class EventType(str, Enum):
    SKIPPED = "SKIPPED"
    WOULD_CREATE_DIR = "WOULD_CREATE_DIR"
    DIR_CREATED = "DIR_CREATED"
    WOULD_COPY = "WOULD_COPY"
    WOULD_EXTRACT = "WOULD_EXTRACT"
    COPIED = "COPIED"
    EXTRACTED = "EXTRACTED"
    FAILED = "FAILED"
    BATCH_RECORDED = "BATCH_RECORDED"
    WOULD_DELETE = "WOULD_DELETE"
    DELETED = "DELETED"
    ALREADY_GONE = "ALREADY_GONE"
    DELETE_FAILED = "DELETE_FAILED"
    NOTHING_TO_UNDO = "NOTHING_TO_UNDO"


@dataclass
class RunEvent:
    event_type: EventType
    level: ErrorLevel
    message: str
    source: Optional[str] = None
    destination: Optional[str] = None
    code: Optional[str] = None
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> dict[str, object]:
        return {
            "event_type": self.event_type.value,
            "level": self.level.value,
            "message": self.message,
            "source": self.source,
            "destination": self.destination,
            "code": self.code,
            "timestamp": self.timestamp.strftime("%Y-%m-%d %H:%M:%S"),
        }
