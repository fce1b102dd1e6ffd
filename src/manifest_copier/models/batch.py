"""歷史紀錄：每次非預覽執行一個批次。"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class CompletedOperation:
    source: str
    destination: str

    def to_dict(self) -> dict[str, str]:
        return {"source": self.source, "destination": self.destination}

    @classmethod
    def from_dict(cls, data: Any) -> "CompletedOperation":
        if not isinstance(data, dict):
            raise ValueError(f"Operation must be an object, got {type(data).__name__}")
        source = data["source"]
        destination = data["destination"]
        if not isinstance(source, str) or not isinstance(destination, str):
            raise ValueError("Operation source and destination must be strings")
        return cls(source=source, destination=destination)


@dataclass(frozen=True)
class Batch:
    id: int
    timestamp: str
    operations: tuple[CompletedOperation, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "timestamp": self.timestamp,
            "operations": [operation.to_dict() for operation in self.operations],
        }

    @classmethod
    def from_dict(cls, data: Any) -> "Batch":
        if not isinstance(data, dict):
            raise ValueError(f"Batch must be an object, got {type(data).__name__}")
        batch_id = data["id"]
        timestamp = data["timestamp"]
        operations = data["operations"]
        if isinstance(batch_id, bool) or not isinstance(batch_id, int):
            raise ValueError("Batch id must be an integer")
        if not isinstance(timestamp, str):
            raise ValueError("Batch timestamp must be a string")
        if not isinstance(operations, list):
            raise ValueError("Batch operations must be a list")
        return cls(
            id=batch_id,
            timestamp=timestamp,
            operations=tuple(CompletedOperation.from_dict(item) for item in operations),
        )
