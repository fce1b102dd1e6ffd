"""時間戳處理工具。"""

from __future__ import annotations

import time
from datetime import datetime

HISTORY_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def get_history_timestamp(now: datetime | None = None) -> str:
    return (now or datetime.now()).strftime(HISTORY_TIMESTAMP_FORMAT)


def next_batch_id(previous_id: int | None = None) -> int:
    """High-resolution timestamp id, strictly greater than ``previous_id``."""
    candidate = time.time_ns()
    if previous_id is not None and candidate <= previous_id:
        return previous_id + 1
    return candidate
