"""Route structured events to the caller and collect warnings/errors."""

from __future__ import annotations

from typing import Callable, Optional

from ..models import ErrorLevel, EventType, ProcessError, RunEvent
from ..utils.error_handler import ErrorHandler

EventCallback = Callable[[RunEvent], None]


class EventRecorder:
    def __init__(self, callback: Optional[EventCallback] = None, errors: ErrorHandler | None = None) -> None:
        self.callback = callback
        self.errors = errors if errors is not None else ErrorHandler()
        self.events: list[RunEvent] = []

    def emit(
        self,
        event_type: EventType,
        level: ErrorLevel,
        message: str,
        *,
        source: Optional[str] = None,
        destination: Optional[str] = None,
        code: Optional[str] = None,
    ) -> RunEvent:
        event = RunEvent(
            event_type=event_type,
            level=level,
            message=message,
            source=source,
            destination=destination,
            code=code,
        )
        self.events.append(event)
        if code is not None:
            self.errors.add(
                ProcessError(code=code, level=level, message=message, file_path=destination or source)
            )
        if self.callback is not None:
            self.callback(event)
        return event
