"""One-way event stream from the scan engine to its consumers."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional

from .models import AnalysisReport

logger = logging.getLogger(__name__)


class EventKind(str, Enum):
    SCAN_STARTED = "scan-started"
    PROGRESS = "progress"
    RESULT = "result"
    FAILED = "failed"


@dataclass(frozen=True)
class ScanEvent:
    """A single channel message. ``run_id`` identifies the scan that emitted it."""

    kind: EventKind
    run_id: str
    value: Optional[int] = None
    report: Optional[AnalysisReport] = None
    message: Optional[str] = None

    def to_dict(self) -> Dict[str, object]:
        data: Dict[str, object] = {"type": self.kind.value, "runId": self.run_id}
        if self.value is not None:
            data["value"] = self.value
        if self.report is not None:
            data["data"] = self.report.to_dict()
        if self.message is not None:
            data["message"] = self.message
        return data


Listener = Callable[[ScanEvent], None]


class ReportChannel:
    """Deliver scan events to subscribed listeners in emission order."""

    def __init__(self) -> None:
        self._listeners: List[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener`` and return a callable that unsubscribes it."""

        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def emit(self, event: ScanEvent) -> None:
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:  # pylint: disable=broad-except
                logger.exception("Listener %r failed on %s event", listener, event.kind.value)
