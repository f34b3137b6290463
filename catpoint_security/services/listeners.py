"""Ready-made status listeners."""

import threading
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Deque, Dict, List, Any, Optional

from ..models.security import AlarmStatus
from .interfaces import StatusListener


class CallbackStatusListener(StatusListener):
    """Adapts plain callables to the StatusListener interface."""

    def __init__(self, on_status: Callable[[AlarmStatus], None],
                 on_cat_detected: Optional[Callable[[bool], None]] = None,
                 on_sensors_changed: Optional[Callable[[], None]] = None):
        self.on_status = on_status
        self.on_cat_detected = on_cat_detected
        self.on_sensors_changed = on_sensors_changed

    def notify(self, status: AlarmStatus) -> None:
        self.on_status(status)

    def cat_detected(self, cat_detected: bool) -> None:
        if self.on_cat_detected:
            self.on_cat_detected(cat_detected)

    def sensor_status_changed(self) -> None:
        if self.on_sensors_changed:
            self.on_sensors_changed()


@dataclass
class StatusEvent:
    """One notification received by an EventHistoryListener."""
    kind: str  # alarm_status, cat_detected, sensors_changed
    value: Any = None
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> Dict[str, Any]:
        value = self.value
        if isinstance(value, AlarmStatus):
            value = value.name
        return {
            'kind': self.kind,
            'value': value,
            'timestamp': self.timestamp.isoformat()
        }


class EventHistoryListener(StatusListener):
    """Keeps the most recent notifications in a bounded buffer."""

    def __init__(self, max_events: int = 100):
        self._events: Deque[StatusEvent] = deque(maxlen=max_events)
        self._lock = threading.Lock()

    def notify(self, status: AlarmStatus) -> None:
        self._append(StatusEvent('alarm_status', status))

    def cat_detected(self, cat_detected: bool) -> None:
        self._append(StatusEvent('cat_detected', cat_detected))

    def sensor_status_changed(self) -> None:
        self._append(StatusEvent('sensors_changed'))

    def _append(self, event: StatusEvent) -> None:
        with self._lock:
            self._events.append(event)

    def get_events(self, limit: Optional[int] = None) -> List[StatusEvent]:
        """Return events newest first."""
        with self._lock:
            events = list(reversed(self._events))
        return events[:limit] if limit else events

    def clear(self) -> None:
        with self._lock:
            self._events.clear()
