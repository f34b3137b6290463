"""Component error ledger and collaborator-failure handling."""

import functools
import threading
import traceback
from datetime import datetime, timedelta
from typing import Dict, List, Optional, Any
from dataclasses import dataclass, field
from enum import Enum

from ..exceptions import CollaboratorUnavailableError
from ..logging_config import get_logger

logger = get_logger("error_handler")


class ErrorSeverity(Enum):
    """Error severity levels."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ComponentStatus(Enum):
    """Component status levels."""
    HEALTHY = "healthy"
    DEGRADED = "degraded"
    FAILED = "failed"


@dataclass
class ErrorRecord:
    """Record of an error occurrence."""
    component_name: str
    error: Exception
    severity: ErrorSeverity
    operation: str = ""
    timestamp: datetime = field(default_factory=datetime.now)
    traceback_str: str = ""


class ErrorHandler:
    """Records collaborator errors per component.

    Nothing is retried or recovered here; callers see the failure.
    """

    def __init__(self, max_records: int = 500):
        self.max_records = max_records
        self.error_records: List[ErrorRecord] = []
        self.component_error_counts: Dict[str, int] = {}
        self.component_status: Dict[str, ComponentStatus] = {}
        self._lock = threading.Lock()

    def register_component(self, component_name: str) -> None:
        """Register a component for error tracking."""
        with self._lock:
            self.component_error_counts.setdefault(component_name, 0)
            self.component_status.setdefault(component_name, ComponentStatus.HEALTHY)
        logger.debug(f"Component registered: {component_name}")

    def handle_error(self, component_name: str, error: Exception,
                     severity: ErrorSeverity, operation: str = "") -> ErrorRecord:
        """Record an error from a component and update its status."""
        record = ErrorRecord(
            component_name=component_name,
            error=error,
            severity=severity,
            operation=operation,
            traceback_str=traceback.format_exc()
        )

        with self._lock:
            self.error_records.append(record)
            if len(self.error_records) > self.max_records:
                self.error_records.pop(0)

            self.component_error_counts[component_name] = \
                self.component_error_counts.get(component_name, 0) + 1

            if severity == ErrorSeverity.CRITICAL:
                self.component_status[component_name] = ComponentStatus.FAILED
            elif severity == ErrorSeverity.HIGH:
                self.component_status[component_name] = ComponentStatus.DEGRADED

        logger.error(f"Error in {component_name} during {operation or 'call'}: "
                     f"{error} (Severity: {severity.value})")
        return record

    def mark_healthy(self, component_name: str) -> None:
        with self._lock:
            if self.component_status.get(component_name, ComponentStatus.HEALTHY) != ComponentStatus.HEALTHY:
                logger.info(f"Component {component_name} is healthy again")
            self.component_status[component_name] = ComponentStatus.HEALTHY

    def get_component_health(self) -> Dict[str, ComponentStatus]:
        with self._lock:
            return dict(self.component_status)

    def get_error_stats(self) -> Dict[str, Any]:
        with self._lock:
            return {
                "total_errors": len(self.error_records),
                "component_error_counts": dict(self.component_error_counts),
                "component_status": {k: v.value for k, v in self.component_status.items()}
            }

    def get_error_summary(self, hours: int = 24) -> Dict[str, Any]:
        """Get summary of errors in the last N hours."""
        cutoff_time = datetime.now() - timedelta(hours=hours)

        with self._lock:
            recent_errors = [e for e in self.error_records if e.timestamp >= cutoff_time]

        component_counts: Dict[str, int] = {}
        severity_counts = {severity.value: 0 for severity in ErrorSeverity}

        for error in recent_errors:
            component_counts[error.component_name] = component_counts.get(error.component_name, 0) + 1
            severity_counts[error.severity.value] += 1

        return {
            "total_errors": len(recent_errors),
            "component_counts": component_counts,
            "severity_counts": severity_counts,
            "time_period_hours": hours
        }

    def reset_error_counts(self, component_name: Optional[str] = None) -> None:
        with self._lock:
            components = [component_name] if component_name else list(self.component_error_counts)
            for component in components:
                self.component_error_counts[component] = 0
                self.component_status[component] = ComponentStatus.HEALTHY


# Create global error handler instance
global_error_handler = ErrorHandler()


def collaborator_call(component_name: str, severity: ErrorSeverity = ErrorSeverity.HIGH,
                      error_handler: Optional[ErrorHandler] = None,
                      operation: Optional[str] = None):
    """Decorator recording a failure and re-raising it as CollaboratorUnavailableError."""
    def decorator(func):
        op_name = operation or getattr(func, "__name__", "call")

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            handler = error_handler or global_error_handler
            try:
                result = func(*args, **kwargs)
            except CollaboratorUnavailableError:
                raise
            except Exception as e:
                handler.handle_error(component_name, e, severity, operation=op_name)
                raise CollaboratorUnavailableError(component_name, op_name, e) from e
            handler.mark_healthy(component_name)
            return result
        return wrapper
    return decorator


class GuardedCollaborator:
    """Proxy that routes every method call on ``target`` through collaborator_call."""

    def __init__(self, target: Any, component_name: str,
                 error_handler: Optional[ErrorHandler] = None):
        self._target = target
        self._component_name = component_name
        self._error_handler = error_handler
        (error_handler or global_error_handler).register_component(component_name)

    @property
    def target(self) -> Any:
        return self._target

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        attr = getattr(self._target, name)
        if not callable(attr):
            return attr
        return collaborator_call(self._component_name,
                                 error_handler=self._error_handler,
                                 operation=name)(attr)
