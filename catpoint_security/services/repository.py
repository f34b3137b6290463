"""Security repository implementations: in-memory and JSON file backed."""

import json
import os
import tempfile
import threading
from typing import Dict, Optional, Set, Tuple

from ..exceptions import ConfigurationError
from ..logging_config import get_logger
from ..models.security import AlarmStatus, ArmingStatus, Sensor, SensorType
from ..utils import ensure_directory_exists
from .interfaces import SecurityRepositoryInterface

logger = get_logger("repository")


class InMemorySecurityRepository(SecurityRepositoryInterface):
    """Process-local repository. Sensors are keyed by (name, sensor_type)."""

    def __init__(self,
                 alarm_status: AlarmStatus = AlarmStatus.NO_ALARM,
                 arming_status: ArmingStatus = ArmingStatus.DISARMED):
        self._sensors: Dict[Tuple[str, SensorType], Sensor] = {}
        self._alarm_status = alarm_status
        self._arming_status = arming_status
        self._lock = threading.RLock()

    def add_sensor(self, sensor: Sensor) -> None:
        with self._lock:
            if sensor.key in self._sensors:
                logger.debug(f"Sensor {sensor.name} ({sensor.sensor_type.name}) already registered")
                return
            self._sensors[sensor.key] = sensor
            self._persist()
        logger.info(f"Added sensor {sensor.name} ({sensor.sensor_type.name})")

    def remove_sensor(self, sensor: Sensor) -> None:
        with self._lock:
            if self._sensors.pop(sensor.key, None) is None:
                return
            self._persist()
        logger.info(f"Removed sensor {sensor.name} ({sensor.sensor_type.name})")

    def update_sensor(self, sensor: Sensor) -> None:
        with self._lock:
            stored = self._sensors.get(sensor.key)
            if stored is None:
                return
            stored.active = sensor.active
            self._persist()

    def get_sensors(self) -> Set[Sensor]:
        with self._lock:
            return set(self._sensors.values())

    def get_alarm_status(self) -> AlarmStatus:
        return self._alarm_status

    def set_alarm_status(self, alarm_status: AlarmStatus) -> None:
        with self._lock:
            self._alarm_status = alarm_status
            self._persist()

    def get_arming_status(self) -> ArmingStatus:
        return self._arming_status

    def set_arming_status(self, arming_status: ArmingStatus) -> None:
        with self._lock:
            self._arming_status = arming_status
            self._persist()

    def _persist(self) -> None:
        """Hook for durable subclasses; called with the lock held after each write."""

    def to_dict(self) -> dict:
        with self._lock:
            return {
                'alarm_status': self._alarm_status.name,
                'arming_status': self._arming_status.name,
                'sensors': [s.to_dict() for s in sorted(
                    self._sensors.values(), key=lambda s: (s.name, s.sensor_type.name))]
            }


class JsonFileSecurityRepository(InMemorySecurityRepository):
    """Repository that writes its whole state to a JSON file after every change."""

    def __init__(self, file_path: str):
        self.file_path = file_path
        self._loading = False
        super().__init__()
        self._load()

    def _load(self) -> None:
        """Load state from file, or create the file with defaults."""
        if not os.path.exists(self.file_path):
            self._persist()
            return

        try:
            with open(self.file_path, 'r') as f:
                data = json.load(f)
            self._loading = True
            self._alarm_status = AlarmStatus[data.get('alarm_status', 'NO_ALARM')]
            self._arming_status = ArmingStatus[data.get('arming_status', 'DISARMED')]
            self._sensors = {}
            for sensor_data in data.get('sensors', []):
                sensor = Sensor.from_dict(sensor_data)
                self._sensors[sensor.key] = sensor
        except (json.JSONDecodeError, KeyError, TypeError) as e:
            raise ConfigurationError(f"Corrupt repository file {self.file_path}: {e}") from e
        finally:
            self._loading = False

        logger.info(f"Loaded {len(self._sensors)} sensors from {self.file_path}")

    def _persist(self) -> None:
        if self._loading:
            return

        directory = os.path.dirname(os.path.abspath(self.file_path))
        ensure_directory_exists(directory)

        fd, tmp_path = tempfile.mkstemp(dir=directory, suffix=".tmp")
        try:
            with os.fdopen(fd, 'w') as f:
                json.dump(self.to_dict(), f, indent=2)
            os.replace(tmp_path, self.file_path)
        except OSError:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise


def create_repository(backend: str = "memory",
                      file_path: Optional[str] = None) -> SecurityRepositoryInterface:
    """Build a repository for the configured backend."""
    if backend == "memory":
        return InMemorySecurityRepository()
    if backend == "json":
        if not file_path:
            raise ConfigurationError("JSON repository requires a file path")
        return JsonFileSecurityRepository(file_path)
    raise ConfigurationError(f"Unknown repository backend: {backend}")
