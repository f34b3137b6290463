"""Alarm decision engine.

Receives sensor changes, camera frames and arming changes, decides the
alarm status and tells registered listeners about it. All status writes
go through ``set_alarm_status``.
"""

import threading
from typing import Any, Optional, Set

from ..logging_config import get_logger
from ..models.config import SystemConfig
from ..models.security import AlarmStatus, ArmingStatus, Sensor
from ..utils import any_sensor_active
from .error_handler import ErrorHandler, GuardedCollaborator, global_error_handler
from .interfaces import ImageServiceInterface, SecurityRepositoryInterface, StatusListener

logger = get_logger("security_service")


class SecurityService:
    """Decides the alarm status from sensors, arming state and the cat classifier.

    Every public method runs under one re-entrant lock, so the service may
    be shared between a sensor event source and a UI thread.
    """

    def __init__(self,
                 security_repository: SecurityRepositoryInterface,
                 image_service: ImageServiceInterface,
                 config: Optional[SystemConfig] = None,
                 error_handler: Optional[ErrorHandler] = None):
        self.security_repository = security_repository
        self.image_service = image_service
        self.config = config or SystemConfig()

        self.error_handler = error_handler or global_error_handler

        self._repository = GuardedCollaborator(security_repository, "security_repository", self.error_handler)
        self._classifier = GuardedCollaborator(image_service, "image_service", self.error_handler)

        self._status_listeners: Set[StatusListener] = set()
        self._last_cat_detected = False
        self._lock = threading.RLock()

    # Listener registry

    def add_status_listener(self, listener: StatusListener) -> None:
        with self._lock:
            self._status_listeners.add(listener)

    def remove_status_listener(self, listener: StatusListener) -> None:
        with self._lock:
            self._status_listeners.discard(listener)

    def has_status_listener(self, listener: StatusListener) -> bool:
        with self._lock:
            return listener in self._status_listeners

    def _notify_listeners(self, method: str, *args) -> None:
        """Fan an event out to every listener; one failing listener does not stop the rest."""
        for listener in list(self._status_listeners):
            try:
                getattr(listener, method)(*args)
            except Exception as e:
                logger.error(f"Status listener {listener!r} failed in {method}: {e}", exc_info=True)

    # Status accessors

    def get_alarm_status(self) -> AlarmStatus:
        with self._lock:
            return self._repository.get_alarm_status()

    def get_arming_status(self) -> ArmingStatus:
        with self._lock:
            return self._repository.get_arming_status()

    def get_sensors(self) -> Set[Sensor]:
        with self._lock:
            return self._repository.get_sensors()

    @property
    def last_cat_detected(self) -> bool:
        with self._lock:
            return self._last_cat_detected

    def set_alarm_status(self, status: AlarmStatus) -> None:
        """Persist a new alarm status and notify listeners."""
        status = AlarmStatus(status)
        with self._lock:
            self._repository.set_alarm_status(status)
            logger.info(f"Alarm status set to {status.name}",
                        extra={'context': {'listeners': len(self._status_listeners)}})
            self._notify_listeners("notify", status)

    # Arming

    def set_arming_status(self, arming_status: ArmingStatus) -> None:
        """Change the arming mode.

        Disarming clears the alarm. Arming resets every sensor to inactive,
        then raises the alarm if arming home while a cat was last seen.
        """
        arming_status = ArmingStatus(arming_status)
        with self._lock:
            logger.info(f"Arming status changing to {arming_status.name}")

            if arming_status == ArmingStatus.DISARMED:
                self.set_alarm_status(AlarmStatus.NO_ALARM)
            else:
                self._reset_sensors()
                if arming_status == ArmingStatus.ARMED_HOME and self._last_cat_detected:
                    self.set_alarm_status(AlarmStatus.ALARM)

            self._repository.set_arming_status(arming_status)

    def _reset_sensors(self) -> None:
        changed = False
        for sensor in self._repository.get_sensors():
            if sensor.active:
                self._write_sensor_flag(sensor, False)
                changed = True
        if changed:
            logger.debug("Sensors reset to inactive on arming")
            self._notify_listeners("sensor_status_changed")

    def _write_sensor_flag(self, sensor: Sensor, active: bool) -> None:
        """Persist a new active flag, restoring the old one if the write fails."""
        previous = sensor.active
        sensor.active = active
        try:
            self._repository.update_sensor(sensor)
        except Exception:
            sensor.active = previous
            raise

    # Camera

    def process_image(self, image: Any) -> bool:
        """Classify a camera frame and apply the verdict. Returns the verdict."""
        with self._lock:
            cat_detected = bool(self._classifier.image_contains_cat(
                image, self.config.confidence_threshold))
            self._last_cat_detected = cat_detected
            logger.debug(f"Classifier verdict: cat_detected={cat_detected}")

            self._cat_detected(cat_detected)
            return cat_detected

    def _cat_detected(self, cat: bool) -> None:
        if cat:
            arming_status = self._repository.get_arming_status()
            if arming_status == ArmingStatus.ARMED_HOME:
                self.set_alarm_status(AlarmStatus.ALARM)
            elif arming_status == ArmingStatus.ARMED_AWAY and self.config.alarm_on_cat_when_away:
                self.set_alarm_status(AlarmStatus.ALARM)
        elif not any_sensor_active(self._repository.get_sensors()):
            self.set_alarm_status(AlarmStatus.NO_ALARM)

        self._notify_listeners("cat_detected", cat)

    # Sensors

    def add_sensor(self, sensor: Sensor) -> None:
        with self._lock:
            self._repository.add_sensor(sensor)

    def remove_sensor(self, sensor: Sensor) -> None:
        with self._lock:
            self._repository.remove_sensor(sensor)

    def change_sensor_activation_status(self, sensor: Sensor, active: bool) -> None:
        """Set a sensor's active flag and apply the resulting alarm transition.

        A call that would not change the flag does nothing at all.
        """
        active = bool(active)
        with self._lock:
            if sensor.active == active:
                logger.debug(f"Sensor {sensor.name} already {'active' if active else 'inactive'}")
                return

            self._write_sensor_flag(sensor, active)

            if active:
                self._handle_sensor_activated()
            else:
                self._handle_sensor_deactivated()

            self._notify_listeners("sensor_status_changed")

    def _handle_sensor_activated(self) -> None:
        alarm_status = self._repository.get_alarm_status()
        if alarm_status == AlarmStatus.PENDING_ALARM:
            self.set_alarm_status(AlarmStatus.ALARM)
        elif alarm_status == AlarmStatus.NO_ALARM:
            if self.config.escalate_when_disarmed or \
                    self._repository.get_arming_status() != ArmingStatus.DISARMED:
                self.set_alarm_status(AlarmStatus.PENDING_ALARM)

    def _handle_sensor_deactivated(self) -> None:
        alarm_status = self._repository.get_alarm_status()
        if alarm_status == AlarmStatus.ALARM:
            self.set_alarm_status(AlarmStatus.PENDING_ALARM)
        elif alarm_status == AlarmStatus.PENDING_ALARM:
            if not any_sensor_active(self._repository.get_sensors()):
                self.set_alarm_status(AlarmStatus.NO_ALARM)

    # Configuration

    def apply_config(self, config: SystemConfig) -> None:
        """Config change callback: pick up a new threshold and policy flags."""
        with self._lock:
            self.config = config
            logger.info(f"Configuration applied: threshold={config.confidence_threshold}, "
                        f"escalate_when_disarmed={config.escalate_when_disarmed}, "
                        f"alarm_on_cat_when_away={config.alarm_on_cat_when_away}")
