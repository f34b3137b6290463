"""Service interfaces and abstract base classes."""

from abc import ABC, abstractmethod
from typing import Any, Set

from ..models.security import AlarmStatus, ArmingStatus, Sensor


class SecurityRepositoryInterface(ABC):
    """Durable store of sensors, arming status and alarm status."""

    @abstractmethod
    def add_sensor(self, sensor: Sensor) -> None:
        """Add a sensor to the sensor set."""
        pass

    @abstractmethod
    def remove_sensor(self, sensor: Sensor) -> None:
        """Remove a sensor from the sensor set."""
        pass

    @abstractmethod
    def update_sensor(self, sensor: Sensor) -> None:
        """Persist a sensor's current active flag."""
        pass

    @abstractmethod
    def get_sensors(self) -> Set[Sensor]:
        """Get all registered sensors."""
        pass

    @abstractmethod
    def get_alarm_status(self) -> AlarmStatus:
        """Get the current alarm status."""
        pass

    @abstractmethod
    def set_alarm_status(self, alarm_status: AlarmStatus) -> None:
        """Set the current alarm status."""
        pass

    @abstractmethod
    def get_arming_status(self) -> ArmingStatus:
        """Get the current arming status."""
        pass

    @abstractmethod
    def set_arming_status(self, arming_status: ArmingStatus) -> None:
        """Set the current arming status."""
        pass


class ImageServiceInterface(ABC):
    """Interface for the cat classifier."""

    @abstractmethod
    def image_contains_cat(self, image: Any, confidence_threshold: float) -> bool:
        """Return True if a cat is seen in the image with at least the given confidence."""
        pass


class StatusListener(ABC):
    """Observer of security status changes.

    Only ``notify`` is required. The other hooks default to no-ops so new
    event kinds can be added without breaking existing listeners.
    """

    @abstractmethod
    def notify(self, status: AlarmStatus) -> None:
        """Called with the new alarm status after every alarm status change."""
        pass

    def cat_detected(self, cat_detected: bool) -> None:
        """Called with each classifier verdict."""

    def sensor_status_changed(self) -> None:
        """Called when sensor active flags have changed."""
