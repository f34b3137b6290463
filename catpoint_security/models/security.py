"""Security domain models: statuses and sensors."""

from dataclasses import dataclass, field
from enum import Enum


class AlarmStatus(Enum):
    """Alarm severity, ordered NO_ALARM < PENDING_ALARM < ALARM."""
    NO_ALARM = ("Cool and Good", "#47B85A")
    PENDING_ALARM = ("I'm in Danger...", "#FFC107")
    ALARM = ("Awooga!", "#E53935")

    def __init__(self, description: str, color: str):
        self.description = description
        self.color = color

    @property
    def severity(self) -> int:
        return list(AlarmStatus).index(self)

    def __lt__(self, other):
        if not isinstance(other, AlarmStatus):
            return NotImplemented
        return self.severity < other.severity

    def __le__(self, other):
        if not isinstance(other, AlarmStatus):
            return NotImplemented
        return self.severity <= other.severity

    def __gt__(self, other):
        if not isinstance(other, AlarmStatus):
            return NotImplemented
        return self.severity > other.severity

    def __ge__(self, other):
        if not isinstance(other, AlarmStatus):
            return NotImplemented
        return self.severity >= other.severity


class ArmingStatus(Enum):
    """How the system is armed."""
    DISARMED = "Disarmed"
    ARMED_HOME = "Armed - At Home"
    ARMED_AWAY = "Armed - Away"

    @property
    def description(self) -> str:
        return self.value

    @property
    def is_armed(self) -> bool:
        return self is not ArmingStatus.DISARMED


class SensorType(Enum):
    """Kinds of intrusion sensor."""
    DOOR = "door"
    WINDOW = "window"
    MOTION = "motion"


@dataclass
class Sensor:
    """A binary-state sensor. Identity is the (name, sensor_type) pair."""
    name: str
    sensor_type: SensorType
    active: bool = field(default=False, compare=False)

    def __hash__(self) -> int:
        return hash((self.name, self.sensor_type))

    @property
    def key(self) -> tuple:
        return (self.name, self.sensor_type)

    def to_dict(self) -> dict:
        return {
            'name': self.name,
            'sensor_type': self.sensor_type.name,
            'active': self.active
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Sensor":
        return cls(
            name=data['name'],
            sensor_type=SensorType[data['sensor_type']],
            active=bool(data.get('active', False))
        )
