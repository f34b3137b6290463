"""Utility functions for the catpoint security system."""

import os
from typing import Iterable

from .models.security import Sensor


def ensure_directory_exists(path: str) -> None:
    """Ensure a directory exists, create if it doesn't."""
    if path and not os.path.exists(path):
        os.makedirs(path, exist_ok=True)


def any_sensor_active(sensors: Iterable[Sensor]) -> bool:
    return any(sensor.active for sensor in sensors)

