"""
Catpoint Security

Home alarm decision engine combining door, window and motion sensors,
an arming switch and a camera cat classifier.
"""

__version__ = "1.0.0"
__author__ = "Catpoint Security"

from .config_manager import ConfigManager
from .exceptions import SecurityError, CollaboratorUnavailableError, ConfigurationError
from .models import (
    AlarmStatus,
    ArmingStatus,
    SensorType,
    Sensor,
    SystemConfig
)
from .services import (
    SecurityRepositoryInterface,
    ImageServiceInterface,
    StatusListener,
    CallbackStatusListener,
    InMemorySecurityRepository,
    JsonFileSecurityRepository,
    SecurityService
)

__all__ = [
    # Core management
    'ConfigManager',
    'SecurityService',

    # Errors
    'SecurityError',
    'CollaboratorUnavailableError',
    'ConfigurationError',

    # Data models
    'AlarmStatus',
    'ArmingStatus',
    'SensorType',
    'Sensor',
    'SystemConfig',

    # Collaborator interfaces and implementations
    'SecurityRepositoryInterface',
    'ImageServiceInterface',
    'StatusListener',
    'CallbackStatusListener',
    'InMemorySecurityRepository',
    'JsonFileSecurityRepository'
]
