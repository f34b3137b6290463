"""Services for the catpoint security system."""

from .interfaces import (
    SecurityRepositoryInterface,
    ImageServiceInterface,
    StatusListener
)
from .listeners import CallbackStatusListener, EventHistoryListener, StatusEvent
from .repository import InMemorySecurityRepository, JsonFileSecurityRepository, create_repository
from .security_service import SecurityService

__all__ = [
    'SecurityRepositoryInterface',
    'ImageServiceInterface',
    'StatusListener',
    'CallbackStatusListener',
    'EventHistoryListener',
    'StatusEvent',
    'InMemorySecurityRepository',
    'JsonFileSecurityRepository',
    'create_repository',
    'SecurityService'
]
