"""Configuration components for the catpoint security system."""

from .defaults import (
    DEFAULT_PATHS,
    CASCADE_FILES,
    CLASSIFIER_SETTINGS,
    VALID_CLASSIFIER_BACKENDS,
    VALID_REPOSITORY_BACKENDS
)

__all__ = [
    'DEFAULT_PATHS',
    'CASCADE_FILES',
    'CLASSIFIER_SETTINGS',
    'VALID_CLASSIFIER_BACKENDS',
    'VALID_REPOSITORY_BACKENDS'
]
