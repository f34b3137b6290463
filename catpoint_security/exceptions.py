"""Exception types raised by the catpoint security system."""


class SecurityError(Exception):
    """Base class for catpoint security errors."""


class CollaboratorUnavailableError(SecurityError):
    """A repository or classifier call failed.

    The original exception is chained as ``__cause__``.
    """

    def __init__(self, component: str, operation: str, cause: Exception):
        self.component = component
        self.operation = operation
        super().__init__(f"{component} unavailable during {operation}: {cause}")


class ConfigurationError(SecurityError):
    """Configuration could not be loaded or failed validation."""
