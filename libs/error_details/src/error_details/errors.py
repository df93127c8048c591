"""Domain errors for error-detail construction."""


class ErrorDetailsError(RuntimeError):
    """Base class for error-detail domain errors."""


class RuleRegistryError(ErrorDetailsError, ValueError):
    """Raised when a rule registry is defined with an invalid formatter table."""
