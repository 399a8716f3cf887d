"""Exception types raised by memorial-match."""


class MemorialMatchError(Exception):
    """Base class for all memorial-match errors."""


class InvalidInputError(MemorialMatchError, ValueError):
    """Raised when a candidate or threshold cannot be scored."""


class ConfigurationError(MemorialMatchError, ValueError):
    """Raised when scoring weights or thresholds are inconsistent."""
