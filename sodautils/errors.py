"""Exception types for SodaUtils.

Every error raised by the package derives from SodaUtilsError, and the
concrete classes also derive from the matching builtin so callers can catch
either.
"""


class SodaUtilsError(Exception):
    """Base class for all SodaUtils errors."""
    pass


class InvalidInputError(SodaUtilsError, ValueError):
    """Raised when an argument cannot be processed (empty tree, bad bounds, illegal ID...)."""
    pass


class InvariantViolationError(SodaUtilsError, RuntimeError):
    """Raised when a structural precondition is broken, e.g. walking from a non-root fiber."""
    pass


class ConfigurationError(SodaUtilsError, ValueError):
    """Raised when a configuration object fails validation."""
    pass
