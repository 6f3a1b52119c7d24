"""
Error taxonomy for the engine.

Every failure is a precondition violation detected before any write:
- InvalidConfigError: dim / alpha / seed outside the allowed ranges
- UninitializedError: a data read or advance with no field
- InvalidWindowError: slice bounds outside the grid

None of these are retryable. Identical inputs always take identical paths.
"""


class EngineError(Exception):
    """Base class for all engine failures."""


class InvalidConfigError(EngineError, ValueError):
    """Raised when initialization parameters are out of range."""


class UninitializedError(EngineError, RuntimeError):
    """Raised when an operation needs a field and none exists."""

    def __init__(self, message: str = "engine not initialized"):
        super().__init__(message)


class InvalidWindowError(EngineError, IndexError):
    """Raised when a slice window does not fit inside the grid."""


class UnknownCommandError(EngineError, KeyError):
    """Raised by the command dispatcher for an unrecognized verb."""

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message
        return str(self.args[0]) if self.args else ""
