"""
Detection error taxonomy.

A content verdict ("this looks AI-generated") is never an exception; it is a
DetectionResult with passed=False. Exceptions are reserved for attempts that
could not produce a trustworthy verdict at all.
"""


class DetectionError(Exception):
    """Base class for every detection-gate failure."""


class DetectionServiceError(DetectionError):
    """The provider was unreachable or answered with an unsuccessful response."""

    def __init__(self, message: str, provider: str = None, status: int = None):
        super().__init__(message)
        self.provider = provider
        self.status = status


class DetectionConfigError(DetectionServiceError):
    """Provider credentials are missing while running in strict mode."""


class InputInvalidError(DetectionError):
    """The submission cannot be scored (too short, wrong type, nothing to check)."""
