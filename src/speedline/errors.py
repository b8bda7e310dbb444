"""Exceptions raised by speedline."""


class SpeedlineError(Exception):
    """Base class for all speedline errors."""


class InvalidInputError(SpeedlineError, ValueError):
    """Raised when a frame is built or updated with invalid arguments."""


class MalformedTraceError(SpeedlineError):
    """Raised when a trace has no usable events or no screenshots."""


class DecodeError(SpeedlineError):
    """Raised when a screenshot payload or image cannot be decoded."""
