"""Exception types raised by frame construction and mutation.

All validation happens before a frame's state is touched, so catching one
of these leaves the frame exactly as it was.  Each class also derives from
the matching builtin (``TypeError`` / ``ValueError``) so callers that only
know the builtins keep working.
"""


class FrameError(Exception):
    """Base class for all skyframes validation errors."""


class TypeValidationError(FrameError, TypeError):
    """A required field has the wrong runtime type (e.g. epoch, position)."""


class RangeValidationError(FrameError, ValueError):
    """A value lies outside its documented domain."""


class UnknownEnumError(FrameError, ValueError):
    """An unrecognized model name, frame code or center-mode string."""


class MissingRequiredFieldError(FrameError, ValueError):
    """A conditionally required field is absent."""
