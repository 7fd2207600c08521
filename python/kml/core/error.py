"""
Error handling for KML.

Every failure raised by the package is a KMLError carrying one of the
integer codes below. The typed subclasses fix their code so callers can
catch a single kind (DimensionMismatchError, OutOfBoundsError,
InvalidShapeError) or everything at once (KMLError).
"""

from __future__ import annotations

from typing import Optional, Type


# =============================================================================
# Error Codes
# =============================================================================

# Success
KML_OK = 0

# General errors (1-9)
KML_ERROR_UNKNOWN = 1
KML_ERROR_INTERNAL = 2

# Argument errors (10-19)
KML_ERROR_INVALID_ARGUMENT = 10
KML_ERROR_DIMENSION_MISMATCH = 11
KML_ERROR_OUT_OF_BOUNDS = 12
KML_ERROR_INVALID_SHAPE = 13

# Feature errors (40-49)
KML_ERROR_NOT_IMPLEMENTED = 40


# Error code to message mapping
_ERROR_MESSAGES = {
    KML_OK: "Success",
    KML_ERROR_UNKNOWN: "Unknown error",
    KML_ERROR_INTERNAL: "Internal error",
    KML_ERROR_INVALID_ARGUMENT: "Invalid argument",
    KML_ERROR_DIMENSION_MISMATCH: "Dimension mismatch",
    KML_ERROR_OUT_OF_BOUNDS: "Value out of bounds",
    KML_ERROR_INVALID_SHAPE: "Invalid shape",
    KML_ERROR_NOT_IMPLEMENTED: "Not implemented",
}


# =============================================================================
# Exception Classes
# =============================================================================

class KMLError(ValueError):
    """
    Base exception for all KML errors.

    Subclasses ValueError so that shape and bound failures can be handled
    like any other invalid input.
    """

    # Re-export error codes as class attributes for convenience
    OK = KML_OK
    ERROR_UNKNOWN = KML_ERROR_UNKNOWN
    ERROR_INTERNAL = KML_ERROR_INTERNAL
    ERROR_INVALID_ARGUMENT = KML_ERROR_INVALID_ARGUMENT
    ERROR_DIMENSION_MISMATCH = KML_ERROR_DIMENSION_MISMATCH
    ERROR_OUT_OF_BOUNDS = KML_ERROR_OUT_OF_BOUNDS
    ERROR_INVALID_SHAPE = KML_ERROR_INVALID_SHAPE
    ERROR_NOT_IMPLEMENTED = KML_ERROR_NOT_IMPLEMENTED

    def __init__(self, code: int, message: Optional[str] = None):
        """
        Create KML exception.

        Args:
            code: Error code
            message: Optional detailed message (generic text for the code if not provided)
        """
        self.code = code
        if message is None:
            message = _ERROR_MESSAGES.get(code, f"Unknown error (code={code})")
        self.message = message
        super().__init__(f"KML Error {code}: {message}")

    @classmethod
    def from_code(cls, code: int, context: str = "") -> "KMLError":
        """Create exception from error code with optional context."""
        base_msg = _ERROR_MESSAGES.get(code, "Unknown error")
        msg = f"{context}: {base_msg}" if context else base_msg
        error_cls = _ERROR_CLASSES.get(code)
        if error_cls is None:
            return KMLError(code, msg)
        return error_cls(msg)


class DimensionMismatchError(KMLError):
    """Vector lengths, matrix shapes or parameter vector lengths disagree."""

    def __init__(self, message: Optional[str] = None):
        super().__init__(KML_ERROR_DIMENSION_MISMATCH, message)


class OutOfBoundsError(KMLError):
    """A parameter value violates its interval constraint."""

    def __init__(self, message: Optional[str] = None):
        super().__init__(KML_ERROR_OUT_OF_BOUNDS, message)


class InvalidShapeError(KMLError):
    """An array has the wrong number of dimensions, or a symmetric result is not square."""

    def __init__(self, message: Optional[str] = None):
        super().__init__(KML_ERROR_INVALID_SHAPE, message)


_ERROR_CLASSES: dict[int, Type[KMLError]] = {
    KML_ERROR_DIMENSION_MISMATCH: DimensionMismatchError,
    KML_ERROR_OUT_OF_BOUNDS: OutOfBoundsError,
    KML_ERROR_INVALID_SHAPE: InvalidShapeError,
}


# =============================================================================
# Error Checking Functions
# =============================================================================

def error_message(code: int) -> str:
    """Get the generic message for an error code."""
    return _ERROR_MESSAGES.get(code, f"Unknown error (code={code})")


def check_error(code: int, context: str = "") -> None:
    """
    Check error code and raise exception if not OK.

    Args:
        code: Error code
        context: Optional context message for better error reporting

    Raises:
        KMLError: The typed subclass matching code, if code indicates an error
    """
    if code == KML_OK:
        return
    raise KMLError.from_code(code, context)
