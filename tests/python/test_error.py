"""
Tests for error codes and exception classes.
"""

import pytest

from kml.core.error import (
    KMLError,
    DimensionMismatchError,
    OutOfBoundsError,
    InvalidShapeError,
    check_error,
    error_message,
    KML_OK,
    KML_ERROR_INVALID_ARGUMENT,
    KML_ERROR_DIMENSION_MISMATCH,
    KML_ERROR_OUT_OF_BOUNDS,
    KML_ERROR_INVALID_SHAPE,
    KML_ERROR_NOT_IMPLEMENTED,
)


class TestErrorCodes:
    """Test error code values and messages."""

    def test_code_values(self):
        """Codes are stable integers."""
        assert KMLError.OK == KML_OK == 0
        assert KMLError.ERROR_INVALID_ARGUMENT == 10
        assert KMLError.ERROR_DIMENSION_MISMATCH == 11
        assert KMLError.ERROR_OUT_OF_BOUNDS == 12
        assert KMLError.ERROR_INVALID_SHAPE == 13
        assert KMLError.ERROR_NOT_IMPLEMENTED == 40

    def test_error_message(self):
        """Every code has a generic message."""
        assert error_message(KML_ERROR_DIMENSION_MISMATCH) == "Dimension mismatch"
        assert "Unknown" in error_message(999)


class TestExceptions:
    """Test KMLError and the typed subclasses."""

    def test_message_format(self):
        """str() carries code and message."""
        err = KMLError(KML_ERROR_INVALID_ARGUMENT, "bad input")
        assert str(err) == "KML Error 10: bad input"
        assert err.code == 10
        assert err.message == "bad input"

    def test_default_message(self):
        """Missing message falls back to the code's text."""
        err = KMLError(KML_ERROR_NOT_IMPLEMENTED)
        assert err.message == "Not implemented"

    def test_is_value_error(self):
        """KMLError can be caught as ValueError."""
        with pytest.raises(ValueError):
            raise OutOfBoundsError("alpha=0.0 is outside (0.0, inf)")

    @pytest.mark.parametrize("cls,code", [
        (DimensionMismatchError, KML_ERROR_DIMENSION_MISMATCH),
        (OutOfBoundsError, KML_ERROR_OUT_OF_BOUNDS),
        (InvalidShapeError, KML_ERROR_INVALID_SHAPE),
    ])
    def test_typed_codes(self, cls, code):
        """Typed errors fix their code."""
        err = cls("detail")
        assert isinstance(err, KMLError)
        assert err.code == code

    def test_from_code_returns_typed_error(self):
        """from_code maps codes to their typed class."""
        err = KMLError.from_code(KML_ERROR_OUT_OF_BOUNDS, "theta[2]")
        assert isinstance(err, OutOfBoundsError)
        assert err.message == "theta[2]: Value out of bounds"

    def test_from_code_generic(self):
        """Codes without a typed class give a plain KMLError."""
        err = KMLError.from_code(KML_ERROR_NOT_IMPLEMENTED)
        assert type(err) is KMLError
        assert err.code == KML_ERROR_NOT_IMPLEMENTED


class TestCheckError:
    """Test check_error()."""

    def test_ok_passes(self):
        """KML_OK does not raise."""
        check_error(KML_OK)

    def test_raises_typed(self):
        """Non-OK codes raise the matching class."""
        with pytest.raises(DimensionMismatchError) as info:
            check_error(KML_ERROR_DIMENSION_MISMATCH, "pairwise_matrix")
        assert "pairwise_matrix" in str(info.value)

    def test_raises_invalid_shape(self):
        with pytest.raises(InvalidShapeError):
            check_error(KML_ERROR_INVALID_SHAPE)
