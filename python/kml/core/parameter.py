"""
Bounded parameters.

A BoundedParameter is a scalar value tied to an Interval. The value is
validated on construction and on every update; a violating update raises
OutOfBoundsError and leaves the stored value untouched. Values are never
clamped.

Usage:
    >>> alpha = BoundedParameter(1.0, Interval(open_bound(0.0)), name="alpha")
    >>> alpha.set(0.5)
    >>> alpha.check(0.0)
    False
    >>> alpha.set(0.0)
    Traceback (most recent call last):
    ...
    kml.core.error.OutOfBoundsError: KML Error 12: alpha=0.0 is outside (0.0, inf)
"""

from __future__ import annotations

import math
from typing import Optional, Tuple, Type, Union

from .error import KMLError, OutOfBoundsError


Number = Union[int, float]


# =============================================================================
# Bounds and Intervals
# =============================================================================

class Bound:
    """One side of an interval: a limit value and whether it is attained."""

    __slots__ = ("value", "closed")

    def __init__(self, value: Number, closed: bool = True):
        if isinstance(value, float) and math.isnan(value):
            raise KMLError(KMLError.ERROR_INVALID_ARGUMENT, "Bound value must not be NaN")
        self.value = value
        self.closed = bool(closed)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Bound):
            return NotImplemented
        return self.value == other.value and self.closed == other.closed

    def __hash__(self) -> int:
        return hash((self.value, self.closed))

    def __repr__(self) -> str:
        kind = "closed" if self.closed else "open"
        return f"Bound({self.value!r}, {kind})"


def open_bound(value: Number) -> Bound:
    """Bound that excludes its limit."""
    return Bound(value, closed=False)


def closed_bound(value: Number) -> Bound:
    """Bound that includes its limit."""
    return Bound(value, closed=True)


class Interval:
    """
    Interval constraint with optional lower and upper bounds.

    A missing side is unconstrained. Empty intervals are rejected.
    """

    __slots__ = ("lower", "upper")

    def __init__(self, lower: Optional[Bound] = None, upper: Optional[Bound] = None):
        if lower is not None and upper is not None:
            if lower.value > upper.value:
                raise KMLError(
                    KMLError.ERROR_INVALID_ARGUMENT,
                    f"Lower bound {lower.value!r} exceeds upper bound {upper.value!r}",
                )
            if lower.value == upper.value and not (lower.closed and upper.closed):
                raise KMLError(
                    KMLError.ERROR_INVALID_ARGUMENT,
                    f"Interval at {lower.value!r} is empty",
                )
        self.lower = lower
        self.upper = upper

    def check_lower(self, x: Number) -> bool:
        if self.lower is None:
            return True
        return self.lower.value <= x if self.lower.closed else self.lower.value < x

    def check_upper(self, x: Number) -> bool:
        if self.upper is None:
            return True
        return x <= self.upper.value if self.upper.closed else x < self.upper.value

    def contains(self, x: Number) -> bool:
        """Whether x satisfies both sides (NaN never does)."""
        if isinstance(x, float) and math.isnan(x):
            return False
        return self.check_lower(x) and self.check_upper(x)

    __contains__ = contains

    def limits(self) -> Tuple[Optional[Number], Optional[Number]]:
        """(low, high) pair with None for unconstrained sides."""
        low = None if self.lower is None else self.lower.value
        high = None if self.upper is None else self.upper.value
        return low, high

    def __eq__(self, other) -> bool:
        if not isinstance(other, Interval):
            return NotImplemented
        return self.lower == other.lower and self.upper == other.upper

    def __hash__(self) -> int:
        return hash((self.lower, self.upper))

    def __repr__(self) -> str:
        if self.lower is None:
            left = "(-inf"
        else:
            left = ("[" if self.lower.closed else "(") + repr(float(self.lower.value))
        if self.upper is None:
            right = "inf)"
        else:
            right = repr(float(self.upper.value)) + ("]" if self.upper.closed else ")")
        return f"{left}, {right}"


def interval(lower: Optional[Bound] = None, upper: Optional[Bound] = None) -> Interval:
    """Shorthand constructor for Interval."""
    return Interval(lower, upper)


# Common intervals for kernel parameters
def positive() -> Interval:
    """(0, inf)"""
    return Interval(open_bound(0.0))


def nonnegative() -> Interval:
    """[0, inf)"""
    return Interval(closed_bound(0.0))


def unit_exponent() -> Interval:
    """(0, 1]"""
    return Interval(open_bound(0.0), closed_bound(1.0))


# =============================================================================
# Bounded Parameter
# =============================================================================

class BoundedParameter:
    """
    Scalar value constrained to an interval.

    Args:
        value: Initial value (validated)
        bounds: Interval constraint (unconstrained if omitted)
        name: Name used in error messages
        dtype: float (default) or int for integer-valued parameters

    Raises:
        OutOfBoundsError: If value is outside bounds
    """

    __slots__ = ("_value", "bounds", "name", "dtype")

    def __init__(
        self,
        value: Number,
        bounds: Optional[Interval] = None,
        name: Optional[str] = None,
        dtype: Type = float,
    ):
        if dtype not in (float, int):
            raise KMLError(KMLError.ERROR_INVALID_ARGUMENT, f"Unsupported parameter dtype {dtype!r}")
        self.bounds = bounds if bounds is not None else Interval()
        self.name = name
        self.dtype = dtype
        self._value = self._validate(value)

    def _convert(self, value: Number) -> Number:
        if self.dtype is int:
            if not math.isfinite(float(value)) or float(value) != int(value):
                raise OutOfBoundsError(f"{self._label()}={value!r} is not an integer")
            return int(value)
        return float(value)

    def _validate(self, value: Number) -> Number:
        value = self._convert(value)
        if not self.bounds.contains(value):
            raise OutOfBoundsError(f"{self._label()}={value!r} is outside {self.bounds!r}")
        return value

    def _label(self) -> str:
        return self.name if self.name is not None else "parameter"

    @property
    def value(self) -> Number:
        """Current value."""
        return self._value

    @value.setter
    def value(self, value: Number) -> None:
        self.set(value)

    def get(self) -> Number:
        """Get current value."""
        return self._value

    def set(self, value: Number) -> None:
        """
        Set value.

        Raises:
            OutOfBoundsError: If value is outside bounds (value is left unchanged)
        """
        self._value = self._validate(value)

    def check(self, value: Number) -> bool:
        """Whether value would be accepted by set(), without mutating."""
        try:
            value = self._convert(value)
        except (OutOfBoundsError, TypeError, ValueError, OverflowError):
            return False
        return self.bounds.contains(value)

    def __float__(self) -> float:
        return float(self._value)

    def __eq__(self, other) -> bool:
        if not isinstance(other, BoundedParameter):
            return NotImplemented
        return self._value == other._value and self.bounds == other.bounds

    def __repr__(self) -> str:
        label = f"{self.name}=" if self.name else ""
        return f"BoundedParameter({label}{self._value!r} in {self.bounds!r})"
