"""
Pairwise functions.

A pairwise function maps two equal-length vectors to a scalar. There are
two families:

Leaves:
    Defined by a streaming reduction over coordinate pairs:
        acc = initiate()
        acc = aggregate(acc, x[k], y[k])   for every k
        result = finalize(acc)
    ScalarProduct, SquaredEuclidean and SineSquared are provided; they
    replace the fold with an equivalent vectorized numpy reduction.

Combinators:
    CompositeFunction   g(f(x, y)) for a CompositionClass g
    AffineFunction      scale * f(x, y) + offset
    FunctionSum         f(x, y) + h(x, y) + constant
    FunctionProduct     f(x, y) * h(x, y) * constant

Function objects form trees: each combinator owns its children. Matrix
evaluation of any tree lives in kml.core.engine.

Usage:
    >>> f = AffineFunction(ScalarProduct(), scale=2.0, offset=1.0)
    >>> f([1.0, 2.0], [3.0, 4.0])
    23.0
    >>> g = ExponentialClass(0.5)
    >>> CompositeFunction(g, SquaredEuclidean()).parameter_names()
    ['outer.alpha']
"""

from __future__ import annotations

import copy
import numbers

import numpy as np

from .config import _resolve_dtype
from .error import DimensionMismatchError, InvalidShapeError, KMLError
from .compositions import CompositionClass
from .parameter import BoundedParameter, nonnegative, positive
from .theta import Parametrized
from .._config import config


# =============================================================================
# Base Class
# =============================================================================

class PairwiseFunction(Parametrized):
    """
    Base class for all pairwise functions.

    evaluate() is the checked public entry point; _unsafe_evaluate()
    assumes 1-D arrays of equal length and a common float dtype.
    """

    def evaluate(self, x, y) -> float:
        """
        Evaluate on a single pair of vectors (scalars count as 1-vectors).

        Raises:
            InvalidShapeError: If x or y has more than one dimension
            DimensionMismatchError: If x and y differ in length
        """
        x = _as_vector(x, "x")
        y = _as_vector(y, "y")
        if x.shape[0] != y.shape[0]:
            raise DimensionMismatchError(
                f"Vectors x and y must have the same length, got {x.shape[0]} and {y.shape[0]}"
            )
        if config.compute.check_finite:
            _check_finite(x, "x")
            _check_finite(y, "y")
        dtype = _resolve_dtype(x, y)
        return float(self._unsafe_evaluate(x.astype(dtype, copy=False), y.astype(dtype, copy=False)))

    def __call__(self, x, y) -> float:
        return self.evaluate(x, y)

    def _unsafe_evaluate(self, x: np.ndarray, y: np.ndarray):
        raise KMLError(
            KMLError.ERROR_NOT_IMPLEMENTED,
            f"{type(self).__name__} does not define an evaluator",
        )

    # -------------------------------------------------------------------------
    # Structural equality
    # -------------------------------------------------------------------------

    def __eq__(self, other) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return all(
            getattr(self, field) == getattr(other, field)
            for field in self._parameter_fields + self._child_fields
        )

    __hash__ = None

    # -------------------------------------------------------------------------
    # Algebra
    # -------------------------------------------------------------------------

    def __add__(self, other):
        if isinstance(other, PairwiseFunction):
            return FunctionSum(copy.deepcopy(self), copy.deepcopy(other))
        if isinstance(other, numbers.Real):
            return AffineFunction(copy.deepcopy(self), 1.0, other)
        return NotImplemented

    __radd__ = __add__

    def __mul__(self, other):
        if isinstance(other, PairwiseFunction):
            return FunctionProduct(copy.deepcopy(self), copy.deepcopy(other))
        if isinstance(other, numbers.Real):
            return AffineFunction(copy.deepcopy(self), other, 0.0)
        return NotImplemented

    __rmul__ = __mul__


def _as_vector(v, name: str) -> np.ndarray:
    arr = np.asarray(v)
    if arr.ndim == 0:
        return arr.reshape(1)
    if arr.ndim != 1:
        raise InvalidShapeError(f"{name} must be a scalar or 1-D vector, got {arr.ndim}-D")
    return arr


def _check_finite(arr: np.ndarray, name: str) -> None:
    if not np.all(np.isfinite(arr)):
        raise KMLError(KMLError.ERROR_INVALID_ARGUMENT, f"{name} contains NaN or infinite values")


def _require(obj, cls, role: str):
    if not isinstance(obj, cls):
        raise KMLError(
            KMLError.ERROR_INVALID_ARGUMENT,
            f"{role} must be a {cls.__name__}, got {type(obj).__name__}",
        )
    return obj


def _parameter(value, bounds, name: str) -> BoundedParameter:
    if isinstance(value, BoundedParameter):
        return value
    return BoundedParameter(value, bounds, name=name)


# =============================================================================
# Leaves
# =============================================================================

class LeafFunction(PairwiseFunction):
    """
    Pairwise function defined by a streaming reduction.

    Subclasses define aggregate(), and optionally initiate() and
    finalize(). Parametrized leaves also declare _parameter_fields.
    """

    def initiate(self):
        """Identity of the reduction."""
        return 0.0

    def aggregate(self, acc, xi, yi):
        """Fold one coordinate pair into the accumulator."""
        raise NotImplementedError(f"{type(self).__name__} does not define aggregate()")

    def finalize(self, acc):
        """Post-process the reduced value."""
        return acc

    def _reduce(self, x: np.ndarray, y: np.ndarray):
        acc = self.initiate()
        for xi, yi in zip(x, y):
            acc = self.aggregate(acc, xi, yi)
        return acc

    def _unsafe_evaluate(self, x: np.ndarray, y: np.ndarray):
        return self.finalize(self._reduce(x, y))

    def __hash__(self) -> int:
        return hash(type(self))

    def __repr__(self) -> str:
        args = ", ".join(f"{field}={getattr(self, field).value!r}" for field in self._parameter_fields)
        return f"{type(self).__name__}({args})"


class ScalarProduct(LeafFunction):
    """f(x, y) = sum_k x_k y_k"""

    def aggregate(self, acc, xi, yi):
        return acc + xi * yi

    def _reduce(self, x, y):
        return self.initiate() + np.dot(x, y)


class SquaredEuclidean(LeafFunction):
    """f(x, y) = sum_k (x_k - y_k)^2"""

    def aggregate(self, acc, xi, yi):
        d = xi - yi
        return acc + d * d

    def _reduce(self, x, y):
        d = x - y
        return self.initiate() + np.dot(d, d)


class SineSquared(LeafFunction):
    """f(x, y) = sum_k sin^2(x_k - y_k)"""

    def aggregate(self, acc, xi, yi):
        s = np.sin(xi - yi)
        return acc + s * s

    def _reduce(self, x, y):
        s = np.sin(x - y)
        return self.initiate() + np.dot(s, s)


# =============================================================================
# Combinators
# =============================================================================

class CompositeFunction(PairwiseFunction):
    """h(x, y) = outer(inner(x, y))"""

    _child_fields = ("outer", "inner")

    def __init__(self, outer: CompositionClass, inner: PairwiseFunction):
        self.outer = _require(outer, CompositionClass, "outer")
        self.inner = _require(inner, PairwiseFunction, "inner")

    def _unsafe_evaluate(self, x, y):
        return self.outer.apply(self.inner._unsafe_evaluate(x, y))

    def __repr__(self) -> str:
        return f"CompositeFunction({self.outer!r}, {self.inner!r})"


class AffineFunction(PairwiseFunction):
    """h(x, y) = scale * inner(x, y) + offset,  scale in (0, inf), offset in [0, inf)"""

    _parameter_fields = ("scale", "offset")
    _child_fields = ("inner",)

    def __init__(self, inner: PairwiseFunction, scale=1.0, offset=0.0):
        self.inner = _require(inner, PairwiseFunction, "inner")
        self.scale = _parameter(scale, positive(), "scale")
        self.offset = _parameter(offset, nonnegative(), "offset")

    def _unsafe_evaluate(self, x, y):
        return self.scale.value * self.inner._unsafe_evaluate(x, y) + self.offset.value

    def __repr__(self) -> str:
        return (
            f"AffineFunction({self.inner!r}, scale={self.scale.value!r}, "
            f"offset={self.offset.value!r})"
        )


class _FunctionCombination(PairwiseFunction):
    """Shared structure of FunctionSum and FunctionProduct."""

    _parameter_fields = ("constant",)
    _child_fields = ("left", "right")

    # Set by subclasses
    operator = None
    identity: float = 0.0

    @staticmethod
    def _constant_bounds():
        raise NotImplementedError

    def __init__(self, left: PairwiseFunction, right: PairwiseFunction, constant=None):
        if left is right:
            raise KMLError(
                KMLError.ERROR_INVALID_ARGUMENT,
                f"{type(self).__name__} children must be distinct objects",
            )
        self.left = _require(left, PairwiseFunction, "left")
        self.right = _require(right, PairwiseFunction, "right")
        if constant is None:
            constant = self.identity
        self.constant = _parameter(constant, self._constant_bounds(), "constant")

    def _unsafe_evaluate(self, x, y):
        op = type(self).operator
        return op(
            op(self.left._unsafe_evaluate(x, y), self.right._unsafe_evaluate(x, y)),
            self.constant.value,
        )

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}({self.left!r}, {self.right!r}, "
            f"constant={self.constant.value!r})"
        )


class FunctionSum(_FunctionCombination):
    """h(x, y) = left(x, y) + right(x, y) + constant,  constant in [0, inf)"""

    operator = np.add
    identity = 0.0

    @staticmethod
    def _constant_bounds():
        return nonnegative()


class FunctionProduct(_FunctionCombination):
    """h(x, y) = left(x, y) * right(x, y) * constant,  constant in (0, inf)"""

    operator = np.multiply
    identity = 1.0

    @staticmethod
    def _constant_bounds():
        return positive()
