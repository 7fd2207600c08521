"""
Matrix evaluation engine.

Evaluates a pairwise function over every pair of vectors from one matrix
(symmetric form, n x n result) or two matrices (rectangular form, n x m
result).

Dispatch:
    The public entry points validate every shape once, resolve the memory
    order into a row-vector view and the float dtype, then hand over to
    _symmetric_into / _rectangular_into. Those branch on the function
    variant and recurse into children without checking again:

    ScalarProduct       Gram matrix by matrix multiplication (fast path)
    SquaredEuclidean    Gram matrix + norm identity (fast path)
    CompositeFunction   inner matrix, then outer transform per entry
    AffineFunction      inner matrix, then scale/offset per entry
    FunctionSum/Product left matrix, right matrix in scratch, combine
    any other function  element-by-element loop

Symmetric results:
    Only the upper triangle (diagonal included) is computed. Children are
    always evaluated unsymmetrized so that transforms touch each distinct
    entry once; the triangle is mirrored at the end when symmetrize=True.
    With symmetrize=False the lower triangle is left untouched.

Usage:
    >>> import numpy as np
    >>> X = np.array([[1.0, 0.0], [0.0, 1.0], [1.0, 1.0]])
    >>> pairwise_matrix(ScalarProduct(), X)
    array([[1., 0., 1.],
           [0., 1., 1.],
           [1., 1., 2.]])
    >>> pairwise_matrix(SquaredEuclidean(), X, order="col").shape
    (2, 2)
"""

from __future__ import annotations

import logging
from typing import Optional, Union

import numpy as np

from .blas import _gramian, _gramian_rect, _squared_distance, _squared_distance_rect, dot_vectors
from .config import MemoryOrder, _resolve_dtype, get_memory_order
from .dense import (
    as_matrix,
    check_finite,
    check_pairwise_dimensions,
    copy_triangle,
    upper_indices,
    vectors,
)
from .dense import init_pairwise_matrix as _init_pairwise_matrix
from .error import KMLError
from .functions import (
    AffineFunction,
    CompositeFunction,
    PairwiseFunction,
    ScalarProduct,
    SquaredEuclidean,
    _FunctionCombination,
)
from .._config import FastPathConfig, FastPathStrategy, config


logger = logging.getLogger(__name__)


OrderLike = Union[MemoryOrder, str, None]


# =============================================================================
# Public API
# =============================================================================

def pairwise(f: PairwiseFunction, x, y) -> float:
    """
    Evaluate f on one pair of vectors.

    Raises:
        DimensionMismatchError: If x and y differ in length
    """
    _check_function(f)
    return f.evaluate(x, y)


def init_pairwise_matrix(order: OrderLike, X, Y=None) -> np.ndarray:
    """Uninitialized result matrix for pairwise_matrix_into(P, f, X, Y)."""
    order = _resolve_order(order)
    X = as_matrix(X, "X")
    if Y is None:
        return _init_pairwise_matrix(order, X, None, _resolve_dtype(X))
    Y = as_matrix(Y, "Y")
    return _init_pairwise_matrix(order, X, Y, _resolve_dtype(X, Y))


def pairwise_matrix(
    f: PairwiseFunction,
    X,
    Y=None,
    *,
    order: OrderLike = None,
    symmetrize: Optional[bool] = None,
) -> np.ndarray:
    """
    Evaluate f over all pairs of vectors.

    Args:
        f: Pairwise function (leaf or combinator tree)
        X: Matrix of vectors
        Y: Second matrix of vectors; if omitted the symmetric form
            f(x_i, x_j) is computed
        order: 'row' (vectors are rows, default) or 'col' (vectors are columns)
        symmetrize: Fill the lower triangle of a symmetric result (default
            from configuration, normally True)

    Returns:
        (n, n) or (n, m) matrix

    Raises:
        InvalidShapeError: If X or Y is not 2-D
        DimensionMismatchError: If X and Y hold vectors of different lengths
    """
    P = init_pairwise_matrix(order, X, Y)
    return pairwise_matrix_into(P, f, X, Y, order=order, symmetrize=symmetrize)


def pairwise_matrix_into(
    P: np.ndarray,
    f: PairwiseFunction,
    X,
    Y=None,
    *,
    order: OrderLike = None,
    symmetrize: Optional[bool] = None,
) -> np.ndarray:
    """
    Evaluate f over all pairs of vectors into a preallocated matrix.

    All shapes are checked before anything is written to P.

    Args:
        P: Float result matrix, (n, n) for the symmetric form, (n, m) otherwise
        f, X, Y, order, symmetrize: As for pairwise_matrix()

    Returns:
        P

    Raises:
        InvalidShapeError: If an input is not 2-D, or P is not square in
            the symmetric form
        DimensionMismatchError: If P does not match the vector counts, or
            X and Y hold vectors of different lengths
    """
    _check_function(f)
    if not isinstance(P, np.ndarray) or P.dtype.kind != "f":
        raise KMLError(
            KMLError.ERROR_INVALID_ARGUMENT,
            "Result matrix P must be a floating point numpy array",
        )
    order = _resolve_order(order)
    if symmetrize is None:
        symmetrize = config.compute.symmetrize

    X = as_matrix(X, "X")
    Y = None if Y is None else as_matrix(Y, "Y")
    check_pairwise_dimensions(order, P, X, Y)

    if config.compute.check_finite:
        check_finite(X, "X")
        if Y is not None:
            check_finite(Y, "Y")

    fast = config.fast_path
    if Y is None:
        dtype = _resolve_dtype(X)
        Xv = vectors(order, X.astype(dtype, copy=False))
        logger.debug(
            "Symmetric evaluation of %s over %d %s vectors of length %d",
            type(f).__name__, Xv.shape[0], order.value, Xv.shape[1],
        )
        return _symmetric_into(P, f, Xv, symmetrize, fast)

    dtype = _resolve_dtype(X, Y)
    Xv = vectors(order, X.astype(dtype, copy=False))
    Yv = vectors(order, Y.astype(dtype, copy=False))
    logger.debug(
        "Rectangular evaluation of %s over %d x %d %s vectors of length %d",
        type(f).__name__, Xv.shape[0], Yv.shape[0], order.value, Xv.shape[1],
    )
    return _rectangular_into(P, f, Xv, Yv, fast)


# Identical definitions
kernel = pairwise
kernel_matrix = pairwise_matrix
kernel_matrix_into = pairwise_matrix_into


def _check_function(f) -> None:
    if not isinstance(f, PairwiseFunction):
        raise KMLError(
            KMLError.ERROR_INVALID_ARGUMENT,
            f"Expected a PairwiseFunction, got {type(f).__name__}",
        )


def _resolve_order(order: OrderLike) -> MemoryOrder:
    return get_memory_order() if order is None else MemoryOrder.parse(order)


# =============================================================================
# Symmetric Form
# =============================================================================

def _symmetric_into(
    P: np.ndarray,
    f: PairwiseFunction,
    X: np.ndarray,
    symmetrize: bool,
    fast: FastPathConfig,
) -> np.ndarray:
    if fast.strategy == FastPathStrategy.AUTO:
        if type(f) is ScalarProduct:
            logger.debug("Fast path: Gram matrix (blas=%s)", fast.use_blas)
            return _gramian(P, X, symmetrize, fast.use_blas)
        if type(f) is SquaredEuclidean:
            logger.debug("Fast path: squared distances from Gram matrix (blas=%s)", fast.use_blas)
            _gramian(P, X, False, fast.use_blas)
            return _squared_distance(P, dot_vectors(X), symmetrize, fast.clip_negative)

    if isinstance(f, CompositeFunction):
        _symmetric_into(P, f.inner, X, False, fast)
        return _symmetric_transform(P, f.outer.apply, symmetrize)

    if isinstance(f, AffineFunction):
        _symmetric_into(P, f.inner, X, False, fast)
        a = f.scale.value
        c = f.offset.value
        return _symmetric_transform(P, lambda z: a * z + c, symmetrize)

    if isinstance(f, _FunctionCombination):
        _symmetric_into(P, f.left, X, False, fast)
        S = _symmetric_into(np.empty_like(P), f.right, X, False, fast)
        op = type(f).operator
        rows, cols = upper_indices(P.shape[0])
        upper = op(P[rows, cols], S[rows, cols])
        if f.constant.value != f.identity:
            op(upper, f.constant.value, out=upper)
        P[rows, cols] = upper
        return copy_triangle(P) if symmetrize else P

    return _symmetric_loop(P, f, X, symmetrize)


def _symmetric_transform(P: np.ndarray, g, symmetrize: bool) -> np.ndarray:
    rows, cols = upper_indices(P.shape[0])
    P[rows, cols] = g(P[rows, cols])
    return copy_triangle(P) if symmetrize else P


def _symmetric_loop(P: np.ndarray, f: PairwiseFunction, X: np.ndarray, symmetrize: bool) -> np.ndarray:
    n = X.shape[0]
    for j in range(n):
        xj = X[j]
        for i in range(j + 1):
            P[i, j] = f._unsafe_evaluate(X[i], xj)
    return copy_triangle(P) if symmetrize else P


# =============================================================================
# Rectangular Form
# =============================================================================

def _rectangular_into(
    P: np.ndarray,
    f: PairwiseFunction,
    X: np.ndarray,
    Y: np.ndarray,
    fast: FastPathConfig,
) -> np.ndarray:
    if fast.strategy == FastPathStrategy.AUTO:
        if type(f) is ScalarProduct:
            logger.debug("Fast path: Gram matrix (blas=%s)", fast.use_blas)
            return _gramian_rect(P, X, Y, fast.use_blas)
        if type(f) is SquaredEuclidean:
            logger.debug("Fast path: squared distances from Gram matrix (blas=%s)", fast.use_blas)
            _gramian_rect(P, X, Y, fast.use_blas)
            return _squared_distance_rect(P, dot_vectors(X), dot_vectors(Y), fast.clip_negative)

    if isinstance(f, CompositeFunction):
        _rectangular_into(P, f.inner, X, Y, fast)
        P[...] = f.outer.apply(P)
        return P

    if isinstance(f, AffineFunction):
        _rectangular_into(P, f.inner, X, Y, fast)
        P *= f.scale.value
        P += f.offset.value
        return P

    if isinstance(f, _FunctionCombination):
        _rectangular_into(P, f.left, X, Y, fast)
        S = _rectangular_into(np.empty_like(P), f.right, X, Y, fast)
        op = type(f).operator
        op(P, S, out=P)
        if f.constant.value != f.identity:
            op(P, f.constant.value, out=P)
        return P

    return _rectangular_loop(P, f, X, Y)


def _rectangular_loop(P: np.ndarray, f: PairwiseFunction, X: np.ndarray, Y: np.ndarray) -> np.ndarray:
    n = X.shape[0]
    m = Y.shape[0]
    for j in range(m):
        yj = Y[j]
        for i in range(n):
            P[i, j] = f._unsafe_evaluate(X[i], yj)
    return P
