"""
Dense matrix helpers.

Thin layer over numpy used by the evaluation engine:
- Input coercion to 2-D arrays with a float dtype
- Vector extraction by memory order (rows or columns)
- Result allocation
- Triangle mirroring
- Dimension checks

Conventions:
    Symmetric results are computed on the upper triangle (i <= j,
    diagonal included) and mirrored into the lower triangle on request.
    Allocated results are uninitialized (np.empty), so an unmirrored
    lower triangle holds arbitrary values.
"""

from __future__ import annotations

from typing import Optional, Tuple

import numpy as np

from .config import MemoryOrder
from .error import DimensionMismatchError, InvalidShapeError, KMLError


# =============================================================================
# Input Coercion
# =============================================================================

def as_matrix(X, name: str = "X") -> np.ndarray:
    """
    View X as a 2-D numpy array without copying when possible.

    Raises:
        InvalidShapeError: If X is not 2-D
    """
    arr = np.asarray(X)
    if arr.ndim != 2:
        raise InvalidShapeError(f"{name} must be a 2-D matrix, got {arr.ndim}-D with shape {arr.shape}")
    return arr


def check_finite(X: np.ndarray, name: str = "X") -> None:
    """Raise if X holds NaN or infinite values."""
    if not np.all(np.isfinite(X)):
        raise KMLError(KMLError.ERROR_INVALID_ARGUMENT, f"{name} contains NaN or infinite values")


# =============================================================================
# Vector Access
# =============================================================================

def vector_count(order: MemoryOrder, X: np.ndarray) -> int:
    """Number of vectors stored in X."""
    return X.shape[order.axis]


def vector_length(order: MemoryOrder, X: np.ndarray) -> int:
    """Length of each vector stored in X."""
    return X.shape[1 - order.axis]


def vectors(order: MemoryOrder, X: np.ndarray) -> np.ndarray:
    """
    Row-vector view of X: vectors(order, X)[i] is the i-th vector.

    For COL order this is the transpose view, no data is copied.
    """
    return X if order == MemoryOrder.ROW else X.T


# =============================================================================
# Allocation
# =============================================================================

def init_matrix(n: int, m: int, dtype=np.float64) -> np.ndarray:
    """Uninitialized (n, m) result matrix."""
    return np.empty((n, m), dtype=dtype)


def init_pairwise_matrix(
    order: MemoryOrder,
    X: np.ndarray,
    Y: Optional[np.ndarray] = None,
    dtype=np.float64,
) -> np.ndarray:
    """
    Uninitialized result for evaluating over X (and Y).

    Shape is (n, n) for the symmetric case and (n, m) otherwise, where n
    and m are the vector counts of X and Y.
    """
    n = vector_count(order, X)
    m = n if Y is None else vector_count(order, Y)
    return init_matrix(n, m, dtype)


# =============================================================================
# Triangles
# =============================================================================

def upper_indices(n: int) -> Tuple[np.ndarray, np.ndarray]:
    """Row/column indices of the upper triangle, diagonal included."""
    return np.triu_indices(n)


def copy_triangle(P: np.ndarray) -> np.ndarray:
    """
    Mirror the upper triangle of square P into its lower triangle (in place).

    Raises:
        InvalidShapeError: If P is not square
    """
    n = check_square(P)
    rows, cols = np.tril_indices(n, -1)
    P[rows, cols] = P[cols, rows]
    return P


# =============================================================================
# Dimension Checks
# =============================================================================

def check_square(P: np.ndarray, name: str = "P") -> int:
    """Return n for an (n, n) matrix, raise InvalidShapeError otherwise."""
    if P.ndim != 2 or P.shape[0] != P.shape[1]:
        raise InvalidShapeError(f"Result matrix {name} must be square, got shape {P.shape}")
    return P.shape[0]


def check_pairwise_dimensions(
    order: MemoryOrder,
    P: np.ndarray,
    X: np.ndarray,
    Y: Optional[np.ndarray] = None,
) -> Tuple[int, int]:
    """
    Validate P against X (symmetric) or X and Y (rectangular).

    Returns:
        (n, m) vector counts

    Raises:
        InvalidShapeError: If P is not 2-D, or not square in the symmetric case
        DimensionMismatchError: If P does not match the vector counts, or X
            and Y hold vectors of different lengths
    """
    axis = order.axis
    if P.ndim != 2:
        raise InvalidShapeError(f"Result matrix P must be 2-D, got {P.ndim}-D")

    if Y is None:
        n = check_square(P)
        if vector_count(order, X) != n:
            raise DimensionMismatchError(
                f"Dimensions of P {P.shape} must match dimension {axis} of X "
                f"({vector_count(order, X)} {order.value} vectors)"
            )
        return n, n

    n = vector_count(order, X)
    m = vector_count(order, Y)
    if n != P.shape[0]:
        raise DimensionMismatchError(
            f"Dimension 0 of P ({P.shape[0]}) must match dimension {axis} of X ({n})"
        )
    if m != P.shape[1]:
        raise DimensionMismatchError(
            f"Dimension 1 of P ({P.shape[1]}) must match dimension {axis} of Y ({m})"
        )
    if vector_length(order, X) != vector_length(order, Y):
        raise DimensionMismatchError(
            f"Vectors of X and Y must have the same length, got "
            f"{vector_length(order, X)} and {vector_length(order, Y)}"
        )
    return n, m
