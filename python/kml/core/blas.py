"""
Scalar products and squared distances by matrix multiplication.

Gram matrices come from BLAS syrk (symmetric) and gemm (rectangular)
through scipy.linalg.blas, or from numpy matmul when BLAS is disabled in
the configuration. Squared Euclidean distances are recovered from a Gram
matrix with

    ||x - y||^2 = x'x - 2 x'y + y'y

All functions take row-vector views (one vector per row); the engine
resolves the memory order before calling them. Public functions check
their arguments; the underscored variants are the unchecked kernels used
by the engine after it has validated shapes.
"""

from __future__ import annotations

import numpy as np
from scipy.linalg import get_blas_funcs

from .dense import check_square, copy_triangle, upper_indices
from .error import DimensionMismatchError


# =============================================================================
# Gram Matrices
# =============================================================================

def _gramian(G: np.ndarray, X: np.ndarray, symmetrize: bool, use_blas: bool = True) -> np.ndarray:
    n, d = X.shape
    if n == 0:
        return G
    rows, cols = upper_indices(n)
    if d == 0:
        G[rows, cols] = 0
    elif use_blas:
        syrk, = get_blas_funcs(("syrk",), (X,))
        # syrk only fills the upper triangle
        G[rows, cols] = syrk(1.0, X)[rows, cols]
    else:
        G[rows, cols] = (X @ X.T)[rows, cols]
    return copy_triangle(G) if symmetrize else G


def _gramian_rect(G: np.ndarray, X: np.ndarray, Y: np.ndarray, use_blas: bool = True) -> np.ndarray:
    n, d = X.shape
    m = Y.shape[0]
    if n == 0 or m == 0:
        return G
    if d == 0:
        G.fill(0)
        return G
    if use_blas:
        gemm, = get_blas_funcs(("gemm",), (X, Y))
        G[...] = gemm(1.0, X, Y, trans_b=True)
    else:
        G[...] = X @ Y.T
    return G


def gramian(G: np.ndarray, X: np.ndarray, symmetrize: bool = True, use_blas: bool = True) -> np.ndarray:
    """
    Symmetric Gram matrix G = X X' (in place).

    Args:
        G: (n, n) output
        X: (n, d) row vectors
        symmetrize: Mirror the upper triangle into the lower one
        use_blas: syrk if True, numpy matmul otherwise

    Raises:
        InvalidShapeError: If G is not square
        DimensionMismatchError: If G does not match the vector count of X
    """
    n = check_square(G, "G")
    if X.shape[0] != n:
        raise DimensionMismatchError(f"Gram matrix of shape {G.shape} does not match {X.shape[0]} vectors")
    return _gramian(G, X, symmetrize, use_blas)


def gramian_rect(G: np.ndarray, X: np.ndarray, Y: np.ndarray, use_blas: bool = True) -> np.ndarray:
    """
    Rectangular Gram matrix G = X Y' (in place).

    Raises:
        DimensionMismatchError: If shapes are incompatible
    """
    if G.shape != (X.shape[0], Y.shape[0]):
        raise DimensionMismatchError(
            f"Gram matrix of shape {G.shape} does not match ({X.shape[0]}, {Y.shape[0]})"
        )
    if X.shape[1] != Y.shape[1]:
        raise DimensionMismatchError(
            f"Vectors of X and Y must have the same length, got {X.shape[1]} and {Y.shape[1]}"
        )
    return _gramian_rect(G, X, Y, use_blas)


def dot_vectors(X: np.ndarray) -> np.ndarray:
    """Squared norm x'x of every row vector of X."""
    return np.einsum("ij,ij->i", X, X)


# =============================================================================
# Squared Distances
# =============================================================================

def _squared_distance(G: np.ndarray, xx: np.ndarray, symmetrize: bool, clip: bool = True) -> np.ndarray:
    n = xx.shape[0]
    rows, cols = upper_indices(n)
    upper = xx[rows] - 2 * G[rows, cols] + xx[cols]
    if clip:
        np.maximum(upper, 0, out=upper)
    G[rows, cols] = upper
    # d(x, x) is exactly zero; the identity above only gets close
    G[np.diag_indices(n)] = 0
    return copy_triangle(G) if symmetrize else G


def _squared_distance_rect(G: np.ndarray, xx: np.ndarray, yy: np.ndarray, clip: bool = True) -> np.ndarray:
    G *= -2
    G += xx[:, np.newaxis]
    G += yy[np.newaxis, :]
    if clip:
        np.maximum(G, 0, out=G)
    return G


def squared_distance(G: np.ndarray, xx: np.ndarray, symmetrize: bool = True, clip: bool = True) -> np.ndarray:
    """
    Turn a symmetric Gram matrix into squared distances (in place).

    Only the upper triangle of G is read.

    Args:
        G: (n, n) Gram matrix
        xx: (n,) squared norms, see dot_vectors()
        symmetrize: Mirror the upper triangle into the lower one
        clip: Clip small negative values caused by cancellation to zero
    """
    n = check_square(G, "G")
    if xx.shape != (n,):
        raise DimensionMismatchError(f"Length of xx ({xx.shape[0]}) must match size of G ({n})")
    return _squared_distance(G, xx, symmetrize, clip)


def squared_distance_rect(G: np.ndarray, xx: np.ndarray, yy: np.ndarray, clip: bool = True) -> np.ndarray:
    """
    Turn a rectangular Gram matrix into squared distances (in place).

    Raises:
        DimensionMismatchError: If xx or yy do not match the shape of G
    """
    if G.ndim != 2 or xx.shape != (G.shape[0],):
        raise DimensionMismatchError(f"Length of xx must match rows of G {G.shape}")
    if yy.shape != (G.shape[1],):
        raise DimensionMismatchError(f"Length of yy must match columns of G {G.shape}")
    return _squared_distance_rect(G, xx, yy, clip)
