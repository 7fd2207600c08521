"""
KML - Kernel Matrix Library

Kernel matrices over sets of feature vectors, built from a small algebra
of pairwise functions.

Functions:
    ScalarProduct, SquaredEuclidean, SineSquared: Leaf functions
    CompositeFunction, AffineFunction: Transforms of one function
    FunctionSum, FunctionProduct: Combinations of two functions
    f + g, f * g, a * f, f + c build the same trees with operators

Kernels:
    kml.kernels holds ready-made kernels (gaussian, matern, polynomial, ...)
    and is_mercer() / is_negdef() classification.

Evaluation:
    pairwise_matrix(f, X) is symmetric (n x n), pairwise_matrix(f, X, Y)
    rectangular (n x m). Vectors are rows by default; pass order='col' or
    call set_memory_order() for column vectors.

Configuration:
    set_precision() picks the dtype for integer inputs; kml.config holds
    the fast-path strategy and compute options, with thread-local
    overrides through config.local().

Usage:
    >>> import numpy as np
    >>> import kml
    >>> X = np.array([[1.0, 0.0], [0.0, 1.0], [1.0, 1.0]])

    # Gram matrix
    >>> kml.pairwise_matrix(kml.ScalarProduct(), X)
    array([[1., 0., 1.],
           [0., 1., 1.],
           [1., 1., 2.]])

    # Gaussian kernel plus a linear term
    >>> k = kml.kernels.gaussian(0.5) + 2.0 * kml.ScalarProduct()
    >>> K = kml.pairwise_matrix(k, X)

    # Force the element-by-element loop for one block
    >>> with kml.config.local(fast_path=kml.FastPathConfig(kml.FastPathStrategy.GENERIC)):
    ...     K = kml.pairwise_matrix(kml.SquaredEuclidean(), X)
"""

__version__ = "0.1.0"

# Core types and evaluation
from .core import (
    # Pairwise functions
    PairwiseFunction,
    LeafFunction,
    ScalarProduct,
    SquaredEuclidean,
    SineSquared,
    CompositeFunction,
    AffineFunction,
    FunctionSum,
    FunctionProduct,
    # Composition classes
    CompositionClass,
    ExponentialClass,
    GammaExponentialClass,
    LaplacianClass,
    RationalQuadraticClass,
    GammaRationalClass,
    MaternClass,
    ExponentiatedClass,
    PolynomialClass,
    PowerClass,
    LogClass,
    SigmoidClass,
    # Parameters
    Bound,
    Interval,
    BoundedParameter,
    open_bound,
    closed_bound,
    interval,
    Parametrized,
    get_theta,
    set_theta,
    check_theta,
    # Evaluation
    pairwise,
    pairwise_matrix,
    pairwise_matrix_into,
    init_pairwise_matrix,
    kernel,
    kernel_matrix,
    kernel_matrix_into,
    # Enums
    RealType,
    MemoryOrder,
    # Error handling
    KMLError,
    DimensionMismatchError,
    OutOfBoundsError,
    InvalidShapeError,
    check_error,
    # Configuration
    set_precision,
    get_precision,
    set_memory_order,
    get_memory_order,
)

from ._config import (
    config,
    KmlConfig,
    FastPathStrategy,
    FastPathConfig,
    ComputeConfig,
    set_fast_path,
    set_check_finite,
)

from . import kernels
from .kernels import is_mercer, is_negdef

__all__ = [
    # Version
    "__version__",
    # Pairwise functions
    "PairwiseFunction",
    "LeafFunction",
    "ScalarProduct",
    "SquaredEuclidean",
    "SineSquared",
    "CompositeFunction",
    "AffineFunction",
    "FunctionSum",
    "FunctionProduct",
    # Composition classes
    "CompositionClass",
    "ExponentialClass",
    "GammaExponentialClass",
    "LaplacianClass",
    "RationalQuadraticClass",
    "GammaRationalClass",
    "MaternClass",
    "ExponentiatedClass",
    "PolynomialClass",
    "PowerClass",
    "LogClass",
    "SigmoidClass",
    # Parameters
    "Bound",
    "Interval",
    "BoundedParameter",
    "open_bound",
    "closed_bound",
    "interval",
    "Parametrized",
    "get_theta",
    "set_theta",
    "check_theta",
    # Evaluation
    "pairwise",
    "pairwise_matrix",
    "pairwise_matrix_into",
    "init_pairwise_matrix",
    "kernel",
    "kernel_matrix",
    "kernel_matrix_into",
    # Enums
    "RealType",
    "MemoryOrder",
    # Error handling
    "KMLError",
    "DimensionMismatchError",
    "OutOfBoundsError",
    "InvalidShapeError",
    "check_error",
    # Configuration
    "set_precision",
    "get_precision",
    "set_memory_order",
    "get_memory_order",
    "config",
    "KmlConfig",
    "FastPathStrategy",
    "FastPathConfig",
    "ComputeConfig",
    "set_fast_path",
    "set_check_finite",
    # Kernels
    "kernels",
    "is_mercer",
    "is_negdef",
]
