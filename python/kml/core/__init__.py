"""
KML Core - pairwise functions, bounded parameters and the matrix engine.

Provides:
- Leaves: ScalarProduct, SquaredEuclidean, SineSquared (and LeafFunction
  for user-defined reductions)
- Combinators: CompositeFunction, AffineFunction, FunctionSum, FunctionProduct
- Composition classes: scalar transforms such as ExponentialClass
- BoundedParameter / Interval: validated hyperparameters
- pairwise_matrix(): symmetric and rectangular kernel matrices

Usage:
    >>> import numpy as np
    >>> from kml.core import ScalarProduct, SquaredEuclidean, ExponentialClass
    >>> from kml.core import CompositeFunction, pairwise_matrix
    >>> X = np.random.randn(100, 5)

    # Gaussian kernel matrix
    >>> k = CompositeFunction(ExponentialClass(0.5), SquaredEuclidean())
    >>> K = pairwise_matrix(k, X)

    # Vectors stored as columns
    >>> K = pairwise_matrix(k, X.T, order='col')

    # Tune through the parameter vector
    >>> k.to_vector()
    array([0.5])
    >>> k.from_vector([2.0])
"""

from .error import (
    KMLError,
    DimensionMismatchError,
    OutOfBoundsError,
    InvalidShapeError,
    check_error,
    error_message,
    # Error codes
    KML_OK,
    KML_ERROR_UNKNOWN,
    KML_ERROR_INTERNAL,
    KML_ERROR_INVALID_ARGUMENT,
    KML_ERROR_DIMENSION_MISMATCH,
    KML_ERROR_OUT_OF_BOUNDS,
    KML_ERROR_INVALID_SHAPE,
    KML_ERROR_NOT_IMPLEMENTED,
)

from .config import (
    RealType,
    MemoryOrder,
    set_precision,
    get_precision,
    set_memory_order,
    get_memory_order,
)

from .parameter import (
    Bound,
    Interval,
    BoundedParameter,
    open_bound,
    closed_bound,
    interval,
)

from .theta import (
    Parametrized,
    get_theta,
    set_theta,
    check_theta,
)

from .compositions import (
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
)

from .functions import (
    PairwiseFunction,
    LeafFunction,
    ScalarProduct,
    SquaredEuclidean,
    SineSquared,
    CompositeFunction,
    AffineFunction,
    FunctionSum,
    FunctionProduct,
)

from .engine import (
    pairwise,
    pairwise_matrix,
    pairwise_matrix_into,
    init_pairwise_matrix,
    kernel,  # Alias for pairwise
    kernel_matrix,  # Alias for pairwise_matrix
    kernel_matrix_into,  # Alias for pairwise_matrix_into
)

__all__ = [
    # Error handling
    "KMLError",
    "DimensionMismatchError",
    "OutOfBoundsError",
    "InvalidShapeError",
    "check_error",
    "error_message",
    "KML_OK",
    "KML_ERROR_UNKNOWN",
    "KML_ERROR_INTERNAL",
    "KML_ERROR_INVALID_ARGUMENT",
    "KML_ERROR_DIMENSION_MISMATCH",
    "KML_ERROR_OUT_OF_BOUNDS",
    "KML_ERROR_INVALID_SHAPE",
    "KML_ERROR_NOT_IMPLEMENTED",
    # Configuration
    "RealType",
    "MemoryOrder",
    "set_precision",
    "get_precision",
    "set_memory_order",
    "get_memory_order",
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
    # Evaluation
    "pairwise",
    "pairwise_matrix",
    "pairwise_matrix_into",
    "init_pairwise_matrix",
    "kernel",  # Alias
    "kernel_matrix",  # Alias
    "kernel_matrix_into",  # Alias
]
