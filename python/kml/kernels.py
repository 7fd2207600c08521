"""
Catalog of named kernels and kernel classification.

Every kernel here is an ordinary function tree built from the leaves in
kml.core.functions and the transforms in kml.core.compositions, so it can
be evaluated, tuned through its parameter vector, and combined further
with + and *.

    Name                  k(x, y)
    --------------------  -----------------------------------------
    squared_exponential   exp(-alpha ||x - y||^2)
    exponential           exp(-alpha ||x - y||)
    gamma_exponential     exp(-alpha ||x - y||^(2 gamma))
    rational_quadratic    (1 + alpha ||x - y||^2)^(-beta)
    gamma_rational        (1 + alpha ||x - y||^(2 gamma))^(-beta)
    matern                Matern(nu, rho) of ||x - y||^2
    periodic              exp(-alpha sum_k sin^2(x_k - y_k))
    linear                a x'y + c
    polynomial            (a x'y + c)^d
    exponentiated         exp(alpha x'y)
    sigmoid               tanh(a x'y + c)
    power                 ||x - y||^(2 gamma)
    logarithmic           log(1 + alpha ||x - y||^(2 gamma))

Classification:
    A kernel is "mercer" (positive definite) or "negdef" (conditionally
    negative definite) when that follows from the construction rules:

    - x'y is mercer; squared distances (Euclidean or sine) are negdef
    - a composition maps the kind of its inner function through the
      transform's table, e.g. exp(-alpha z) turns negdef into mercer
    - scale > 0 and offset >= 0 keep the kind
    - a sum of two kernels of the same kind has that kind
    - a product of two mercer kernels is mercer

    Anything else is unclassified (kernel_kind() returns None).

Usage:
    >>> k = squared_exponential(0.5) + linear()
    >>> is_mercer(k)
    True
    >>> is_negdef(power(0.5))
    True
"""

from __future__ import annotations

from typing import Callable, Dict, Optional

from .core.compositions import (
    ExponentialClass,
    ExponentiatedClass,
    GammaExponentialClass,
    GammaRationalClass,
    LaplacianClass,
    LogClass,
    MaternClass,
    PolynomialClass,
    PowerClass,
    RationalQuadraticClass,
    SigmoidClass,
)
from .core.error import KMLError
from .core.functions import (
    AffineFunction,
    CompositeFunction,
    FunctionProduct,
    FunctionSum,
    PairwiseFunction,
    ScalarProduct,
    SineSquared,
    SquaredEuclidean,
)


MERCER = "mercer"
NEGDEF = "negdef"


# =============================================================================
# Distance-based kernels
# =============================================================================

def squared_exponential(alpha: float = 1.0) -> CompositeFunction:
    """Gaussian kernel exp(-alpha ||x - y||^2)."""
    return CompositeFunction(ExponentialClass(alpha), SquaredEuclidean())


def exponential(alpha: float = 1.0) -> CompositeFunction:
    """Laplacian kernel exp(-alpha ||x - y||)."""
    return CompositeFunction(LaplacianClass(alpha), SquaredEuclidean())


def gamma_exponential(alpha: float = 1.0, gamma: float = 1.0) -> CompositeFunction:
    return CompositeFunction(GammaExponentialClass(alpha, gamma), SquaredEuclidean())


def rational_quadratic(alpha: float = 1.0, beta: float = 1.0) -> CompositeFunction:
    return CompositeFunction(RationalQuadraticClass(alpha, beta), SquaredEuclidean())


def gamma_rational(alpha: float = 1.0, beta: float = 1.0, gamma: float = 1.0) -> CompositeFunction:
    return CompositeFunction(GammaRationalClass(alpha, beta, gamma), SquaredEuclidean())


def matern(nu: float = 1.0, rho: float = 1.0) -> CompositeFunction:
    """Matern kernel with smoothness nu and length scale rho."""
    return CompositeFunction(MaternClass(nu, rho), SquaredEuclidean())


def periodic(alpha: float = 1.0) -> CompositeFunction:
    """exp(-alpha sum_k sin^2(x_k - y_k))"""
    return CompositeFunction(ExponentialClass(alpha), SineSquared())


def power(gamma: float = 1.0) -> CompositeFunction:
    return CompositeFunction(PowerClass(gamma), SquaredEuclidean())


def logarithmic(alpha: float = 1.0, gamma: float = 1.0) -> CompositeFunction:
    return CompositeFunction(LogClass(alpha, gamma), SquaredEuclidean())


# Identical definitions
gaussian = squared_exponential
radial_basis = squared_exponential
laplacian = exponential


# =============================================================================
# Inner-product kernels
# =============================================================================

def linear(a: float = 1.0, c: float = 1.0) -> CompositeFunction:
    """a x'y + c, the degree-1 polynomial kernel."""
    return CompositeFunction(PolynomialClass(a, c, 1), ScalarProduct())


def polynomial(a: float = 1.0, c: float = 1.0, d: int = 3) -> CompositeFunction:
    return CompositeFunction(PolynomialClass(a, c, d), ScalarProduct())


def exponentiated(alpha: float = 1.0) -> CompositeFunction:
    return CompositeFunction(ExponentiatedClass(alpha), ScalarProduct())


def sigmoid(a: float = 1.0, c: float = 1.0) -> CompositeFunction:
    """tanh(a x'y + c). Not positive definite in general."""
    return CompositeFunction(SigmoidClass(a, c), ScalarProduct())


KERNELS: Dict[str, Callable[..., PairwiseFunction]] = {
    "squared_exponential": squared_exponential,
    "gaussian": gaussian,
    "radial_basis": radial_basis,
    "exponential": exponential,
    "laplacian": laplacian,
    "gamma_exponential": gamma_exponential,
    "rational_quadratic": rational_quadratic,
    "gamma_rational": gamma_rational,
    "matern": matern,
    "periodic": periodic,
    "power": power,
    "logarithmic": logarithmic,
    "linear": linear,
    "polynomial": polynomial,
    "exponentiated": exponentiated,
    "sigmoid": sigmoid,
}


def get_kernel(name: str, **params) -> PairwiseFunction:
    """
    Build a catalog kernel by name.

    Args:
        name: Key of KERNELS (case-insensitive)
        **params: Keyword arguments of the factory

    Raises:
        KMLError: If name is unknown
        OutOfBoundsError: If a parameter violates its bounds
    """
    factory = KERNELS.get(name.lower())
    if factory is None:
        raise KMLError(
            KMLError.ERROR_INVALID_ARGUMENT,
            f"Unknown kernel '{name}'. Available: {', '.join(sorted(KERNELS))}",
        )
    return factory(**params)


# =============================================================================
# Classification
# =============================================================================

def kernel_kind(f: PairwiseFunction) -> Optional[str]:
    """'mercer', 'negdef' or None when the construction proves neither."""
    if type(f) is ScalarProduct:
        return MERCER
    if type(f) is SquaredEuclidean or type(f) is SineSquared:
        return NEGDEF
    if isinstance(f, CompositeFunction):
        inner = kernel_kind(f.inner)
        if inner is None:
            return None
        return type(f.outer)._kind_map.get(inner)
    if isinstance(f, AffineFunction):
        return kernel_kind(f.inner)
    if isinstance(f, FunctionSum):
        left = kernel_kind(f.left)
        return left if left is not None and left == kernel_kind(f.right) else None
    if isinstance(f, FunctionProduct):
        if kernel_kind(f.left) == MERCER and kernel_kind(f.right) == MERCER:
            return MERCER
        return None
    return None


def is_mercer(f: PairwiseFunction) -> bool:
    """Whether f is positive definite by construction."""
    return kernel_kind(f) == MERCER


def is_negdef(f: PairwiseFunction) -> bool:
    """Whether f is conditionally negative definite by construction."""
    return kernel_kind(f) == NEGDEF
