"""
Composition classes.

A composition class is a scalar transform g applied to the result z of an
inner pairwise function, giving the composite kernel g(f(x, y)). Every
apply() is written with numpy ufuncs so the same code maps a scalar, a
triangle of a matrix, or a whole matrix.

The _kind_map of each class records which kernel kind of the inner
function (see kml.kernels) the transform turns into which kind of result.
"""

from __future__ import annotations

from typing import Dict, Tuple

import numpy as np
from scipy import special

from .parameter import (
    BoundedParameter,
    Interval,
    closed_bound,
    nonnegative,
    positive,
    unit_exponent,
)
from .theta import Parametrized


class CompositionClass(Parametrized):
    """
    Base class for scalar transforms.

    Subclasses implement apply(z) and declare their parameters in
    _parameter_fields.
    """

    _fixed_fields: Tuple[str, ...] = ()
    _kind_map: Dict[str, str] = {}

    def apply(self, z):
        raise NotImplementedError(f"{type(self).__name__} does not define apply()")

    def __call__(self, z):
        return self.apply(z)

    def __eq__(self, other) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return all(
            getattr(self, field) == getattr(other, field)
            for field in self._parameter_fields + self._fixed_fields
        )

    __hash__ = None

    def __repr__(self) -> str:
        fields = self._parameter_fields + self._fixed_fields
        args = ", ".join(f"{field}={getattr(self, field).value!r}" for field in fields)
        return f"{type(self).__name__}({args})"


# =============================================================================
# Transforms of distances (negative definite inputs)
# =============================================================================

class ExponentialClass(CompositionClass):
    """g(z) = exp(-alpha z),  alpha in (0, inf)"""

    _parameter_fields = ("alpha",)
    _kind_map = {"negdef": "mercer"}

    def __init__(self, alpha: float = 1.0):
        self.alpha = BoundedParameter(alpha, positive(), name="alpha")

    def apply(self, z):
        return np.exp(-self.alpha.value * z)


class GammaExponentialClass(CompositionClass):
    """g(z) = exp(-alpha z^gamma),  alpha in (0, inf), gamma in (0, 1]"""

    _parameter_fields = ("alpha", "gamma")
    _kind_map = {"negdef": "mercer"}

    def __init__(self, alpha: float = 1.0, gamma: float = 1.0):
        self.alpha = BoundedParameter(alpha, positive(), name="alpha")
        self.gamma = BoundedParameter(gamma, unit_exponent(), name="gamma")

    def apply(self, z):
        return np.exp(-self.alpha.value * np.power(z, self.gamma.value))


class LaplacianClass(CompositionClass):
    """g(z) = exp(-alpha sqrt(z)),  alpha in (0, inf)"""

    _parameter_fields = ("alpha",)
    _kind_map = {"negdef": "mercer"}

    def __init__(self, alpha: float = 1.0):
        self.alpha = BoundedParameter(alpha, positive(), name="alpha")

    def apply(self, z):
        return np.exp(-self.alpha.value * np.sqrt(z))


class RationalQuadraticClass(CompositionClass):
    """g(z) = (1 + alpha z)^(-beta),  alpha, beta in (0, inf)"""

    _parameter_fields = ("alpha", "beta")
    _kind_map = {"negdef": "mercer"}

    def __init__(self, alpha: float = 1.0, beta: float = 1.0):
        self.alpha = BoundedParameter(alpha, positive(), name="alpha")
        self.beta = BoundedParameter(beta, positive(), name="beta")

    def apply(self, z):
        return np.power(1.0 + self.alpha.value * z, -self.beta.value)


class GammaRationalClass(CompositionClass):
    """g(z) = (1 + alpha z^gamma)^(-beta),  alpha, beta in (0, inf), gamma in (0, 1]"""

    _parameter_fields = ("alpha", "beta", "gamma")
    _kind_map = {"negdef": "mercer"}

    def __init__(self, alpha: float = 1.0, beta: float = 1.0, gamma: float = 1.0):
        self.alpha = BoundedParameter(alpha, positive(), name="alpha")
        self.beta = BoundedParameter(beta, positive(), name="beta")
        self.gamma = BoundedParameter(gamma, unit_exponent(), name="gamma")

    def apply(self, z):
        return np.power(1.0 + self.alpha.value * np.power(z, self.gamma.value), -self.beta.value)


class MaternClass(CompositionClass):
    """
    g(z) = 2 (v/2)^nu K_nu(v) / Gamma(nu),  v = sqrt(2 nu) z / rho

    nu, rho in (0, inf). v is floored at machine epsilon so that g(0)
    stays finite (K_nu diverges at 0).
    """

    _parameter_fields = ("nu", "rho")
    _kind_map = {"negdef": "mercer"}

    def __init__(self, nu: float = 1.0, rho: float = 1.0):
        self.nu = BoundedParameter(nu, positive(), name="nu")
        self.rho = BoundedParameter(rho, positive(), name="rho")

    def apply(self, z):
        nu = self.nu.value
        z = np.asarray(z)
        if z.dtype.kind != "f":
            z = z.astype(np.float64)
        v = np.sqrt(2.0 * nu) * z / self.rho.value
        v = np.maximum(v, np.finfo(v.dtype).eps)
        return 2.0 * np.power(v / 2.0, nu) * special.kv(nu, v) / special.gamma(nu)


class PowerClass(CompositionClass):
    """g(z) = z^gamma,  gamma in (0, 1]"""

    _parameter_fields = ("gamma",)
    _kind_map = {"negdef": "negdef"}

    def __init__(self, gamma: float = 1.0):
        self.gamma = BoundedParameter(gamma, unit_exponent(), name="gamma")

    def apply(self, z):
        return np.power(z, self.gamma.value)


class LogClass(CompositionClass):
    """g(z) = log(1 + alpha z^gamma),  alpha in (0, inf), gamma in (0, 1]"""

    _parameter_fields = ("alpha", "gamma")
    _kind_map = {"negdef": "negdef"}

    def __init__(self, alpha: float = 1.0, gamma: float = 1.0):
        self.alpha = BoundedParameter(alpha, positive(), name="alpha")
        self.gamma = BoundedParameter(gamma, unit_exponent(), name="gamma")

    def apply(self, z):
        return np.log1p(self.alpha.value * np.power(z, self.gamma.value))


# =============================================================================
# Transforms of inner products (positive definite inputs)
# =============================================================================

class ExponentiatedClass(CompositionClass):
    """g(z) = exp(alpha z),  alpha in (0, inf)"""

    _parameter_fields = ("alpha",)
    _kind_map = {"mercer": "mercer"}

    def __init__(self, alpha: float = 1.0):
        self.alpha = BoundedParameter(alpha, positive(), name="alpha")

    def apply(self, z):
        return np.exp(self.alpha.value * z)


class PolynomialClass(CompositionClass):
    """
    g(z) = (a z + c)^d,  a in (0, inf), c in [0, inf), d integer >= 1

    The degree is structural: it is validated like any parameter but kept
    out of the parameter vector.
    """

    _parameter_fields = ("a", "c")
    _fixed_fields = ("d",)
    _kind_map = {"mercer": "mercer"}

    def __init__(self, a: float = 1.0, c: float = 1.0, d: int = 3):
        self.a = BoundedParameter(a, positive(), name="a")
        self.c = BoundedParameter(c, nonnegative(), name="c")
        self.d = BoundedParameter(d, Interval(closed_bound(1)), name="d", dtype=int)

    def apply(self, z):
        return np.power(self.a.value * z + self.c.value, self.d.value)


class SigmoidClass(CompositionClass):
    """g(z) = tanh(a z + c),  a in (0, inf), c in [0, inf). Not a Mercer transform."""

    _parameter_fields = ("a", "c")

    def __init__(self, a: float = 1.0, c: float = 1.0):
        self.a = BoundedParameter(a, positive(), name="a")
        self.c = BoundedParameter(c, nonnegative(), name="c")

    def apply(self, z):
        return np.tanh(self.a.value * z + self.c.value)
