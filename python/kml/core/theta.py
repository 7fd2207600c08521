"""
Parameter-vector protocol.

Optimizers see a function tree as one flat vector of numbers. Each class
declares, once, which attributes hold its own BoundedParameters
(_parameter_fields) and which hold child objects (_child_fields). The
vector order is: own parameters, then each child in declared order,
recursively. For combinators this gives outer before inner and left
before right.
"""

from __future__ import annotations

import logging
from typing import Iterator, List, Optional, Sequence, Tuple

import numpy as np

from .error import DimensionMismatchError, OutOfBoundsError
from .parameter import BoundedParameter


logger = logging.getLogger(__name__)


class Parametrized:
    """
    Base class for objects exposing BoundedParameters to optimizers.

    Subclasses list attribute names in _parameter_fields and
    _child_fields. Fixed structural parameters (an integer polynomial
    degree, say) are simply left out of _parameter_fields.
    """

    _parameter_fields: Tuple[str, ...] = ()
    _child_fields: Tuple[str, ...] = ()

    # -------------------------------------------------------------------------
    # Traversal
    # -------------------------------------------------------------------------

    def _walk(self, prefix: str = "") -> Iterator[Tuple[str, BoundedParameter]]:
        for field in self._parameter_fields:
            yield prefix + field, getattr(self, field)
        for field in self._child_fields:
            yield from getattr(self, field)._walk(prefix + field + ".")

    def parameters(self) -> List[BoundedParameter]:
        """BoundedParameters in vector order."""
        return [param for _, param in self._walk()]

    def parameter_names(self) -> List[str]:
        """Dotted attribute paths in vector order, e.g. 'inner.outer.alpha'."""
        return [name for name, _ in self._walk()]

    @property
    def n_parameters(self) -> int:
        return sum(1 for _ in self._walk())

    # -------------------------------------------------------------------------
    # Vector Conversion
    # -------------------------------------------------------------------------

    def to_vector(self) -> np.ndarray:
        """Current parameter values as a float64 vector."""
        return np.array([float(param.value) for param in self.parameters()], dtype=np.float64)

    def _check_length(self, params: Sequence[BoundedParameter], v: np.ndarray) -> None:
        if v.ndim != 1 or len(v) != len(params):
            raise DimensionMismatchError(
                f"Parameter vector has shape {v.shape}, expected ({len(params)},) "
                f"for {type(self).__name__}"
            )

    def _first_invalid(
        self, named: Sequence[Tuple[str, BoundedParameter]], v: np.ndarray
    ) -> Optional[int]:
        for i, (_, param) in enumerate(named):
            if not param.check(v[i]):
                return i
        return None

    def check_vector(self, v) -> bool:
        """
        Whether from_vector(v) would succeed, without mutating anything.

        Raises:
            DimensionMismatchError: If len(v) differs from the parameter count
        """
        named = list(self._walk())
        v = np.asarray(v, dtype=np.float64)
        self._check_length([param for _, param in named], v)
        return self._first_invalid(named, v) is None

    def from_vector(self, v) -> "Parametrized":
        """
        Assign parameter values from a vector.

        Every entry is validated before any assignment, so a failing call
        leaves all parameters unchanged.

        Raises:
            DimensionMismatchError: If len(v) differs from the parameter count
            OutOfBoundsError: If an entry violates its parameter's bounds
        """
        named = list(self._walk())
        v = np.asarray(v, dtype=np.float64)
        self._check_length([param for _, param in named], v)

        bad = self._first_invalid(named, v)
        if bad is not None:
            name, param = named[bad]
            raise OutOfBoundsError(
                f"Entry {bad} ({name}={v[bad]!r}) is outside {param.bounds!r}"
            )

        for i, (_, param) in enumerate(named):
            param.set(v[i])
        logger.debug("Updated %d parameters of %s", len(named), type(self).__name__)
        return self

    def bounds(self) -> List[Tuple[Optional[float], Optional[float]]]:
        """(low, high) per parameter, None where unconstrained (scipy.optimize style)."""
        return [param.bounds.limits() for param in self.parameters()]


# =============================================================================
# Functional Aliases
# =============================================================================

def get_theta(obj: Parametrized) -> np.ndarray:
    """Flatten obj's parameters to a vector."""
    return obj.to_vector()


def set_theta(obj: Parametrized, v) -> Parametrized:
    """Assign obj's parameters from a vector (validated, all-or-nothing)."""
    return obj.from_vector(v)


def check_theta(obj: Parametrized, v) -> bool:
    """Whether v is a valid parameter vector for obj."""
    return obj.check_vector(v)
