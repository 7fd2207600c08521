"""
Global configuration for KML.

Provides:
- Default precision for allocated result matrices (real type)
- Default memory order (which matrix axis holds one feature vector)
- Dtype resolution for input matrices
"""

from __future__ import annotations

from enum import Enum
from typing import Optional, Union

import numpy as np

from .error import KMLError


# =============================================================================
# Precision Types
# =============================================================================

class RealType(Enum):
    """Real (floating-point) precision."""
    FLOAT32 = "f32"
    FLOAT64 = "f64"

    @property
    def numpy_dtype(self) -> np.dtype:
        return np.dtype(np.float32) if self == RealType.FLOAT32 else np.dtype(np.float64)


class MemoryOrder(Enum):
    """
    Layout of feature vectors inside an input matrix.

    ROW: each row is one vector, so axis 0 counts vectors.
    COL: each column is one vector, so axis 1 counts vectors.
    """
    ROW = "row"
    COL = "col"

    @property
    def axis(self) -> int:
        """Matrix axis that indexes vectors."""
        return 0 if self == MemoryOrder.ROW else 1

    @classmethod
    def parse(cls, value: Union["MemoryOrder", str]) -> "MemoryOrder":
        """Accept an enum member or one of 'row', 'col', 'C', 'F'."""
        if isinstance(value, MemoryOrder):
            return value
        key = str(value).lower()
        if key in ("row", "c", "rows"):
            return MemoryOrder.ROW
        if key in ("col", "f", "cols", "column", "columns"):
            return MemoryOrder.COL
        raise KMLError(KMLError.ERROR_INVALID_ARGUMENT, f"Unknown memory order: {value!r}")


# =============================================================================
# Global Configuration State
# =============================================================================

class _Config:
    """
    Global configuration singleton.

    Holds default precision and memory order.
    """

    def __init__(self):
        # Default: float64, row vectors (numpy convention)
        self._default_real = RealType.FLOAT64
        self._default_order = MemoryOrder.ROW

    @property
    def default_real(self) -> RealType:
        """Get default real type."""
        return self._default_real

    @default_real.setter
    def default_real(self, value: Union[RealType, str]):
        """Set default real type."""
        if isinstance(value, str):
            value = RealType(value) if value in ('f32', 'f64') else \
                    RealType.FLOAT32 if 'float32' in value.lower() or '32' in value else \
                    RealType.FLOAT64
        self._default_real = value

    @property
    def default_order(self) -> MemoryOrder:
        """Get default memory order."""
        return self._default_order

    @default_order.setter
    def default_order(self, value: Union[MemoryOrder, str]):
        """Set default memory order."""
        self._default_order = MemoryOrder.parse(value)

    def resolve_dtype(self, *arrays: np.ndarray) -> np.dtype:
        """
        Pick the floating dtype for a computation over arrays.

        float32/float64 inputs keep their (promoted) precision; anything
        else falls back to the default real type.
        """
        if arrays:
            dtype = np.result_type(*arrays)
            if dtype in (np.float32, np.float64):
                return np.dtype(dtype)
        return self._default_real.numpy_dtype


# Global config instance
_config = _Config()


# =============================================================================
# Public API
# =============================================================================

def get_config() -> _Config:
    """Get global configuration instance."""
    return _config


def set_precision(real: Optional[Union[RealType, str]] = None) -> None:
    """
    Set default precision for allocated matrices and non-float inputs.

    Args:
        real: Real type ('float32', 'float64', 'f32', 'f64')

    Example:
        >>> kml.set_precision(real='float32')
        >>> P = kml.pairwise_matrix(kml.ScalarProduct(), np.eye(3, dtype=int))  # float32
    """
    if real is not None:
        _config.default_real = real


def get_precision() -> RealType:
    """Get current default precision."""
    return _config.default_real


def set_memory_order(order: Union[MemoryOrder, str]) -> None:
    """Set the memory order used when a call does not pass one."""
    _config.default_order = order


def get_memory_order() -> MemoryOrder:
    """Get current default memory order."""
    return _config.default_order


# =============================================================================
# Internal Helpers
# =============================================================================

def _resolve_dtype(*arrays: np.ndarray) -> np.dtype:
    """Internal: dtype used to evaluate over the given arrays."""
    return _config.resolve_dtype(*arrays)
