"""
KML Config - Strategy Configuration System

Provides property-based strategy configuration for matrix evaluation.
Allows fine-grained control over computation behavior without modifying
function signatures.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict, List
from enum import IntEnum
import threading


# =============================================================================
# Strategy Enumerations
# =============================================================================

class FastPathStrategy(IntEnum):
    """
    Strategy for scalar-product and squared-Euclidean leaves.
    """
    AUTO = 0           # Use matrix multiplication when the leaf allows it
    GENERIC = 1        # Always use the element-by-element loop


# =============================================================================
# Configuration Classes
# =============================================================================

@dataclass
class FastPathConfig:
    """Configuration for the linear-algebra fast path."""
    strategy: FastPathStrategy = FastPathStrategy.AUTO
    use_blas: bool = True          # scipy BLAS syrk/gemm, else numpy matmul
    clip_negative: bool = True     # Clip squared distances below zero


@dataclass
class ComputeConfig:
    """Configuration for matrix evaluation."""
    symmetrize: bool = True        # Mirror symmetric results by default
    check_finite: bool = False     # Reject NaN/inf inputs before computing


# =============================================================================
# Global Configuration Manager
# =============================================================================

class KmlConfig:
    """
    Global configuration manager for KML.

    Provides thread-local configuration with context manager support.
    Configuration can be set globally or locally within a context.

    Example:
        # Global configuration
        kml.config.fast_path.strategy = FastPathStrategy.GENERIC

        # Local configuration (context manager)
        with kml.config.local(fast_path=FastPathConfig(use_blas=False)):
            # numpy matmul here
            P = kml.pairwise_matrix(kml.ScalarProduct(), X)
        # Back to global config
    """

    def __init__(self):
        self._global_fast_path = FastPathConfig()
        self._global_compute = ComputeConfig()

        # Thread-local storage for context overrides
        self._local = threading.local()

    # -------------------------------------------------------------------------
    # Property Accessors (with thread-local override support)
    # -------------------------------------------------------------------------

    @property
    def fast_path(self) -> FastPathConfig:
        """Get fast path configuration."""
        if getattr(self._local, "fast_path", None) is not None:
            return self._local.fast_path
        return self._global_fast_path

    @fast_path.setter
    def fast_path(self, value: FastPathConfig):
        """Set global fast path configuration."""
        self._global_fast_path = value

    @property
    def compute(self) -> ComputeConfig:
        """Get compute configuration."""
        if getattr(self._local, "compute", None) is not None:
            return self._local.compute
        return self._global_compute

    @compute.setter
    def compute(self, value: ComputeConfig):
        """Set global compute configuration."""
        self._global_compute = value

    # -------------------------------------------------------------------------
    # Convenience Properties
    # -------------------------------------------------------------------------

    @property
    def symmetrize(self) -> bool:
        """Whether symmetric results are mirrored by default."""
        return self.compute.symmetrize

    @symmetrize.setter
    def symmetrize(self, value: bool):
        """
        Set the global default symmetrization.

        A compute config installed by local() still takes precedence in
        its block, so the new value reads back only outside it.
        """
        self._global_compute.symmetrize = value

    @property
    def use_fast_path(self) -> bool:
        """Whether the matrix-multiply fast path is enabled."""
        return self.fast_path.strategy == FastPathStrategy.AUTO

    # -------------------------------------------------------------------------
    # Context Manager Support
    # -------------------------------------------------------------------------

    def local(self, **kwargs) -> "_LocalConfigContext":
        """
        Create a local configuration context.

        Args:
            **kwargs: Configuration overrides (fast_path, compute)

        Returns:
            Context manager
        """
        unknown = set(kwargs) - {"fast_path", "compute"}
        if unknown:
            raise TypeError(f"Unknown configuration sections: {sorted(unknown)}")
        return _LocalConfigContext(self, **kwargs)

    def _set_local(self, **kwargs):
        """Set thread-local configuration."""
        for key, value in kwargs.items():
            if value is not None:
                setattr(self._local, key, value)

    def _get_local(self, keys: List[str]) -> Dict[str, Any]:
        """Snapshot thread-local configuration."""
        return {key: getattr(self._local, key, None) for key in keys}

    # -------------------------------------------------------------------------
    # Reset
    # -------------------------------------------------------------------------

    def reset(self):
        """Reset all configurations to defaults."""
        self._global_fast_path = FastPathConfig()
        self._global_compute = ComputeConfig()

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        """Export configuration as dictionary."""
        return {
            "fast_path": {
                "strategy": self.fast_path.strategy.name,
                "use_blas": self.fast_path.use_blas,
                "clip_negative": self.fast_path.clip_negative,
            },
            "compute": {
                "symmetrize": self.compute.symmetrize,
                "check_finite": self.compute.check_finite,
            },
        }

    def __repr__(self) -> str:
        return f"KmlConfig({self.to_dict()})"


class _LocalConfigContext:
    """Context manager for local configuration override."""

    def __init__(self, config: KmlConfig, **kwargs):
        self._config = config
        self._kwargs = kwargs
        self._keys = list(kwargs.keys())
        self._saved: Dict[str, Any] = {}

    def __enter__(self):
        # Restore outer overrides on exit so contexts nest
        self._saved = self._config._get_local(self._keys)
        self._config._set_local(**self._kwargs)
        return self._config

    def __exit__(self, exc_type, exc_val, exc_tb):
        for key, value in self._saved.items():
            setattr(self._config._local, key, value)
        return False


# =============================================================================
# Global Instance
# =============================================================================

# Global configuration instance
config = KmlConfig()


# =============================================================================
# Convenience Functions
# =============================================================================

def get_config() -> KmlConfig:
    """Get the global configuration instance."""
    return config


def set_fast_path(strategy: FastPathStrategy = FastPathStrategy.AUTO, use_blas: bool = True):
    """
    Configure the matrix-multiply fast path.

    Args:
        strategy: AUTO to use matrix multiplication where possible, GENERIC to disable it
        use_blas: Use scipy BLAS routines (syrk/gemm) instead of numpy matmul
    """
    config.fast_path = replace(
        config._global_fast_path,
        strategy=strategy,
        use_blas=use_blas,
    )


def set_check_finite(enabled: bool = True):
    """Enable or disable rejection of non-finite inputs globally."""
    config.compute = replace(config._global_compute, check_finite=enabled)


# =============================================================================
# Exports
# =============================================================================

__all__ = [
    # Strategy enums
    "FastPathStrategy",
    # Config classes
    "FastPathConfig",
    "ComputeConfig",
    # Main config class
    "KmlConfig",
    # Global instance
    "config",
    # Convenience functions
    "get_config",
    "set_fast_path",
    "set_check_finite",
]
