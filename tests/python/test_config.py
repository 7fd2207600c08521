"""
Tests for precision, memory order and strategy configuration.
"""

import threading

import numpy as np
import pytest

import kml
from kml import (
    ComputeConfig,
    FastPathConfig,
    FastPathStrategy,
    KMLError,
    MemoryOrder,
    RealType,
)
from kml.core.config import _resolve_dtype


class TestPrecision:
    """Test default precision and dtype resolution."""

    def test_default_precision(self):
        """Default is float64."""
        assert kml.get_precision() == RealType.FLOAT64

    def test_set_precision(self):
        """Strings in both spellings are accepted."""
        kml.set_precision(real="float32")
        assert kml.get_precision() == RealType.FLOAT32
        kml.set_precision(real="f64")
        assert kml.get_precision() == RealType.FLOAT64

    def test_float_inputs_keep_dtype(self):
        """float32 stays float32, mixed promotes to float64."""
        a32 = np.zeros((2, 2), dtype=np.float32)
        a64 = np.zeros((2, 2), dtype=np.float64)
        assert _resolve_dtype(a32) == np.float32
        assert _resolve_dtype(a32, a64) == np.float64

    def test_integer_inputs_use_default(self):
        """Integer inputs take the configured real type."""
        ints = np.zeros((2, 2), dtype=np.int64)
        assert _resolve_dtype(ints) == np.float64
        kml.set_precision(real="float32")
        assert _resolve_dtype(ints) == np.float32

    def test_integer_matrix_result_dtype(self, example_matrix):
        """Allocated results follow the configured precision."""
        kml.set_precision(real="float32")
        P = kml.pairwise_matrix(kml.ScalarProduct(), example_matrix.astype(int))
        assert P.dtype == np.float32

    def test_dtype_resolution_has_single_entry_point(self):
        """Precision lookups all go through _resolve_dtype."""
        from kml.core import config as core_config
        assert not hasattr(core_config, "_get_real_dtype")
        kml.set_precision(real="float32")
        assert _resolve_dtype(np.zeros(3, dtype=np.int32)) == np.float32


class TestMemoryOrder:
    """Test MemoryOrder parsing and defaults."""

    def test_default(self):
        assert kml.get_memory_order() == MemoryOrder.ROW

    @pytest.mark.parametrize("value,expected", [
        ("row", MemoryOrder.ROW),
        ("C", MemoryOrder.ROW),
        ("col", MemoryOrder.COL),
        ("F", MemoryOrder.COL),
        (MemoryOrder.COL, MemoryOrder.COL),
    ])
    def test_parse(self, value, expected):
        """Names, numpy letters and members are accepted."""
        assert MemoryOrder.parse(value) == expected

    def test_parse_unknown(self):
        """Unknown names raise KMLError."""
        with pytest.raises(KMLError) as info:
            MemoryOrder.parse("diagonal")
        assert info.value.code == KMLError.ERROR_INVALID_ARGUMENT

    def test_axis(self):
        assert MemoryOrder.ROW.axis == 0
        assert MemoryOrder.COL.axis == 1

    def test_set_memory_order(self, example_matrix):
        """The default order applies when a call passes none."""
        kml.set_memory_order("col")
        P = kml.pairwise_matrix(kml.ScalarProduct(), example_matrix)
        assert P.shape == (2, 2)


class TestStrategyConfig:
    """Test KmlConfig and its thread-local overrides."""

    def test_defaults(self):
        """Fresh configuration enables the fast path and symmetrization."""
        assert kml.config.fast_path.strategy == FastPathStrategy.AUTO
        assert kml.config.fast_path.use_blas is True
        assert kml.config.compute.symmetrize is True
        assert kml.config.compute.check_finite is False
        assert kml.config.use_fast_path

    def test_set_fast_path(self):
        """Convenience setter updates the global section."""
        kml.set_fast_path(FastPathStrategy.GENERIC, use_blas=False)
        assert kml.config.fast_path.strategy == FastPathStrategy.GENERIC
        assert kml.config.fast_path.use_blas is False
        assert not kml.config.use_fast_path

    def test_local_override(self):
        """local() overrides only inside the block."""
        with kml.config.local(compute=ComputeConfig(symmetrize=False)):
            assert kml.config.symmetrize is False
        assert kml.config.symmetrize is True

    def test_setter_writes_global_default(self):
        """Assignment inside local() is shadowed until the block exits."""
        with kml.config.local(compute=ComputeConfig(symmetrize=True)):
            kml.config.symmetrize = False
            assert kml.config.symmetrize is True
        assert kml.config.symmetrize is False

    def test_nested_local(self):
        """Inner contexts restore the outer override on exit."""
        outer = FastPathConfig(FastPathStrategy.GENERIC)
        inner = FastPathConfig(use_blas=False)
        with kml.config.local(fast_path=outer):
            with kml.config.local(fast_path=inner):
                assert kml.config.fast_path is inner
            assert kml.config.fast_path is outer
        assert kml.config.fast_path.strategy == FastPathStrategy.AUTO

    def test_local_is_thread_local(self):
        """Overrides are not visible from other threads."""
        seen = {}

        def worker():
            seen["strategy"] = kml.config.fast_path.strategy

        with kml.config.local(fast_path=FastPathConfig(FastPathStrategy.GENERIC)):
            thread = threading.Thread(target=worker)
            thread.start()
            thread.join()
        assert seen["strategy"] == FastPathStrategy.AUTO

    def test_get_config(self):
        """Accessors return the module singletons."""
        from kml._config import get_config
        from kml.core.config import get_config as get_core_config

        assert get_config() is kml.config
        assert get_core_config().default_order == MemoryOrder.ROW

    def test_local_unknown_section(self):
        with pytest.raises(TypeError):
            kml.config.local(threads=4)

    def test_reset_and_to_dict(self):
        """reset() restores defaults, to_dict() reflects them."""
        kml.set_check_finite(True)
        assert kml.config.to_dict()["compute"]["check_finite"] is True
        kml.config.reset()
        assert kml.config.to_dict() == {
            "fast_path": {"strategy": "AUTO", "use_blas": True, "clip_negative": True},
            "compute": {"symmetrize": True, "check_finite": False},
        }
