"""
Tests for the parameter-vector protocol.
"""

import numpy as np
import pytest

from kml import (
    AffineFunction,
    CompositeFunction,
    DimensionMismatchError,
    ExponentialClass,
    FunctionProduct,
    FunctionSum,
    GammaRationalClass,
    OutOfBoundsError,
    PolynomialClass,
    ScalarProduct,
    SquaredEuclidean,
    check_theta,
    get_theta,
    set_theta,
)


def nested_tree():
    """Affine( Sum( Composite(exp, sqeuclid), Composite(poly, dot) ) )"""
    return AffineFunction(
        FunctionSum(
            CompositeFunction(ExponentialClass(0.5), SquaredEuclidean()),
            CompositeFunction(PolynomialClass(2.0, 1.0, 3), ScalarProduct()),
            0.25,
        ),
        3.0,
        0.0,
    )


class TestFlattening:
    """Test to_vector() ordering and names."""

    def test_leaf_has_no_parameters(self):
        f = ScalarProduct()
        assert f.n_parameters == 0
        assert f.to_vector().shape == (0,)
        assert f.to_vector().dtype == np.float64

    def test_composition_order(self):
        """Own parameters first, then outer before inner."""
        f = CompositeFunction(GammaRationalClass(1.0, 2.0, 0.5), SquaredEuclidean())
        assert f.parameter_names() == ["outer.alpha", "outer.beta", "outer.gamma"]
        np.testing.assert_array_equal(f.to_vector(), [1.0, 2.0, 0.5])

    def test_nested_order(self):
        """Affine params, then the sum constant, then left before right."""
        f = nested_tree()
        assert f.parameter_names() == [
            "scale",
            "offset",
            "inner.constant",
            "inner.left.outer.alpha",
            "inner.right.outer.a",
            "inner.right.outer.c",
        ]
        np.testing.assert_array_equal(f.to_vector(), [3.0, 0.0, 0.25, 0.5, 2.0, 1.0])

    def test_polynomial_degree_is_fixed(self):
        """The integer degree is not part of the vector."""
        f = CompositeFunction(PolynomialClass(1.0, 0.0, 4), ScalarProduct())
        assert "outer.d" not in f.parameter_names()
        assert f.n_parameters == 2

    def test_bounds(self):
        """bounds() lists (low, high) per entry."""
        f = FunctionProduct(ScalarProduct(), SquaredEuclidean(), 2.0)
        assert f.bounds() == [(0.0, None)]


class TestRoundTrip:
    """Test from_vector()/check_vector()."""

    def test_identity_round_trip(self):
        """from_vector(to_vector()) leaves the tree unchanged."""
        f = nested_tree()
        before = nested_tree()
        f.from_vector(f.to_vector())
        assert f == before

    def test_update(self):
        f = nested_tree()
        returned = f.from_vector([1.0, 2.0, 0.0, 4.0, 5.0, 6.0])
        assert returned is f
        assert f.scale.value == 1.0
        assert f.inner.left.outer.alpha.value == 4.0
        assert f.inner.right.outer.c.value == 6.0

    def test_wrong_length(self):
        f = nested_tree()
        with pytest.raises(DimensionMismatchError):
            f.from_vector([1.0, 2.0])
        with pytest.raises(DimensionMismatchError):
            f.check_vector(np.zeros((2, 3)))

    def test_out_of_bounds_is_atomic(self):
        """A bad entry rejects the whole vector and changes nothing."""
        f = nested_tree()
        before = f.to_vector()
        with pytest.raises(OutOfBoundsError) as info:
            f.from_vector([9.0, 9.0, 9.0, -1.0, 9.0, 9.0])
        assert "inner.left.outer.alpha" in str(info.value)
        np.testing.assert_array_equal(f.to_vector(), before)

    def test_check_vector(self):
        f = nested_tree()
        assert f.check_vector([1.0, 0.0, 0.0, 1.0, 1.0, 0.0])
        assert not f.check_vector([0.0, 0.0, 0.0, 1.0, 1.0, 0.0])
        assert not f.check_vector([1.0, 0.0, 0.0, np.nan, 1.0, 0.0])

    def test_functional_aliases(self):
        f = CompositeFunction(ExponentialClass(1.0), SquaredEuclidean())
        assert check_theta(f, [2.0])
        set_theta(f, [2.0])
        np.testing.assert_array_equal(get_theta(f), [2.0])
