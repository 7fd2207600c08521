"""
Tests for the kernel catalog and Mercer / negative-definite classification.
"""

import math

import numpy as np
import pytest

import kml
from kml import (
    AffineFunction,
    CompositeFunction,
    DimensionMismatchError,
    ExponentialClass,
    FunctionProduct,
    FunctionSum,
    KMLError,
    OutOfBoundsError,
    ScalarProduct,
    SigmoidClass,
    SineSquared,
    SquaredEuclidean,
    is_mercer,
    is_negdef,
)
from kml import kernels
from kml.kernels import MERCER, NEGDEF, get_kernel, kernel_kind


RTOL = 1e-9

X = np.array([1.0, 2.0])
Y = np.array([2.0, 0.0])
SQDIST = 5.0
DOT = 2.0


class TestCatalog:
    """Catalog kernels evaluate to their closed forms."""

    @pytest.mark.parametrize("k,expected", [
        (kernels.squared_exponential(0.5), math.exp(-0.5 * SQDIST)),
        (kernels.exponential(0.5), math.exp(-0.5 * math.sqrt(SQDIST))),
        (kernels.gamma_exponential(1.0, 0.5), math.exp(-math.sqrt(SQDIST))),
        (kernels.rational_quadratic(1.0, 2.0), (1.0 + SQDIST) ** -2.0),
        (kernels.gamma_rational(2.0, 1.0, 0.5), 1.0 / (1.0 + 2.0 * math.sqrt(SQDIST))),
        (kernels.matern(0.5, 1.0), math.exp(-SQDIST)),
        (kernels.power(0.5), math.sqrt(SQDIST)),
        (kernels.logarithmic(1.0, 1.0), math.log(1.0 + SQDIST)),
        (kernels.linear(2.0, 1.0), 2.0 * DOT + 1.0),
        (kernels.polynomial(1.0, 1.0, 2), (DOT + 1.0) ** 2),
        (kernels.exponentiated(0.5), math.exp(0.5 * DOT)),
        (kernels.sigmoid(0.5, 0.0), math.tanh(0.5 * DOT)),
        (kernels.periodic(1.0), math.exp(-(math.sin(-1.0) ** 2 + math.sin(2.0) ** 2))),
    ])
    def test_closed_form(self, k, expected):
        np.testing.assert_allclose(k(X, Y), expected, rtol=1e-8)

    def test_aliases(self):
        assert kernels.gaussian is kernels.squared_exponential
        assert kernels.radial_basis is kernels.squared_exponential
        assert kernels.laplacian is kernels.exponential

    def test_gaussian_matrix(self, random_x):
        """Matrix evaluation of a catalog kernel."""
        K = kml.pairwise_matrix(kernels.gaussian(0.5), random_x)
        diff = random_x[:, None, :] - random_x[None, :, :]
        np.testing.assert_allclose(K, np.exp(-0.5 * (diff ** 2).sum(axis=2)), rtol=RTOL)
        np.testing.assert_array_equal(np.diag(K), 1.0)

    def test_parameters_exposed(self):
        k = kernels.rational_quadratic(0.5, 2.0)
        assert k.parameter_names() == ["outer.alpha", "outer.beta"]
        k.from_vector([1.0, 3.0])
        assert k.outer.beta.value == 3.0

    def test_laplacian_has_single_parameter(self):
        """The distance exponent is fixed at 1/2; only alpha is tunable."""
        k = kernels.laplacian(2.0)
        assert k.parameter_names() == ["outer.alpha"]
        np.testing.assert_array_equal(k.to_vector(), [2.0])
        with pytest.raises(DimensionMismatchError):
            k.from_vector([2.0, 1.0])
        k.from_vector([0.5])
        np.testing.assert_allclose(k(X, Y), math.exp(-0.5 * math.sqrt(SQDIST)), rtol=1e-8)

    def test_bounds_enforced(self):
        with pytest.raises(OutOfBoundsError):
            kernels.squared_exponential(-1.0)
        with pytest.raises(OutOfBoundsError):
            kernels.polynomial(d=0)

    def test_get_kernel(self):
        k = get_kernel("Gaussian", alpha=2.0)
        assert k == kernels.squared_exponential(2.0)
        with pytest.raises(KMLError):
            get_kernel("unknown")

    def test_catalog_complete(self):
        """Every catalog entry builds with its defaults."""
        for name, factory in kernels.KERNELS.items():
            assert isinstance(factory(), kml.PairwiseFunction), name


class TestClassification:
    """Mercer / negative-definite classification rules."""

    def test_leaves(self):
        assert kernel_kind(ScalarProduct()) == MERCER
        assert kernel_kind(SquaredEuclidean()) == NEGDEF
        assert kernel_kind(SineSquared()) == NEGDEF

    @pytest.mark.parametrize("name", [
        "squared_exponential", "exponential", "gamma_exponential", "rational_quadratic",
        "gamma_rational", "matern", "periodic", "linear", "polynomial", "exponentiated",
    ])
    def test_mercer_catalog(self, name):
        assert is_mercer(get_kernel(name))

    @pytest.mark.parametrize("name", ["power", "logarithmic"])
    def test_negdef_catalog(self, name):
        assert is_negdef(get_kernel(name))
        assert not is_mercer(get_kernel(name))

    def test_sigmoid_unclassified(self):
        assert kernel_kind(kernels.sigmoid()) is None

    def test_transform_of_wrong_kind(self):
        """exp(-alpha z) of an inner product is not classified."""
        f = CompositeFunction(ExponentialClass(1.0), ScalarProduct())
        assert kernel_kind(f) is None

    def test_affine_keeps_kind(self):
        assert is_mercer(AffineFunction(kernels.gaussian(), 2.0, 1.0))
        assert is_negdef(AffineFunction(SquaredEuclidean(), 3.0, 0.0))

    def test_sum(self):
        assert is_mercer(kernels.gaussian() + kernels.linear())
        assert is_negdef(SquaredEuclidean() + kernels.power(0.5))
        assert kernel_kind(SquaredEuclidean() + ScalarProduct()) is None

    def test_product(self):
        assert is_mercer(FunctionProduct(kernels.gaussian(), kernels.polynomial(), 2.0))
        assert kernel_kind(SquaredEuclidean() * SquaredEuclidean()) is None

    def test_sigmoid_inside_sum(self):
        f = FunctionSum(CompositeFunction(SigmoidClass(), ScalarProduct()), kernels.linear())
        assert kernel_kind(f) is None

    def test_mercer_matrix_is_psd(self, random_x):
        """A Mercer kernel matrix has no significantly negative eigenvalues."""
        k = kernels.gaussian(0.3) + 0.5 * kernels.polynomial(1.0, 1.0, 2)
        assert is_mercer(k)
        K = kml.pairwise_matrix(k, random_x)
        assert np.linalg.eigvalsh(K).min() > -1e-8 * np.abs(K).max()
