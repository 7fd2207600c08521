"""
Pytest configuration and shared fixtures for KML tests.
"""

import pytest
import numpy as np
from pathlib import Path
import sys

# Add python/ to path for imports
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root / "python"))

import kml
from kml import (
    AffineFunction,
    CompositeFunction,
    ExponentialClass,
    FunctionProduct,
    FunctionSum,
    PolynomialClass,
    RationalQuadraticClass,
    ScalarProduct,
    SineSquared,
    SquaredEuclidean,
)


# =============================================================================
# Configuration Isolation
# =============================================================================

@pytest.fixture(autouse=True)
def reset_config():
    """Restore global configuration after every test."""
    yield
    kml.config.reset()
    kml.set_precision("f64")
    kml.set_memory_order("row")


# =============================================================================
# Matrices
# =============================================================================

@pytest.fixture
def example_matrix():
    """Three row vectors in the plane.

    Matrix:
    [[1, 0],
     [0, 1],
     [1, 1]]
    """
    return np.array([[1.0, 0.0], [0.0, 1.0], [1.0, 1.0]])


@pytest.fixture
def rng():
    """Seeded random generator."""
    return np.random.default_rng(12345)


@pytest.fixture
def random_x(rng):
    """7 random row vectors of length 4."""
    return rng.standard_normal((7, 4))


@pytest.fixture
def random_y(rng):
    """5 random row vectors of length 4."""
    return rng.standard_normal((5, 4))


# =============================================================================
# Function Trees
# =============================================================================

def make_function_catalog():
    """Representative trees covering every leaf and combinator."""
    return [
        ScalarProduct(),
        SquaredEuclidean(),
        SineSquared(),
        CompositeFunction(ExponentialClass(0.5), SquaredEuclidean()),
        CompositeFunction(PolynomialClass(0.5, 1.0, 2), ScalarProduct()),
        AffineFunction(ScalarProduct(), 2.0, 1.0),
        FunctionSum(SquaredEuclidean(), SineSquared(), 0.25),
        FunctionProduct(
            CompositeFunction(RationalQuadraticClass(1.0, 2.0), SquaredEuclidean()),
            ScalarProduct(),
            3.0,
        ),
        AffineFunction(
            FunctionSum(
                CompositeFunction(ExponentialClass(1.5), SineSquared()),
                ScalarProduct(),
            ),
            0.5,
            2.0,
        ),
    ]


@pytest.fixture(params=range(len(make_function_catalog())), ids=lambda i: f"tree{i}")
def function_tree(request):
    """Each tree of the catalog in turn (fresh copy per test)."""
    return make_function_catalog()[request.param]
