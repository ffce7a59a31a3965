"""
conftest.py - Pytest Configuration and Shared Fixtures

This file contains fixtures used across all test modules. Fixtures are
organized by category:
- Random number generators (for reproducibility)
- Concrete matrices (worked examples)
- Random matrices and their symmetrizations
"""

import pytest
import numpy as np


def sym(A: np.ndarray) -> np.ndarray:
    """(A + A.T) / 2, exactly symmetric in floating point."""
    return (A + A.T) / 2


# =============================================================================
# RANDOM NUMBER GENERATORS
# =============================================================================

@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(seed=42)


# =============================================================================
# CONCRETE MATRICES
# =============================================================================

@pytest.fixture
def worked_example():
    """
    The 3x3 symmetric matrix whose vech is 1..6.

    Column 0 contributes 1, 2, 3; column 1 contributes 4, 5; column 2 gives 6.
    """
    return np.array([[1, 2, 3], [2, 4, 5], [3, 5, 6]])


@pytest.fixture
def rect_matrix():
    """
    A non-square 3x2 matrix filled column-major with 1..6.

        [[1, 4],
         [2, 5],
         [3, 6]]
    """
    return np.arange(1, 7).reshape((3, 2), order="F")


# =============================================================================
# RANDOM MATRICES
# =============================================================================

@pytest.fixture
def random_square(rng):
    """A general (non-symmetric) 5x5 matrix with uniform entries."""
    return rng.random((5, 5))


@pytest.fixture
def random_symmetric(random_square):
    """Exact symmetrization of `random_square`."""
    return sym(random_square)
