"""
Pytest configuration and shared fixtures for libmat tests.
"""

import pytest
import numpy as np
from pathlib import Path
import sys

# Add src to path for imports
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root / "src"))

import libmat
from libmat import Matrix


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture(autouse=True)
def default_options():
    """Restore global options after every test."""
    saved = libmat.get_options()
    yield
    libmat.set_options(**saved)


@pytest.fixture
def square4():
    """4x4 matrix with M(i, j) = i + 4j, i.e. data == [0, 1, ..., 15].

    Matrix:
    [[0, 4,  8, 12],
     [1, 5,  9, 13],
     [2, 6, 10, 14],
     [3, 7, 11, 15]]
    """
    m = Matrix(4, 4)
    for i in range(4):
        for j in range(4):
            m[i, j] = i + 4 * j
    return m


@pytest.fixture
def rect23():
    """2x3 matrix.

    [[1, 2, 3],
     [4, 5, 6]]
    """
    return Matrix.from_rows([[1, 2, 3], [4, 5, 6]])


@pytest.fixture
def random_square():
    """Reproducible random 5x5 matrix."""
    rng = np.random.default_rng(42)
    return Matrix.from_numpy(rng.standard_normal((5, 5)))

