# conftest.py
import matplotlib
import pytest

from pynlfem.core import SquareMesh


@pytest.fixture(autouse=True)
def mpl_test_backend():
    """Switch to a non-interactive backend for all tests."""
    matplotlib.use('Agg')


@pytest.fixture
def coarse_mesh():
    """Unit square, h = 1/4, no refinement: 25 nodes, 9 of them free."""
    return SquareMesh((0.0, 1.0, 0.0, 1.0), 0.25, n_refine=0)


@pytest.fixture
def refined_mesh():
    """Unit square, h = 1/4 refined once: 81 nodes, 49 of them free."""
    return SquareMesh.from_meshprops((0.0, 1.0, 0.0, 1.0, 0.25), n_refine=1)
