import numpy as np
import pytest
from pynlfem.assembly.accumulate import accum_array

@pytest.mark.parametrize("numba_path", [True, False])
def test_repeated_indices_are_summed(numba_path):
    S = accum_array([0, 2, 0, 1], [1.0, 5.0, 2.0, 3.0], 3, numba_path=numba_path)
    assert np.allclose(S, [3.0, 3.0, 5.0])

@pytest.mark.parametrize("numba_path", [True, False])
def test_missing_indices_are_zero(numba_path):
    S = accum_array([4, 4, 1], [1.0, 2.0, -0.5], 6, numba_path=numba_path)
    assert np.allclose(S, [0.0, -0.5, 0.0, 0.0, 3.0, 0.0])

@pytest.mark.parametrize("numba_path", [True, False])
def test_empty_input(numba_path):
    S = accum_array([], [], 3, numba_path=numba_path)
    assert S.shape == (3,) and not S.any()

def test_matches_bincount():
    rng = np.random.default_rng(0)
    subs = rng.integers(0, 50, size=1000)
    ar = rng.standard_normal(1000)
    ref = np.bincount(subs, weights=ar, minlength=60)
    assert np.allclose(accum_array(subs, ar, 60, numba_path=True), ref)
    assert np.allclose(accum_array(subs, ar, 60, numba_path=False), ref)

def test_invalid_input():
    with pytest.raises(ValueError):
        accum_array([0, 3], [1.0, 1.0], 3)
    with pytest.raises(ValueError):
        accum_array([0, -1], [1.0, 1.0], 3)
    with pytest.raises(ValueError):
        accum_array([0, 1], [1.0], 3)
