"""pynlfem.assembly.accumulate
Scatter-accumulation of element contributions into a global vector.

``accum_array(subs, ar, n)`` returns ``S`` with ``S[i] = sum(ar[subs == i])``
and ``S[i] = 0`` where no contribution exists, i.e. MATLAB ``accumarray``
for a column of subscripts.
"""
import os

import numba
import numpy as np

__all__ = ["accum_array"]

_disable_numba = os.getenv("PYNLFEM_DISABLE_NUMBA", "").lower() in {"1", "true", "yes"}


@numba.jit(nopython=True, cache=True)
def _accumulate_numba(subs, ar, n):
    out = np.zeros(n, dtype=np.float64)
    for k in range(subs.shape[0]):
        out[subs[k]] += ar[k]
    return out


def _accumulate_numpy(subs, ar, n):
    out = np.zeros(n, dtype=np.float64)
    np.add.at(out, subs, ar)
    return out


def accum_array(subs, ar, n: int, *, numba_path: bool = None) -> np.ndarray:
    """
    Sum the values of ``ar`` that share a target index in ``subs``.

    Args:
        subs: length-L sequence of non-negative target indices (repeats allowed).
        ar: length-L sequence of values.
        n: size of the result; every index in ``subs`` must be ``< n``.
        numba_path: use the compiled single-pass kernel. Defaults to True
            unless ``PYNLFEM_DISABLE_NUMBA`` is set.
    """
    subs = np.asarray(subs, dtype=np.int64).ravel()
    ar = np.asarray(ar, dtype=np.float64).ravel()
    if subs.shape != ar.shape:
        raise ValueError(f"subs and ar must have the same length, got {subs.size} and {ar.size}.")
    if n < 0:
        raise ValueError("Target size must be non-negative.")
    if subs.size and (subs.min() < 0 or subs.max() >= n):
        raise ValueError(f"Subscripts must lie in [0, {n}), got range [{subs.min()}, {subs.max()}].")

    if numba_path is None:
        numba_path = not _disable_numba
    if numba_path:
        return _accumulate_numba(subs, ar, int(n))
    return _accumulate_numpy(subs, ar, int(n))
