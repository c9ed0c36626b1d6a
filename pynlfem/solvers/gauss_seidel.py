"""pynlfem.solvers.gauss_seidel
Nodewise nonlinear Gauss-Seidel sweeps.

Each free node ``i`` solves its own row of the residual,

    A_ii x + M_i f(x) + c_i = 0,   c_i = sum_{j != i} A_ij u_j - b_i,

for ``x`` with a scalar Newton iteration, and ``u[i]`` is overwritten before
the next node is visited. Nodes already visited in the sweep therefore enter
``c_i`` with their new values.
"""
import numpy as np
import scipy.sparse as sp

from pynlfem.solvers.nodal_newton import SolverDivergedError, newton_1d

__all__ = ["local_system", "gs_sweep", "gs_sweep_forward", "gs_sweep_backward"]


def local_system(A: sp.csr_matrix, u: np.ndarray, b: np.ndarray, mass_diag: np.ndarray, i: int):
    """``(c_i, A_ii, M_i)`` for node ``i`` with the current values of ``u``."""
    start, end = A.indptr[i], A.indptr[i + 1]
    cols = A.indices[start:end]
    vals = A.data[start:end]
    off = cols != i
    c_i = float(vals[off] @ u[cols[off]]) - b[i]
    a_ii = float(vals[~off].sum())
    return c_i, a_ii, float(mass_diag[i])


def gs_sweep(A, u, b, mass_diag, reaction, free_nodes, *, reverse=False,
             newton_tol=1e-6, max_newton_iter=10) -> np.ndarray:
    """
    One in-place sweep over ``free_nodes`` in ascending order, or descending
    when ``reverse``. Boundary entries of ``u`` are never touched.

    ``A`` must be CSR; ``u`` is modified and returned.
    """
    order = np.sort(np.asarray(free_nodes, dtype=np.int64))
    if reverse:
        order = order[::-1]
    for i in order:
        c_i, a_ii, m_i = local_system(A, u, b, mass_diag, i)
        g = reaction.nodal(c_i, a_ii, m_i)
        try:
            u[i] = newton_1d(g, u[i], tol=newton_tol, maxit=max_newton_iter)
        except SolverDivergedError as exc:
            raise SolverDivergedError(f"Gauss-Seidel update of node {i} diverged: {exc}") from exc
    return u


def gs_sweep_forward(A, u, b, mass_diag, reaction, free_nodes, **kwargs):
    return gs_sweep(A, u, b, mass_diag, reaction, free_nodes, reverse=False, **kwargs)


def gs_sweep_backward(A, u, b, mass_diag, reaction, free_nodes, **kwargs):
    return gs_sweep(A, u, b, mass_diag, reaction, free_nodes, reverse=True, **kwargs)
