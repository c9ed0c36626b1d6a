import numpy as np
import scipy.sparse as sp
from pynlfem.functions import Reaction
from pynlfem.functions.analytic import u
from pynlfem.solvers.gauss_seidel import local_system, gs_sweep_forward, gs_sweep_backward
from pynlfem.solvers.nonlinear_solver import GaussSeidelNewtonSolver, SolverParameters

A = sp.csr_matrix(np.array([[4.0, -1.0, 0.0],
                            [-2.0, 5.0, -1.0],
                            [0.0, -1.0, 3.0]]))
b = np.array([0.5, 1.0, 1.5])
M = np.ones(3)
free = np.array([0, 1, 2])

def test_local_system_excludes_pivot():
    c, a_ii, m_i = local_system(A, np.array([1.0, 2.0, 3.0]), b, M, 1)
    assert np.isclose(c, -2.0 * 1.0 - 1.0 * 3.0 - 1.0)
    assert a_ii == 5.0 and m_i == 1.0

def test_linear_forward_and_backward_sweeps():
    zero = Reaction(0)
    uf = gs_sweep_forward(A, np.array([1.0, 2.0, 3.0]), b, M, zero, free)
    ub = gs_sweep_backward(A, np.array([1.0, 2.0, 3.0]), b, M, zero, free)
    assert np.allclose(uf, [0.625, 1.05, 0.85])
    assert np.allclose(ub, [1.0 / 3.0, 5.0 / 6.0, 3.5 / 3.0])
    assert not np.allclose(uf, ub)

def test_sweep_is_in_place_and_skips_boundary():
    u0 = np.array([1.0, 2.0, 3.0])
    out = gs_sweep_forward(A, u0, b, M, Reaction(u**3), np.array([1]))
    assert out is u0
    assert u0[0] == 1.0 and u0[2] == 3.0
    # row 1 of the residual vanishes at the new value
    r1 = A[1] @ u0 + u0[1]**3 - b[1]
    assert abs(r1[0]) <= 1e-6

def test_alternating_sweeps_reduce_residual():
    params = SolverParameters(tol=1e-10, newton_tol=1e-13, max_iter=50)
    solver = GaussSeidelNewtonSolver(A, M, free, Reaction(u**3), params)
    result = solver.solve(np.zeros(3), b)
    assert result.converged
    assert result.history[-1] < 1e-10 * result.history[0]
    assert result.history[1] < result.history[0]
