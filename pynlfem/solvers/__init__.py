from .nodal_newton import SolverDivergedError, newton_1d
from .residual import residual, free_residual_norm
from .gauss_seidel import local_system, gs_sweep, gs_sweep_forward, gs_sweep_backward
from .nonlinear_solver import (SolverParameters, SolveResult, NonlinearSolver,
                               GaussSeidelNewtonSolver, FullNewtonSolver, make_solver)
__all__ = ['SolverDivergedError', 'newton_1d', 'residual', 'free_residual_norm',
           'local_system', 'gs_sweep', 'gs_sweep_forward', 'gs_sweep_backward',
           'SolverParameters', 'SolveResult', 'NonlinearSolver',
           'GaussSeidelNewtonSolver', 'FullNewtonSolver', 'make_solver']
