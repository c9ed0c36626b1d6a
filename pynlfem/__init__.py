"""pynlfem – nonlinear elliptic finite elements on a square with P1 triangles."""
from pynlfem.core import Mesh, SquareMesh
from pynlfem.functions import get_problem, available_problems
from pynlfem.solvers import SolverParameters, SolveResult, SolverDivergedError, make_solver
from pynlfem.problem import solve_problem, solve_on_mesh

__version__ = "0.1.0"
__all__ = ['Mesh', 'SquareMesh', 'get_problem', 'available_problems', 'SolverParameters',
           'SolveResult', 'SolverDivergedError', 'make_solver', 'solve_problem', 'solve_on_mesh']
