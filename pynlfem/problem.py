"""pynlfem.problem
Solver entry point: mesh description + problem name -> nodal solution.
"""
import logging
from typing import Sequence, Tuple, Union

import numpy as np

from pynlfem.assembly.load_vector import assemble_load_vector
from pynlfem.core.mesh import Mesh, SquareMesh
from pynlfem.functions.library import Problem, get_problem
from pynlfem.solvers.nonlinear_solver import SolveResult, SolverParameters, make_solver

logger = logging.getLogger(__name__)

__all__ = ["initial_state", "solve_on_mesh", "solve_problem"]


def initial_state(mesh: Mesh, problem: Problem, initial_guess: float = 0.0) -> Tuple[np.ndarray, np.ndarray]:
    """Load vector ``b`` and starting vector ``u`` with the Dirichlet values imposed."""
    b = assemble_load_vector(mesh, problem.source)
    u = np.full(mesh.n_nodes, float(initial_guess))
    u[mesh.bd_nodes] = problem.boundary.evaluate(mesh.nodes[mesh.bd_nodes])
    return u, b


def solve_on_mesh(mesh: Mesh, problem: Union[str, Problem] = "boltzmann",
                  params: SolverParameters = None) -> SolveResult:
    if isinstance(problem, str):
        problem = get_problem(problem)
    params = params if params is not None else SolverParameters()
    u, b = initial_state(mesh, problem, params.initial_guess)
    solver = make_solver(mesh.stiffness, mesh.mass_diag, mesh.free_nodes, problem.reaction, params)
    logger.info("Solving '%s' on %r with strategy '%s'.", problem.name, mesh, params.strategy)
    return solver.solve(u, b)


def solve_problem(meshprops: Sequence[float] = (0.0, 1.0, 0.0, 1.0, 0.25),
                  problem: Union[str, Problem] = "boltzmann", *,
                  n_refine: int = 1,
                  params: SolverParameters = None) -> Tuple[SquareMesh, SolveResult]:
    """
    Build the square mesh ``(x_min, x_max, y_min, y_max, h)``, refine it
    ``n_refine`` times and solve the named problem on it.
    """
    mesh = SquareMesh.from_meshprops(meshprops, n_refine=n_refine)
    return mesh, solve_on_mesh(mesh, problem, params)
