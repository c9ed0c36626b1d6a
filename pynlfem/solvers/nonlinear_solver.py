r"""
nonlinear_solver.py  –  Outer iteration drivers for ``A u + M f(u) = b``
=======================================================================
Two interchangeable strategies share one convergence controller:

* ``GaussSeidelNewtonSolver`` – each outer iteration is a forward followed by
  a backward nodewise Gauss-Seidel sweep, every node solved with a scalar
  Newton iteration.
* ``FullNewtonSolver`` – each outer iteration is one Newton step on the
  free-node block of the Jacobian ``A + diag(M f'(u))``.

The controller measures the Euclidean norm of the residual on the free rows,
scales the tolerance by the initial norm and stops on tolerance or on the
iteration cap. Running out of iterations is reported in the returned
``SolveResult``, not raised; non-finite numbers raise ``SolverDivergedError``.
"""
from __future__ import annotations

import logging
import time
import warnings
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List

import numpy as np
import scipy.sparse as sp
import scipy.sparse.linalg as spla

from pynlfem.solvers.gauss_seidel import gs_sweep_forward, gs_sweep_backward
from pynlfem.solvers.nodal_newton import SolverDivergedError
from pynlfem.solvers.residual import residual

logger = logging.getLogger(__name__)

__all__ = ["SolverParameters", "SolveResult", "NonlinearSolver", "GaussSeidelNewtonSolver",
           "FullNewtonSolver", "SolverDivergedError", "make_solver", "STRATEGIES"]


# ----------------------------------------------------------------------------
#  Parameter dataclasses
# ----------------------------------------------------------------------------

@dataclass
class SolverParameters:
    """Settings that govern a single nonlinear solve."""

    tol: float = 1e-6                   # relative to the initial free residual
    atol: float = 1e-12                 # absolute floor on the free residual
    max_iter: int = 10                  # outer iterations (sweep pairs / Newton steps)

    # nodal Newton inside the Gauss-Seidel sweeps
    newton_tol: float = 1e-6
    max_newton_iter: int = 10

    initial_guess: float = 0.0          # starting value at free nodes
    strategy: str = "gauss_seidel"      # or "newton"

    def __post_init__(self):
        if self.tol < 0 or self.atol < 0 or self.newton_tol < 0:
            raise ValueError("Tolerances must be non-negative.")
        if self.max_iter < 0 or self.max_newton_iter < 0:
            raise ValueError("Iteration caps must be non-negative.")


@dataclass
class SolveResult:
    """Outcome of a solve; ``u`` is the last iterate whether or not it converged."""

    u: np.ndarray
    converged: bool
    iterations: int
    residual_norm: float
    initial_residual_norm: float
    tolerance: float
    strategy: str
    history: List[float] = field(default_factory=list)
    elapsed: float = 0.0


# ----------------------------------------------------------------------------
#  Solvers
# ----------------------------------------------------------------------------

class NonlinearSolver(ABC):
    """
    Convergence controller shared by the strategies.

    Subclasses implement ``_step``, one outer iteration that updates the free
    entries of ``u`` in place.
    """

    name = "base"

    def __init__(self, A, mass_diag, free_nodes, reaction, params: SolverParameters = None):
        self.A: sp.csr_matrix = sp.csr_matrix(A, dtype=float)
        n = self.A.shape[0]
        if self.A.shape != (n, n):
            raise ValueError(f"System matrix must be square, got {self.A.shape}.")
        self.mass_diag = np.asarray(mass_diag, dtype=float)
        if self.mass_diag.shape != (n,):
            raise ValueError(f"Mass diagonal must have length {n}, got {self.mass_diag.shape}.")
        self.free_nodes = np.asarray(free_nodes, dtype=np.int64)
        if self.free_nodes.size and (self.free_nodes.min() < 0 or self.free_nodes.max() >= n):
            raise ValueError("Free node index out of range.")
        if np.unique(self.free_nodes).size != self.free_nodes.size:
            raise ValueError("Free node indices must be unique.")
        self.reaction = reaction
        self.params = params if params is not None else SolverParameters()

    @property
    def n(self) -> int:
        return self.A.shape[0]

    def free_residual(self, u, b) -> np.ndarray:
        return residual(self.A, u, self.mass_diag, b, self.reaction)[self.free_nodes]

    def _norm(self, u, b, it) -> float:
        err = float(np.linalg.norm(self.free_residual(u, b)))
        if not np.isfinite(err):
            raise SolverDivergedError(f"{self.name}: residual is not finite after iteration {it}.", iteration=it)
        return err

    def solve(self, u0, b) -> SolveResult:
        """
        Iterate from ``u0`` (boundary entries already set) until
        ``‖r_free‖ <= max(tol * ‖r0_free‖, atol)`` or ``max_iter`` outer
        iterations. ``u0`` is not modified.
        """
        p = self.params
        u = np.array(u0, dtype=float)
        b = np.asarray(b, dtype=float)
        if u.shape != (self.n,) or b.shape != (self.n,):
            raise ValueError(f"u0 and b must have length {self.n}.")

        t_start = time.perf_counter()
        r0 = self._norm(u, b, 0)
        tol = max(p.tol * r0, p.atol)
        err = r0
        history = [r0]
        k = 0
        logger.info("%s: %d free of %d nodes, |R0|_2 = %.3e, tol = %.3e",
                    self.name, self.free_nodes.size, self.n, r0, tol)

        if self.free_nodes.size:
            while k < p.max_iter and err > tol:
                try:
                    self._step(u, b)
                except SolverDivergedError as exc:
                    exc.iteration = k + 1
                    raise
                k += 1
                err = self._norm(u, b, k)
                history.append(err)
                logger.info("    %s %d: |R|_2 = %.3e", self.name, k, err)

        converged = err <= tol or self.free_nodes.size == 0
        elapsed = time.perf_counter() - t_start
        if converged:
            logger.info("%s converged in %d iterations (%.3fs).", self.name, k, elapsed)
        else:
            logger.warning("%s stopped after %d iterations: |R|_2 = %.3e > tol = %.3e.",
                           self.name, k, err, tol)
        return SolveResult(u=u, converged=converged, iterations=k, residual_norm=err,
                           initial_residual_norm=r0, tolerance=tol, strategy=self.name,
                           history=history, elapsed=elapsed)

    @abstractmethod
    def _step(self, u, b) -> None:
        """One outer iteration, updating the free entries of ``u`` in place."""


class GaussSeidelNewtonSolver(NonlinearSolver):
    """One forward and one backward nonlinear Gauss-Seidel sweep per iteration."""

    name = "gauss_seidel"

    def sweep(self, u, b, *, reverse=False):
        sweep = gs_sweep_backward if reverse else gs_sweep_forward
        return sweep(self.A, u, b, self.mass_diag, self.reaction, self.free_nodes,
                     newton_tol=self.params.newton_tol,
                     max_newton_iter=self.params.max_newton_iter)

    def _step(self, u, b):
        self.sweep(u, b, reverse=False)
        self.sweep(u, b, reverse=True)


class FullNewtonSolver(NonlinearSolver):
    """
    Newton on the free block: ``(A + diag(M f'(u)))_ff e = r_f``,
    ``u_f <- u_f - e``.
    """

    name = "newton"

    def jacobian(self, u) -> sp.csr_matrix:
        Df = self.mass_diag * self.reaction.evaluate_derivative(u)
        return (self.A + sp.diags(Df)).tocsr()

    def _step(self, u, b):
        free = self.free_nodes
        r = self.free_residual(u, b)
        B_ff = self.jacobian(u)[free][:, free]
        with warnings.catch_warnings():
            warnings.simplefilter("error", spla.MatrixRankWarning)
            try:
                e = np.atleast_1d(spla.spsolve(B_ff.tocsc(), r))
            except (RuntimeError, spla.MatrixRankWarning) as exc:
                raise SolverDivergedError(f"{self.name}: Jacobian block is singular ({exc}).") from exc
        if not np.all(np.isfinite(e)):
            raise SolverDivergedError(f"{self.name}: Jacobian solve returned a non-finite correction.")
        u[free] -= e


STRATEGIES = {
    GaussSeidelNewtonSolver.name: GaussSeidelNewtonSolver,
    FullNewtonSolver.name: FullNewtonSolver,
}


def make_solver(A, mass_diag, free_nodes, reaction, params: SolverParameters = None) -> NonlinearSolver:
    """Instantiate the strategy named by ``params.strategy``."""
    params = params if params is not None else SolverParameters()
    try:
        cls = STRATEGIES[params.strategy]
    except KeyError:
        raise ValueError(f"Unknown strategy '{params.strategy}'; choose from {sorted(STRATEGIES)}.") from None
    return cls(A, mass_diag, free_nodes, reaction, params)
