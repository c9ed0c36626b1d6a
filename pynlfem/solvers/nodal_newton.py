"""pynlfem.solvers.nodal_newton
Scalar Newton iteration for the local equation of one node.
"""
import logging
import math

logger = logging.getLogger(__name__)

__all__ = ["SolverDivergedError", "newton_1d"]


class SolverDivergedError(RuntimeError):
    """A Newton step or residual stopped being a finite number."""

    def __init__(self, message: str, iteration: int = None):
        super().__init__(message)
        self.iteration = iteration


def newton_1d(g, x0: float, tol: float = 1e-6, maxit: int = 10) -> float:
    """
    Plain Newton ``x <- x - g(x)/g'(x)`` started from ``x0``.

    Stops once ``|g(x)| <= tol`` or after ``maxit`` steps and returns the last
    iterate either way. There is no line search or bracketing; a vanishing
    derivative, an overflowing evaluation or a step that leaves the domain of
    the reaction (``math`` domain error) raises :class:`SolverDivergedError`.
    """
    x = float(x0)
    try:
        fp = g.evaluate(x)
        df = g.evaluate_derivative(x)
        n = 0
        while abs(fp) > tol and n < maxit:
            x = x - fp / df
            fp = g.evaluate(x)
            df = g.evaluate_derivative(x)
            n += 1
    except (ZeroDivisionError, OverflowError, ValueError) as exc:
        raise SolverDivergedError(f"Nodal Newton step failed near x = {x!r}: {exc}") from exc
    if not (math.isfinite(x) and math.isfinite(fp)):
        raise SolverDivergedError(f"Nodal Newton produced a non-finite iterate from x0 = {x0!r}.")
    if abs(fp) > tol:
        logger.debug("Nodal Newton stopped after %d steps with |g| = %.2e", n, abs(fp))
    return x
