# analytic.py
"""
Function evaluators used by the assembly and the nonlinear solvers.

Every evaluator offers ``evaluate`` and ``evaluate_derivative``. Spatial
functions (source and boundary data) act on points ``(..., 2)``; the
reaction term acts on nodal values ``u``. Expressions are SymPy objects,
lambdified once at construction; derivatives come from ``sympy.diff``.
"""
from abc import ABC, abstractmethod

import numpy as np
import sympy as sp

__all__ = ["FunctionEvaluator", "Analytic", "Zeros", "Constant", "Reaction", "NodalReaction", "x", "y", "u"]


class FunctionEvaluator(ABC):
    """
    Uniform interface for the pluggable PDE coefficient functions.

    The solvers only differentiate the reaction term. Spatial data built from
    a plain Python callable carries no derivative, and its
    ``evaluate_derivative`` raises ``NotImplementedError``.
    """

    @abstractmethod
    def evaluate(self, X):
        """Values at ``X``: one value per point (spatial) or per entry (reaction)."""

    @abstractmethod
    def evaluate_derivative(self, X):
        """Derivative at ``X``."""


def _broadcast(vals, shape):
    # lambdified constants come back as Python scalars
    return np.array(np.broadcast_to(np.asarray(vals, dtype=float), shape))


class Analytic(FunctionEvaluator):
    """
    Wraps a SymPy expression (or callable) ``f(x, y)``.

    ``evaluate(X)`` takes points ``(..., 2)`` and returns ``(...)``;
    ``evaluate_derivative(X)`` returns the gradient ``(..., 2)``.
    """
    _x, _y = sp.symbols("x y")
    _coords = (_x, _y)

    def __init__(self, sympy_expr):
        self.sympy_expr = sympy_expr
        if callable(sympy_expr) and not isinstance(sympy_expr, sp.Basic):
            self._func = sympy_expr
            self._grad = None
        else:
            expr = sp.sympify(sympy_expr)
            self.sympy_expr = expr
            self._func = sp.lambdify(self._coords, expr, "numpy")
            self._grad = [sp.lambdify(self._coords, sp.diff(expr, c), "numpy") for c in self._coords]

    def evaluate(self, X):
        X = np.asarray(X, dtype=float)
        return _broadcast(self._func(X[..., 0], X[..., 1]), X.shape[:-1])

    def evaluate_derivative(self, X):
        if self._grad is None:
            raise NotImplementedError(f"{self!r} wraps a Python callable; its gradient is only available for SymPy expressions.")
        X = np.asarray(X, dtype=float)
        return np.stack([_broadcast(g(X[..., 0], X[..., 1]), X.shape[:-1]) for g in self._grad], axis=-1)

    def __repr__(self):
        return f"Analytic({self.sympy_expr})"


class Zeros(Analytic):
    def __init__(self):
        super().__init__(sp.Integer(0))


class Constant(Analytic):
    def __init__(self, value: float):
        self.value = float(value)
        super().__init__(sp.Float(self.value))


class Reaction(FunctionEvaluator):
    """
    Nonlinear reaction term ``f(u)`` applied entry-wise to nodal values.

    Keeps a NumPy form for whole vectors and a ``math`` form for the scalar
    calls made inside the nodal Newton solve.
    """
    _u = sp.Symbol("u")

    def __init__(self, sympy_expr):
        expr = sp.sympify(sympy_expr)
        self.sympy_expr = expr
        self.derivative_expr = sp.diff(expr, self._u)
        self._f = sp.lambdify(self._u, expr, "numpy")
        self._df = sp.lambdify(self._u, self.derivative_expr, "numpy")
        self._f_scalar = sp.lambdify(self._u, expr, "math")
        self._df_scalar = sp.lambdify(self._u, self.derivative_expr, "math")

    def evaluate(self, U):
        U = np.asarray(U, dtype=float)
        return _broadcast(self._f(U), U.shape)

    def evaluate_derivative(self, U):
        U = np.asarray(U, dtype=float)
        return _broadcast(self._df(U), U.shape)

    def scalar(self, value: float) -> float:
        return float(self._f_scalar(value))

    def scalar_derivative(self, value: float) -> float:
        return float(self._df_scalar(value))

    def nodal(self, c: float, a_ii: float, m_i: float) -> "NodalReaction":
        """Local equation of one node, see :class:`NodalReaction`."""
        return NodalReaction(self, c, a_ii, m_i)

    def __repr__(self):
        return f"Reaction({self.sympy_expr})"


class NodalReaction(FunctionEvaluator):
    """
    Scalar local equation ``g(x) = a_ii x + m_i f(x) + c`` of a single node.

    ``c`` gathers the neighbour couplings and the load; ``a_ii`` is the
    diagonal stiffness and ``m_i`` the lumped mass of the node.
    """

    def __init__(self, reaction: Reaction, c: float, a_ii: float, m_i: float):
        self.reaction = reaction
        self.c = float(c)
        self.a_ii = float(a_ii)
        self.m_i = float(m_i)

    @property
    def params(self):
        return self.c, self.a_ii, self.m_i

    def evaluate(self, x: float) -> float:
        return self.a_ii * x + self.m_i * self.reaction.scalar(x) + self.c

    def evaluate_derivative(self, x: float) -> float:
        return self.a_ii + self.m_i * self.reaction.scalar_derivative(x)


# helpers to avoid typing Analytic._x all the time
x, y = Analytic._coords
u = Reaction._u
