"""pynlfem.functions.library
Named model problems ``-Δu + f(u) = s`` in Ω, ``u = g`` on ∂Ω.
"""
from dataclasses import dataclass
from typing import Callable, Dict, Optional

import sympy as sp

from pynlfem.functions.analytic import Analytic, Constant, Reaction, Zeros, u, x, y

__all__ = ["Problem", "get_problem", "available_problems", "register_problem"]


@dataclass(frozen=True)
class Problem:
    """Source, boundary data and reaction term of one PDE."""

    name: str
    source: Analytic
    boundary: Analytic
    reaction: Reaction
    exact: Optional[Analytic] = None


def _boltzmann() -> Problem:
    # Dirichlet data: equilibrium potential asinh(C/2) of a linear p-n doping C = 20 (x - 1/2)
    doping = 20 * (x - sp.Rational(1, 2))
    return Problem(
        name="boltzmann",
        source=Zeros(),
        boundary=Analytic(sp.asinh(doping / 2)),
        reaction=Reaction(sp.sinh(u)),
    )


def _sincos() -> Problem:
    w = sp.sin(sp.pi * x) * sp.cos(sp.pi * y)
    source = -sp.diff(w, x, 2) - sp.diff(w, y, 2) + w**3
    return Problem(
        name="sincos",
        source=Analytic(sp.simplify(source)),
        boundary=Analytic(w),
        reaction=Reaction(u**3),
        exact=Analytic(w),
    )


def _constant() -> Problem:
    return Problem(
        name="constant",
        source=Zeros(),
        boundary=Constant(1.0),
        reaction=Reaction(sp.Integer(0)),
        exact=Constant(1.0),
    )


def _poisson() -> Problem:
    return Problem(
        name="poisson",
        source=Constant(1.0),
        boundary=Zeros(),
        reaction=Reaction(sp.Integer(0)),
    )


_PROBLEMS: Dict[str, Callable[[], Problem]] = {
    "boltzmann": _boltzmann,
    "sincos": _sincos,
    "constant": _constant,
    "poisson": _poisson,
}


def available_problems():
    return sorted(_PROBLEMS)


def register_problem(name: str, factory: Callable[[], Problem]) -> None:
    """Make ``factory`` selectable as ``name``."""
    _PROBLEMS[name] = factory


def get_problem(name: str) -> Problem:
    """Build the evaluators of the problem called ``name``."""
    try:
        factory = _PROBLEMS[name]
    except KeyError:
        raise KeyError(f"Unknown problem '{name}'. Known problems: {', '.join(available_problems())}.") from None
    return factory()
