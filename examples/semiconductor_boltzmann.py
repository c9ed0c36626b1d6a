#!/usr/bin/env python
# coding: utf-8

"""
Nonlinear Poisson-Boltzmann equation on the unit square.

Problem setup:
- PDE: -Δu + sinh(u) = 0  in Ω = (0,1)²
- BC:   u = asinh(10 (x - 1/2))  on ∂Ω

The mesh is the uniform h-grid, refined once, and the discrete system
A u + M sinh(u) = b is solved with alternating nonlinear Gauss-Seidel sweeps
(default) or with full Newton. The nodal solution is printed to stdout.
"""

import argparse
import logging

from pynlfem.functions import available_problems
from pynlfem.io import format_solution, plot_solution
from pynlfem.problem import solve_problem
from pynlfem.solvers import SolverParameters


def main():
    parser = argparse.ArgumentParser(description="Nonlinear elliptic FEM on a square")
    parser.add_argument("--box", type=float, nargs=4, default=[0.0, 1.0, 0.0, 1.0],
                        metavar=("XMIN", "XMAX", "YMIN", "YMAX"))
    parser.add_argument("--h", type=float, default=0.25, help="coarse mesh size")
    parser.add_argument("--refine", type=int, default=1, help="number of uniform refinements")
    parser.add_argument("--problem", default="boltzmann", choices=available_problems())
    parser.add_argument("--strategy", default="gauss_seidel", choices=["gauss_seidel", "newton"])
    parser.add_argument("--tol", type=float, default=1e-6)
    parser.add_argument("--max-iter", type=int, default=10)
    parser.add_argument("--plot", action="store_true", help="show the solution with matplotlib")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(levelname)s %(name)s: %(message)s")

    params = SolverParameters(tol=args.tol, max_iter=args.max_iter, strategy=args.strategy)
    mesh, result = solve_problem((*args.box, args.h), args.problem,
                                 n_refine=args.refine, params=params)

    print(format_solution(result.u))
    status = "converged" if result.converged else "NOT converged"
    print(f"--- {status}: {result.iterations} iterations, |R|_2 = {result.residual_norm:.3e}")

    if args.plot:
        plot_solution(mesh, result.u, title=f"{args.problem} ({result.strategy})")


if __name__ == '__main__':
    main()
