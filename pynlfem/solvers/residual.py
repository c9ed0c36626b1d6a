"""pynlfem.solvers.residual"""
import numpy as np

__all__ = ["residual", "free_residual_norm"]


def residual(A, u, mass_diag, b, reaction) -> np.ndarray:
    """Full residual ``A u + M ⊙ f(u) - b`` (boundary rows included)."""
    return A @ u + mass_diag * reaction.evaluate(u) - b


def free_residual_norm(A, u, mass_diag, b, reaction, free_nodes) -> float:
    """Euclidean norm of the residual restricted to the free rows."""
    r = residual(A, u, mass_diag, b, reaction)
    return float(np.linalg.norm(r[free_nodes]))
