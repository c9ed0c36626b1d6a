"""pynlfem.io.visualization"""
import numpy as np
import matplotlib.pyplot as plt
import matplotlib.tri as mtri

__all__ = ["triangulation", "plot_solution", "format_solution"]


def triangulation(mesh) -> mtri.Triangulation:
    return mtri.Triangulation(mesh.nodes[:, 0], mesh.nodes[:, 1], mesh.elems)


def plot_solution(mesh, u, *, ax=None, show=True, plot_edges=True, title=None, cmap="viridis"):
    """
    Colour plot of a nodal P1 field.

    Args:
        mesh: mesh providing ``nodes`` and ``elems``.
        u: nodal values, one per mesh node.
        ax: axes to draw into; a new figure is created when None.
        show: call ``plt.show()`` at the end.
        plot_edges: overlay the element edges.
    """
    u = np.asarray(u, dtype=float)
    if u.shape != (mesh.n_nodes,):
        raise ValueError(f"Expected {mesh.n_nodes} nodal values, got shape {u.shape}.")
    if ax is None:
        _, ax = plt.subplots(figsize=(6, 5))
    tri = triangulation(mesh)
    pc = ax.tripcolor(tri, u, shading="gouraud", cmap=cmap)
    if plot_edges:
        ax.triplot(tri, color="k", lw=0.3, alpha=0.5)
    ax.figure.colorbar(pc, ax=ax)
    ax.set_aspect("equal")
    ax.set_xlabel("x"); ax.set_ylabel("y")
    if title:
        ax.set_title(title)
    if show:
        plt.show()
    return ax


def format_solution(u, precision: int = 6) -> str:
    """One nodal value per line, as printed by the command-line driver."""
    return "\n".join(f"{i:6d}  {val:.{precision}e}" for i, val in enumerate(np.asarray(u, dtype=float)))
