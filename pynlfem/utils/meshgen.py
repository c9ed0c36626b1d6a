"""pynlfem.utils.meshgen
Structured P1 triangulations of a rectangle and their uniform refinement.
"""
import numpy as np
from typing import Sequence, Tuple

__all__ = ["square_triangles", "uniform_refine", "unique_edges", "boundary_nodes"]


def square_triangles(box: Sequence[float], h: float) -> Tuple[np.ndarray, np.ndarray]:
    """
    Triangulate ``[x_min, x_max] x [y_min, y_max]`` with a uniform grid of
    spacing ``h``; every cell is split along its diagonal into two
    counter-clockwise triangles.

    Returns:
        tuple: (nodes, elems)
            nodes (np.ndarray): (N, 2) coordinates, row-major (x fastest).
            elems (np.ndarray): (M, 3) vertex indices.
    """
    x_min, x_max, y_min, y_max = (float(v) for v in box)
    if h <= 0:
        raise ValueError("Mesh size h must be positive.")
    if x_max <= x_min or y_max <= y_min:
        raise ValueError(f"Degenerate box {tuple(box)}.")

    nx = max(1, int(round((x_max - x_min) / h)))
    ny = max(1, int(round((y_max - y_min) / h)))
    x = np.linspace(x_min, x_max, nx + 1)
    y = np.linspace(y_min, y_max, ny + 1)
    X, Y = np.meshgrid(x, y)
    nodes = np.column_stack([X.ravel(), Y.ravel()])

    get_node_id = lambda ix, iy: iy * (nx + 1) + ix

    ix, iy = np.meshgrid(np.arange(nx), np.arange(ny))
    ix, iy = ix.ravel(), iy.ravel()
    v00 = get_node_id(ix, iy)
    v10 = get_node_id(ix + 1, iy)
    v01 = get_node_id(ix, iy + 1)
    v11 = get_node_id(ix + 1, iy + 1)

    lower = np.column_stack([v00, v10, v11])
    upper = np.column_stack([v00, v11, v01])
    elems = np.vstack([lower, upper]).astype(np.int64)
    return nodes, elems


def unique_edges(elems: np.ndarray) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Unique undirected edges of a triangulation.

    Local edge ``k`` of a triangle is the one opposite vertex ``k``:
    ``(1, 2)``, ``(2, 0)``, ``(0, 1)``.

    Returns:
        edges (np.ndarray): (E, 2) sorted vertex pairs.
        elem2edge (np.ndarray): (M, 3) edge index of each local edge.
        counts (np.ndarray): (E,) number of triangles sharing each edge.
    """
    elems = np.asarray(elems, dtype=np.int64)
    all_edges = np.vstack([elems[:, [1, 2]], elems[:, [2, 0]], elems[:, [0, 1]]])
    all_edges.sort(axis=1)
    edges, inverse, counts = np.unique(all_edges, axis=0,
                                       return_inverse=True, return_counts=True)
    elem2edge = inverse.reshape(3, -1).T
    return edges, elem2edge, counts


def uniform_refine(nodes: np.ndarray, elems: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """
    Red refinement: every triangle is split into four through its edge
    midpoints. Midpoint nodes are appended after the existing nodes, one per
    unique edge. Orientation of the children matches the parent.
    """
    nodes = np.asarray(nodes, dtype=float)
    elems = np.asarray(elems, dtype=np.int64)
    edges, elem2edge, _ = unique_edges(elems)

    n_old = nodes.shape[0]
    midpoints = 0.5 * (nodes[edges[:, 0]] + nodes[edges[:, 1]])
    new_nodes = np.vstack([nodes, midpoints])

    # m_k: midpoint of the edge opposite local vertex k
    m0 = elem2edge[:, 0] + n_old
    m1 = elem2edge[:, 1] + n_old
    m2 = elem2edge[:, 2] + n_old
    a, b, c = elems[:, 0], elems[:, 1], elems[:, 2]

    new_elems = np.vstack([
        np.column_stack([a, m2, m1]),
        np.column_stack([m2, b, m0]),
        np.column_stack([m1, m0, c]),
        np.column_stack([m0, m1, m2]),
    ])
    return new_nodes, new_elems


def boundary_nodes(elems: np.ndarray, n_nodes: int) -> np.ndarray:
    """Vertices of edges owned by a single triangle, sorted ascending."""
    edges, _, counts = unique_edges(elems)
    on_boundary = np.zeros(n_nodes, dtype=bool)
    on_boundary[edges[counts == 1].ravel()] = True
    return np.flatnonzero(on_boundary)
