"""pynlfem.assembly.load_vector"""
import numpy as np

from pynlfem.assembly.accumulate import accum_array

__all__ = ["assemble_load_vector", "edge_midpoints"]


def edge_midpoints(nodes, elems):
    """Midpoints of the three edges of every triangle; ``mid[k]`` is opposite vertex ``k``."""
    mid1 = 0.5 * (nodes[elems[:, 1]] + nodes[elems[:, 2]])
    mid2 = 0.5 * (nodes[elems[:, 2]] + nodes[elems[:, 0]])
    mid3 = 0.5 * (nodes[elems[:, 0]] + nodes[elems[:, 1]])
    return mid1, mid2, mid3


def assemble_load_vector(mesh, source) -> np.ndarray:
    """
    Right-hand side ``b_i = ∫ s φ_i`` with the three-point edge-midpoint rule.

    Vertex ``k`` of a triangle receives ``|T| (s(m_a) + s(m_b)) / 6`` where
    ``m_a, m_b`` are the midpoints of the two edges meeting at ``k``. The
    per-vertex contributions are stacked vertex-by-vertex and scatter-added.
    """
    nodes, elems, area = mesh.nodes, mesh.elems, mesh.areas
    mid1, mid2, mid3 = edge_midpoints(nodes, elems)
    f1, f2, f3 = source.evaluate(mid1), source.evaluate(mid2), source.evaluate(mid3)

    bt1 = area * (f2 + f3) / 6.0
    bt2 = area * (f3 + f1) / 6.0
    bt3 = area * (f1 + f2) / 6.0
    bts = np.concatenate([bt1, bt2, bt3])
    return accum_array(elems.T.ravel(), bts, mesh.n_nodes)
