import numpy as np
import pytest
from pynlfem.utils.meshgen import square_triangles, uniform_refine, unique_edges, boundary_nodes
from pynlfem.assembly.global_matrix import element_areas

def signed_area(nodes, elems):
    p0, p1, p2 = nodes[elems[:, 0]], nodes[elems[:, 1]], nodes[elems[:, 2]]
    return 0.5 * ((p1 - p0)[:, 0] * (p2 - p0)[:, 1] - (p1 - p0)[:, 1] * (p2 - p0)[:, 0])

def test_square_triangles_counts_and_orientation():
    nodes, elems = square_triangles((0, 1, 0, 1), 0.5)
    assert nodes.shape == (9, 2)
    assert elems.shape == (8, 3)
    assert np.all(signed_area(nodes, elems) > 0)
    assert np.isclose(element_areas(nodes, elems).sum(), 1.0)

def test_square_triangles_rectangle():
    nodes, elems = square_triangles((-1, 2, 0, 1), 0.5)
    assert nodes.shape == (7 * 3, 2)
    assert np.isclose(element_areas(nodes, elems).sum(), 3.0)

def test_uniform_refine_matches_finer_grid():
    nodes, elems = square_triangles((0, 1, 0, 1), 0.5)
    edges, elem2edge, counts = unique_edges(elems)
    assert len(edges) == 16
    rnodes, relems = uniform_refine(nodes, elems)
    assert rnodes.shape == (25, 2)
    assert relems.shape == (32, 3)
    assert np.allclose(rnodes[:9], nodes)                # old nodes keep their ids
    assert np.all(signed_area(rnodes, relems) > 0)
    assert np.allclose(element_areas(rnodes, relems), 1.0 / 32)
    # same point set as the h = 1/4 grid
    fine, _ = square_triangles((0, 1, 0, 1), 0.25)
    key = lambda p: np.lexsort((p[:, 1], p[:, 0]))
    assert np.allclose(rnodes[key(rnodes)], fine[key(fine)])

def test_boundary_nodes_on_box_edges():
    nodes, elems = uniform_refine(*square_triangles((0, 1, 0, 1), 0.5))
    bd = boundary_nodes(elems, len(nodes))
    assert len(bd) == 16
    x, y = nodes[bd, 0], nodes[bd, 1]
    on_edge = np.isclose(x, 0) | np.isclose(x, 1) | np.isclose(y, 0) | np.isclose(y, 1)
    assert on_edge.all()

def test_invalid_arguments():
    with pytest.raises(ValueError):
        square_triangles((0, 1, 0, 1), 0.0)
    with pytest.raises(ValueError):
        square_triangles((1, 0, 0, 1), 0.5)
