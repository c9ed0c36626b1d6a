import numpy as np
import pytest
from pynlfem.core import Mesh, SquareMesh

def test_partition(refined_mesh):
    mesh = refined_mesh
    assert mesh.n_nodes == 9 * 9
    assert mesh.bd_nodes.size == 32
    assert mesh.free_nodes.size == 7 * 7
    assert np.intersect1d(mesh.free_nodes, mesh.bd_nodes).size == 0
    assert np.array_equal(np.union1d(mesh.free_nodes, mesh.bd_nodes), np.arange(mesh.n_nodes))
    assert mesh.is_free().sum() == mesh.free_nodes.size

def test_stiffness_properties(refined_mesh):
    K = refined_mesh.stiffness
    assert K.shape == (refined_mesh.n_nodes,) * 2
    assert np.allclose((K - K.T).toarray(), 0.0)
    assert np.allclose(np.asarray(K.sum(axis=1)).ravel(), 0.0)
    # linear functions are discrete-harmonic at interior nodes
    Kx = K @ refined_mesh.nodes[:, 0]
    assert np.allclose(Kx[refined_mesh.free_nodes], 0.0)

def test_unit_square_p1_stencil(coarse_mesh):
    K = coarse_mesh.stiffness.toarray()
    i = 12                                  # centre node (0.5, 0.5)
    assert np.allclose(coarse_mesh.nodes[i], [0.5, 0.5])
    assert np.isclose(K[i, i], 4.0)
    assert np.isclose(K[i].sum() - K[i, i], -4.0)

def test_lumped_mass(refined_mesh):
    assert np.isclose(refined_mesh.mass_diag.sum(), 1.0)
    assert np.allclose(refined_mesh.mass.diagonal(), refined_mesh.mass_diag)
    assert np.isclose(refined_mesh.areas.sum(), 1.0)

def test_read_only(coarse_mesh):
    with pytest.raises(ValueError):
        coarse_mesh.nodes[0, 0] = 3.0
    for name in ("elems", "areas", "mass_diag", "free_nodes", "bd_nodes"):
        assert not getattr(coarse_mesh, name).flags.writeable, name

def test_single_triangle_has_no_free_nodes():
    mesh = Mesh(np.array([[0, 0], [1, 0], [0, 1]]), np.array([[0, 1, 2]]))
    assert mesh.free_nodes.size == 0
    assert np.isclose(mesh.areas[0], 0.5)

def test_invalid_meshes():
    nodes = np.array([[0, 0], [1, 0], [0, 1]])
    with pytest.raises(ValueError):
        Mesh(nodes, np.array([[0, 1, 2]]), bd_nodes=[0, 5])
    with pytest.raises(ValueError):
        Mesh(nodes, np.array([[0, 1]]))
    with pytest.raises(ValueError):
        SquareMesh.from_meshprops((0, 1, 0, 1))

def test_solve_leaves_operators_untouched(coarse_mesh):
    from pynlfem.problem import solve_on_mesh
    K = coarse_mesh.stiffness.copy()
    solve_on_mesh(coarse_mesh, "boltzmann")
    assert abs(coarse_mesh.stiffness - K).max() == 0.0
