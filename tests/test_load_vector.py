import numpy as np
from pynlfem.assembly.load_vector import assemble_load_vector, edge_midpoints
from pynlfem.functions import Analytic, Constant, Zeros
from pynlfem.functions.analytic import x, y

def test_constant_source_equals_lumped_mass(refined_mesh):
    b = assemble_load_vector(refined_mesh, Constant(1.0))
    assert np.allclose(b, refined_mesh.mass_diag)
    assert np.isclose(b.sum(), 1.0)

def test_midpoint_rule_is_exact_for_quadratics(refined_mesh):
    # sum_i b_i = ∫ s because the basis is a partition of unity
    b = assemble_load_vector(refined_mesh, Analytic(x**2 + x * y))
    assert np.isclose(b.sum(), 1.0 / 3.0 + 1.0 / 4.0)

def test_zero_source(coarse_mesh):
    assert not assemble_load_vector(coarse_mesh, Zeros()).any()

def test_edge_midpoints(coarse_mesh):
    m1, m2, m3 = edge_midpoints(coarse_mesh.nodes, coarse_mesh.elems)
    tri = coarse_mesh.nodes[coarse_mesh.elems[0]]
    assert np.allclose(m1[0], 0.5 * (tri[1] + tri[2]))
    assert np.allclose(m2[0], 0.5 * (tri[2] + tri[0]))
    assert np.allclose(m3[0], 0.5 * (tri[0] + tri[1]))
