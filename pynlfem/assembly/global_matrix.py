"""pynlfem.assembly.global_matrix
Linear-triangle stiffness matrix and lumped mass, assembled for the whole mesh.
"""
import numpy as np, scipy.sparse as sp

from pynlfem.assembly.accumulate import accum_array

__all__ = ["element_areas", "grad_basis", "assemble_stiffness", "lumped_mass"]


def _signed_areas(nodes, elems):
    p0, p1, p2 = nodes[elems[:, 0]], nodes[elems[:, 1]], nodes[elems[:, 2]]
    e1, e2 = p1 - p0, p2 - p0
    return 0.5 * (e1[:, 0] * e2[:, 1] - e1[:, 1] * e2[:, 0])


def element_areas(nodes: np.ndarray, elems: np.ndarray) -> np.ndarray:
    """Area of every triangle."""
    return np.abs(_signed_areas(nodes, elems))


def grad_basis(nodes: np.ndarray, elems: np.ndarray) -> np.ndarray:
    """
    Constant gradients of the three barycentric basis functions.

    Returns an (M, 3, 2) array; entry ``[t, k]`` is ∇φ_k on triangle ``t``.
    """
    signed = _signed_areas(nodes, elems)
    if np.any(np.isclose(signed, 0.0)):
        raise ValueError("Mesh contains degenerate (zero-area) triangles.")
    grads = np.empty((elems.shape[0], 3, 2))
    for k in range(3):
        # edge opposite vertex k, rotated by -90 degrees
        pa = nodes[elems[:, (k + 1) % 3]]
        pb = nodes[elems[:, (k + 2) % 3]]
        edge = pb - pa
        grads[:, k, 0] = -edge[:, 1] / (2.0 * signed)
        grads[:, k, 1] = edge[:, 0] / (2.0 * signed)
    return grads


def assemble_stiffness(nodes: np.ndarray, elems: np.ndarray, areas: np.ndarray = None) -> sp.csr_matrix:
    """Global P1 stiffness ``A_ij = sum_T |T| ∇φ_i·∇φ_j`` as CSR (duplicates summed)."""
    n_dofs = nodes.shape[0]
    if areas is None:
        areas = element_areas(nodes, elems)
    grads = grad_basis(nodes, elems)
    rows, cols, data = [], [], []
    for a in range(3):
        for b in range(3):
            Ke_ab = areas * np.einsum("ij,ij->i", grads[:, a], grads[:, b])
            rows.append(elems[:, a]); cols.append(elems[:, b]); data.append(Ke_ab)
    K = sp.csr_matrix((np.concatenate(data), (np.concatenate(rows), np.concatenate(cols))),
                      shape=(n_dofs, n_dofs))
    K.sum_duplicates()
    return K


def lumped_mass(elems: np.ndarray, areas: np.ndarray, n_nodes: int) -> np.ndarray:
    """Row-sum lumped mass: each vertex receives a third of the area of its triangles."""
    contrib = np.tile(areas / 3.0, 3)
    return accum_array(elems.T.ravel(), contrib, n_nodes)
