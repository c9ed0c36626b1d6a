import logging
import numpy as np
import scipy.sparse as sp
from typing import Sequence

from pynlfem.assembly.global_matrix import element_areas, assemble_stiffness, lumped_mass
from pynlfem.utils.meshgen import square_triangles, uniform_refine, boundary_nodes

logger = logging.getLogger(__name__)


class Mesh:
    """
    Linear triangular mesh together with the discrete operators the
    nonlinear solvers need.

    Holds node coordinates, element connectivity, element areas, the P1
    stiffness matrix, the lumped mass (as a diagonal matrix and as a vector)
    and the partition of nodes into free and boundary sets. Everything is
    built once in the constructor; the NumPy arrays (nodes, elems, areas,
    mass_diag and the node sets) are flagged read-only, the SciPy matrices
    ``stiffness`` and ``mass`` are not and must be treated as shared state.
    """

    def __init__(self, nodes: np.ndarray, elems: np.ndarray, bd_nodes: np.ndarray = None):
        self.nodes = np.array(nodes, dtype=float)
        self.elems = np.array(elems, dtype=np.int64)
        if self.nodes.ndim != 2 or self.nodes.shape[1] != 2:
            raise ValueError(f"nodes must be an (N, 2) array, got shape {self.nodes.shape}.")
        if self.elems.ndim != 2 or self.elems.shape[1] != 3:
            raise ValueError(f"elems must be an (M, 3) array, got shape {self.elems.shape}.")

        n = self.n_nodes
        if bd_nodes is None:
            bd_nodes = boundary_nodes(self.elems, n)
        self.bd_nodes = np.unique(np.asarray(bd_nodes, dtype=np.int64))
        self.free_nodes = np.setdiff1d(np.arange(n, dtype=np.int64), self.bd_nodes)
        self._check_partition()

        self.areas = element_areas(self.nodes, self.elems)
        self.stiffness: sp.csr_matrix = assemble_stiffness(self.nodes, self.elems, self.areas)
        self.mass_diag = lumped_mass(self.elems, self.areas, n)
        self.mass: sp.dia_matrix = sp.diags(self.mass_diag)

        for arr in (self.nodes, self.elems, self.bd_nodes, self.free_nodes, self.areas, self.mass_diag):
            arr.setflags(write=False)
        logger.debug("Built %r", self)

    def _check_partition(self):
        n = self.n_nodes
        if self.bd_nodes.size and (self.bd_nodes.min() < 0 or self.bd_nodes.max() >= n):
            raise ValueError("Boundary node index out of range.")
        if np.intersect1d(self.free_nodes, self.bd_nodes).size:
            raise ValueError("Free and boundary node sets overlap.")
        if self.free_nodes.size + self.bd_nodes.size != n:
            raise ValueError("Free and boundary node sets do not cover all nodes.")

    @property
    def n_nodes(self) -> int:
        return self.nodes.shape[0]

    @property
    def n_elems(self) -> int:
        return self.elems.shape[0]

    def is_free(self) -> np.ndarray:
        """Boolean mask over nodes, True for free nodes."""
        mask = np.zeros(self.n_nodes, dtype=bool)
        mask[self.free_nodes] = True
        return mask

    def __repr__(self):
        return (f"<Mesh n_nodes={self.n_nodes}, "
                f"n_elems={self.n_elems}, "
                f"n_free={self.free_nodes.size}, "
                f"n_boundary={self.bd_nodes.size}>")


class SquareMesh(Mesh):
    """Uniformly refined triangulation of a rectangle."""

    def __init__(self, box: Sequence[float], h: float, n_refine: int = 1):
        if n_refine < 0:
            raise ValueError("n_refine must be non-negative.")
        nodes, elems = square_triangles(box, h)
        for _ in range(n_refine):
            nodes, elems = uniform_refine(nodes, elems)
        self.box = tuple(float(v) for v in box)
        self.h = float(h) / 2 ** n_refine
        super().__init__(nodes, elems)

    @classmethod
    def from_meshprops(cls, meshprops: Sequence[float], n_refine: int = 1) -> "SquareMesh":
        """Build from ``(x_min, x_max, y_min, y_max, h)``."""
        if len(meshprops) != 5:
            raise ValueError("meshprops must be (x_min, x_max, y_min, y_max, h).")
        *box, h = meshprops
        return cls(box, h, n_refine=n_refine)
