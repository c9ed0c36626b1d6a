from .accumulate import accum_array
from .global_matrix import element_areas, assemble_stiffness, lumped_mass
from .load_vector import assemble_load_vector
__all__ = ['accum_array', 'element_areas', 'assemble_stiffness', 'lumped_mass', 'assemble_load_vector']
