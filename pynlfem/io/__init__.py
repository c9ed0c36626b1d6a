from .visualization import plot_solution, format_solution
__all__ = ['plot_solution', 'format_solution']
