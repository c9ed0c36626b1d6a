from .mesh import Mesh, SquareMesh
__all__=['Mesh','SquareMesh']
