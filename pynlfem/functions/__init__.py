from .analytic import FunctionEvaluator, Analytic, Zeros, Constant, Reaction, NodalReaction
from .library import Problem, get_problem, available_problems, register_problem
__all__ = ['FunctionEvaluator', 'Analytic', 'Zeros', 'Constant', 'Reaction', 'NodalReaction',
           'Problem', 'get_problem', 'available_problems', 'register_problem']
