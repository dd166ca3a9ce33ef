# src/circuitsim_core/simulation/__init__.py
from ..errors import SolverError, SolverOutputError
from .solver import Solver, CallableSolver
from .execution import simulate

__all__ = [
    # Exceptions
    "SolverError",
    "SolverOutputError",
    # Solver boundary
    "Solver",
    "CallableSolver",
    "simulate",
]
