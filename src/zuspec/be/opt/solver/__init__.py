"""Optimizer handle, result types and solver backend adapter."""

from .base import SolverBackend
from .result import (
    CheckOutcome,
    SolverResult,
    VerificationResult,
    from_lbool,
    model_to_dict,
)
from .optimizer import Optimizer
from .z3_solver import Z3OptimizeSolver

__all__ = [
    "SolverBackend",
    "CheckOutcome",
    "SolverResult",
    "VerificationResult",
    "from_lbool",
    "model_to_dict",
    "Optimizer",
    "Z3OptimizeSolver",
]
