"""
Optimization backend for Zuspec.

This package wraps the Z3 optimization engine's C API behind a handle that
owns its engine reference and serializes every foreign call.
"""

__version__ = "0.1.0"

from .errors import (
    OptimizeError,
    PreconditionError,
    HandleClosedError,
    FormatError,
    EngineContractError,
)
from .engine import ENGINE_LOCK, engine_call
from .solver import (
    Optimizer,
    SolverBackend,
    CheckOutcome,
    SolverResult,
    VerificationResult,
    Z3OptimizeSolver,
)

__all__ = [
    "OptimizeError",
    "PreconditionError",
    "HandleClosedError",
    "FormatError",
    "EngineContractError",
    "ENGINE_LOCK",
    "engine_call",
    "Optimizer",
    "SolverBackend",
    "CheckOutcome",
    "SolverResult",
    "VerificationResult",
    "Z3OptimizeSolver",
]
