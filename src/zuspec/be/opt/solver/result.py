"""
Check result types.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Dict, Any
import z3

from ..errors import EngineContractError


class SolverResult(Enum):
    """Result from an optimization check."""
    SAT = "sat"
    UNSAT = "unsat"
    UNKNOWN = "unknown"


def from_lbool(code: int) -> SolverResult:
    """Map a Z3_lbool returned by the engine to a SolverResult.

    Raises:
        EngineContractError: if the code is not one of the three lbool values
    """
    if code == z3.Z3_L_TRUE:
        return SolverResult.SAT
    elif code == z3.Z3_L_FALSE:
        return SolverResult.UNSAT
    elif code == z3.Z3_L_UNDEF:
        return SolverResult.UNKNOWN
    raise EngineContractError(f"Bad check result from z3 api: {code!r}")


def model_to_dict(model: Optional[z3.ModelRef]) -> Dict[str, Any]:
    """Convert a Z3 model into a dictionary of Python values.

    Integer and bitvector numerals become ``int``, boolean constants become
    ``bool``, anything else is kept as its textual form.
    """
    result: Dict[str, Any] = {}
    if model is None:
        return result

    for decl in model:
        name = decl.name()
        value = model[decl]

        if z3.is_int_value(value):
            result[name] = value.as_long()
        elif z3.is_bv_value(value):
            result[name] = value.as_long()
        elif z3.is_true(value):
            result[name] = True
        elif z3.is_false(value):
            result[name] = False
        else:
            result[name] = str(value)

    return result


@dataclass(frozen=True)
class CheckOutcome:
    """Tri-state outcome of an optimization check.

    Attributes:
        result: SAT, UNSAT or UNKNOWN
        model: Model reported by the engine; None exactly when UNSAT.
            For UNKNOWN this is a best-effort, possibly partial, model.
        solver_time_ms: Time spent inside the check call
    """
    result: SolverResult
    model: Optional[z3.ModelRef] = None
    solver_time_ms: float = 0.0

    @property
    def satisfiable(self) -> bool:
        return self.result == SolverResult.SAT

    @property
    def unsatisfiable(self) -> bool:
        return self.result == SolverResult.UNSAT

    @property
    def unknown(self) -> bool:
        return self.result == SolverResult.UNKNOWN

    def assignments(self) -> Dict[str, Any]:
        """Model values as plain Python objects (empty when UNSAT)."""
        return model_to_dict(self.model)

    def __bool__(self) -> bool:
        return self.satisfiable


@dataclass
class VerificationResult:
    """Result of a check made through a solver backend.
    
    Attributes:
        holds: True if the constraints are unsatisfiable
        counterexample: Variable assignments if the constraints are satisfiable
        solver_time_ms: Time taken by solver in milliseconds
        solver_name: Name of the solver backend used
        result: Raw solver result (SAT/UNSAT/UNKNOWN)
    """
    holds: bool
    counterexample: Optional[Dict[str, Any]] = None
    solver_time_ms: float = 0.0
    solver_name: str = "unknown"
    result: SolverResult = SolverResult.UNKNOWN
    
    def __str__(self) -> str:
        if self.holds:
            return f"Unsatisfiable ({self.solver_name}, {self.solver_time_ms:.2f}ms)"
        elif self.result == SolverResult.UNKNOWN:
            return f"Unknown ({self.solver_name}, {self.solver_time_ms:.2f}ms)"
        else:
            cex_str = ", ".join(f"{k}={v}" for k, v in (self.counterexample or {}).items())
            return f"Satisfiable: {cex_str} ({self.solver_name}, {self.solver_time_ms:.2f}ms)"
