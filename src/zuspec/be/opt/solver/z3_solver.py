"""
Z3 optimization backend implementation.
"""
from typing import Any, Optional, Dict
import z3

from .optimizer import Optimizer
from .result import VerificationResult, SolverResult


class Z3OptimizeSolver:
    """Z3 optimization backend wrapper.
    
    Implements the SolverBackend protocol on top of an Optimizer handle.
    """
    
    def __init__(self, ctx: Optional[z3.Context] = None):
        """Initialize a Z3 optimizer instance."""
        self._ctx = ctx
        self._timeout_ms: Optional[int] = None
        self.optimizer = Optimizer.create(ctx)
        self._variables: Dict[str, Any] = {}
        self._model: Optional[Dict[str, Any]] = None

    def __enter__(self) -> "Z3OptimizeSolver":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        """Release the underlying optimizer."""
        self.optimizer.close()
    
    def add_constraint(self, constraint: Any) -> None:
        """Add a hard Z3 constraint.
        
        Args:
            constraint: Z3 boolean expression
        """
        self.optimizer.assert_hard(constraint)
        self._model = None

    def add_soft(self, constraint: Any, weight: int = 1) -> None:
        """Add a soft Z3 constraint.

        Args:
            constraint: Z3 boolean expression
            weight: Penalty paid when the constraint is violated
        """
        self.optimizer.assert_soft(constraint, weight)
        self._model = None

    def maximize(self, objective: Any) -> None:
        self.optimizer.maximize(objective)
        self._model = None

    def minimize(self, objective: Any) -> None:
        self.optimizer.minimize(objective)
        self._model = None

    def set_timeout(self, milliseconds: int) -> None:
        """Bound later checks; kept across reset()."""
        self.optimizer.set_timeout(milliseconds)
        self._timeout_ms = milliseconds
    
    def check_sat(self) -> VerificationResult:
        """Check satisfiability of constraints and optimize objectives.
        
        Returns:
            VerificationResult with status and, when satisfiable, the model
        """
        outcome = self.optimizer.check_with_model()
        self._model = outcome.assignments() if outcome.model is not None else None

        return VerificationResult(
            holds=outcome.result == SolverResult.UNSAT,
            counterexample=self._model if outcome.result == SolverResult.SAT else None,
            solver_time_ms=outcome.solver_time_ms,
            solver_name="z3-opt",
            result=outcome.result
        )
    
    def get_model(self) -> Optional[Dict[str, Any]]:
        """Model of the last check.
        
        Returns:
            Dictionary mapping variable names to their values, or None if
            the last check was unsat or constraints changed since
        """
        return self._model
    
    def push(self) -> None:
        """Push a new assertion scope."""
        self.optimizer.push()
        self._model = None
    
    def pop(self) -> None:
        """Pop the most recent assertion scope."""
        self.optimizer.pop()
        self._model = None
    
    def reset(self) -> None:
        """Discard all constraints by replacing the optimizer."""
        self.optimizer.close()
        self.optimizer = Optimizer.create(self._ctx)
        if self._timeout_ms is not None:
            self.optimizer.set_timeout(self._timeout_ms)
        self._model = None
    
    def register_variable(self, name: str, var: Any) -> None:
        """Register a Z3 variable for later reference.
        
        Args:
            name: Variable name
            var: Z3 variable object
        """
        self._variables[name] = var
    
    def get_variable(self, name: str) -> Optional[Any]:
        """Get a registered Z3 variable.
        
        Args:
            name: Variable name
            
        Returns:
            Z3 variable object or None
        """
        return self._variables.get(name)
