"""
Abstract base interface for optimization solver backends.
"""
from typing import Protocol, Any, Optional, Dict
from .result import VerificationResult


class SolverBackend(Protocol):
    """Protocol defining the interface for optimization solver backends.
    
    Constraints and objectives are solver-specific expression objects; the
    backend only forwards them.
    """
    
    def add_constraint(self, constraint: Any) -> None:
        """Add a hard constraint to the solver.
        
        Args:
            constraint: Solver-specific constraint object
        """
        ...

    def add_soft(self, constraint: Any, weight: int = 1) -> None:
        """Add a weighted soft constraint to the solver."""
        ...

    def maximize(self, objective: Any) -> None:
        """Declare an objective to maximize."""
        ...

    def minimize(self, objective: Any) -> None:
        """Declare an objective to minimize."""
        ...
    
    def check_sat(self) -> VerificationResult:
        """Check satisfiability of added constraints.
        
        Returns:
            VerificationResult with sat/unsat status and optional model
        """
        ...
    
    def get_model(self) -> Optional[Dict[str, Any]]:
        """Get the model (variable assignments) of the last check.
        
        Returns:
            Dictionary mapping variable names to values, or None if unavailable
        """
        ...
    
    def push(self) -> None:
        """Push a new assertion scope."""
        ...
    
    def pop(self) -> None:
        """Pop the most recent assertion scope."""
        ...
    
    def reset(self) -> None:
        """Reset the solver state, clearing all constraints and objectives."""
        ...
