"""
Tests for the Z3 optimization solver backend.
"""
import z3
from zuspec.be.opt.solver import SolverBackend, Z3OptimizeSolver, SolverResult


def test_z3_solver_unsat():
    """Test that contradictory hard constraints are reported unsatisfiable."""
    with Z3OptimizeSolver() as solver:
        x = z3.Int('x')
        solver.register_variable('x', x)
        solver.add_constraint(x > 10)
        solver.add_constraint(x < 5)

        result = solver.check_sat()

        assert result.holds is True
        assert result.result == SolverResult.UNSAT
        assert result.counterexample is None
        assert result.solver_name == "z3-opt"
        assert solver.get_model() is None


def test_z3_solver_sat_with_objective():
    """Test that the optimum is found within the hard constraints."""
    with Z3OptimizeSolver() as solver:
        x = z3.Int('x')
        solver.register_variable('x', x)
        solver.add_constraint(x > 10)
        solver.add_constraint(x < 20)
        solver.maximize(x)

        result = solver.check_sat()

        assert result.holds is False
        assert result.result == SolverResult.SAT
        assert result.counterexample['x'] == 19
        assert solver.get_model()['x'] == 19
        assert "x=19" in str(result)


def test_z3_solver_soft_constraints():
    """Test that the cheaper soft constraint is the one given up."""
    with Z3OptimizeSolver() as solver:
        a = z3.Bool('a')
        b = z3.Bool('b')
        solver.add_constraint(z3.Or(z3.Not(a), z3.Not(b)))
        solver.add_soft(a, weight=2)
        solver.add_soft(b, weight=9)

        result = solver.check_sat()

        assert result.result == SolverResult.SAT
        assert result.counterexample['b'] is True


def test_z3_solver_bitvector_minimize():
    """Test minimization over bitvectors."""
    with Z3OptimizeSolver() as solver:
        addr = z3.BitVec('addr', 32)
        size = z3.BitVec('size', 8)

        solver.add_constraint(z3.ULE(addr, 0xFFFF))
        solver.add_constraint(z3.UGE(size, 1))
        solver.add_constraint(z3.ULE(size, 128))
        solver.add_constraint(z3.UGT(addr + z3.ZeroExt(24, size), 0x10000))
        solver.minimize(size)

        result = solver.check_sat()

        assert result.result == SolverResult.SAT
        assert result.counterexample['size'] == 2
        assert result.counterexample['addr'] == 0xFFFF


def test_z3_solver_push_pop():
    """Test push/pop for backtracking."""
    with Z3OptimizeSolver() as solver:
        x = z3.Int('x')
        solver.add_constraint(x > 10)

        result1 = solver.check_sat()
        assert result1.holds is False  # Satisfiable

        solver.push()
        solver.add_constraint(x < 5)

        result2 = solver.check_sat()
        assert result2.holds is True  # Unsatisfiable

        solver.pop()

        result3 = solver.check_sat()
        assert result3.holds is False  # Satisfiable again


def test_z3_solver_reset():
    """Test that reset discards constraints but keeps the timeout."""
    with Z3OptimizeSolver() as solver:
        x = z3.Int('x')
        solver.set_timeout(10000)
        solver.add_constraint(x > 10)
        solver.add_constraint(x < 5)

        result1 = solver.check_sat()
        assert result1.holds is True  # Unsat

        old = solver.optimizer
        solver.reset()
        assert old.closed
        assert not solver.optimizer.closed

        y = z3.Int('y')
        solver.add_constraint(y == 42)

        result2 = solver.check_sat()
        assert result2.holds is False  # Sat
        assert result2.counterexample['y'] == 42
    assert solver.optimizer.closed


def test_z3_solver_model_invalidated_by_changes():
    with Z3OptimizeSolver() as solver:
        x = z3.Int('x')
        solver.add_constraint(x == 1)
        solver.check_sat()
        assert solver.get_model()['x'] == 1

        solver.add_constraint(x >= 0)
        assert solver.get_model() is None


def test_z3_solver_variables():
    with Z3OptimizeSolver() as solver:
        x = z3.Int('x')
        solver.register_variable('x', x)
        assert solver.get_variable('x') is x
        assert solver.get_variable('y') is None


def test_z3_solver_satisfies_backend_protocol():
    def run(backend: SolverBackend):
        return backend.check_sat()

    with Z3OptimizeSolver() as solver:
        solver.add_constraint(z3.Bool('p'))
        assert run(solver).counterexample['p'] is True
