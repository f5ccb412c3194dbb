"""
Basic test to verify package setup is correct.
"""

def test_package_imports():
    """Test that the package can be imported."""
    import zuspec.be.opt
    assert zuspec.be.opt.__version__ == "0.1.0"
    assert hasattr(zuspec.be.opt, 'Optimizer')


def test_package_structure():
    """Test that package structure is accessible."""
    from zuspec.be import opt
    from zuspec.be.opt.solver import Z3OptimizeSolver
    assert opt.__version__ == "0.1.0"
    assert opt.Z3OptimizeSolver is Z3OptimizeSolver
