"""
Error types raised by the optimization wrapper.
"""


class OptimizeError(Exception):
    """Base class for recoverable errors raised by this package."""


class PreconditionError(OptimizeError):
    """A caller contract was violated before reaching the engine.

    Raised instead of issuing a foreign call whose behavior is undefined,
    e.g. popping more scopes than were pushed or asking for a model when
    no usable check result exists.
    """


class HandleClosedError(PreconditionError):
    """The optimizer handle was already released."""


class FormatError(OptimizeError):
    """The engine produced no usable text for a rendering request."""


class EngineContractError(AssertionError):
    """The engine returned a value outside its documented contract.

    This is not an OptimizeError: it signals a broken invariant in the
    engine binding and must not be handled like an ordinary failure.
    """
