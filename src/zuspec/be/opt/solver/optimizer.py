"""
Thread-serialized, lifetime-safe handle over a Z3 optimize object.

The handle talks to the engine exclusively through the flat ``Z3_*``
functions of the Z3 Python bindings. Each operation holds the
process-wide engine lock (see :mod:`zuspec.be.opt.engine`) only for its
own foreign calls; the lock is never held across two operations.

Example:
    >>> x = z3.Int('x')
    >>> with Optimizer.create() as opt:
    ...     opt.assert_hard(x > 0)
    ...     opt.assert_soft(x < 5, weight=10)
    ...     opt.maximize(x)
    ...     outcome = opt.check_with_model()
"""
from typing import Optional
import logging
import time
import z3

from ..config import MAX_TIMEOUT_MS, default_timeout_ms
from ..engine import engine_call
from ..errors import FormatError, HandleClosedError, PreconditionError
from .result import CheckOutcome, SolverResult, from_lbool


def _logger() -> logging.Logger:
    return logging.getLogger(__name__)


class Optimizer:
    """Owner of exactly one reference to a Z3 optimize object.

    The reference is taken once in the constructor and dropped once by
    :meth:`close` (or by the context-manager exit, or as a last resort by
    the finalizer). After that every operation raises HandleClosedError.

    The context passed in is not owned: it must outlive the optimizer.
    Keeping it referenced from here keeps the Python object alive.

    Thread-safety: individual calls are serialized against every other
    engine call in the process, but sequences of calls are not atomic.
    ``close()`` must not race an in-flight call on the same handle.
    """

    def __init__(self, ctx: Optional[z3.Context] = None):
        self._ctx = ctx if ctx is not None else z3.main_ctx()
        self._handle = None
        self._depth = 0
        self._last: Optional[SolverResult] = None

        with engine_call():
            handle = z3.Z3_mk_optimize(self._ctx.ref())
            z3.Z3_optimize_inc_ref(self._ctx.ref(), handle)
            self._handle = handle
        _logger().debug("Acquired optimize handle %s", self._handle)

        timeout = default_timeout_ms()
        if timeout is not None:
            self.set_timeout(timeout)

    @classmethod
    def create(cls, ctx: Optional[z3.Context] = None) -> "Optimizer":
        """Create an optimizer bound to ``ctx`` (the main context by default)."""
        return cls(ctx)

    # -- lifecycle -----------------------------------------------------

    @property
    def ctx(self) -> z3.Context:
        return self._ctx

    @property
    def closed(self) -> bool:
        return self._handle is None

    def close(self) -> None:
        """Release the engine reference. Further calls are no-ops."""
        with engine_call():
            handle, self._handle = self._handle, None
            if handle is None:
                return
            z3.Z3_optimize_dec_ref(self._ctx.ref(), handle)
        _logger().debug("Released optimize handle %s", handle)

    def __enter__(self) -> "Optimizer":
        self._require_open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __del__(self):
        # Construction may have failed before the handle was acquired.
        if getattr(self, "_handle", None) is None:
            return
        _logger().warning("Optimizer released by finalizer; call close() or use 'with'")
        self.close()

    def __copy__(self):
        raise TypeError("Optimizer handles cannot be copied")

    def __deepcopy__(self, memo):
        raise TypeError("Optimizer handles cannot be copied")

    def __reduce__(self):
        raise TypeError("Optimizer handles cannot be pickled")

    # -- configuration ---------------------------------------------------

    def set_timeout(self, milliseconds: int) -> None:
        """Bound the duration of subsequent checks.

        A check that runs out of time reports UNKNOWN. The setting persists
        until overwritten.
        """
        if isinstance(milliseconds, bool) or not isinstance(milliseconds, int):
            raise PreconditionError(f"Timeout must be an int, got {type(milliseconds).__name__}")
        if not 0 <= milliseconds <= MAX_TIMEOUT_MS:
            raise PreconditionError(f"Timeout out of range: {milliseconds}")

        with engine_call():
            handle = self._require_open()
            c = self._ctx.ref()
            params = z3.Z3_mk_params(c)
            z3.Z3_params_inc_ref(c, params)
            try:
                symbol = z3.Z3_mk_string_symbol(c, "timeout")
                z3.Z3_params_set_uint(c, params, symbol, milliseconds)
                z3.Z3_optimize_set_params(c, handle, params)
            finally:
                z3.Z3_params_dec_ref(c, params)
        _logger().debug("Optimize timeout set to %d ms", milliseconds)

    # -- declarations ----------------------------------------------------

    def assert_hard(self, expr: z3.ExprRef) -> None:
        """Add a constraint every accepted solution must satisfy."""
        ast = self._ast_of(expr)
        with engine_call():
            z3.Z3_optimize_assert(self._ctx.ref(), self._require_open(), ast)
            self._last = None

    def assert_soft(self, expr: z3.ExprRef, weight: int = 1, group: Optional[str] = None) -> int:
        """Add a constraint whose violation costs ``weight``.

        Args:
            expr: Boolean expression
            weight: Integer penalty, passed to the engine as decimal text
            group: Optional name of the soft-constraint group; the default
                group is used when omitted

        Returns:
            Index of the soft constraint within the engine
        """
        if isinstance(weight, bool) or not isinstance(weight, int):
            raise PreconditionError(f"Soft weight must be an int, got {type(weight).__name__}")
        ast = self._ast_of(expr)
        with engine_call():
            handle = self._require_open()
            c = self._ctx.ref()
            symbol = z3.Z3_mk_string_symbol(c, group) if group is not None else None
            idx = z3.Z3_optimize_assert_soft(c, handle, ast, str(weight), symbol)
            self._last = None
        return idx

    def maximize(self, expr: z3.ExprRef) -> int:
        """Add ``expr`` as an objective to maximize. Returns its index."""
        ast = self._ast_of(expr)
        with engine_call():
            idx = z3.Z3_optimize_maximize(self._ctx.ref(), self._require_open(), ast)
            self._last = None
        return idx

    def minimize(self, expr: z3.ExprRef) -> int:
        """Add ``expr`` as an objective to minimize. Returns its index."""
        ast = self._ast_of(expr)
        with engine_call():
            idx = z3.Z3_optimize_minimize(self._ctx.ref(), self._require_open(), ast)
            self._last = None
        return idx

    def load(self, text: str) -> None:
        """Add the declarations contained in SMT-LIB2 ``text``.

        Parsing is done by the engine. Accepts the output of :meth:`render`.
        """
        with engine_call():
            z3.Z3_optimize_from_string(self._ctx.ref(), self._require_open(), text)
            self._last = None

    # -- backtracking ----------------------------------------------------

    @property
    def depth(self) -> int:
        """Number of pushes not yet matched by a pop."""
        return self._depth

    def push(self) -> None:
        """Create a backtracking point.

        Hard and soft constraints and objectives declared after the push
        are discarded by the matching :meth:`pop`.
        """
        with engine_call():
            z3.Z3_optimize_push(self._ctx.ref(), self._require_open())
            self._depth += 1
            self._last = None
        _logger().debug("push -> depth %d", self._depth)

    def pop(self) -> None:
        """Backtrack one level.

        Precondition: the number of pops cannot exceed the number of pushes.
        A pop without a matching push raises PreconditionError and is never
        forwarded to the engine.
        """
        with engine_call():
            handle = self._require_open()
            if self._depth == 0:
                raise PreconditionError("pop() without a matching push()")
            z3.Z3_optimize_pop(self._ctx.ref(), handle)
            self._depth -= 1
            self._last = None
        _logger().debug("pop -> depth %d", self._depth)

    # -- checking ----------------------------------------------------------

    @property
    def last_result(self) -> Optional[SolverResult]:
        """Result of the most recent check, or None if stale or never run."""
        return self._last

    def check(self) -> bool:
        """Check consistency and produce optimal values.

        Returns True only for SAT; UNSAT and UNKNOWN both give False. Use
        :meth:`check_with_model` to tell them apart.
        """
        return self._check().result == SolverResult.SAT

    def check_with_model(self) -> CheckOutcome:
        """Check and return the tri-state outcome.

        The model is attached for SAT and UNKNOWN (best effort) and omitted
        for UNSAT. It is fetched under the same lock acquisition as the
        check, so concurrent declarations cannot invalidate it in between.
        """
        return self._check(with_model=True)

    def model(self) -> z3.ModelRef:
        """Retrieve the model of the last check.

        Precondition: a check ran after the last declaration or push/pop,
        and it did not report UNSAT.
        """
        with engine_call():
            handle = self._require_open()
            if self._last is None:
                raise PreconditionError("No current check result; call check() first")
            if self._last == SolverResult.UNSAT:
                raise PreconditionError("Last check was unsatisfiable; no model available")
            return self._fetch_model(handle)

    def _check(self, with_model: bool = False) -> CheckOutcome:
        with engine_call():
            handle = self._require_open()
            self._last = None
            start_time = time.time()
            code = z3.Z3_optimize_check(self._ctx.ref(), handle, 0, (z3.Ast * 0)())
            elapsed_ms = (time.time() - start_time) * 1000
            result = from_lbool(code)
            self._last = result
            model = None
            if with_model and result != SolverResult.UNSAT:
                model = self._fetch_model(handle)
        _logger().debug("check -> %s (%.2fms)", result.value, elapsed_ms)
        return CheckOutcome(result=result, model=model, solver_time_ms=elapsed_ms)

    def _fetch_model(self, handle) -> z3.ModelRef:
        ptr = z3.Z3_optimize_get_model(self._ctx.ref(), handle)
        return z3.ModelRef(ptr, self._ctx)

    # -- rendering ---------------------------------------------------------

    def render(self) -> str:
        """Return the engine's SMT-LIB2 text for the current declarations.

        Raises:
            FormatError: if the engine returns no text or undecodable bytes
        """
        try:
            with engine_call():
                text = z3.Z3_optimize_to_string(self._ctx.ref(), self._require_open())
        except UnicodeDecodeError as e:
            raise FormatError(f"Optimize state is not valid text: {e}") from e
        if not isinstance(text, str) or not text:
            raise FormatError("Engine returned no text for optimize state")
        return text

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        state = "closed" if self.closed else f"depth={self._depth}"
        return f"<Optimizer {state}>"

    # -- helpers -----------------------------------------------------------

    def _require_open(self):
        if self._handle is None:
            raise HandleClosedError("Optimizer handle has been released")
        return self._handle

    def _ast_of(self, expr: z3.ExprRef):
        if not z3.is_expr(expr):
            raise PreconditionError(f"Expected a z3 expression, got {type(expr).__name__}")
        if expr.ctx != self._ctx:
            raise PreconditionError("Expression belongs to a different context")
        return expr.as_ast()
