"""
Process-wide serialization of calls into the Z3 C API.

The engine is treated as unsafe for concurrent entry. Every foreign call
made by this package runs inside ``engine_call()``, which holds
``ENGINE_LOCK`` for that single call only. Sequences of calls are *not*
atomic: callers that need a push/assert/check sequence to be uninterrupted
must add their own, coarser lock.
"""
from contextlib import contextmanager
from typing import Iterator
import threading

# Re-entrant so that a finalizer releasing a handle cannot deadlock a
# thread that is already inside a foreign call.
ENGINE_LOCK = threading.RLock()


@contextmanager
def engine_call() -> Iterator[None]:
    """Hold the engine lock for the duration of one foreign call."""
    with ENGINE_LOCK:
        yield
