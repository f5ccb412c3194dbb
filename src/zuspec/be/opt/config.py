"""
Environment-driven defaults.

Users can set $ZUSPEC_OPT_TIMEOUT_MS to apply a timeout (in milliseconds)
to every newly created optimizer.
"""
import logging
import os
from typing import Optional

TIMEOUT_ENV = "ZUSPEC_OPT_TIMEOUT_MS"

MAX_TIMEOUT_MS = 2**32 - 1


def _logger() -> logging.Logger:
    return logging.getLogger(__name__)


def default_timeout_ms() -> Optional[int]:
    """Return the timeout requested via $ZUSPEC_OPT_TIMEOUT_MS, if any."""
    raw = os.environ.get(TIMEOUT_ENV)
    if raw is None or not raw.strip():
        return None

    try:
        value = int(raw.strip())
    except ValueError:
        _logger().warning("Ignoring %s=%r: not an integer", TIMEOUT_ENV, raw)
        return None

    if not 0 <= value <= MAX_TIMEOUT_MS:
        _logger().warning("Ignoring %s=%r: out of range", TIMEOUT_ENV, raw)
        return None

    return value
