"""
errors.py - Input errors raised by the step generators
========================================================
Only malformed input raises.  Designed stopping points inside an
algorithm (a full probing table, say) are reported as Steps instead.
"""


class InvalidArgument(ValueError):
    """Malformed or out-of-contract input reached a generator or the caller layer."""


def require_positive_int(value, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise InvalidArgument(f"{name} must be a positive integer, got {value!r}")
    return value


def require_non_negative_int(value, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise InvalidArgument(f"{name} must be a non-negative integer, got {value!r}")
    return value
