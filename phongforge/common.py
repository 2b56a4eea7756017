"""
Shared numeric helpers and the base error type.

Every floating point comparison in the tracer goes through `approx_equal`
so that tuples, matrices and materials compare with the same tolerance.
"""

EPSILON = 1e-5


class TracerError(Exception):
    """Base class for errors raised by the tracer."""
    pass


def approx_equal(a: float, b: float) -> bool:
    """Return True if a and b differ by less than EPSILON."""
    return abs(a - b) < EPSILON
