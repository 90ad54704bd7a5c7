from __future__ import annotations


class InvariantViolation(AssertionError):
    """
    Raised when the generator produces something inconsistent.

    This is a bug in the generator, not bad input, so callers should not
    try to recover from it.
    """
