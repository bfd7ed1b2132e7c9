"""Exceptions raised by the stock cutting domain."""


class StockcutError(Exception):
    """Base class for all stockcut errors."""

    pass


class InvalidDimensionError(StockcutError, ValueError):
    """Raised when a piece or sheet is built with degenerate dimensions.

    Width, height and thickness must be positive and quantities at least 1.
    Subclasses ValueError so callers validating plain input can catch either.
    """

    pass


class PackingInconsistencyError(StockcutError):
    """Raised when a packing heuristic produces an inconsistent layout.

    Packers contain this error themselves: a failed attempt on one sheet is
    reported as "nothing placed" and never escapes to the caller.
    """

    pass
