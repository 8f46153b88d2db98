"""Exception classes for IconMatrix."""


class MatrixError(Exception):
    """Base exception for matrix errors."""

    pass


class DimensionMismatchError(MatrixError, ValueError):
    """Raised when frames that must share a size do not."""

    pass


class OutOfBoundsError(MatrixError, IndexError):
    """Raised when a cell coordinate lies outside the frame."""

    pass


class SvgLoadError(MatrixError):
    """Raised when an SVG document cannot be parsed or rendered."""

    pass
