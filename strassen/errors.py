class MatrixError(ValueError):
    """Base class for every error raised by the matrix core."""


class InvalidDimension(MatrixError):
    """A row or column count is not positive, or a reduction asks for more than exists."""


class SizeMismatch(MatrixError):
    """The element buffer length does not equal rows * cols."""


class DimensionMismatch(MatrixError):
    """Two operands have incompatible shapes for the requested operation."""
