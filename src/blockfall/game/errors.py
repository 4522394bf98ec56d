# errors.py - Exceptions raised by the blockfall engine.


class BlockfallError(Exception):
    """Base class for engine errors."""


class OutOfBounds(BlockfallError, IndexError):
    """A matrix cell was addressed outside the matrix dimensions."""

    def __init__(self, x: int, y: int, width: int, height: int) -> None:
        super().__init__(f"cell ({x}, {y}) is outside a {width}x{height} matrix")
        self.x = x
        self.y = y


class InvalidPieceType(BlockfallError, ValueError):
    """A piece kind outside the seven known tetrominoes was requested."""
