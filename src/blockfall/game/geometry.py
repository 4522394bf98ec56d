from __future__ import annotations

from typing import Tuple

import numpy as np

from .matrix import Matrix


def _rotate(shape: Matrix, clockwise: bool) -> None:
    if not shape.is_square:
        raise ValueError(f"only square shapes rotate, got {shape.width}x{shape.height}")
    transposed = shape.cells.T
    if clockwise:
        rotated = transposed[:, ::-1]  # reverse each row
    else:
        rotated = transposed[::-1, :]  # reverse row order
    # Copy first: source and destination share storage.
    shape.cells[...] = rotated.copy()


def rotate_clockwise(shape: Matrix) -> None:
    _rotate(shape, clockwise=True)


def rotate_counter_clockwise(shape: Matrix) -> None:
    _rotate(shape, clockwise=False)


def rotate(shape: Matrix, direction: int) -> None:
    """Rotate in place; positive direction is clockwise."""
    _rotate(shape, clockwise=direction > 0)


def _occupied_columns(shape: Matrix) -> np.ndarray:
    return np.flatnonzero(np.any(shape.cells != 0, axis=0))


def leftmost_occupied_column(shape: Matrix) -> int:
    columns = _occupied_columns(shape)
    if columns.size == 0:
        return shape.width
    return int(columns[0])


def occupied_width(shape: Matrix) -> int:
    columns = _occupied_columns(shape)
    if columns.size == 0:
        return 0
    return int(columns[-1]) + 1


def collides(field: Matrix, shape: Matrix, offset: Tuple[int, int]) -> bool:
    """True if `shape` placed at `offset` overlaps a wall, the floor or a settled block.

    Cells above the top row also count as a collision.
    """
    ox, oy = offset
    for x, y in shape.occupied():
        fx, fy = ox + x, oy + y
        if not field.is_inside(fx, fy):
            return True
        if field.get(fx, fy) != 0:
            return True
    return False
