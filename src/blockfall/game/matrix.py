from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple

import numpy as np

from .errors import OutOfBounds


Coordinate = Tuple[int, int]


class Matrix:
    """Fixed-size 2D grid of small integer cells.

    Cells are addressed as (x, y) with y=0 at the top. 0 means empty and
    positive integers are colour ids. Storage is a numpy array of shape
    (height, width); unlike plain numpy indexing, negative or oversized
    coordinates never wrap and raise `OutOfBounds` instead.
    """

    __slots__ = ("cells",)

    def __init__(self, cells: np.ndarray) -> None:
        if cells.ndim != 2:
            raise ValueError(f"matrix storage must be 2D, got shape {cells.shape}")
        self.cells = cells

    @classmethod
    def create(cls, width: int, height: int) -> "Matrix":
        return cls(np.zeros((int(height), int(width)), dtype=np.int8))

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> "Matrix":
        widths = {len(row) for row in rows}
        if len(widths) > 1:
            raise ValueError(f"rows have differing lengths: {sorted(widths)}")
        return cls(np.array(rows, dtype=np.int8).reshape(len(rows), -1))

    @property
    def width(self) -> int:
        return int(self.cells.shape[1])

    @property
    def height(self) -> int:
        return int(self.cells.shape[0])

    @property
    def is_square(self) -> bool:
        return self.width == self.height

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def _check(self, x: int, y: int) -> None:
        if not self.is_inside(x, y):
            raise OutOfBounds(x, y, self.width, self.height)

    def get(self, x: int, y: int) -> int:
        self._check(x, y)
        return int(self.cells[y, x])

    def set(self, x: int, y: int, value: int) -> None:
        self._check(x, y)
        self.cells[y, x] = value

    def __getitem__(self, xy: Coordinate) -> int:
        x, y = xy
        return self.get(x, y)

    def __setitem__(self, xy: Coordinate, value: int) -> None:
        x, y = xy
        self.set(x, y, value)

    def fill(self, value: int) -> None:
        self.cells.fill(value)

    def clone(self) -> "Matrix":
        return Matrix(self.cells.copy())

    def occupied(self) -> Iterable[Coordinate]:
        """Yield (x, y) of every nonzero cell, row by row."""
        for y, x in np.argwhere(self.cells != 0):
            yield int(x), int(y)

    def rows(self) -> List[List[int]]:
        return self.cells.tolist()

    def as_array(self) -> np.ndarray:
        """Read-only view on the underlying storage."""
        view = self.cells.view()
        view.flags.writeable = False
        return view

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.cells.shape == other.cells.shape and bool(np.array_equal(self.cells, other.cells))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Matrix({self.rows()!r})"
