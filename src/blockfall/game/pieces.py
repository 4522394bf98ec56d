from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Dict, List, Protocol, Sequence, Tuple, Union

import numpy as np

from .errors import InvalidPieceType
from .matrix import Matrix


class TetrominoType(IntEnum):
    """Piece kinds; the value doubles as the colour id written into cells."""

    I = 1
    J = 2
    L = 3
    O = 4
    S = 5
    T = 6
    Z = 7


PieceKind = Union[TetrominoType, int, str]


class RandomSource(Protocol):
    def choice(self, seq: Sequence[Any]) -> Any: ...


def _frozen(rows: Sequence[Sequence[int]]) -> np.ndarray:
    shape = np.array(rows, dtype=np.int8)
    shape.flags.writeable = False
    return shape


BASE_SHAPES: Dict[TetrominoType, np.ndarray] = {
    TetrominoType.I: _frozen([[0, 0, 0, 0], [1, 1, 1, 1], [0, 0, 0, 0], [0, 0, 0, 0]]),
    TetrominoType.J: _frozen([[2, 0, 0], [2, 2, 2], [0, 0, 0]]),
    TetrominoType.L: _frozen([[0, 0, 3], [3, 3, 3], [0, 0, 0]]),
    TetrominoType.O: _frozen([[0, 4, 4], [0, 4, 4], [0, 0, 0]]),
    TetrominoType.S: _frozen([[0, 5, 5], [5, 5, 0], [0, 0, 0]]),
    TetrominoType.T: _frozen([[0, 6, 0], [6, 6, 6], [0, 0, 0]]),
    TetrominoType.Z: _frozen([[7, 7, 0], [0, 7, 7], [0, 0, 0]]),
}

ALL_TYPES: Tuple[TetrominoType, ...] = tuple(TetrominoType)


def piece_type(kind: PieceKind) -> TetrominoType:
    """Resolve an enum member, colour id or letter name to a TetrominoType."""
    if isinstance(kind, TetrominoType):
        return kind
    if isinstance(kind, str):
        try:
            return TetrominoType[kind.upper()]
        except KeyError:
            raise InvalidPieceType(f"unknown piece type {kind!r}") from None
    if isinstance(kind, (int, np.integer)) and not isinstance(kind, bool):
        try:
            return TetrominoType(int(kind))
        except ValueError:
            raise InvalidPieceType(f"unknown piece type {kind!r}") from None
    raise InvalidPieceType(f"unknown piece type {kind!r}")


def shape_for(kind: PieceKind) -> Matrix:
    """Fresh, writable copy of the canonical shape for `kind`."""
    return Matrix(BASE_SHAPES[piece_type(kind)].copy())


def color_id_for(kind: PieceKind) -> int:
    return int(piece_type(kind))


def random_type(rng: RandomSource) -> TetrominoType:
    return piece_type(rng.choice(ALL_TYPES))


@dataclass(frozen=True)
class ActivePiece:
    """Read-only snapshot of the falling piece."""

    kind: TetrominoType
    shape: Matrix
    position: Tuple[int, int]

    @property
    def x(self) -> int:
        return self.position[0]

    @property
    def y(self) -> int:
        return self.position[1]

    def cells(self) -> List[Tuple[int, int]]:
        """Field coordinates covered by the piece."""
        ox, oy = self.position
        return [(ox + x, oy + y) for x, y in self.shape.occupied()]
