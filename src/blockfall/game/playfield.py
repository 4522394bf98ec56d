from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Iterator, Optional

import numpy as np

from . import geometry
from .geometry import collides, leftmost_occupied_column, occupied_width
from .matrix import Matrix
from .pieces import ActivePiece, PieceKind, RandomSource, TetrominoType, piece_type, random_type, shape_for


logger = logging.getLogger(__name__)


@dataclass
class LandingResult:
    lines_cleared: int
    game_over: bool


def kick_shifts(limit: int) -> Iterator[int]:
    """Cumulative x shifts tried after a rotation: 0, +1, -1, +2, -2, ...

    The step alternates +1, -2, +3, -4, ... and the scan ends once the next
    step exceeds `limit`.
    """
    shift, step = 0, 1
    yield shift
    while True:
        shift += step
        step = -(step + (1 if step > 0 else -1))
        if step > limit:
            return
        yield shift


class Playfield:
    """Field matrix plus the falling piece.

    Illegal moves and rotations leave the state untouched. Landing merges the
    piece, sweeps full rows and spawns the next piece; a spawn that collides
    immediately ends the game.
    """

    def __init__(self, width: int = 10, height: int = 20, rng: Optional[RandomSource] = None,
                 spawn_y: int = 0) -> None:
        self.field = Matrix.create(width, height)
        self.rng: RandomSource = rng if rng is not None else random.Random()
        self.spawn_y = int(spawn_y)
        self.kind: Optional[TetrominoType] = None
        self.shape: Optional[Matrix] = None
        self.x = 0
        self.y = 0
        self.game_over = False

    @property
    def width(self) -> int:
        return self.field.width

    @property
    def height(self) -> int:
        return self.field.height

    @property
    def has_piece(self) -> bool:
        return self.shape is not None and not self.game_over

    def reset(self, preset: Optional[Matrix] = None) -> None:
        self.field.fill(0)
        if preset is not None:
            if (preset.width, preset.height) != (self.width, self.height):
                raise ValueError(
                    f"preset is {preset.width}x{preset.height}, field is {self.width}x{self.height}"
                )
            self.field.cells[...] = preset.cells
        self.kind = None
        self.shape = None
        self.x = 0
        self.y = 0
        self.game_over = False

    def spawn(self, kind: Optional[PieceKind] = None) -> bool:
        """Place a new piece centred at the top. Returns False on game over."""
        self.kind = random_type(self.rng) if kind is None else piece_type(kind)
        self.shape = shape_for(self.kind)
        left = leftmost_occupied_column(self.shape)
        x = self.width // 2 - self.shape.width // 2 - left
        self.x = max(x, -left)
        self.y = self.spawn_y
        if collides(self.field, self.shape, (self.x, self.y)):
            self.game_over = True
            logger.info("Spawn of %s at (%d, %d) blocked; game over", self.kind.name, self.x, self.y)
            return False
        logger.debug("Spawned %s at (%d, %d)", self.kind.name, self.x, self.y)
        return True

    def _within_columns(self, x: int) -> bool:
        assert self.shape is not None
        left = leftmost_occupied_column(self.shape)
        return x + left >= 0 and x + occupied_width(self.shape) <= self.width

    def _collides_at(self, x: int, y: int) -> bool:
        assert self.shape is not None
        return collides(self.field, self.shape, (x, y))

    def move_horizontal(self, direction: int) -> None:
        if not self.has_piece:
            return
        new_x = self.x + direction
        if not self._within_columns(new_x):
            return
        original_x = self.x
        self.x = new_x
        if self._collides_at(self.x, self.y):
            self.x = original_x

    def rotate(self, direction: int) -> None:
        if not self.has_piece:
            return
        assert self.shape is not None
        snapshot = self.shape.clone()
        original_x = self.x
        old_left = leftmost_occupied_column(self.shape)
        geometry.rotate(self.shape, direction)
        base_x = self.x + old_left - leftmost_occupied_column(self.shape)
        for shift in kick_shifts(self.shape.width):
            candidate = base_x + shift
            if self._within_columns(candidate) and not self._collides_at(candidate, self.y):
                self.x = candidate
                return
        self.shape.cells[...] = snapshot.cells
        self.x = original_x

    def soft_drop_one_step(self) -> Optional[LandingResult]:
        """Fall one row; land instead if the row below is blocked."""
        if not self.has_piece:
            return None
        self.y += 1
        if self._collides_at(self.x, self.y):
            self.y -= 1
            return self._land()
        return None

    def hard_drop(self) -> Optional[LandingResult]:
        if not self.has_piece:
            return None
        while not self._collides_at(self.x, self.y + 1):
            self.y += 1
        return self._land()

    def merge(self) -> None:
        """Write the piece's occupied cells into the field, skipping any outside it."""
        assert self.shape is not None
        for x, y in self.shape.occupied():
            fx, fy = self.x + x, self.y + y
            if self.field.is_inside(fx, fy):
                self.field.set(fx, fy, self.shape.get(x, y))

    def sweep_rows(self) -> int:
        cells = self.field.cells
        cleared = 0
        y = self.height - 1
        while y >= 0:
            if np.all(cells[y] != 0):
                # Shift everything above down by one; same index is checked again.
                cells[1 : y + 1] = cells[0:y].copy()
                cells[0] = 0
                cleared += 1
            else:
                y -= 1
        return cleared

    def _land(self) -> LandingResult:
        assert self.kind is not None
        logger.debug("Landed %s at (%d, %d)", self.kind.name, self.x, self.y)
        self.merge()
        lines = self.sweep_rows()
        if lines:
            logger.debug("Cleared %d row(s)", lines)
        self.spawn()
        return LandingResult(lines_cleared=lines, game_over=self.game_over)

    def active_piece(self) -> Optional[ActivePiece]:
        if self.shape is None or self.kind is None:
            return None
        return ActivePiece(kind=self.kind, shape=self.shape.clone(), position=(self.x, self.y))

    def overlay(self) -> np.ndarray:
        """Copy of the field with the active piece drawn as negative colour ids."""
        state = self.field.cells.copy()
        if self.has_piece:
            assert self.kind is not None and self.shape is not None
            for x, y in self.shape.occupied():
                fx, fy = self.x + x, self.y + y
                if self.field.is_inside(fx, fy):
                    state[fy, fx] = -int(self.kind)
        return state
