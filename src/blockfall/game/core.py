from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional

import numpy as np

from .matrix import Matrix
from .pieces import ActivePiece, RandomSource
from .playfield import LandingResult, Playfield
from .rules import ScoringRules


logger = logging.getLogger(__name__)


class Action(IntEnum):
    LEFT = 0
    RIGHT = 1
    ROTATE_CW = 2
    ROTATE_CCW = 3
    SOFT_DROP = 4
    HARD_DROP = 5
    NONE = 6


@dataclass
class GameConfig:
    width: int = 10
    height: int = 20
    random_seed: Optional[int] = None
    spawn_y: int = 0


class GameSession:
    """One game from start to game over.

    This is the only object a presentation layer talks to: it forwards player
    commands to the playfield, turns elapsed time into gravity, and keeps the
    score, level and drop interval in step with cleared rows. Commands are
    ignored while paused or after game over; `start()` begins a new game.
    """

    def __init__(self, config: Optional[GameConfig] = None, rules: Optional[ScoringRules] = None,
                 rng: Optional[RandomSource] = None) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.rng: RandomSource = rng if rng is not None else random.Random(self.config.random_seed)
        self.playfield = Playfield(self.config.width, self.config.height, rng=self.rng,
                                   spawn_y=self.config.spawn_y)
        self.score = 0
        self.level = 1
        self.drop_interval_ms = self.rules.drop_interval_ms_for(self.level)
        self.lines_cleared_total = 0
        self.drop_counter_ms = 0.0
        self.paused = False
        self.started = False

    @property
    def game_over(self) -> bool:
        return self.playfield.game_over

    def start(self, preset: Optional[Matrix] = None) -> None:
        """Reset everything and spawn the first piece.

        `preset` is an optional starting layout loaded as part of the reset.
        """
        self.playfield.reset(preset)
        self.score = 0
        self.level = 1
        self.drop_interval_ms = self.rules.drop_interval_ms_for(self.level)
        self.lines_cleared_total = 0
        self.drop_counter_ms = 0.0
        self.paused = False
        self.started = True
        logger.info("Game started on a %dx%d field", self.playfield.width, self.playfield.height)
        self.playfield.spawn()

    def reseed(self, seed: Optional[int]) -> None:
        """Reseed the random source, when it supports seeding."""
        seed_fn = getattr(self.rng, "seed", None)
        if seed_fn is not None:
            seed_fn(seed)

    def pause(self) -> None:
        # State is frozen after game over; only start() leaves it.
        if self.game_over:
            return
        if not self.paused:
            self.paused = True
            logger.info("Paused")

    def resume(self) -> None:
        if self.paused:
            self.paused = False
            logger.info("Resumed")

    def toggle_pause(self) -> None:
        if self.paused:
            self.resume()
        else:
            self.pause()

    def _accepts_commands(self) -> bool:
        return self.started and not self.paused and not self.game_over

    def _apply_landing(self, result: Optional[LandingResult]) -> None:
        if result is None:
            return
        if result.lines_cleared:
            self.lines_cleared_total += result.lines_cleared
            self.score += self.rules.score_delta(result.lines_cleared)
            self.level = self.rules.level_for(self.score)
            self.drop_interval_ms = self.rules.drop_interval_ms_for(self.level)
            logger.debug("Score %d, level %d, interval %d ms", self.score, self.level, self.drop_interval_ms)
        if result.game_over:
            logger.info("Game over with score %d after %d line(s)", self.score, self.lines_cleared_total)

    def advance(self, delta_ms: float) -> None:
        """Let `delta_ms` of game time pass; drops at most one row per call."""
        if delta_ms < 0:
            raise ValueError(f"delta_ms must be non-negative, got {delta_ms}")
        if not self._accepts_commands():
            return
        self.drop_counter_ms += delta_ms
        if self.drop_counter_ms > self.drop_interval_ms:
            self._apply_landing(self.playfield.soft_drop_one_step())
            self.drop_counter_ms = 0.0

    def move_left(self) -> None:
        if self._accepts_commands():
            self.playfield.move_horizontal(-1)

    def move_right(self) -> None:
        if self._accepts_commands():
            self.playfield.move_horizontal(1)

    def rotate_cw(self) -> None:
        if self._accepts_commands():
            self.playfield.rotate(1)

    def rotate_ccw(self) -> None:
        if self._accepts_commands():
            self.playfield.rotate(-1)

    def soft_drop(self) -> None:
        if self._accepts_commands():
            self._apply_landing(self.playfield.soft_drop_one_step())
            self.drop_counter_ms = 0.0

    def hard_drop(self) -> None:
        if self._accepts_commands():
            self._apply_landing(self.playfield.hard_drop())
            self.drop_counter_ms = 0.0

    def step(self, action: Action) -> None:
        if action == Action.LEFT:
            self.move_left()
        elif action == Action.RIGHT:
            self.move_right()
        elif action == Action.ROTATE_CW:
            self.rotate_cw()
        elif action == Action.ROTATE_CCW:
            self.rotate_ccw()
        elif action == Action.SOFT_DROP:
            self.soft_drop()
        elif action == Action.HARD_DROP:
            self.hard_drop()
        elif action == Action.NONE:
            pass
        else:
            raise ValueError(f"unknown action {action!r}")

    def get_field(self) -> Matrix:
        return self.playfield.field.clone()

    def get_active_piece(self) -> Optional[ActivePiece]:
        return self.playfield.active_piece()

    def get_score(self) -> int:
        return self.score

    def get_level(self) -> int:
        return self.level

    def get_drop_interval_ms(self) -> int:
        return self.drop_interval_ms

    def get_lines_cleared(self) -> int:
        return self.lines_cleared_total

    def is_game_over(self) -> bool:
        return self.game_over

    def is_paused(self) -> bool:
        return self.paused

    def get_state(self) -> np.ndarray:
        return self.playfield.overlay()
