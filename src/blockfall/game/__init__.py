"""Game module for blockfall.

Exports the falling-block engine and supporting classes:
- Matrix: Fixed-size integer grid used for the field and piece shapes
- TetrominoType / ActivePiece: Piece catalog and falling-piece snapshots
- Playfield: Collision, rotation kicks, merging and row sweeping
- ScoringRules: Score, level and drop-interval formulas
- GameSession: Session lifecycle, gravity ticks and the command surface
"""

from .errors import BlockfallError, InvalidPieceType, OutOfBounds
from .matrix import Matrix
from .pieces import ActivePiece, TetrominoType, color_id_for, random_type, shape_for
from .geometry import (
    collides,
    leftmost_occupied_column,
    occupied_width,
    rotate_clockwise,
    rotate_counter_clockwise,
)
from .playfield import LandingResult, Playfield
from .rules import ScoringRules, drop_interval_ms_for, level_for, score_delta
from .core import Action, GameConfig, GameSession

__all__ = [
    "BlockfallError",
    "InvalidPieceType",
    "OutOfBounds",
    "Matrix",
    "ActivePiece",
    "TetrominoType",
    "color_id_for",
    "random_type",
    "shape_for",
    "collides",
    "leftmost_occupied_column",
    "occupied_width",
    "rotate_clockwise",
    "rotate_counter_clockwise",
    "LandingResult",
    "Playfield",
    "ScoringRules",
    "drop_interval_ms_for",
    "level_for",
    "score_delta",
    "Action",
    "GameConfig",
    "GameSession",
]
