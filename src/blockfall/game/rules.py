from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict


def _default_bonus() -> Dict[int, int]:
    return {2: 100, 3: 200, 4: 400}


@dataclass
class ScoringRules:
    points_per_line: int = 100
    multi_line_bonus: Dict[int, int] = field(default_factory=_default_bonus)
    points_per_level: int = 1000
    base_interval_ms: int = 1000
    interval_step_ms: int = 100
    min_interval_ms: int = 100

    def score_delta(self, lines: int) -> int:
        """Flat per-line points plus the multi-line bonus: 100/300/500/800."""
        if lines <= 0:
            return 0
        return lines * self.points_per_line + self.multi_line_bonus.get(lines, 0)

    def level_for(self, score: int) -> int:
        return score // self.points_per_level + 1

    def drop_interval_ms_for(self, level: int) -> int:
        return max(self.min_interval_ms, self.base_interval_ms - level * self.interval_step_ms)


DEFAULT_RULES = ScoringRules()


def score_delta(lines: int) -> int:
    return DEFAULT_RULES.score_delta(lines)


def level_for(score: int) -> int:
    return DEFAULT_RULES.level_for(score)


def drop_interval_ms_for(level: int) -> int:
    return DEFAULT_RULES.drop_interval_ms_for(level)
