from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from blockfall.game import Action, GameConfig, GameSession, ScoringRules


class BlockfallEnv(gym.Env):
    """Gymnasium wrapper around a `GameSession`.

    Each step applies one `Action` and then advances the session clock by
    `tick_ms`, so gravity keeps pulling the piece down while the agent acts.
    The reward is the score gained during the step.
    """

    metadata = {"render_modes": [], "render_fps": 30}

    def __init__(self, config: Optional[GameConfig] = None, rules: Optional[ScoringRules] = None,
                 tick_ms: float = 50.0, max_episode_steps: int = 10000,
                 render_mode: Optional[str] = None) -> None:
        super().__init__()
        self.game = GameSession(config, rules)
        self.tick_ms = float(tick_ms)
        self.max_episode_steps = int(max_episode_steps)
        self.render_mode = render_mode

        height, width = self.game.config.height, self.game.config.width
        self.observation_space = spaces.Dict(
            {
                # Settled cells are colour ids, the falling piece is negated
                "field": spaces.Box(low=-7, high=7, shape=(height, width), dtype=np.int8),
                "piece": spaces.Discrete(8),
                "level": spaces.Box(low=1, high=np.iinfo(np.int32).max, shape=(1,), dtype=np.int32),
            }
        )
        self.action_space = spaces.Discrete(len(Action))

        self._steps = 0

    def _get_obs(self) -> Dict[str, Any]:
        piece = self.game.get_active_piece()
        piece_id = int(piece.kind) if piece is not None and not self.game.is_game_over() else 0
        return {
            "field": self.game.get_state().astype(np.int8),
            "piece": piece_id,
            "level": np.array([self.game.get_level()], dtype=np.int32),
        }

    def _get_info(self) -> Dict[str, Any]:
        return {
            "score": self.game.get_score(),
            "level": self.game.get_level(),
            "lines_cleared": self.game.get_lines_cleared(),
            "steps": self._steps,
        }

    def reset(self, *, seed: Optional[int] = None,
              options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        if seed is not None:
            self.game.reseed(seed)
        self.game.start()
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action: int):
        score_before = self.game.get_score()
        self.game.step(Action(int(action)))
        self.game.advance(self.tick_ms)
        self._steps += 1

        reward = float(self.game.get_score() - score_before)
        terminated = self.game.is_game_over()
        truncated = self._steps >= self.max_episode_steps
        return self._get_obs(), reward, terminated, truncated, self._get_info()

    def render(self) -> None:
        # Drawing belongs to the presentation layer.
        return None

    def close(self) -> None:
        pass
