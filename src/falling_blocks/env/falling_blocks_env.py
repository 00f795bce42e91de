from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from falling_blocks.game import Command, FallingBlocksGame, GameConfig, PieceKind, SHADOW
from falling_blocks.visualization.renderer import color_for_value


class FallingBlocksEnv(gym.Env):
    """
    One environment step is one engine tick: the chosen command is applied,
    then gravity/locking runs for that tick.

    Actions (5 total):
      0: No-op
      1: Move Left
      2: Move Right
      3: Rotate CW
      4: Soft Drop (held until the next piece spawns)

    Reward is the engine score gained during the step.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    ACTIONS = (
        Command.NONE,
        Command.MOVE_LEFT,
        Command.MOVE_RIGHT,
        Command.ROTATE_CW,
        Command.SOFT_DROP,
    )

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        render_mode: Optional[str] = None,
        max_episode_steps: int = 20_000,
        terminal_penalty: float = 0.0,
    ) -> None:
        super().__init__()
        self.game = FallingBlocksGame(config)
        self.render_mode = render_mode
        self.max_episode_steps = int(max_episode_steps)
        self.terminal_penalty = float(terminal_penalty)

        h, w = self.game.grid.height, self.game.grid.width
        k = self.game.config.queue_length
        self.observation_space = spaces.Dict(
            {
                # -1 shadow, 0 empty, 1..7 piece kinds (falling piece included)
                "grid": spaces.Box(low=SHADOW, high=len(PieceKind), shape=(h, w), dtype=np.int8),
                "next": spaces.Box(low=1, high=len(PieceKind), shape=(k,), dtype=np.int8),
            }
        )
        self.action_space = spaces.Discrete(len(self.ACTIONS))
        self._steps = 0

    def _get_obs(self) -> Dict[str, Any]:
        return {
            "grid": self.game.grid.clone_state().astype(np.int8),
            "next": np.array([int(k) for k in self.game.next_kinds], dtype=np.int8),
        }

    def _get_info(self) -> Dict[str, Any]:
        info: Dict[str, Any] = self.game.get_stats()
        info["steps"] = self._steps
        return info

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        # without a seed the engine keeps drawing from its own stream
        self.game.reset(seed)
        self._steps = 0
        # settle the first tick so the piece and its shadow are on the grid
        self.game.update()
        return self._get_obs(), self._get_info()

    def step(self, action):
        if not self.action_space.contains(action):
            raise ValueError(f"invalid action {action!r}")
        before = self.game.score
        self.game.apply(self.ACTIONS[int(action)])
        self.game.update()
        self._steps += 1

        reward = float(self.game.score - before)
        terminated = bool(self.game.game_over)
        truncated = self._steps >= self.max_episode_steps and not terminated
        if terminated:
            reward += self.terminal_penalty

        return self._get_obs(), reward, terminated, truncated, self._get_info()

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode == "rgb_array":
            grid = self.game.grid.grid
            cell = 12
            h, w = grid.shape
            img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
            for y in range(h):
                for x in range(w):
                    img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color_for_value(int(grid[y, x]))
            return img
        return None

    def close(self) -> None:
        pass
