"""
Gymnasium Environment Wrapper
=============================

Provides a standard Gymnasium interface to Flappy Dragon.
One step is one physics tick. Reward is always 0.0 - agents compute their
own from info.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple, Union

import numpy as np

import gymnasium as gym
from gymnasium import spaces

from flappy_dragon.dragon_core.config_loader import GameConfig, load_config
from flappy_dragon.dragon_core.game import GameState
from flappy_dragon.dragon_core.render_text import TextSurface
from flappy_dragon.dragon_core.state_snapshot import SnapshotBuilder
from flappy_dragon.dragon_core.surface import FrameContext

GLIDE = 0
FLAP = 1


class FlappyEnv(gym.Env):
    """
    Flappy Dragon as a Gymnasium environment.

    Action Space:
        Discrete(2): 0 = glide, 1 = flap.

    Observation Space:
        Dict with dragon position/velocity, score, tick counter, and
        fixed-size arrays describing the nearest obstacles.

    Reward:
        Always 0.0. Agents must compute their own reward from the info dict.

    Info:
        Contains score, delta_score, frame_count, obstacle_count,
        terminated_reason.
    """

    metadata = {
        "render_modes": ["ansi", "rgb_array"],
        "render_fps": 16,
    }

    def __init__(
        self,
        config_path: Optional[str] = None,
        render_mode: Optional[str] = None,
        debug: bool = False,
    ):
        """
        Initialize environment.

        Args:
            config_path: Path to game_config.yaml. Uses default if None.
            render_mode: "ansi" for a text frame, "rgb_array" for numpy, None for headless.
            debug: If True, prints [DEBUG] lines on construction and termination.
        """
        super().__init__()

        if render_mode is not None and render_mode not in self.metadata["render_modes"]:
            raise ValueError(f"Unsupported render_mode: {render_mode}")

        self._config = load_config(config_path)
        self.render_mode = render_mode
        self._debug = debug

        self._game = GameState(config=self._config)
        self._surface = TextSurface(self._config)
        self._snapshot_builder = SnapshotBuilder(self._config)

        # Just over the threshold: exactly one physics tick per step
        self._tick_ms = self._config.timing.frame_duration_ms + 1.0

        self.action_space = spaces.Discrete(2)
        self.observation_space = self._build_observation_space()

        if self._debug:
            print(f"[DEBUG] FlappyEnv initialized")
            print(f"[DEBUG]   Screen: {self._config.screen.width}x{self._config.screen.height}")
            print(f"[DEBUG]   Tick: {self._config.timing.frame_duration_ms}ms")
            print(f"[DEBUG]   Max obstacles: {self._config.observation.max_obstacles}")

    def _build_observation_space(self) -> spaces.Dict:
        """Build the observation space definition."""
        max_obs = self._config.observation.max_obstacles
        player = self._config.player
        int64_max = np.iinfo(np.int64).max

        return spaces.Dict({
            "player_x": spaces.Box(low=0, high=int64_max, shape=(), dtype=np.int64),
            "player_y": spaces.Box(low=0, high=np.inf, shape=(), dtype=np.float32),
            "velocity": spaces.Box(
                low=player.flap_velocity, high=player.terminal_velocity,
                shape=(), dtype=np.float32
            ),
            "score": spaces.Box(low=0, high=int64_max, shape=(), dtype=np.int64),
            "frame_count": spaces.Box(low=0, high=int64_max, shape=(), dtype=np.int64),
            "obstacle_dx": spaces.Box(low=-np.inf, high=np.inf, shape=(max_obs,), dtype=np.float32),
            "obstacle_gap_y": spaces.Box(low=0, high=np.inf, shape=(max_obs,), dtype=np.float32),
            "obstacle_size": spaces.Box(low=0, high=np.inf, shape=(max_obs,), dtype=np.float32),
            "obstacle_mask": spaces.MultiBinary(max_obs),
        })

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None
    ) -> Tuple[Dict[str, np.ndarray], Dict[str, Any]]:
        """
        Reset the environment straight into a fresh run.

        Args:
            seed: Random seed for obstacle placement.
            options: Additional options (unused).

        Returns:
            (observation, info) tuple.
        """
        super().reset(seed=seed)

        self._game.rng.reset(seed)
        self._game.restart()
        # Zero-time frame: draws the opening screen without advancing physics
        self._game.tick(FrameContext(surface=self._surface))

        info = self._game.get_info()
        info["delta_score"] = 0
        return self._get_obs(), info

    def step(
        self,
        action: Union[int, np.integer]
    ) -> Tuple[Dict[str, np.ndarray], float, bool, bool, Dict[str, Any]]:
        """
        Execute one physics tick.

        Args:
            action: 0 to glide, 1 to flap.

        Returns:
            (observation, reward, terminated, truncated, info) tuple.
            Reward is always 0.0.

        Raises:
            ValueError: If action is not in the action space.
        """
        if not self.action_space.contains(int(action)):
            raise ValueError(f"Invalid action {action!r}, expected 0 or 1")

        if self._game.is_over:
            info = self._game.get_info()
            info["delta_score"] = 0
            return self._get_obs(), 0.0, True, False, info

        score_before = self._game.score
        key = self._config.controls.flap if int(action) == FLAP else None
        ctx = FrameContext(surface=self._surface, frame_time_ms=self._tick_ms, key=key)
        self._game.tick(ctx)

        terminated = self._game.is_over
        info = self._game.get_info()
        info["delta_score"] = self._game.score - score_before

        if self._debug and terminated:
            print(f"[DEBUG] TERMINATED: {info['terminated_reason']} "
                  f"(score={info['score']}, tick={info['frame_count']})")

        return self._get_obs(), 0.0, terminated, False, info

    def _get_obs(self) -> Dict[str, np.ndarray]:
        return self._snapshot_builder.build(self._game).to_obs_dict()

    def render(self) -> Optional[Union[str, np.ndarray]]:
        """
        Render the last drawn frame.

        Returns:
            Text frame for "ansi", RGB array for "rgb_array", None otherwise.
        """
        if self.render_mode == "ansi":
            return self._surface.to_string()
        if self.render_mode == "rgb_array":
            return self._surface.to_rgb_array()
        return None

    def close(self) -> None:
        """Nothing to release; the text surface is plain arrays."""

    @property
    def game(self) -> GameState:
        """Access to underlying game (for debugging/tools)."""
        return self._game

    @property
    def config(self) -> GameConfig:
        """Game configuration."""
        return self._config
