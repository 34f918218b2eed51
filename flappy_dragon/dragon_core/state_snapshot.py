"""
State Snapshot
==============

Packs game state into fixed-size numpy arrays for Gymnasium observations.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, Optional

import numpy as np

from flappy_dragon.dragon_core.config_loader import GameConfig, get_config

if TYPE_CHECKING:
    from flappy_dragon.dragon_core.game import GameState


@dataclass
class GameSnapshot:
    """
    Game state at one instant.

    Obstacle arrays are fixed-size, nearest obstacle first, with a mask for
    unused slots. `obstacle_dx` is the world distance from the dragon.
    """
    player_x: int
    player_y: int
    velocity: float
    score: int
    frame_count: int
    obstacle_count: int

    obstacle_dx: np.ndarray       # (MAX_OBS,) float32
    obstacle_gap_y: np.ndarray    # (MAX_OBS,) float32
    obstacle_size: np.ndarray     # (MAX_OBS,) float32
    obstacle_mask: np.ndarray     # (MAX_OBS,) int8

    def to_obs_dict(self) -> Dict[str, np.ndarray]:
        """Convert to Gymnasium observation dictionary."""
        return {
            "player_x": np.array(self.player_x, dtype=np.int64),
            "player_y": np.array(self.player_y, dtype=np.float32),
            "velocity": np.array(self.velocity, dtype=np.float32),
            "score": np.array(self.score, dtype=np.int64),
            "frame_count": np.array(self.frame_count, dtype=np.int64),
            "obstacle_dx": self.obstacle_dx.copy(),
            "obstacle_gap_y": self.obstacle_gap_y.copy(),
            "obstacle_size": self.obstacle_size.copy(),
            "obstacle_mask": self.obstacle_mask.copy(),
        }


class SnapshotBuilder:
    """Builds game state snapshots with pre-allocated arrays."""

    def __init__(self, config: Optional[GameConfig] = None):
        if config is None:
            config = get_config()

        self._max_obstacles = config.observation.max_obstacles

        self._obstacle_dx = np.zeros(self._max_obstacles, dtype=np.float32)
        self._obstacle_gap_y = np.zeros(self._max_obstacles, dtype=np.float32)
        self._obstacle_size = np.zeros(self._max_obstacles, dtype=np.float32)
        self._obstacle_mask = np.zeros(self._max_obstacles, dtype=np.int8)

    @property
    def max_obstacles(self) -> int:
        return self._max_obstacles

    def build(self, game: "GameState") -> GameSnapshot:
        """Build a snapshot from current game state."""
        self._obstacle_dx.fill(0)
        self._obstacle_gap_y.fill(0)
        self._obstacle_size.fill(0)
        self._obstacle_mask.fill(0)

        player = game.player
        nearest = sorted(game.obstacles, key=lambda o: o.x)[:self._max_obstacles]
        for i, obstacle in enumerate(nearest):
            self._obstacle_dx[i] = obstacle.x - player.x
            self._obstacle_gap_y[i] = obstacle.gap_y
            self._obstacle_size[i] = obstacle.size
            self._obstacle_mask[i] = 1

        return GameSnapshot(
            player_x=player.x,
            player_y=player.y,
            velocity=player.velocity,
            score=game.score,
            frame_count=game.frame_count,
            obstacle_count=len(game.obstacles),
            obstacle_dx=self._obstacle_dx.copy(),
            obstacle_gap_y=self._obstacle_gap_y.copy(),
            obstacle_size=self._obstacle_size.copy(),
            obstacle_mask=self._obstacle_mask.copy(),
        )
