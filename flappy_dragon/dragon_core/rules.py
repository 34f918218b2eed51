"""
Game Rules
==========

Game modes, obstacle spawn cadence, and termination conditions.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from flappy_dragon.dragon_core.config_loader import GameConfig, get_config
from flappy_dragon.dragon_core.obstacle import Obstacle
from flappy_dragon.dragon_core.player import Player


class GameMode(Enum):
    """Closed set of screens. Each has its own per-frame handler."""
    MENU = "menu"
    PLAYING = "playing"
    END = "end"


@dataclass
class TerminationResult:
    """Result of termination check."""
    terminated: bool
    reason: str

    @staticmethod
    def none() -> "TerminationResult":
        return TerminationResult(False, "")

    @staticmethod
    def game_over(reason: str) -> "TerminationResult":
        return TerminationResult(True, reason)


class SpawnRules:
    """Decides when a new obstacle joins the course."""

    def __init__(self, config: Optional[GameConfig] = None):
        if config is None:
            config = get_config()

        self._interval = config.timing.spawn_interval_ticks

    @property
    def interval(self) -> int:
        """Physics ticks between spawns."""
        return self._interval

    def should_spawn(self, frame_count: int) -> bool:
        """True on every tick that lands on a multiple of the interval."""
        return frame_count % self._interval == 0


class TerminationRules:
    """
    Handles run-ending conditions.

    - Collision: the dragon is in a wall column outside its gap
    - Out of bounds: the dragon's bottom edge fell past the last screen row
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize termination rules.

        Args:
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._screen_height = config.screen.height

    def check_collision(self, player: Player, obstacle: Obstacle) -> TerminationResult:
        """Check the dragon against a single obstacle."""
        if obstacle.hit_obstacle(player):
            return TerminationResult.game_over("collision")
        return TerminationResult.none()

    def check_out_of_bounds(self, player: Player) -> TerminationResult:
        """Check whether the dragon fell off the bottom of the screen."""
        if player.y + player.height > self._screen_height:
            return TerminationResult.game_over("out_of_bounds")
        return TerminationResult.none()


class GameRules:
    """
    Combined interface for all game rules.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        if config is None:
            config = get_config()

        self.spawn = SpawnRules(config)
        self.termination = TerminationRules(config)
