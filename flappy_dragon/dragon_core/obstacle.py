"""
Obstacle
========

A scrolling wall with a single gap. Positions are world columns; rendering
translates them relative to the dragon.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from flappy_dragon.dragon_core.config_loader import GameConfig, get_config
from flappy_dragon.dragon_core.player import Player
from flappy_dragon.dragon_core.rng import ObstacleRng
from flappy_dragon.dragon_core.surface import DisplaySurface


@dataclass(frozen=True)
class Obstacle:
    """
    Wall at world column `x` with a gap of `size` rows centered on `gap_y`.

    Read-only once spawned.
    """
    x: int
    gap_y: int
    size: int
    config: Optional[GameConfig] = field(default=None, repr=False, compare=False)

    def __post_init__(self):
        if self.config is None:
            object.__setattr__(self, "config", get_config())

    @classmethod
    def spawn(
        cls,
        reference_x: int,
        score: int,
        rng: ObstacleRng,
        config: Optional[GameConfig] = None
    ) -> "Obstacle":
        """
        Create an obstacle somewhere ahead of `reference_x`.

        Args:
            reference_x: World column to spawn ahead of (usually the dragon's).
            score: Current score; higher scores give narrower gaps.
            rng: Generator shared by the whole run.
            config: Game configuration. Uses default if None.

        Returns:
            New obstacle one to two screen widths ahead.
        """
        if config is None:
            config = get_config()

        rules = config.obstacles
        return cls(
            x=reference_x + rng.spawn_offset(config.screen.width),
            gap_y=rng.gap_y(rules.gap_y_min, rules.gap_y_max),
            size=rules.size_for_score(score),
            config=config
        )

    @property
    def gap_top(self) -> int:
        """First row of the gap."""
        return self.gap_y - self.size // 2

    @property
    def gap_bottom(self) -> int:
        """First row below the gap."""
        return self.gap_y + self.size // 2

    def render(self, surface: DisplaySurface, player_x: int) -> None:
        """Draw both wall halves, leaving the gap band empty."""
        screen_x = self.x - player_x
        color = self.config.colors.obstacle
        bar_width = self.config.obstacles.bar_width

        # Top half
        for y in range(0, self.gap_top):
            surface.draw_bar_horizontal(screen_x, y, bar_width, 1, color, color)
        # Bottom half
        for y in range(self.gap_bottom, self.config.screen.height):
            surface.draw_bar_horizontal(screen_x, y, bar_width, 1, color, color)

    def hit_obstacle(self, player: Player) -> bool:
        """
        True if the dragon is in this wall's column and outside the gap.

        Only the exact column counts. The dragon advances one column per tick,
        so it always lands on the wall column once before passing it.
        """
        player_half_size = player.height // 2
        does_x_match = player.x + player_half_size == self.x
        player_above_gap = player.y - player_half_size < self.gap_top
        player_below_gap = player.y + player_half_size > self.gap_bottom
        return does_x_match and (player_above_gap or player_below_gap)
