"""
Player
======

The dragon: falls under gravity, flaps upward on input, and moves one world
column per physics tick.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from flappy_dragon.dragon_core.config_loader import GameConfig, PlayerConfig, get_config
from flappy_dragon.dragon_core.surface import DisplaySurface


@dataclass
class Player:
    """
    Falling/flapping entity.

    `x` is the world column and doubles as distance travelled. `y` grows
    downward and is clamped at 0.
    """
    x: int
    y: int
    velocity: float = 0.0
    width: int = 1
    height: int = 1
    config: Optional[GameConfig] = field(default=None, repr=False, compare=False)

    def __post_init__(self):
        if self.config is None:
            self.config = get_config()

    @classmethod
    def at_start(cls, config: Optional[GameConfig] = None) -> "Player":
        """Player at the configured start position."""
        if config is None:
            config = get_config()
        p = config.player
        return cls(p.start_x, p.start_y, width=p.width, height=p.height, config=config)

    @property
    def physics(self) -> PlayerConfig:
        return self.config.player

    def gravity_and_move(self) -> None:
        """Advance one physics tick."""
        physics = self.physics
        if self.velocity < physics.terminal_velocity:
            self.velocity = min(self.velocity + physics.gravity, physics.terminal_velocity)
        # int() truncates toward zero, so -0.8 moves nothing
        self.y += int(self.velocity)
        self.x += 1
        if self.y < 0:
            self.y = 0

    def flap(self) -> None:
        """Replace current velocity with the upward impulse."""
        self.velocity = self.physics.flap_velocity

    def render(self, surface: DisplaySurface) -> None:
        """Draw at the fixed screen column."""
        colors = self.config.colors
        surface.draw_box(
            self.physics.render_x, self.y, self.width, self.height,
            colors.player_fg, colors.player_bg
        )
