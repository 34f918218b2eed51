"""
Configuration Loader
====================

Loads and validates game_config.yaml, providing typed access to all parameters.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

import yaml

from flappy_dragon.dragon_core.surface import Color, GameKey


@dataclass(frozen=True)
class ScreenConfig:
    """Logical screen geometry and window settings."""
    width: int          # Cells
    height: int         # Cells
    title: str
    tile_width: int     # Pixels per cell (pygame only)
    tile_height: int


@dataclass(frozen=True)
class TimingConfig:
    """Fixed-step simulation cadence."""
    frame_duration_ms: float     # Accumulated time needed for one physics tick
    spawn_interval_ticks: int    # Ticks between obstacle spawns


@dataclass(frozen=True)
class PlayerConfig:
    """Dragon start position, size and physics."""
    start_x: int
    start_y: int
    width: int
    height: int
    render_x: int
    gravity: float
    terminal_velocity: float
    flap_velocity: float


@dataclass(frozen=True)
class ObstacleConfig:
    """Obstacle spawning and gap sizing."""
    initial_count: int
    gap_y_min: int
    gap_y_max: int
    base_size: int
    min_size: int
    bar_width: int

    def size_for_score(self, score: int) -> int:
        """Gap size narrows by one per point, floored at min_size."""
        return max(self.min_size, self.base_size - score)


@dataclass(frozen=True)
class ControlsConfig:
    """Key bindings."""
    flap: GameKey
    play: GameKey
    restart: GameKey
    quit: GameKey


@dataclass(frozen=True)
class ColorsConfig:
    """RGB palette."""
    background: Color
    text: Color
    menu_background: Color
    title_fg: Color
    title_bg: Color
    dead_fg: Color
    dead_bg: Color
    player_fg: Color
    player_bg: Color
    obstacle: Color


@dataclass(frozen=True)
class ObservationConfig:
    """Observation space parameters."""
    max_obstacles: int


@dataclass(frozen=True)
class GameConfig:
    """
    Complete game configuration loaded from YAML.

    All values are immutable to prevent accidental modification during runtime.
    """
    screen: ScreenConfig
    timing: TimingConfig
    player: PlayerConfig
    obstacles: ObstacleConfig
    controls: ControlsConfig
    colors: ColorsConfig
    observation: ObservationConfig


def _parse_color(color_data: List) -> Color:
    """Parse RGB color from YAML."""
    if len(color_data) != 3:
        raise ValueError(f"Color must have 3 values [R, G, B], got {color_data}")
    return (int(color_data[0]), int(color_data[1]), int(color_data[2]))


def _parse_key(name: str) -> GameKey:
    """Parse a key binding name such as 'space' or 'p'."""
    try:
        return GameKey(str(name).lower())
    except ValueError:
        valid = ", ".join(k.value for k in GameKey)
        raise ValueError(f"Unknown key '{name}', expected one of: {valid}") from None


def _validate_config(config: GameConfig) -> None:
    """Validate configuration consistency."""
    screen = config.screen
    if screen.width <= 0 or screen.height <= 0:
        raise ValueError(f"Screen size must be positive, got {screen.width}x{screen.height}")
    if screen.tile_width <= 0 or screen.tile_height <= 0:
        raise ValueError("Tile dimensions must be positive")

    if config.timing.frame_duration_ms <= 0:
        raise ValueError(
            f"frame_duration_ms must be positive, got {config.timing.frame_duration_ms}"
        )
    if config.timing.spawn_interval_ticks <= 0:
        raise ValueError(
            f"spawn_interval_ticks must be positive, got {config.timing.spawn_interval_ticks}"
        )

    player = config.player
    if player.width <= 0 or player.height <= 0:
        raise ValueError("Player size must be positive")
    if not 0 <= player.start_y < screen.height:
        raise ValueError(f"player.start_y ({player.start_y}) is off screen")
    if not 0 <= player.render_x < screen.width:
        raise ValueError(f"player.render_x ({player.render_x}) is off screen")
    if player.terminal_velocity <= 0:
        raise ValueError("terminal_velocity must be positive")
    if player.flap_velocity >= 0:
        raise ValueError(f"flap_velocity must be negative (upward), got {player.flap_velocity}")

    obstacles = config.obstacles
    if obstacles.gap_y_min >= obstacles.gap_y_max:
        raise ValueError(
            f"gap_y_min ({obstacles.gap_y_min}) must be less than "
            f"gap_y_max ({obstacles.gap_y_max})"
        )
    if obstacles.min_size > obstacles.base_size:
        raise ValueError(
            f"min_size ({obstacles.min_size}) exceeds base_size ({obstacles.base_size})"
        )
    if obstacles.initial_count < 0:
        raise ValueError("initial_count cannot be negative")

    if config.observation.max_obstacles <= 0:
        raise ValueError("observation.max_obstacles must be positive")


def load_config(config_path: Optional[str] = None) -> GameConfig:
    """
    Load and validate game configuration from YAML.

    Args:
        config_path: Path to game_config.yaml. If None, uses default location.

    Returns:
        Validated GameConfig instance.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If config validation fails.
    """
    if config_path is None:
        config_path = os.path.join(
            os.path.dirname(os.path.dirname(__file__)),
            "game_config.yaml"
        )

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r") as f:
        raw = yaml.safe_load(f)

    screen_data = raw["screen"]
    screen = ScreenConfig(
        width=int(screen_data["width"]),
        height=int(screen_data["height"]),
        title=str(screen_data.get("title", "Flappy Dragon")),
        tile_width=int(screen_data.get("tile_width", 12)),
        tile_height=int(screen_data.get("tile_height", 12))
    )

    timing_data = raw["timing"]
    timing = TimingConfig(
        frame_duration_ms=float(timing_data["frame_duration_ms"]),
        spawn_interval_ticks=int(timing_data.get("spawn_interval_ticks", 60))
    )

    player_data = raw["player"]
    player = PlayerConfig(
        start_x=int(player_data["start_x"]),
        start_y=int(player_data["start_y"]),
        width=int(player_data.get("width", 1)),
        height=int(player_data.get("height", 1)),
        render_x=int(player_data.get("render_x", 5)),
        gravity=float(player_data["gravity"]),
        terminal_velocity=float(player_data["terminal_velocity"]),
        flap_velocity=float(player_data["flap_velocity"])
    )

    obstacle_data = raw["obstacles"]
    obstacles = ObstacleConfig(
        initial_count=int(obstacle_data.get("initial_count", 5)),
        gap_y_min=int(obstacle_data["gap_y_min"]),
        gap_y_max=int(obstacle_data["gap_y_max"]),
        base_size=int(obstacle_data["base_size"]),
        min_size=int(obstacle_data["min_size"]),
        bar_width=int(obstacle_data.get("bar_width", 2))
    )

    controls_data = raw.get("controls", {})
    controls = ControlsConfig(
        flap=_parse_key(controls_data.get("flap", "space")),
        play=_parse_key(controls_data.get("play", "p")),
        restart=_parse_key(controls_data.get("restart", "p")),
        quit=_parse_key(controls_data.get("quit", "q"))
    )

    colors_data = raw["colors"]
    colors = ColorsConfig(
        background=_parse_color(colors_data["background"]),
        text=_parse_color(colors_data["text"]),
        menu_background=_parse_color(colors_data.get("menu_background", [0, 0, 0])),
        title_fg=_parse_color(colors_data["title_fg"]),
        title_bg=_parse_color(colors_data["title_bg"]),
        dead_fg=_parse_color(colors_data["dead_fg"]),
        dead_bg=_parse_color(colors_data["dead_bg"]),
        player_fg=_parse_color(colors_data["player_fg"]),
        player_bg=_parse_color(colors_data["player_bg"]),
        obstacle=_parse_color(colors_data["obstacle"])
    )

    obs_data = raw.get("observation", {})
    observation = ObservationConfig(
        max_obstacles=int(obs_data.get("max_obstacles", 16))
    )

    config = GameConfig(
        screen=screen,
        timing=timing,
        player=player,
        obstacles=obstacles,
        controls=controls,
        colors=colors,
        observation=observation
    )

    _validate_config(config)
    return config


# Module-level singleton for convenience
_cached_config: Optional[GameConfig] = None


def get_config() -> GameConfig:
    """Get the cached game configuration, loading if necessary."""
    global _cached_config
    if _cached_config is None:
        _cached_config = load_config()
    return _cached_config


def reload_config(config_path: Optional[str] = None) -> GameConfig:
    """Reload the configuration (useful for testing)."""
    global _cached_config
    _cached_config = load_config(config_path)
    return _cached_config
