"""
Dragon Core - the gameplay loop.

This module provides the core game simulation, its display contract,
renderers, and a Gymnasium environment wrapper.

Main exports:
- GameState: Mode machine and per-frame entry point
- Player, Obstacle: The two kinds of entity
- DisplaySurface, FrameContext, GameKey: Boundary with the frame driver
- TextSurface: Headless renderer
- FlappyEnv: Gymnasium environment for agents
- GameConfig: Configuration loaded from game_config.yaml
"""

from flappy_dragon.dragon_core.config_loader import GameConfig, load_config, get_config
from flappy_dragon.dragon_core.surface import DisplaySurface, FrameContext, GameKey
from flappy_dragon.dragon_core.rng import ObstacleRng
from flappy_dragon.dragon_core.player import Player
from flappy_dragon.dragon_core.obstacle import Obstacle
from flappy_dragon.dragon_core.rules import GameMode
from flappy_dragon.dragon_core.game import GameState
from flappy_dragon.dragon_core.render_text import TextSurface
from flappy_dragon.dragon_core.env_gym import FlappyEnv

__all__ = [
    "GameConfig",
    "load_config",
    "get_config",
    "DisplaySurface",
    "FrameContext",
    "GameKey",
    "ObstacleRng",
    "Player",
    "Obstacle",
    "GameMode",
    "GameState",
    "TextSurface",
    "FlappyEnv",
]
