"""
Human Play Mode
================

Play Flappy Dragon in a pygame window.

Controls:
    - P: Play / restart
    - Space: Flap
    - Q: Quit (menu and death screen)
    - ESC / window close: Quit at any time

Usage:
    python -m tools.play_human [--seed SEED] [--fps FPS] [--tile-size PX] [--config PATH]
"""

from __future__ import annotations

import argparse
import sys
from typing import Optional

try:
    import pygame
    PYGAME_AVAILABLE = True
except ImportError:
    PYGAME_AVAILABLE = False

from flappy_dragon.dragon_core.config_loader import GameConfig, load_config
from flappy_dragon.dragon_core.game import GameState
from flappy_dragon.dragon_core.render_pygame import PygameSurface
from flappy_dragon.dragon_core.rules import GameMode
from flappy_dragon.dragon_core.surface import FrameContext, GameKey

if PYGAME_AVAILABLE:
    KEY_MAP = {
        pygame.K_SPACE: GameKey.SPACE,
        pygame.K_p: GameKey.P,
        pygame.K_q: GameKey.Q,
        pygame.K_ESCAPE: GameKey.ESCAPE,
    }
    DISPLAY_ERRORS = (pygame.error,)
else:
    KEY_MAP = {}
    DISPLAY_ERRORS = ()


class HumanPlayer:
    """
    Frame driver: owns the window, the clock and the exit flag, and calls
    GameState.tick() once per frame.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        target_fps: int = 60,
        tile_size: Optional[int] = None
    ):
        if not PYGAME_AVAILABLE:
            raise ImportError("pygame required. Install: pip install pygame")

        if config is None:
            config = load_config()

        self._config = config
        self._target_fps = target_fps

        self._game = GameState(config=config, seed=seed)
        self._surface = PygameSurface(config, tile_size=tile_size)
        self._clock = pygame.time.Clock()
        self._quitting = False

    def run(self) -> int:
        """Run the game loop. Returns the last run's score."""
        print(f"=== {self._config.screen.title} ===")
        print("P to play, Space to flap, Q to quit")
        print()

        frame_time_ms = 0.0
        while not self._quitting:
            key = self._poll_key()
            if self._quitting:
                break

            ctx = FrameContext(
                surface=self._surface,
                frame_time_ms=frame_time_ms,
                key=key
            )
            mode_before = self._game.mode
            self._game.tick(ctx)
            self._report_transition(mode_before)
            self._quitting = ctx.quitting

            self._surface.present()
            frame_time_ms = float(self._clock.tick(self._target_fps))

        self._surface.close()
        return self._game.score

    def _poll_key(self) -> Optional[GameKey]:
        """Drain the event queue. The last mapped key pressed this frame wins."""
        key = None
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._quitting = True
            elif event.type == pygame.KEYDOWN:
                mapped = KEY_MAP.get(event.key)
                if mapped is GameKey.ESCAPE:
                    self._quitting = True
                elif mapped is not None:
                    key = mapped
        return key

    def _report_transition(self, mode_before: GameMode) -> None:
        mode = self._game.mode
        if mode is mode_before:
            return
        if mode is GameMode.PLAYING:
            print("=== Run Started ===" if mode_before is GameMode.MENU else "\n=== Game Restarted ===\n")
        elif mode is GameMode.END:
            print(f"\nGAME OVER ({self._game.termination_reason}) - Score: {self._game.score}")


def main():
    parser = argparse.ArgumentParser(description="Play Flappy Dragon")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--fps", type=int, default=60, help="Target FPS")
    parser.add_argument("--tile-size", type=int, default=None, help="Pixels per cell (default: from config)")
    parser.add_argument("--config", type=str, default=None, help="Path to game_config.yaml")

    args = parser.parse_args()

    try:
        config = load_config(args.config)
        player = HumanPlayer(
            config=config,
            seed=args.seed,
            target_fps=args.fps,
            tile_size=args.tile_size
        )
        score = player.run()
        print(f"\nFinal Score: {score}")
        return 0
    except (FileNotFoundError, ValueError) as e:
        print(f"Config error: {e}")
        return 1
    except (ImportError,) + DISPLAY_ERRORS as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
