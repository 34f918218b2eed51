"""
Core Game
=========

Main game orchestrator: mode dispatch, fixed-step physics, obstacle
spawning and retirement, scoring, and termination.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional

from flappy_dragon.dragon_core.config_loader import GameConfig, get_config
from flappy_dragon.dragon_core.obstacle import Obstacle
from flappy_dragon.dragon_core.player import Player
from flappy_dragon.dragon_core.rng import ObstacleRng
from flappy_dragon.dragon_core.rules import GameMode, GameRules, TerminationResult
from flappy_dragon.dragon_core.scoring import ScoreTracker
from flappy_dragon.dragon_core.surface import FrameContext


class GameState:
    """
    Whole-run game state.

    The frame driver calls `tick()` once per rendered frame. Physics only
    advances when enough wall-clock time has accumulated, so the simulation
    rate is independent of the frame rate. Input is read every frame.

    `player`, `obstacles` and `mode` are plain attributes; everything else is
    exposed read-only.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        rng: Optional[ObstacleRng] = None
    ):
        """
        Initialize game in the menu.

        Args:
            config: Game configuration. Uses default if None.
            seed: Random seed for obstacle placement. Ignored if rng is given.
            rng: Obstacle generator to use for the whole run.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._rng = rng if rng is not None else ObstacleRng(seed)
        self._rules = GameRules(config)
        self._scorer = ScoreTracker()

        self._handlers: Dict[GameMode, Callable[[FrameContext], None]] = {
            GameMode.MENU: self._main_menu,
            GameMode.PLAYING: self._play,
            GameMode.END: self._dead,
        }

        self.mode: GameMode = GameMode.MENU
        self.player: Player = Player.at_start(config)
        self.obstacles: List[Obstacle] = [
            Obstacle.spawn(config.screen.width, 0, self._rng, config)
        ]
        self._frame_time: float = 0.0
        self._frame_count: int = 0
        self._termination_reason: str = ""

    @property
    def config(self) -> GameConfig:
        """Game configuration."""
        return self._config

    @property
    def rng(self) -> ObstacleRng:
        """Obstacle generator."""
        return self._rng

    @property
    def rules(self) -> GameRules:
        """Spawn cadence and termination checks."""
        return self._rules

    @property
    def score(self) -> int:
        """Current score."""
        return self._scorer.score

    @property
    def frame_time_ms(self) -> float:
        """Time accumulated towards the next physics tick."""
        return self._frame_time

    @property
    def frame_count(self) -> int:
        """Physics ticks run so far. Never reset."""
        return self._frame_count

    @property
    def termination_reason(self) -> str:
        """Why the last run ended, or empty string."""
        return self._termination_reason

    @property
    def is_over(self) -> bool:
        """True while on the death screen."""
        return self.mode is GameMode.END

    def tick(self, ctx: FrameContext) -> None:
        """Per-frame entry point."""
        self._handlers[self.mode](ctx)

    def restart(self) -> None:
        """Start a fresh run."""
        config = self._config
        self.player = Player.at_start(config)
        self.obstacles = [
            Obstacle.spawn(self.player.x, 0, self._rng, config)
            for _ in range(config.obstacles.initial_count)
        ]
        self._scorer.reset()
        self._frame_time = 0.0
        self._termination_reason = ""
        self.mode = GameMode.PLAYING

    def step_physics(self) -> None:
        """Run one physics tick."""
        self._frame_count += 1
        self.player.gravity_and_move()

    def _end(self, result: TerminationResult) -> None:
        if result.terminated and self.mode is GameMode.PLAYING:
            self.mode = GameMode.END
            self._termination_reason = result.reason

    def _play(self, ctx: FrameContext) -> None:
        config = self._config
        surface = ctx.surface
        surface.cls_bg(config.colors.background)

        ticked = False
        self._frame_time += ctx.frame_time_ms
        if self._frame_time > config.timing.frame_duration_ms:
            self._frame_time = 0.0
            self.step_physics()
            ticked = True

        if ctx.key is config.controls.flap:
            self.player.flap()

        self.player.render(surface)
        surface.print(0, 0, f"Press {config.controls.flap.label} to flap.")
        surface.print(0, 1, f"Score: {self.score}")
        for obstacle in self.obstacles:
            obstacle.render(surface, self.player.x)

        # Evaluate a snapshot, then rebuild the live list from survivors
        remaining = []
        for obstacle in tuple(self.obstacles):
            self._end(self._rules.termination.check_collision(self.player, obstacle))
            if self.player.x > obstacle.x:
                self._scorer.apply_clear(obstacle.x, self._frame_count)
            else:
                remaining.append(obstacle)
        self.obstacles = remaining

        if ticked and self._rules.spawn.should_spawn(self._frame_count):
            self.obstacles.append(
                Obstacle.spawn(self.player.x, self.score, self._rng, config)
            )

        self._end(self._rules.termination.check_out_of_bounds(self.player))

    def _dead(self, ctx: FrameContext) -> None:
        config = self._config
        surface = ctx.surface
        surface.cls()
        surface.print_color_centered(
            config.screen.height // 2, config.colors.dead_fg, config.colors.dead_bg,
            "You are dead!"
        )
        surface.print_centered(6, f"You earned {self.score} points")
        surface.print_centered(8, f"({config.controls.restart.label}) Restart Game")
        surface.print_centered(9, f"({config.controls.quit.label}) Quit Game")

        if ctx.key is config.controls.restart:
            self.restart()
        elif ctx.key is config.controls.quit:
            ctx.quitting = True

    def _main_menu(self, ctx: FrameContext) -> None:
        config = self._config
        surface = ctx.surface
        middle = config.screen.height // 2
        surface.cls()
        surface.print_color_centered(
            middle, config.colors.title_fg, config.colors.title_bg,
            f"Welcome to {config.screen.title}"
        )
        surface.print_centered(middle + 2, f"({config.controls.play.label}) Play Game")
        surface.print_centered(middle + 4, f"({config.controls.quit.label}) Quit Game")

        if ctx.key is config.controls.play:
            self.restart()
        elif ctx.key is config.controls.quit:
            ctx.quitting = True

    def get_info(self) -> Dict[str, Any]:
        """Summary dict for tools and the Gymnasium wrapper."""
        return {
            "mode": self.mode.value,
            "score": self.score,
            "frame_count": self._frame_count,
            "obstacle_count": len(self.obstacles),
            "obstacles_cleared": self._scorer.obstacles_cleared,
            "terminated_reason": self._termination_reason,
        }
