"""
Tests for the game loop: modes, physics cadence, retirement, spawning.
"""

import pytest

from flappy_dragon.dragon_core.config_loader import load_config
from flappy_dragon.dragon_core.game import GameState
from flappy_dragon.dragon_core.obstacle import Obstacle
from flappy_dragon.dragon_core.render_text import TextSurface
from flappy_dragon.dragon_core.rules import GameMode
from flappy_dragon.dragon_core.surface import FrameContext, GameKey

TICK_MS = 61.0


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def surface(config):
    return TextSurface(config)


@pytest.fixture
def game(config):
    return GameState(config=config, seed=42)


@pytest.fixture
def playing(game):
    game.restart()
    return game


def frame(game, surface, ms=0.0, key=None):
    """Run one frame and return its context."""
    ctx = FrameContext(surface=surface, frame_time_ms=ms, key=key)
    game.tick(ctx)
    return ctx


def safe_wall(config, x):
    """Wall whose gap covers the whole screen."""
    return Obstacle(x=x, gap_y=35, size=70, config=config)


class TestMenu:
    """Test the opening screen."""

    def test_initial_state(self, game):
        assert game.mode is GameMode.MENU
        assert game.score == 0
        assert game.frame_count == 0
        assert len(game.obstacles) == 1
        assert (game.player.x, game.player.y) == (5, 25)

    def test_rules_follow_config(self, game, config):
        assert game.rules.spawn.interval == config.timing.spawn_interval_ticks
        assert game.rules.spawn.should_spawn(0)

    def test_menu_text(self, game, surface):
        frame(game, surface)

        assert surface.row_text(35).strip() == "Welcome to Flappy Dragon"
        assert surface.row_text(37).strip() == "(P) Play Game"
        assert surface.row_text(39).strip() == "(Q) Quit Game"

    def test_play_key_starts_run(self, game, surface):
        frame(game, surface, key=GameKey.P)

        assert game.mode is GameMode.PLAYING
        assert len(game.obstacles) == 5

    def test_quit_key_sets_flag(self, game, surface):
        ctx = frame(game, surface, key=GameKey.Q)

        assert ctx.quitting
        assert game.mode is GameMode.MENU

    def test_other_keys_ignored(self, game, surface):
        for key in (None, GameKey.SPACE, GameKey.ESCAPE):
            ctx = frame(game, surface, ms=TICK_MS, key=key)
            assert game.mode is GameMode.MENU
            assert not ctx.quitting
        assert game.frame_count == 0


class TestPhysicsCadence:
    """Test fixed-step accumulation."""

    def test_no_tick_below_threshold(self, playing, surface):
        frame(playing, surface, ms=30.0)
        frame(playing, surface, ms=30.0)

        # Exactly 60ms accumulated is not enough
        assert playing.frame_count == 0
        assert playing.player.x == 5
        assert playing.frame_time_ms == pytest.approx(60.0)

    def test_tick_once_threshold_exceeded(self, playing, surface):
        frame(playing, surface, ms=30.0)
        frame(playing, surface, ms=31.0)

        assert playing.frame_count == 1
        assert playing.player.x == 6
        assert playing.frame_time_ms == 0.0

    def test_one_tick_per_frame_even_with_large_gap(self, playing, surface):
        frame(playing, surface, ms=1000.0)
        assert playing.frame_count == 1

    def test_flap_applies_without_tick(self, playing, surface):
        frame(playing, surface, ms=0.0, key=GameKey.SPACE)

        assert playing.player.velocity == -2.0
        assert playing.frame_count == 0

    def test_hud(self, playing, surface):
        frame(playing, surface)

        assert surface.row_text(0) == "Press SPACE to flap."
        assert surface.row_text(1) == "Score: 0"
        assert surface.char_at(5, 25) == "@"


class TestObstacleRetirement:
    """Test scoring and same-frame removal of passed obstacles."""

    def test_passed_obstacle_removed_and_scored(self, playing, surface, config):
        target = safe_wall(config, 6)
        playing.obstacles.append(target)
        count_before = len(playing.obstacles)

        # Tick 1: dragon reaches the wall column and flies through the gap
        frame(playing, surface, ms=TICK_MS)
        assert target in playing.obstacles
        assert playing.score == 0

        # Tick 2: dragon is past it
        frame(playing, surface, ms=TICK_MS)
        assert target not in playing.obstacles
        assert len(playing.obstacles) == count_before - 1
        assert playing.score == 1
        assert playing.mode is GameMode.PLAYING

    def test_adjacent_removals_not_skipped(self, playing, surface, config):
        """Several passed obstacles in a row all retire in one frame."""
        ahead = list(playing.obstacles)
        playing.obstacles = [safe_wall(config, x) for x in (1, 2, 3)] + ahead

        frame(playing, surface)

        assert playing.obstacles == ahead
        assert playing.score == 3

    def test_score_never_decreases(self, playing, surface):
        last = playing.score
        for i in range(200):
            key = GameKey.SPACE if i % 4 == 0 else None
            frame(playing, surface, ms=TICK_MS, key=key)
            assert playing.score >= last
            last = playing.score


class TestSpawning:
    """Test the spawn cadence."""

    def test_one_spawn_after_interval(self, playing, surface):
        playing.obstacles = []

        # Flap every frame to stay on screen
        for _ in range(59):
            frame(playing, surface, ms=TICK_MS, key=GameKey.SPACE)
        assert playing.frame_count == 59
        assert len(playing.obstacles) == 0

        frame(playing, surface, ms=TICK_MS, key=GameKey.SPACE)
        assert playing.frame_count == 60
        assert len(playing.obstacles) == 1

        spawned = playing.obstacles[0]
        assert playing.player.x + 100 <= spawned.x < playing.player.x + 200

    def test_no_spawn_on_frames_without_tick(self, playing, surface):
        playing.obstacles = []
        for _ in range(60):
            frame(playing, surface, ms=TICK_MS, key=GameKey.SPACE)

        for _ in range(10):
            frame(playing, surface, ms=0.0)

        assert len(playing.obstacles) == 1

    def test_spawn_uses_current_score(self, playing, surface, config):
        playing.obstacles = [safe_wall(config, x) for x in range(-20, 0)]
        frame(playing, surface)
        assert playing.score == 20

        for _ in range(60):
            frame(playing, surface, ms=TICK_MS, key=GameKey.SPACE)

        assert [o.size for o in playing.obstacles] == [30]


class TestTermination:
    """Test transitions into the death screen."""

    def test_collision_ends_run(self, playing, surface, config):
        playing.player.y = 30
        playing.obstacles = [Obstacle(x=6, gap_y=20, size=10, config=config)]

        frame(playing, surface, ms=TICK_MS)

        assert playing.mode is GameMode.END
        assert playing.termination_reason == "collision"

    def test_fell_off_screen(self, playing, surface):
        playing.player.y = 69
        playing.player.height = 2

        frame(playing, surface)

        assert playing.mode is GameMode.END
        assert playing.termination_reason == "out_of_bounds"

    def test_last_row_is_still_on_screen(self, playing, surface):
        playing.player.y = 69

        frame(playing, surface)

        assert playing.mode is GameMode.PLAYING

    def test_gliding_eventually_falls(self, playing, surface):
        for _ in range(100):
            frame(playing, surface, ms=TICK_MS)
            if playing.is_over:
                break

        assert playing.is_over
        assert playing.termination_reason == "out_of_bounds"


class TestDeathScreen:
    """Test the End mode."""

    @pytest.fixture
    def dead(self, playing, surface, config):
        playing.obstacles = [safe_wall(config, x) for x in (1, 2, 3)]
        frame(playing, surface)
        playing.player.y = 69
        playing.player.height = 2
        frame(playing, surface)
        assert playing.mode is GameMode.END
        return playing

    def test_death_text(self, dead, surface):
        frame(dead, surface)

        assert surface.row_text(35).strip() == "You are dead!"
        assert surface.row_text(6).strip() == "You earned 3 points"
        assert surface.row_text(8).strip() == "(P) Restart Game"
        assert surface.row_text(9).strip() == "(Q) Quit Game"

    def test_no_physics_while_dead(self, dead, surface):
        ticks = dead.frame_count
        frame(dead, surface, ms=TICK_MS)
        assert dead.frame_count == ticks

    def test_restart(self, dead, surface):
        frame(dead, surface, key=GameKey.P)

        assert dead.mode is GameMode.PLAYING
        assert dead.score == 0
        assert len(dead.obstacles) == 5
        assert (dead.player.x, dead.player.y) == (5, 25)
        assert dead.player.height == 1
        assert dead.frame_time_ms == 0.0
        assert dead.termination_reason == ""
        for obstacle in dead.obstacles:
            assert 105 <= obstacle.x < 205
            assert obstacle.size == 50

    def test_quit(self, dead, surface):
        ctx = frame(dead, surface, key=GameKey.Q)
        assert ctx.quitting
        assert dead.mode is GameMode.END


class TestInfo:
    def test_get_info(self, playing):
        info = playing.get_info()

        assert info["mode"] == "playing"
        assert info["score"] == 0
        assert info["obstacle_count"] == 5
        assert info["terminated_reason"] == ""
