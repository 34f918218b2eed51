"""
Tests for dragon physics.
"""

import copy

import pytest

from flappy_dragon.dragon_core.config_loader import load_config
from flappy_dragon.dragon_core.player import Player
from flappy_dragon.dragon_core.render_text import TextSurface


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def player(config):
    return Player(5, 25, config=config)


class TestConstruction:
    """Test fresh players."""

    def test_defaults(self, player):
        """New player starts at rest with unit size."""
        assert (player.x, player.y) == (5, 25)
        assert player.velocity == 0.0
        assert player.width == 1
        assert player.height == 1

    def test_at_start_uses_config(self, config):
        player = Player.at_start(config)
        assert (player.x, player.y) == (config.player.start_x, config.player.start_y)


class TestGravity:
    """Test gravity_and_move."""

    def test_first_tick(self, player):
        """Small velocity truncates to no vertical movement."""
        player.gravity_and_move()

        assert player.velocity == pytest.approx(0.2)
        assert player.y == 25
        assert player.x == 6

    def test_x_advances_one_per_tick(self, player):
        for i in range(1, 31):
            player.gravity_and_move()
            assert player.x == 5 + i

    def test_velocity_never_exceeds_cap(self, player):
        """Velocity saturates at exactly the terminal velocity."""
        for _ in range(100):
            player.gravity_and_move()
            assert player.velocity <= 2.0

        assert player.velocity == 2.0

    def test_velocity_only_decreases_via_flap(self, player):
        previous = player.velocity
        for _ in range(40):
            player.gravity_and_move()
            assert player.velocity >= previous
            previous = player.velocity

    def test_falls_at_terminal_velocity(self, player):
        for _ in range(20):
            player.gravity_and_move()

        y_before = player.y
        player.gravity_and_move()
        assert player.y == y_before + 2

    def test_y_clamped_at_zero(self, config):
        """Flapping at the top never takes y negative."""
        player = Player(5, 0, config=config)
        for _ in range(20):
            player.flap()
            player.gravity_and_move()
            assert player.y >= 0

        assert player.y == 0


class TestFlap:
    """Test flap impulse."""

    def test_flap_sets_velocity(self, player):
        player.flap()
        assert player.velocity == -2.0

    def test_flap_overrides_not_adds(self, player):
        """Flapping twice is the same as flapping once."""
        for _ in range(15):
            player.gravity_and_move()
        player.flap()
        player.flap()
        assert player.velocity == -2.0

    def test_flap_then_tick_moves_up(self, player):
        player.flap()
        player.gravity_and_move()

        assert player.velocity == pytest.approx(-1.8)
        assert player.y == 24


class TestRender:
    """Test player drawing."""

    def test_draws_at_fixed_column(self, config, player):
        surface = TextSurface(config)
        player.x = 500

        player.render(surface)

        assert surface.char_at(5, 25) == "@"
        assert surface.row_text(25).strip() == "@"

    def test_render_does_not_mutate(self, config, player):
        player.flap()
        player.gravity_and_move()
        before = copy.copy(player)

        player.render(TextSurface(config))

        assert player == before
