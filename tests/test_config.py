"""
Tests for configuration loading and validation.
"""

from pathlib import Path

import pytest
import yaml

import flappy_dragon

from flappy_dragon.dragon_core.config_loader import get_config, load_config, reload_config
from flappy_dragon.dragon_core.surface import GameKey


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def raw_config():
    path = Path(flappy_dragon.__file__).parent / "game_config.yaml"
    with open(path) as f:
        return yaml.safe_load(f)


def write_config(tmp_path, raw):
    path = tmp_path / "game_config.yaml"
    with open(path, "w") as f:
        yaml.safe_dump(raw, f)
    return str(path)


class TestDefaults:
    """Test the shipped configuration."""

    def test_screen(self, config):
        assert config.screen.width == 100
        assert config.screen.height == 70
        assert config.screen.title == "Flappy Dragon"

    def test_timing(self, config):
        assert config.timing.frame_duration_ms == 60.0
        assert config.timing.spawn_interval_ticks == 60

    def test_player(self, config):
        player = config.player
        assert (player.start_x, player.start_y) == (5, 25)
        assert (player.width, player.height) == (1, 1)
        assert player.gravity == pytest.approx(0.2)
        assert player.terminal_velocity == 2.0
        assert player.flap_velocity == -2.0

    def test_controls(self, config):
        assert config.controls.flap is GameKey.SPACE
        assert config.controls.play is GameKey.P
        assert config.controls.restart is GameKey.P
        assert config.controls.quit is GameKey.Q

    def test_size_for_score(self, config):
        rules = config.obstacles
        assert rules.size_for_score(0) == 50
        assert rules.size_for_score(25) == 25
        assert rules.size_for_score(40) == 10
        assert rules.size_for_score(1000) == 10

    def test_immutable(self, config):
        with pytest.raises(AttributeError):
            config.screen.width = 10

    def test_cached_config(self):
        assert get_config() is get_config()
        assert reload_config() == get_config()


class TestValidation:
    """Test rejection of bad configuration."""

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / "nope.yaml"))

    def test_round_trip(self, tmp_path, raw_config, config):
        assert load_config(write_config(tmp_path, raw_config)) == config

    def test_gap_range(self, tmp_path, raw_config):
        raw_config["obstacles"]["gap_y_min"] = 40
        with pytest.raises(ValueError, match="gap_y_min"):
            load_config(write_config(tmp_path, raw_config))

    def test_min_size(self, tmp_path, raw_config):
        raw_config["obstacles"]["min_size"] = 60
        with pytest.raises(ValueError, match="min_size"):
            load_config(write_config(tmp_path, raw_config))

    def test_flap_must_go_up(self, tmp_path, raw_config):
        raw_config["player"]["flap_velocity"] = 1.0
        with pytest.raises(ValueError, match="flap_velocity"):
            load_config(write_config(tmp_path, raw_config))

    def test_frame_duration(self, tmp_path, raw_config):
        raw_config["timing"]["frame_duration_ms"] = 0
        with pytest.raises(ValueError, match="frame_duration_ms"):
            load_config(write_config(tmp_path, raw_config))

    def test_start_off_screen(self, tmp_path, raw_config):
        raw_config["player"]["start_y"] = 70
        with pytest.raises(ValueError, match="start_y"):
            load_config(write_config(tmp_path, raw_config))

    def test_unknown_key(self, tmp_path, raw_config):
        raw_config["controls"]["flap"] = "enter"
        with pytest.raises(ValueError, match="Unknown key"):
            load_config(write_config(tmp_path, raw_config))

    def test_only_known_keys_bind(self, tmp_path, raw_config):
        raw_config["controls"]["restart"] = "r"
        with pytest.raises(ValueError, match="Unknown key"):
            load_config(write_config(tmp_path, raw_config))

    def test_bad_color(self, tmp_path, raw_config):
        raw_config["colors"]["obstacle"] = [255, 0]
        with pytest.raises(ValueError, match="Color"):
            load_config(write_config(tmp_path, raw_config))
