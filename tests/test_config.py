"""
Tests for config.py - directions and engine configuration validation.
"""

import pytest

from snakegame.config import ConfigError, Direction, EngineConfig


class TestDirection:

    def test_from_name(self):
        assert Direction("left") is Direction.LEFT

    def test_unknown_name(self):
        with pytest.raises(ValueError):
            Direction("north")

    def test_vectors_and_opposites(self):
        for d in Direction:
            dx, dy = d.vector
            ox, oy = d.opposite.vector
            assert (dx + ox, dy + oy) == (0, 0)
            assert d.opposite.opposite is d
        assert Direction.UP.vector == (0, -1)


class TestEngineConfig:

    def test_defaults(self):
        cfg = EngineConfig()
        assert (cfg.grid_w, cfg.grid_h) == (20, 15)
        assert cfg.initial_speed_ms == 150
        assert cfg.min_speed_ms == 80
        assert cfg.score_per_food == 10
        assert cfg.speed_step_ms == 2

    def test_from_surface(self):
        cfg = EngineConfig.from_surface(600, 410, 20, seed=3)
        assert (cfg.grid_w, cfg.grid_h) == (30, 20)
        assert cfg.seed == 3

    @pytest.mark.parametrize("kwargs", [
        {"grid_w": 3, "grid_h": 10},
        {"grid_w": 10, "grid_h": 0},
        {"initial_speed_ms": 0},
        {"min_speed_ms": 200},
        {"speed_step_ms": -1},
        {"score_per_food": -10},
        {"game_over_delay_ms": -5},
    ])
    def test_rejects_unplayable_values(self, kwargs):
        with pytest.raises(ConfigError):
            EngineConfig(**kwargs)

    def test_smallest_playable_grid(self):
        cfg = EngineConfig(grid_w=4, grid_h=1)
        assert cfg.grid_w * cfg.grid_h == 4

    def test_bad_cell_size(self):
        with pytest.raises(ConfigError):
            EngineConfig.from_surface(400, 300, 0)

    def test_config_error_is_value_error(self):
        assert issubclass(ConfigError, ValueError)
