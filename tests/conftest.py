import random
from unittest.mock import Mock

import pytest

from snakegame.config import EngineConfig
from snakegame.game import Engine
from snakegame.scheduler import ManualScheduler


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def cfg():
    """20x15 grid, the size a 400x300 surface gives with 20px cells."""
    return EngineConfig(grid_w=20, grid_h=15, game_over_delay_ms=0, seed=7)


@pytest.fixture
def make_engine(scheduler):
    """Build an engine on the manual clock with Mock callbacks attached."""
    def _make(cfg):
        return Engine(
            scheduler,
            cfg,
            on_score_update=Mock(),
            on_game_over=Mock(),
            rng=random.Random(cfg.seed),
        )
    return _make


@pytest.fixture
def engine(make_engine, cfg):
    return make_engine(cfg)
