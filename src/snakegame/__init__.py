# src/snakegame/__init__.py
"""Grid snake game: timer-driven engine, pygame driver and session scoreboard."""

from .config import ConfigError, Direction, EngineConfig
from .game import Engine, Frame, GameState, StepOutcome, new_game_state, spawn_food, step_game
from .scheduler import ManualScheduler, PygameScheduler, Scheduler, TimerHandle
from .scoreboard import GameRecord, ScoreBoard

__all__ = [
    "ConfigError", "Direction", "EngineConfig",
    "Engine", "Frame", "GameState", "StepOutcome", "new_game_state", "spawn_food", "step_game",
    "ManualScheduler", "PygameScheduler", "Scheduler", "TimerHandle",
    "GameRecord", "ScoreBoard",
]
