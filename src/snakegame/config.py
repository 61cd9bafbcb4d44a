# config.py
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

# ----- Window & grid -----
WIDTH, HEIGHT = 400, 300
CELL_SIZE = 20
GRID_W, GRID_H = WIDTH // CELL_SIZE, HEIGHT // CELL_SIZE

# ----- Colors -----
BG    = (15, 22, 42)
GRID  = (24, 32, 52)
HEAD  = (34, 197, 94)
BODY  = (8, 145, 178)
FOOD  = (217, 70, 239)
TEXT  = (220, 220, 230)

# ----- Snake length at the start of every game -----
START_LENGTH = 3


class ConfigError(ValueError):
    """Raised when an engine is configured with values it cannot play on."""


# ----- Directions (dx, dy), y grows downward -----
class Direction(str, Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def vector(self) -> Tuple[int, int]:
        return _VECTORS[self]

    @property
    def opposite(self) -> "Direction":
        return _OPPOSITES[self]


_VECTORS = {
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}

_OPPOSITES = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


# ----- Tunables (what you'd tweak for difficulty) -----
@dataclass(frozen=True)
class EngineConfig:
    grid_w: int = GRID_W
    grid_h: int = GRID_H
    initial_speed_ms: int = 150
    min_speed_ms: int = 80
    score_per_food: int = 10
    speed_step_ms: int = 2
    game_over_delay_ms: int = 300  # lets the impact effect play before the callback
    seed: Optional[int] = None

    def __post_init__(self):
        # The starting snake sits at x = w//2, w//2 - 1, w//2 - 2.
        if self.grid_w < 4:
            raise ConfigError(f"grid width must be at least 4, got {self.grid_w}")
        if self.grid_h < 1:
            raise ConfigError(f"grid height must be at least 1, got {self.grid_h}")
        if self.grid_w * self.grid_h <= START_LENGTH:
            raise ConfigError("grid has no free cell for food")
        if self.initial_speed_ms <= 0 or self.min_speed_ms <= 0:
            raise ConfigError("tick intervals must be positive")
        if self.min_speed_ms > self.initial_speed_ms:
            raise ConfigError(
                f"min_speed_ms ({self.min_speed_ms}) exceeds "
                f"initial_speed_ms ({self.initial_speed_ms})"
            )
        if self.speed_step_ms < 0 or self.score_per_food < 0 or self.game_over_delay_ms < 0:
            raise ConfigError("speed step, score increment and delay must not be negative")

    @classmethod
    def from_surface(cls, width_px: int, height_px: int, cell_size: int = CELL_SIZE, **kwargs) -> "EngineConfig":
        """Derive the grid from a drawing surface size."""
        if cell_size <= 0:
            raise ConfigError(f"cell size must be positive, got {cell_size}")
        return cls(grid_w=width_px // cell_size, grid_h=height_px // cell_size, **kwargs)


CFG = EngineConfig()
