# game.py
from __future__ import annotations

import itertools
import logging
import random
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Deque, Dict, Optional, Tuple, Union

import numpy as np  # type: ignore

from .config import CFG, START_LENGTH, Direction, EngineConfig
from .scheduler import Scheduler, TimerHandle

logger = logging.getLogger(__name__)

Cell = Tuple[int, int]

# Cell codes for Frame.to_grid()
EMPTY, BODY, HEAD, FOOD = 0, 1, 2, 3


# ---------- Helpers ----------
def spawn_food(snake: Deque[Cell], grid_w: int, grid_h: int, rng: random.Random) -> Optional[Cell]:
    """
    Uniform rejection sampling over the grid. Returns None when the snake
    covers every cell, since no draw could ever succeed.
    """
    if len(snake) >= grid_w * grid_h:
        return None
    while True:
        fx = rng.randrange(grid_w)
        fy = rng.randrange(grid_h)
        if (fx, fy) not in snake:
            return (fx, fy)


def is_opposite(a: Direction, b: Direction) -> bool:
    return a.opposite is b


def start_snake(cfg: EngineConfig) -> Deque[Cell]:
    """Horizontal segment centred on the grid, head first, facing right."""
    cx, cy = cfg.grid_w // 2, cfg.grid_h // 2
    return deque((cx - i, cy) for i in range(START_LENGTH))


# ---------- State ----------
@dataclass
class GameState:
    snake: Deque[Cell]             # head at index 0
    direction: Direction           # used by the last committed move
    pending: Direction             # applied at the start of the next tick
    food: Optional[Cell]
    score: int
    speed_ms: int                  # current tick interval
    started_at_ms: Optional[int]


def new_game_state(cfg: EngineConfig, rng: random.Random, now_ms: Optional[int] = None) -> GameState:
    snake = start_snake(cfg)
    return GameState(
        snake=snake,
        direction=Direction.RIGHT,
        pending=Direction.RIGHT,
        food=spawn_food(snake, cfg.grid_w, cfg.grid_h, rng),
        score=0,
        speed_ms=cfg.initial_speed_ms,
        started_at_ms=now_ms,
    )


class StepOutcome(str, Enum):
    MOVED = "moved"
    ATE = "ate"
    WALL = "wall"
    SELF = "self"
    VICTORY = "victory"    # ate the last food; no free cell remains

    @property
    def terminal(self) -> bool:
        return self in (StepOutcome.WALL, StepOutcome.SELF, StepOutcome.VICTORY)

    @property
    def ate(self) -> bool:
        return self in (StepOutcome.ATE, StepOutcome.VICTORY)


# ---------- Update ----------
def step_game(
    state: GameState,
    cfg: EngineConfig,
    rng: random.Random,
    on_score: Optional[Callable[[int], None]] = None,
) -> StepOutcome:
    """
    Advance the snake by one cell. Mutates `state` only when the move is legal;
    on WALL or SELF the state is left exactly as it was before the tick,
    apart from the committed direction.

    `on_score` sees the new score before the speed-up and the next food.
    """
    # Commit direction once per tick
    state.direction = state.pending

    hx, hy = state.snake[0]
    dx, dy = state.direction.vector
    new_head = (hx + dx, hy + dy)

    # Wall collision
    if not (0 <= new_head[0] < cfg.grid_w and 0 <= new_head[1] < cfg.grid_h):
        return StepOutcome.WALL

    will_eat = new_head == state.food

    # Self collision: the tail only vacates its cell when we are not growing
    check_len = len(state.snake) if will_eat else len(state.snake) - 1
    if new_head in itertools.islice(state.snake, check_len):
        return StepOutcome.SELF

    state.snake.appendleft(new_head)

    if not will_eat:
        state.snake.pop()
        return StepOutcome.MOVED

    state.score += cfg.score_per_food
    if on_score:
        on_score(state.score)
    state.speed_ms = max(cfg.min_speed_ms, state.speed_ms - cfg.speed_step_ms)
    state.food = spawn_food(state.snake, cfg.grid_w, cfg.grid_h, rng)
    if state.food is None:
        return StepOutcome.VICTORY
    return StepOutcome.ATE


# ---------- Renderer view ----------
@dataclass(frozen=True)
class Frame:
    """Read-only picture of the engine for renderers."""
    grid_w: int
    grid_h: int
    snake: Tuple[Cell, ...]
    food: Optional[Cell]
    direction: Direction
    score: int
    speed_ms: int
    running: bool
    paused: bool

    @property
    def head(self) -> Cell:
        return self.snake[0]

    def to_grid(self) -> np.ndarray:
        """Occupancy grid indexed [y, x] with EMPTY/BODY/HEAD/FOOD codes."""
        grid = np.full((self.grid_h, self.grid_w), EMPTY, dtype=np.int8)
        if self.food is not None:
            grid[self.food[1], self.food[0]] = FOOD
        if self.snake:
            xs, ys = zip(*self.snake)
            grid[np.array(ys), np.array(xs)] = BODY
            grid[self.head[1], self.head[0]] = HEAD
        return grid

    def to_text(self) -> str:
        """
        Text board, top row first:
        . = empty, o = body, @ = head, * = food
        """
        glyphs = np.array([".", "o", "@", "*"])
        return "\n".join("".join(row) for row in glyphs[self.to_grid()])


# ---------- Engine ----------
ScoreCallback = Callable[[int], None]
GameOverCallback = Callable[[int, int], None]


class Engine:
    """
    Snake game engine: owns the grid, snake, food, score and speed, and runs
    the ready / running / paused lifecycle on a host-supplied scheduler.

    Callbacks:
      on_score_update(score)            after each food eaten
      on_game_over(score, duration_s)   once per game, after game_over_delay_ms
    """

    def __init__(
        self,
        scheduler: Scheduler,
        cfg: EngineConfig = CFG,
        on_score_update: Optional[ScoreCallback] = None,
        on_game_over: Optional[GameOverCallback] = None,
        rng: Optional[random.Random] = None,
    ):
        self.cfg = cfg
        self.scheduler = scheduler
        self.rng = rng or random.Random(cfg.seed)
        self.on_score_update = on_score_update
        self.on_game_over = on_game_over

        self.running = False
        self.paused = False
        self.outcome: Optional[StepOutcome] = None

        self._tick_handle: Optional[TimerHandle] = None
        self._game_over_handle: Optional[TimerHandle] = None
        self._pending_report: Optional[Tuple[int, int]] = None

        # Initial board, so a renderer has something to draw before start()
        self.state = new_game_state(cfg, self.rng)

    # ----- Commands -----
    def start(self) -> None:
        if self.running and not self.paused:
            return

        if self.paused:
            self.resume()
            return

        # A game that just ended reports before the next one begins
        self._deliver_game_over()

        self.state = new_game_state(self.cfg, self.rng, now_ms=self.scheduler.now_ms())
        self.outcome = None
        self.running = True
        self.paused = False
        logger.info(
            "Game started on %dx%d grid at %d ms/tick",
            self.cfg.grid_w, self.cfg.grid_h, self.state.speed_ms,
        )
        self._schedule_tick()

    def pause(self) -> None:
        if not self.running or self.paused:
            return
        self.paused = True
        self._cancel_tick()
        logger.debug("Game paused at score %d", self.state.score)

    def resume(self) -> None:
        if not self.paused:
            return
        self.paused = False
        logger.debug("Game resumed")
        self._schedule_tick()

    def toggle_pause(self) -> None:
        if self.paused:
            self.resume()
        else:
            self.pause()

    def stop(self) -> None:
        """
        Tear down to idle. Never produces a game over itself, but a game that
        already collided still reports before we go quiet.
        """
        self.running = False
        self.paused = False
        self._cancel_tick()
        self._deliver_game_over()

    def set_direction(self, direction: Union[Direction, str]) -> bool:
        """
        Queue a direction for the next tick. Returns False (and changes nothing)
        when it would reverse the last committed move.
        """
        direction = Direction(direction)
        if is_opposite(direction, self.state.direction):
            return False
        self.state.pending = direction
        return True

    # ----- Queries -----
    def get_state(self) -> Dict[str, Union[bool, int]]:
        return {
            "running": self.running,
            "paused": self.paused,
            "score": self.state.score,
        }

    def get_score(self) -> int:
        return self.state.score

    def snapshot(self) -> Frame:
        return Frame(
            grid_w=self.cfg.grid_w,
            grid_h=self.cfg.grid_h,
            snake=tuple(self.state.snake),
            food=self.state.food,
            direction=self.state.direction,
            score=self.state.score,
            speed_ms=self.state.speed_ms,
            running=self.running,
            paused=self.paused,
        )

    # ----- Tick loop -----
    def _schedule_tick(self) -> None:
        self._cancel_tick()
        self._tick_handle = self.scheduler.call_later(self.state.speed_ms, self._tick)

    def _cancel_tick(self) -> None:
        self.scheduler.cancel(self._tick_handle)
        self._tick_handle = None

    def _tick(self) -> None:
        self._tick_handle = None
        if not self.running or self.paused:
            return

        outcome = step_game(self.state, self.cfg, self.rng, on_score=self._notify_score)

        if outcome.ate:
            logger.debug(
                "Food eaten: score=%d speed=%dms length=%d",
                self.state.score, self.state.speed_ms, len(self.state.snake),
            )
            # The score callback may have stopped us
            if not self.running:
                return

        if outcome.terminal:
            self._game_over(outcome)
            return

        if self.running and not self.paused:
            self._schedule_tick()

    def _notify_score(self, score: int) -> None:
        if self.on_score_update:
            self.on_score_update(score)

    # ----- Game over -----
    def _game_over(self, outcome: StepOutcome) -> None:
        self.running = False
        self.paused = False
        self._cancel_tick()
        self.outcome = outcome

        # Values are fixed at the moment of collision, not when reported
        score = self.state.score
        duration = (self.scheduler.now_ms() - self.state.started_at_ms) // 1000
        logger.info("Game over (%s): score=%d duration=%ds", outcome.value, score, duration)

        self._pending_report = (score, duration)
        if self.cfg.game_over_delay_ms > 0:
            self._game_over_handle = self.scheduler.call_later(
                self.cfg.game_over_delay_ms, self._deliver_game_over
            )
        else:
            self._deliver_game_over()

    def _deliver_game_over(self) -> None:
        self.scheduler.cancel(self._game_over_handle)
        self._game_over_handle = None
        report, self._pending_report = self._pending_report, None
        if report is not None and self.on_game_over:
            self.on_game_over(*report)

    def __repr__(self):
        return (
            f"<Engine running={self.running} paused={self.paused} "
            f"score={self.state.score} length={len(self.state.snake)}>"
        )
