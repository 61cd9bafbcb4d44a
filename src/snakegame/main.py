# main.py
import argparse
import logging
from typing import List, Optional, Tuple

import pygame  # type: ignore

from .config import WIDTH, HEIGHT, CELL_SIZE, Direction, EngineConfig
from .game import Engine, StepOutcome
from .render import draw_game, draw_overlay
from .scheduler import PygameScheduler
from .scoreboard import ScoreBoard

logger = logging.getLogger(__name__)

KEY_DIRECTIONS = {
    pygame.K_UP: Direction.UP, pygame.K_w: Direction.UP,
    pygame.K_DOWN: Direction.DOWN, pygame.K_s: Direction.DOWN,
    pygame.K_LEFT: Direction.LEFT, pygame.K_a: Direction.LEFT,
    pygame.K_RIGHT: Direction.RIGHT, pygame.K_d: Direction.RIGHT,
}

READY = ("Ready", "Press SPACE to start")
PAUSED = ("Paused", "Press SPACE or P to continue")


class App:
    """Wires the engine to pygame input, the renderer and the scoreboard."""

    def __init__(self, cfg: EngineConfig, cell_size: int, player: Optional[str]):
        self.cell_size = cell_size
        self.player = player
        self.scores = ScoreBoard()
        self.scheduler = PygameScheduler()
        self.engine = Engine(
            self.scheduler,
            cfg,
            on_score_update=self.on_score_update,
            on_game_over=self.on_game_over,
        )
        self.overlay: Optional[Tuple[str, str]] = READY

    # ----- Engine callbacks -----
    def on_score_update(self, score: int) -> None:
        logger.debug("Score: %d", score)

    def on_game_over(self, score: int, duration_s: int) -> None:
        self.scores.record_game(self.player, score, duration_s)
        if self.player is not None:
            logger.info(
                "%s finished a game: score=%d in %ds (best %d over %d games)",
                self.player, score, duration_s,
                self.scores.high_score(self.player), self.scores.total_games(self.player),
            )
        title = "Victory!" if self.engine.outcome is StepOutcome.VICTORY else "Game over"
        self.overlay = (title, f"Final score: {score}. Press SPACE to play again")

    def history_lines(self) -> List[str]:
        """Most recent games, newest first, for the Ready and Game-over overlays."""
        records = self.scores.game_history(self.player)
        if not records:
            return []
        lines = ["Recent games:"]
        for r in records:
            lines.append(f"{r.score} pts in {r.duration_s}s  ({r.played_at.astimezone():%H:%M})")
        return lines

    # ----- Input -----
    def handle_input(self) -> bool:
        """Process events; forward directions and lifecycle keys. Return False to quit."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False
            if event.type != pygame.KEYDOWN:
                continue

            if event.key in KEY_DIRECTIONS:
                self.engine.set_direction(KEY_DIRECTIONS[event.key])
            elif event.key == pygame.K_SPACE:
                state = self.engine.get_state()
                if not state["running"] or state["paused"]:
                    self.engine.start()
                    self.overlay = None
                else:
                    self.engine.pause()
                    self.overlay = PAUSED
            elif event.key == pygame.K_p and self.engine.running:
                self.engine.toggle_pause()
                self.overlay = PAUSED if self.engine.paused else None
            elif event.key == pygame.K_ESCAPE:
                self.engine.stop()
                self.overlay = READY
        return True

    # ----- Draw -----
    def draw(self, screen: pygame.Surface, font: pygame.font.Font) -> None:
        frame = self.engine.snapshot()
        draw_game(screen, font, frame, self.scores.high_score(self.player), self.cell_size)
        if self.overlay is not None:
            lines = [] if self.overlay is PAUSED else self.history_lines()
            draw_overlay(screen, font, *self.overlay, lines=lines)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Grid snake game")
    parser.add_argument("--width", type=int, default=WIDTH, help="window width in pixels")
    parser.add_argument("--height", type=int, default=HEIGHT, help="window height in pixels")
    parser.add_argument("--cell-size", type=int, default=CELL_SIZE, help="pixels per grid cell")
    parser.add_argument("--seed", type=int, default=None, help="seed food placement for reproducible games")
    parser.add_argument(
        "--player",
        type=str,
        default=None,
        help="name to record scores under; omit to play as a guest (nothing recorded)",
    )
    parser.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    cfg = EngineConfig.from_surface(args.width, args.height, args.cell_size, seed=args.seed)

    pygame.init()
    font = pygame.font.SysFont(None, 24)
    screen = pygame.display.set_mode((cfg.grid_w * args.cell_size, cfg.grid_h * args.cell_size))
    pygame.display.set_caption("Snake")
    clock = pygame.time.Clock()

    app = App(cfg, args.cell_size, args.player)
    running = True

    while running:
        # 1) input
        running = app.handle_input()
        if not running:
            break

        # 2) update: fire any ticks that came due since the last frame
        app.scheduler.run_due()

        # 3) render
        app.draw(screen, font)
        pygame.display.flip()
        clock.tick(60)  # high FPS; movement paced by the engine's own timer

    app.engine.stop()
    pygame.quit()


if __name__ == "__main__":
    main()
