# render.py
from typing import Sequence, Tuple

import numpy as np  # type: ignore
import pygame  # type: ignore

from .config import CELL_SIZE, BG, GRID, HEAD, BODY, FOOD, TEXT
from .game import Frame, BODY as BODY_CELL, HEAD as HEAD_CELL, FOOD as FOOD_CELL

_COLORS = {BODY_CELL: BODY, HEAD_CELL: HEAD, FOOD_CELL: FOOD}


def draw_cell(screen: pygame.Surface, gx: int, gy: int, color: Tuple[int, int, int], cell_size: int = CELL_SIZE) -> None:
    rect = pygame.Rect(gx * cell_size + 1, gy * cell_size + 1, cell_size - 2, cell_size - 2)
    pygame.draw.rect(screen, color, rect, border_radius=4)


def draw_grid(screen: pygame.Surface, frame: Frame, cell_size: int = CELL_SIZE) -> None:
    w_px, h_px = frame.grid_w * cell_size, frame.grid_h * cell_size
    for x in range(frame.grid_w + 1):
        pygame.draw.line(screen, GRID, (x * cell_size, 0), (x * cell_size, h_px))
    for y in range(frame.grid_h + 1):
        pygame.draw.line(screen, GRID, (0, y * cell_size), (w_px, y * cell_size))


def draw_game(screen: pygame.Surface, font: pygame.font.Font, frame: Frame, high_score: int, cell_size: int = CELL_SIZE) -> None:
    screen.fill(BG)
    draw_grid(screen, frame, cell_size)

    grid = frame.to_grid()
    for gy, gx in np.argwhere(grid != 0):
        draw_cell(screen, int(gx), int(gy), _COLORS[int(grid[gy, gx])], cell_size)

    txt = font.render(f"Score: {frame.score}   Best: {max(high_score, frame.score)}", True, TEXT)
    screen.blit(txt, (8, 6))


def draw_overlay(screen: pygame.Surface, font: pygame.font.Font, title: str, subtitle: str, lines: Sequence[str] = ()) -> None:
    width, height = screen.get_size()

    # Dim with translucent overlay
    overlay = pygame.Surface((width, height), pygame.SRCALPHA)
    overlay.fill((0, 0, 0, 140))  # RGBA
    screen.blit(overlay, (0, 0))

    head = font.render(title, True, (240, 240, 250))
    sub  = font.render(subtitle, True, (220, 220, 230))

    # Keep the whole block centred when history rows are added
    mid = height // 2 - 10 * len(lines)
    screen.blit(head, head.get_rect(center=(width // 2, mid - 16)))
    screen.blit(sub, sub.get_rect(center=(width // 2, mid + 16)))

    # Extra rows below the subtitle, e.g. recent games
    for i, line in enumerate(lines):
        row = font.render(line, True, TEXT)
        screen.blit(row, row.get_rect(center=(width // 2, mid + 48 + i * 20)))
