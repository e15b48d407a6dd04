import math
from typing import Tuple

import numpy as np
import pygame

from snake_game import DOWN, LEFT, RIGHT, UP, GameConfig, SnakeState

Color = Tuple[int, int, int]

BG_COLOR = (255, 255, 255)
GRID_COLOR = (238, 238, 238)
HEAD_COLOR = (255, 215, 0)
BODY_COLOR = (255, 215, 0)
TAIL_COLOR = (218, 165, 32)
EYE_COLOR = (0, 0, 0)
FOOD_COLOR = (244, 67, 54)


class PygameSurface:
    def __init__(self, surface):
        self.surface = surface

    def clear(self, color: Color) -> None:
        self.surface.fill(color)

    def fill_rect(self, x: float, y: float, w: float, h: float, color: Color) -> None:
        pygame.draw.rect(self.surface, color, pygame.Rect(round(x), round(y), round(w), round(h)))

    def stroke_line(self, x0: float, y0: float, x1: float, y1: float, color: Color) -> None:
        pygame.draw.line(self.surface, color, (x0, y0), (x1, y1))

    def fill_circle(self, cx: float, cy: float, r: float, color: Color) -> None:
        pygame.draw.circle(self.surface, color, (round(cx), round(cy)), max(0, round(r)))


class ArraySurface:
    """Headless raster surface backed by an (H, W, 3) uint8 array."""

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self.pixels = np.zeros((height, width, 3), dtype=np.uint8)

    def clear(self, color: Color) -> None:
        self.pixels[:] = color

    def fill_rect(self, x: float, y: float, w: float, h: float, color: Color) -> None:
        x0 = max(0, int(math.floor(x)))
        y0 = max(0, int(math.floor(y)))
        x1 = min(self.width, int(math.floor(x + w)))
        y1 = min(self.height, int(math.floor(y + h)))
        if x1 > x0 and y1 > y0:
            self.pixels[y0:y1, x0:x1] = color

    def stroke_line(self, x0: float, y0: float, x1: float, y1: float, color: Color) -> None:
        n = int(max(abs(x1 - x0), abs(y1 - y0))) + 1
        xs = np.rint(np.linspace(x0, x1, n)).astype(int)
        ys = np.rint(np.linspace(y0, y1, n)).astype(int)
        keep = (xs >= 0) & (xs < self.width) & (ys >= 0) & (ys < self.height)
        self.pixels[ys[keep], xs[keep]] = color

    def fill_circle(self, cx: float, cy: float, r: float, color: Color) -> None:
        ys, xs = np.ogrid[: self.height, : self.width]
        mask = (xs + 0.5 - cx) ** 2 + (ys + 0.5 - cy) ** 2 <= r * r
        self.pixels[mask] = color

    def to_array(self) -> np.ndarray:
        return self.pixels.copy()


def _draw_eyes(surface, x: float, y: float, cell: float, direction) -> None:
    size = cell / 6
    offset = cell / 4
    if direction == RIGHT:
        eyes = [(x + cell - offset, y + offset), (x + cell - offset, y + cell - offset - size)]
    elif direction == LEFT:
        eyes = [(x + offset - size, y + offset), (x + offset - size, y + cell - offset - size)]
    elif direction == UP:
        eyes = [(x + offset, y + offset - size), (x + cell - offset - size, y + offset - size)]
    elif direction == DOWN:
        eyes = [(x + offset, y + cell - offset), (x + cell - offset - size, y + cell - offset)]
    else:
        return
    for ex, ey in eyes:
        surface.fill_rect(ex, ey, size, size, EYE_COLOR)


def draw_scene(surface, state: SnakeState, config: GameConfig) -> None:
    size = config.canvas_size
    cell = config.cell_size
    surface.clear(BG_COLOR)

    for i in range(config.grid_size + 1):
        surface.stroke_line(i * cell, 0, i * cell, size, GRID_COLOR)
        surface.stroke_line(0, i * cell, size, i * cell, GRID_COLOR)

    length = len(state.snake)
    for idx, (x, y) in enumerate(state.snake):
        if idx == 0:
            color = HEAD_COLOR
        elif idx == length - 1:
            color = TAIL_COLOR
        else:
            color = BODY_COLOR
        surface.fill_rect(x * cell, y * cell, cell - 1, cell - 1, color)

    if state.snake:
        hx, hy = state.snake[0]
        _draw_eyes(surface, hx * cell, hy * cell, cell, state.direction)

    fx, fy = state.food
    surface.fill_circle(fx * cell + cell / 2, fy * cell + cell / 2, cell / 2 - 1, FOOD_COLOR)
