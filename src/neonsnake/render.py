from __future__ import annotations

import math

import pygame

from . import config
from .state import GameState


def window_size(tiles: int, cell: int = config.CELL) -> tuple[int, int]:
    return (tiles * cell, tiles * cell + config.HUD_HEIGHT)


def field_rect(width: int, height: int, cell: int = config.CELL) -> pygame.Rect:
    return pygame.Rect(0, config.HUD_HEIGHT, width * cell, height * cell)


def tiles_for_window(width: int, height: int, cell: int = config.CELL) -> int:
    """Largest square play field that fits under the HUD, clamped."""
    tiles = min(width, height - config.HUD_HEIGHT) // cell
    return max(config.MIN_TILES, min(config.MAX_TILES, tiles))


def food_pulse(now_ms: float) -> float:
    return math.sin(now_ms * 0.01) * 0.2 + 0.8


def _scale(color: tuple[int, int, int], k: float) -> tuple[int, int, int]:
    return tuple(max(0, min(255, int(c * k))) for c in color)


def _mix(a: tuple[int, int, int], b: tuple[int, int, int], t: float) -> tuple[int, int, int]:
    return tuple(int(a[i] + (b[i] - a[i]) * t) for i in range(3))


class Renderer:
    def __init__(self, cell: int = config.CELL):
        if not pygame.font.get_init():
            pygame.font.init()
        self.cell = cell
        self.font = pygame.font.Font(None, config.FONT_SIZE)
        self.title_font = pygame.font.Font(None, config.TITLE_FONT_SIZE)
        self._glow_cache: dict[tuple[int, tuple[int, int, int]], pygame.Surface] = {}

    def _glow(self, radius: int, color: tuple[int, int, int]) -> pygame.Surface:
        key = (radius, color)
        surf = self._glow_cache.get(key)
        if surf is None:
            surf = pygame.Surface((radius * 2, radius * 2), pygame.SRCALPHA)
            for r in range(radius, 0, -1):
                alpha = int(60 * (1.0 - r / radius) ** 2)
                pygame.draw.circle(surf, (*color, alpha), (radius, radius), r)
            self._glow_cache[key] = surf
        return surf

    def draw_frame(self, surface: pygame.Surface, game: GameState, now_ms: float) -> None:
        surface.fill(config.BACKGROUND)
        field = field_rect(game.width, game.height, self.cell)
        self.draw_grid(surface, field, game.width, game.height)
        self.draw_snake(surface, field, game)
        if game.food is not None:
            self.draw_food(surface, field, game.food, now_ms)
        self.draw_hud(surface, game)
        if game.paused:
            self.draw_overlay(surface, field, "PAUSED", "space to resume")
        elif game.game_over:
            title = "BOARD FULL!" if game.won else "GAME OVER"
            self.draw_overlay(surface, field, title, f"score {game.score}  -  R to restart")

    def draw_grid(self, surface: pygame.Surface, field: pygame.Rect, w: int, h: int) -> None:
        for i in range(w + 1):
            x = field.left + i * self.cell
            pygame.draw.line(surface, config.GRID_LINE, (x, field.top), (x, field.bottom))
        for j in range(h + 1):
            y = field.top + j * self.cell
            pygame.draw.line(surface, config.GRID_LINE, (field.left, y), (field.right, y))

    def draw_snake(self, surface: pygame.Surface, field: pygame.Rect, game: GameState) -> None:
        cell = self.cell
        glow = self._glow(cell, config.SNAKE)
        # Tail first so the head ends up on top.
        for index in range(len(game.snake) - 1, -1, -1):
            x, y = game.snake[index]
            px = field.left + x * cell
            py = field.top + y * cell
            surface.blit(glow, (px + cell // 2 - cell, py + cell // 2 - cell))
            rect = pygame.Rect(px + 1, py + 1, cell - 2, cell - 2)
            if index == 0:
                pygame.draw.rect(surface, config.SNAKE, rect)
                inner = rect.inflate(-cell // 2, -cell // 2)
                pygame.draw.rect(surface, config.SNAKE_HEAD, inner)
            else:
                fade = 1.0 - 0.4 * index / max(1, len(game.snake))
                pygame.draw.rect(surface, _scale(config.SNAKE, fade), rect)

    def draw_food(
        self, surface: pygame.Surface, field: pygame.Rect, food: tuple[int, int], now_ms: float
    ) -> None:
        cell = self.cell
        cx = field.left + food[0] * cell + cell // 2
        cy = field.top + food[1] * cell + cell // 2
        radius = max(1, int((cell - 4) * food_pulse(now_ms) / 2))
        glow = self._glow(cell, config.FOOD)
        surface.blit(glow, (cx - cell, cy - cell))
        pygame.draw.circle(surface, config.FOOD, (cx, cy), radius)
        pygame.draw.circle(surface, _mix(config.FOOD, (255, 255, 255), 0.7), (cx, cy), max(1, radius // 3))

    def draw_hud(self, surface: pygame.Surface, game: GameState) -> None:
        bar = pygame.Rect(0, 0, surface.get_width(), config.HUD_HEIGHT)
        pygame.draw.rect(surface, config.HUD_BG, bar)
        text = self.font.render(f"Score: {game.score}", True, config.TEXT)
        surface.blit(text, (10, (config.HUD_HEIGHT - text.get_height()) // 2))

    def draw_overlay(self, surface: pygame.Surface, field: pygame.Rect, title: str, subtitle: str) -> None:
        shade = pygame.Surface(field.size, pygame.SRCALPHA)
        shade.fill(config.OVERLAY)
        surface.blit(shade, field.topleft)
        title_surf = self.title_font.render(title, True, config.SNAKE)
        sub_surf = self.font.render(subtitle, True, config.TEXT)
        surface.blit(title_surf, title_surf.get_rect(center=(field.centerx, field.centery - 16)))
        surface.blit(sub_surf, sub_surf.get_rect(center=(field.centerx, field.centery + 20)))
