from __future__ import annotations

from enum import Enum

import pygame

from .state import DOWN, LEFT, RIGHT, UP, Direction, GameState

KEY_DIRECTIONS: dict[int, Direction] = {
    pygame.K_UP: UP,
    pygame.K_w: UP,
    pygame.K_DOWN: DOWN,
    pygame.K_s: DOWN,
    pygame.K_LEFT: LEFT,
    pygame.K_a: LEFT,
    pygame.K_RIGHT: RIGHT,
    pygame.K_d: RIGHT,
}
PAUSE_KEYS = (pygame.K_SPACE, pygame.K_p)
RESTART_KEYS = (pygame.K_r, pygame.K_RETURN, pygame.K_KP_ENTER)
QUIT_KEYS = (pygame.K_ESCAPE, pygame.K_q)


class Action(Enum):
    NONE = "none"
    QUIT = "quit"
    RESTART = "restart"


def direction_from_point(x: float, y: float, center: tuple[float, float]) -> Direction | None:
    """Direction of the dominant axis from `center` towards (x, y)."""
    dx = x - center[0]
    dy = y - center[1]
    if dx == 0 and dy == 0:
        return None
    if abs(dx) > abs(dy):
        return RIGHT if dx > 0 else LEFT
    return DOWN if dy > 0 else UP


def _pointer_pos(event: pygame.event.Event, window: tuple[int, int]) -> tuple[float, float]:
    if event.type == pygame.FINGERDOWN:
        # Finger coordinates are normalised to the window.
        return (event.x * window[0], event.y * window[1])
    return event.pos


def handle_event(
    game: GameState,
    event: pygame.event.Event,
    field: pygame.Rect,
    window: tuple[int, int],
) -> Action:
    if event.type == pygame.QUIT:
        return Action.QUIT

    if event.type == pygame.KEYDOWN:
        if event.key in QUIT_KEYS:
            return Action.QUIT
        if game.game_over:
            return Action.RESTART if event.key in RESTART_KEYS else Action.NONE
        if event.key in PAUSE_KEYS:
            game.toggle_pause()
            return Action.NONE
        new_dir = KEY_DIRECTIONS.get(event.key)
        if new_dir is not None:
            game.set_direction(*new_dir)
        return Action.NONE

    if event.type == pygame.MOUSEBUTTONDOWN and getattr(event, "touch", False):
        # Touches also arrive as FINGERDOWN.
        return Action.NONE
    if event.type in (pygame.MOUSEBUTTONDOWN, pygame.FINGERDOWN):
        if game.game_over:
            return Action.RESTART
        x, y = _pointer_pos(event, window)
        new_dir = direction_from_point(x, y, field.center)
        if new_dir is not None:
            game.set_direction(*new_dir)
    return Action.NONE
