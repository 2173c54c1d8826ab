from __future__ import annotations

import logging

import pygame

from . import config
from .audio import AudioPlayer
from .controls import Action, handle_event
from .events import EventBus
from .render import Renderer, field_rect, tiles_for_window, window_size
from .scheduler import TickScheduler
from .state import GameState

log = logging.getLogger(__name__)


def run(
    tiles: int = config.GRID_TILES,
    cell: int = config.CELL,
    fps: int = config.FPS,
    mute: bool = False,
) -> int:
    """Play until the window is closed; returns the last score."""
    pygame.init()
    pygame.display.set_caption("neonsnake")
    screen = pygame.display.set_mode(window_size(tiles, cell), pygame.RESIZABLE)
    clock = pygame.time.Clock()

    events = EventBus()
    game = GameState(tiles, tiles, events=events)
    scheduler = TickScheduler(game)
    renderer = Renderer(cell)
    audio = AudioPlayer(events, enabled=not mute)
    audio.start()

    try:
        playing = True
        while playing:
            dt = clock.tick(fps)
            for event in pygame.event.get():
                if event.type == pygame.VIDEORESIZE:
                    tiles = tiles_for_window(event.w, event.h, cell)
                    log.debug("window resized to %dx%d, %d tiles", event.w, event.h, tiles)
                    game.resize(tiles, tiles)
                    screen = pygame.display.set_mode(window_size(tiles, cell), pygame.RESIZABLE)
                    continue

                field = field_rect(game.width, game.height, cell)
                action = handle_event(game, event, field, screen.get_size())
                if action is Action.QUIT:
                    playing = False
                elif action is Action.RESTART:
                    game.reset()
                    scheduler.reset()

            scheduler.advance(dt)
            audio.update(dt)
            renderer.draw_frame(screen, game, pygame.time.get_ticks())
            pygame.display.flip()
    finally:
        audio.close()
        pygame.quit()

    return game.score
