from __future__ import annotations

import logging

from . import config
from .state import GameState

log = logging.getLogger(__name__)


class TickScheduler:
    """Paces GameState.tick() by the interval each tick reports back."""

    def __init__(self, game: GameState, max_catchup: int = config.MAX_CATCHUP_TICKS):
        self.game = game
        self.max_catchup = max_catchup
        self.interval_ms = game.interval_ms
        self.elapsed_ms = 0.0

    def reset(self) -> None:
        self.elapsed_ms = 0.0
        self.interval_ms = self.game.interval_ms

    def advance(self, dt_ms: float) -> int:
        if not self.game.running:
            # Paused or finished: the timer is suspended, not accumulating.
            self.elapsed_ms = 0.0
            return 0

        self.elapsed_ms += dt_ms
        ticks = 0
        while self.elapsed_ms >= self.interval_ms:
            if ticks >= self.max_catchup:
                log.debug("dropping %.0f ms of tick backlog", self.elapsed_ms)
                self.elapsed_ms = 0.0
                break
            self.elapsed_ms -= self.interval_ms
            ticks += 1
            interval = self.game.tick()
            if interval is None:
                self.elapsed_ms = 0.0
                break
            self.interval_ms = interval
        return ticks
