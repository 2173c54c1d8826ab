from __future__ import annotations

from collections import defaultdict
from enum import Enum
from typing import Callable


class Event(Enum):
    FOOD_EATEN = "food_eaten"
    GAME_OVER = "game_over"
    BOARD_FULL = "board_full"
    PAUSED = "paused"
    RESUMED = "resumed"
    RESET = "reset"


class EventBus:
    """Synchronous fan-out of game notifications to adapters.

    Callbacks receive the emitting GameState and run in subscription order.
    """

    def __init__(self):
        self._subs: dict[Event, list[Callable]] = defaultdict(list)

    def subscribe(self, event: Event, callback: Callable) -> None:
        self._subs[event].append(callback)

    def unsubscribe(self, event: Event, callback: Callable) -> None:
        subs = self._subs.get(event)
        if subs and callback in subs:
            subs.remove(callback)

    def emit(self, event: Event, state) -> None:
        # Copy so a callback may unsubscribe itself.
        for callback in list(self._subs.get(event, ())):
            callback(state)
