from .events import Event, EventBus
from .scheduler import TickScheduler
from .state import DOWN, LEFT, RIGHT, STILL, UP, GameState, Outcome, Status

__all__ = [
    "Event",
    "EventBus",
    "GameState",
    "Outcome",
    "Status",
    "TickScheduler",
    "UP",
    "DOWN",
    "LEFT",
    "RIGHT",
    "STILL",
]
