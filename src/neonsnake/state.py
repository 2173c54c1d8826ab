from __future__ import annotations

import logging
import random
from enum import Enum

from . import config
from .events import Event, EventBus

log = logging.getLogger(__name__)

Position = tuple[int, int]
Direction = tuple[int, int]

UP: Direction = (0, -1)
DOWN: Direction = (0, 1)
LEFT: Direction = (-1, 0)
RIGHT: Direction = (1, 0)
STILL: Direction = (0, 0)
DIRECTIONS = frozenset((UP, DOWN, LEFT, RIGHT, STILL))


class Status(Enum):
    RUNNING = "running"
    PAUSED = "paused"
    GAME_OVER = "game_over"


class Outcome(Enum):
    WALL = "wall"
    SELF = "self"
    BOARD_FULL = "board_full"


def add_vectors(a: tuple[int, int], b: tuple[int, int]) -> tuple[int, int]:
    return (a[0] + b[0], a[1] + b[1])


def is_reversal(current: Direction, new: Direction) -> bool:
    """True when `new` points straight back along `current`."""
    return current != STILL and add_vectors(current, new) == STILL


def in_bounds(pos: Position, width: int, height: int) -> bool:
    x, y = pos
    return 0 <= x < width and 0 <= y < height


def next_interval(score: int) -> int:
    steps = score // config.SPEEDUP_SCORE_STEP
    return max(config.MIN_INTERVAL_MS, config.BASE_INTERVAL_MS - steps * config.SPEEDUP_MS)


class GameState:
    """Grid, snake, food and score for one game; advanced by `tick()`.

    The state never drives its own timer. `tick()` returns the interval the
    caller should wait before the next tick, and every transition adapters
    care about is announced on `events`.
    """

    def __init__(
        self,
        width: int = config.GRID_TILES,
        height: int = config.GRID_TILES,
        origin: Position | None = None,
        rng: random.Random | None = None,
        events: EventBus | None = None,
    ):
        if width <= 0 or height <= 0:
            raise ValueError(f"grid must be at least 1x1, got {width}x{height}")
        self.width = width
        self.height = height
        self.origin = origin if origin is not None else (width // 2, height // 2)
        if not in_bounds(self.origin, width, height):
            raise ValueError(f"origin {self.origin} outside {width}x{height} grid")
        self.rng = rng or random.Random()
        self.events = events or EventBus()

        self.snake: list[Position] = [self.origin]
        self.direction: Direction = config.INITIAL_DIRECTION
        self.pending_direction: Direction | None = None
        self.food: Position | None = None
        self.score = 0
        self.status = Status.RUNNING
        self.outcome: Outcome | None = None
        self.interval_ms = config.BASE_INTERVAL_MS
        self.place_food()

    # --- read helpers ---

    @property
    def head(self) -> Position:
        return self.snake[0]

    @property
    def running(self) -> bool:
        return self.status is Status.RUNNING

    @property
    def paused(self) -> bool:
        return self.status is Status.PAUSED

    @property
    def game_over(self) -> bool:
        return self.status is Status.GAME_OVER

    @property
    def won(self) -> bool:
        return self.outcome is Outcome.BOARD_FULL

    def occupied(self) -> set[Position]:
        return set(self.snake)

    # --- operations ---

    def set_direction(self, dx: int, dy: int) -> None:
        new_dir = (dx, dy)
        if new_dir not in DIRECTIONS:
            raise ValueError(f"not a unit direction: {new_dir}")
        if self.game_over:
            return
        # Stopping is only a starting state; a moving snake keeps moving.
        if new_dir == STILL and self.direction != STILL:
            return
        # A one-cell snake has no neck to run into.
        if len(self.snake) > 1 and is_reversal(self.direction, new_dir):
            return
        self.pending_direction = new_dir

    def tick(self) -> int | None:
        if not self.running:
            return None

        if self.pending_direction is not None:
            self.direction = self.pending_direction
            self.pending_direction = None
        if self.direction == STILL:
            return self.interval_ms

        new_head = add_vectors(self.head, self.direction)
        self.snake.insert(0, new_head)
        if new_head == self.food:
            self.score += config.FOOD_SCORE
            log.debug("food eaten at %s, score %d", new_head, self.score)
            self.events.emit(Event.FOOD_EATEN, self)
            self.place_food()
        else:
            self.snake.pop()

        if self.running and not in_bounds(new_head, self.width, self.height):
            self._end(Outcome.WALL)
        if self.running and new_head in self.snake[1:]:
            self._end(Outcome.SELF)
        if not self.running:
            return None

        self.interval_ms = next_interval(self.score)
        return self.interval_ms

    def place_food(self) -> Position | None:
        occupied = self.occupied()
        free = [
            (x, y)
            for y in range(self.height)
            for x in range(self.width)
            if (x, y) not in occupied
        ]
        if not free:
            self.food = None
            self._end(Outcome.BOARD_FULL)
            return None
        self.food = self.rng.choice(free)
        log.debug("food placed at %s", self.food)
        return self.food

    def toggle_pause(self) -> None:
        if self.running:
            self.status = Status.PAUSED
            log.info("paused")
            self.events.emit(Event.PAUSED, self)
        elif self.paused:
            self.status = Status.RUNNING
            log.info("resumed")
            self.events.emit(Event.RESUMED, self)

    def reset(self) -> None:
        self.snake = [self.origin]
        self.direction = config.INITIAL_DIRECTION
        self.pending_direction = None
        self.score = 0
        self.outcome = None
        self.interval_ms = config.BASE_INTERVAL_MS
        self.status = Status.RUNNING
        self.place_food()
        log.info("game reset")
        self.events.emit(Event.RESET, self)

    def resize(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"grid must be at least 1x1, got {width}x{height}")
        self.width = width
        self.height = height
        if not in_bounds(self.origin, width, height):
            self.origin = (width // 2, height // 2)
        if self.food is not None and not in_bounds(self.food, width, height):
            self.place_food()

    def _end(self, outcome: Outcome) -> None:
        if self.game_over:
            return
        self.status = Status.GAME_OVER
        self.outcome = outcome
        log.info("game over (%s), score %d", outcome.value, self.score)
        if outcome is Outcome.BOARD_FULL:
            self.events.emit(Event.BOARD_FULL, self)
        self.events.emit(Event.GAME_OVER, self)
