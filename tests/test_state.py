import random

import pytest

from neonsnake import config
from neonsnake.events import Event
from neonsnake.state import (
    DOWN,
    LEFT,
    RIGHT,
    STILL,
    UP,
    GameState,
    Outcome,
    Status,
    is_reversal,
    next_interval,
)


def make_game(**kwargs) -> GameState:
    kwargs.setdefault("rng", random.Random(1234))
    return GameState(20, 20, **kwargs)


def record(game: GameState) -> list[Event]:
    seen = []
    for event in Event:
        game.events.subscribe(event, lambda s, e=event: seen.append(e))
    return seen


def test_initial_state():
    game = make_game()
    assert game.snake == [(10, 10)]
    assert game.direction == DOWN
    assert game.score == 0
    assert game.status is Status.RUNNING
    assert game.interval_ms == 150
    assert game.food not in game.snake
    assert 0 <= game.food[0] < 20 and 0 <= game.food[1] < 20


def test_eating_grows_snake_and_scores():
    game = make_game()
    game.food = (10, 11)

    interval = game.tick()

    assert game.snake == [(10, 11), (10, 10)]
    assert game.score == 10
    assert game.food not in ((10, 11), (10, 10))
    assert interval == 150


def test_plain_move_drops_tail():
    game = make_game()
    game.snake = [(5, 5), (5, 6)]
    game.direction = UP
    game.food = (0, 0)

    game.tick()

    assert game.snake == [(5, 4), (5, 5)]
    assert game.score == 0


def test_leaving_the_grid_ends_the_game():
    game = make_game()
    game.snake = [(0, 0)]
    game.direction = LEFT
    game.food = (5, 5)

    assert game.tick() is None
    assert game.status is Status.GAME_OVER
    assert game.outcome is Outcome.WALL

    snake = list(game.snake)
    assert game.tick() is None
    assert game.snake == snake


@pytest.mark.parametrize(
    "head, direction",
    [((19, 5), RIGHT), ((5, 19), DOWN), ((5, 0), UP)],
)
def test_every_wall_is_deadly(head, direction):
    game = make_game()
    game.snake = [head]
    game.direction = direction
    game.food = (10, 10)
    game.tick()
    assert game.outcome is Outcome.WALL


def test_running_into_body_ends_the_game():
    game = make_game()
    game.snake = [(5, 5), (6, 5), (6, 6), (5, 6), (4, 6)]
    game.direction = DOWN
    game.food = (0, 0)

    game.tick()

    assert game.game_over
    assert game.outcome is Outcome.SELF


def test_chasing_own_tail_is_safe():
    game = make_game()
    game.snake = [(5, 5), (6, 5), (6, 6), (5, 6)]
    game.direction = DOWN
    game.food = (0, 0)

    game.tick()

    assert game.running
    assert game.snake == [(5, 6), (5, 5), (6, 5), (6, 6)]


def test_reversal_onto_neck_is_ignored():
    game = make_game()
    game.snake = [(5, 5), (5, 6)]
    game.direction = UP
    game.food = (0, 0)

    game.set_direction(*DOWN)
    game.tick()

    assert game.direction == UP
    assert game.head == (5, 4)


def test_single_segment_may_reverse():
    game = make_game()
    game.snake = [(5, 5)]
    game.direction = UP
    game.food = (0, 0)

    game.set_direction(*DOWN)
    game.tick()

    assert game.head == (5, 6)


def test_latest_direction_between_ticks_wins():
    game = make_game()
    game.snake = [(5, 5), (5, 6)]
    game.direction = UP
    game.food = (0, 0)

    game.set_direction(*LEFT)
    game.set_direction(*RIGHT)
    game.set_direction(*RIGHT)
    game.tick()

    assert game.head == (6, 5)
    assert game.pending_direction is None


def test_reversal_is_checked_against_applied_direction():
    # LEFT then DOWN inside one tick must not fold the snake onto its neck.
    game = make_game()
    game.snake = [(5, 5), (5, 6)]
    game.direction = UP
    game.food = (0, 0)

    game.set_direction(*LEFT)
    game.set_direction(*DOWN)
    game.tick()

    assert game.head == (4, 5)


def test_invalid_direction_raises():
    game = make_game()
    with pytest.raises(ValueError):
        game.set_direction(1, 1)
    with pytest.raises(ValueError):
        game.set_direction(0, 2)


def test_direction_ignored_after_game_over():
    game = make_game()
    game.snake = [(0, 0)]
    game.direction = LEFT
    game.tick()
    game.set_direction(*RIGHT)
    assert game.pending_direction is None


def test_still_snake_does_not_move():
    game = make_game()
    game.direction = STILL
    assert game.tick() == 150
    assert game.snake == [(10, 10)]
    assert game.running


def test_reset_after_game_over():
    game = make_game()
    game.snake = [(0, 0), (1, 0)]
    game.direction = LEFT
    game.score = 120
    game.tick()
    assert game.game_over

    game.reset()

    assert game.snake == [(10, 10)]
    assert game.direction == config.INITIAL_DIRECTION
    assert game.score == 0
    assert game.outcome is None
    assert game.interval_ms == 150
    assert game.status is Status.RUNNING
    assert game.food not in game.snake


def test_pause_suspends_ticks():
    game = make_game()
    game.food = (0, 0)
    seen = record(game)

    game.toggle_pause()
    assert game.paused
    assert game.tick() is None
    assert game.snake == [(10, 10)]

    game.toggle_pause()
    assert game.running
    game.tick()
    assert game.head == (10, 11)
    assert seen == [Event.PAUSED, Event.RESUMED]


def test_pause_toggle_does_nothing_after_game_over():
    game = make_game()
    game.snake = [(0, 0)]
    game.direction = LEFT
    game.tick()
    game.toggle_pause()
    assert game.status is Status.GAME_OVER


def test_events_for_food_and_game_over():
    game = make_game()
    seen = record(game)
    game.snake = [(10, 1)]
    game.direction = UP
    game.food = (10, 0)

    game.tick()
    game.tick()
    game.tick()

    assert seen == [Event.FOOD_EATEN, Event.GAME_OVER]


def test_board_full_is_a_terminal_win():
    game = GameState(2, 1, origin=(0, 0), rng=random.Random(0))
    seen = record(game)
    assert game.food == (1, 0)
    game.direction = RIGHT

    assert game.tick() is None

    assert game.snake == [(1, 0), (0, 0)]
    assert game.food is None
    assert game.game_over
    assert game.won
    assert game.outcome is Outcome.BOARD_FULL
    assert seen == [Event.FOOD_EATEN, Event.BOARD_FULL, Event.GAME_OVER]


def test_place_food_on_full_board_returns_none():
    game = make_game()
    game.snake = [(x, y) for y in range(20) for x in range(20)]
    assert game.place_food() is None
    assert game.won


def test_food_only_lands_on_free_cells():
    game = make_game()
    game.snake = [(x, y) for y in range(20) for x in range(20) if (x, y) != (7, 13)]
    for _ in range(20):
        assert game.place_food() == (7, 13)


def test_food_never_overlaps_snake():
    game = make_game()
    game.snake = [(x, 10) for x in range(20)] + [(0, y) for y in range(11, 20)]
    occupied = set(game.snake)
    for _ in range(200):
        pos = game.place_food()
        assert pos not in occupied
        assert 0 <= pos[0] < 20 and 0 <= pos[1] < 20


@pytest.mark.parametrize(
    "score, expected",
    [(0, 150), (40, 150), (50, 140), (90, 140), (100, 130), (250, 100), (1000, 100)],
)
def test_next_interval(score, expected):
    assert next_interval(score) == expected


def test_interval_reported_after_speedup():
    game = make_game()
    game.score = 40
    game.food = (10, 11)
    assert game.tick() == 140
    assert game.interval_ms == 140


def test_is_reversal():
    assert is_reversal(UP, DOWN)
    assert is_reversal(LEFT, RIGHT)
    assert not is_reversal(UP, LEFT)
    assert not is_reversal(UP, UP)
    assert not is_reversal(STILL, UP)


def test_resize_moves_food_inside_new_bounds():
    game = make_game()
    game.food = (18, 18)
    game.resize(12, 12)
    assert game.width == 12 and game.height == 12
    assert 0 <= game.food[0] < 12 and 0 <= game.food[1] < 12
    assert game.food not in game.snake


def test_resize_keeps_food_that_still_fits():
    game = make_game()
    game.food = (3, 4)
    game.resize(12, 12)
    assert game.food == (3, 4)


def test_resize_recentres_origin_that_no_longer_fits():
    game = GameState(30, 30, origin=(25, 25), rng=random.Random(3))
    game.resize(10, 10)
    game.reset()
    assert game.snake == [(5, 5)]


def test_bad_grid_size_raises():
    with pytest.raises(ValueError):
        GameState(0, 10)
    game = make_game()
    with pytest.raises(ValueError):
        game.resize(10, -1)


def test_moving_snake_cannot_stop_then_reverse():
    game = make_game()
    game.snake = [(5, 5), (5, 6), (5, 7)]
    game.direction = UP
    game.food = (0, 0)

    game.set_direction(*STILL)
    game.tick()
    game.set_direction(*DOWN)
    game.tick()

    assert game.running
    assert game.direction == UP
    assert game.head == (5, 3)
