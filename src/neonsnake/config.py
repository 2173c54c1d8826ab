from __future__ import annotations

# Grid / layout
CELL = 20
GRID_TILES = 20
MIN_TILES = 8
MAX_TILES = 40
HUD_HEIGHT = 40
FPS = 60

# Rules
FOOD_SCORE = 10
INITIAL_DIRECTION = (0, 1)  # moving down

# Speed progression: max(MIN, BASE - floor(score / STEP) * SPEEDUP)
BASE_INTERVAL_MS = 150
MIN_INTERVAL_MS = 100
SPEEDUP_SCORE_STEP = 50
SPEEDUP_MS = 10
MAX_CATCHUP_TICKS = 3

# Colours
BACKGROUND = (26, 26, 46)
GRID_LINE = (10, 10, 10)
HUD_BG = (16, 16, 30)
SNAKE = (0, 255, 255)
SNAKE_HEAD = (255, 255, 255)
FOOD = (255, 107, 107)
TEXT = (230, 230, 240)
OVERLAY = (0, 0, 0, 170)

FONT_SIZE = 24
TITLE_FONT_SIZE = 40

# Audio
SAMPLE_RATE = 22050
VOLUME = 0.3
MUSIC_VOLUME = 0.15
MUSIC_STEP_MS = 200
# Hz, cycled by the background sequencer.
MUSIC_NOTES = (220.0, 277.18, 329.63, 277.18, 246.94, 311.13, 369.99, 311.13)
