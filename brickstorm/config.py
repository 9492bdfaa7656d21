"""Constants for the playfield, timing and colours.

Everything is expressed in logical units and logical ticks. One tick is one
simulation step at ``TICK_RATE``; durations are converted to ticks here so the
rest of the game never looks at wall-clock time.
"""

import os

# Run headless unless the caller asked for a real display.
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

# --- Playfield ---
WIDTH, HEIGHT = 800, 600

# --- Timing ---
TICK_RATE = 60
MAX_STEPS = 30 * 60 * TICK_RATE  # 30 minutes of play
EFFECT_DURATION_TICKS = 10 * TICK_RATE
LEVEL_BANNER_TICKS = 2 * TICK_RATE

# --- Paddle ---
PADDLE_WIDTH = 100
PADDLE_HEIGHT = 20
PADDLE_MARGIN = 10  # gap between the paddle and the floor
WIDE_FACTOR = 1.5

# --- Ball ---
BALL_RADIUS = 8
BOUNCE_JITTER = 1.0  # paddle hits add uniform(-BOUNCE_JITTER, BOUNCE_JITTER) to dx

# --- Bricks ---
BRICK_ROWS = 5
BRICK_COLS = 8
BRICK_HEIGHT = 20
BRICK_PADDING = 2
BRICK_TOP = 50
BRICK_POINTS = 10
MAX_BRICK_STRENGTH = 3

# --- Pickups and lasers ---
POWERUP_KINDS = ("laser", "wide", "multi")
POWERUP_SIZE = 20
POWERUP_SPEED = 2
LASER_WIDTH = 4
LASER_HEIGHT = 10
LASER_SPEED = 7

# --- Game ---
INITIAL_LIVES = 3
MAX_LEVELS = 30

# --- Colors ---
COLOR_BG = (12, 12, 20)
COLOR_PADDLE = (255, 255, 255)
COLOR_BALL = (255, 255, 255)
COLOR_TEXT = (230, 230, 230)
COLOR_LASER = (255, 0, 0)
COLOR_OVERLAY = (0, 0, 0, 190)
COLOR_INDICATOR_OFF = (70, 70, 80)
COLOR_POWERUPS = {
    "laser": (255, 0, 0),
    "wide": (0, 255, 0),
    "multi": (0, 0, 255),
}
