"""Level catalog: per-level speeds, power-up odds and brick layouts."""

import logging
from dataclasses import dataclass, field

import numpy as np

from . import config

logger = logging.getLogger(__name__)


def ball_speed(level):
    return 4 + (level - 1) * 0.2


def paddle_speed(level):
    return 8 + (level - 1) * 0.1


def brick_strength(level):
    return min(config.MAX_BRICK_STRENGTH, 1 + (level - 1) // 5)


def powerup_chance(level):
    return min(0.1, 0.05 + (level - 1) * 0.001)


# --- Layout generators ---
# Each takes (rows, cols, rng) and returns raw cell values; 0 means no brick.
# Values above the level's strength cap are clipped by build_brick_grid.

def _full(value):
    return lambda rows, cols, rng: np.full((rows, cols), value)


def _rows(*values):
    def pattern(rows, cols, rng):
        return np.repeat(np.asarray(values[:rows])[:, None], cols, axis=1)
    return pattern


def _alternating_rows(rows, cols, rng):
    return np.repeat((np.arange(rows) % 2 + 1)[:, None], cols, axis=1)


def _row_ramp(rows, cols, rng):
    return np.repeat((np.arange(rows) + 1)[:, None], cols, axis=1)


def _checker(on, off):
    def pattern(rows, cols, rng):
        i, j = np.indices((rows, cols))
        return np.where((i + j) % 2 == 0, on, off)
    return pattern


def _scatter(count, strong, weak=0):
    """Exactly ``count`` randomly placed ``strong`` cells on a ``weak`` background."""
    def pattern(rows, cols, rng):
        order = np.argsort(rng.random(rows * cols), kind="stable")
        cells = np.full(rows * cols, weak)
        cells[order[:count]] = strong
        return cells.reshape(rows, cols)
    return pattern


def _sum_lattice(modulo):
    def pattern(rows, cols, rng):
        i, j = np.indices((rows, cols))
        return (i + j) % modulo + 1
    return pattern


def _sine_checker(on, off):
    def pattern(rows, cols, rng):
        i, j = np.indices((rows, cols))
        return np.where(np.sin(i * j) > 0, on, off)
    return pattern


# Ordered so the total hits to clear a wall (see ``difficulty``) rises with
# every level, whatever the random draw. Random layouts only move bricks
# around; their counts are fixed.
PATTERNS = (
    # 1-5: single-hit walls filling in
    _rows(1, 0, 1, 0, 1),
    _scatter(28, 1),
    _rows(1, 1, 0, 1, 1),
    _scatter(36, 1),
    _full(1),
    # 6-10: two-hit bricks on a solid wall
    _scatter(8, 2, 1),
    _sine_checker(2, 1),
    _alternating_rows,
    _checker(2, 1),
    _scatter(36, 2, 1),
    # 11-20: three-hit bricks appear
    _sum_lattice(3),
    _scatter(4, 3, 2),
    _rows(3, 2, 2, 2, 2),
    _sum_lattice(4),
    _sine_checker(3, 2),
    _row_ramp,
    _scatter(18, 3, 2),
    _checker(3, 2),
    _sum_lattice(6),
    _sum_lattice(7),
    # 21-30: three-hit bricks take over the wall
    _scatter(24, 3, 2),
    _sum_lattice(8),
    _sum_lattice(9),
    _scatter(30, 3, 2),
    _sum_lattice(10),
    _rows(3, 3, 2, 3, 3),
    _scatter(34, 3, 2),
    _sum_lattice(12),
    _scatter(38, 3, 2),
    _full(3),
)


@dataclass(frozen=True)
class LevelConfig:
    index: int
    ball_speed: float
    paddle_speed: float
    brick_strength: int
    powerup_chance: float
    brick_grid: np.ndarray = field(compare=False, repr=False)

    @property
    def brick_count(self):
        return int(np.count_nonzero(self.brick_grid))


def build_brick_grid(level, rng, rows=config.BRICK_ROWS, cols=config.BRICK_COLS):
    """Generate the layout for ``level`` with every cell capped at the level's strength."""
    pattern = PATTERNS[min(level, len(PATTERNS)) - 1]
    grid = np.clip(np.asarray(pattern(rows, cols, rng), dtype=int), 0, brick_strength(level))
    grid.setflags(write=False)
    return grid


def build_catalog(rng, max_levels=config.MAX_LEVELS):
    catalog = tuple(
        LevelConfig(
            index=n,
            ball_speed=ball_speed(n),
            paddle_speed=paddle_speed(n),
            brick_strength=brick_strength(n),
            powerup_chance=powerup_chance(n),
            brick_grid=build_brick_grid(n, rng),
        )
        for n in range(1, max_levels + 1)
    )
    logger.debug("Built level catalog with %d levels", len(catalog))
    return catalog


def level_config(catalog, level):
    """Look up a level, clamping out-of-range indices to the nearest defined level."""
    return catalog[max(1, min(level, len(catalog))) - 1]


def brick_width(cols=config.BRICK_COLS):
    return (config.WIDTH - (cols + 1) * config.BRICK_PADDING) / cols


def brick_layout(grid):
    """Yield ``(row, x, y, width, height, strength)`` for every non-empty cell of ``grid``."""
    width = brick_width(grid.shape[1])
    for i, j in zip(*np.nonzero(grid)):
        x = j * (width + config.BRICK_PADDING) + config.BRICK_PADDING
        y = i * (config.BRICK_HEIGHT + config.BRICK_PADDING) + config.BRICK_PADDING + config.BRICK_TOP
        yield int(i), x, y, width, config.BRICK_HEIGHT, int(grid[i, j])


def difficulty(grid):
    """Total hits needed to clear a layout."""
    return int(grid.sum())
