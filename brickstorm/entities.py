"""Mutable game entities and the state record that owns them."""

import enum

import pygame

from . import config


def overlaps(a, b):
    """Strict overlap test for two ``(x, y, w, h)`` boxes."""
    ax, ay, aw, ah = a
    bx, by, bw, bh = b
    return ax < bx + bw and ax + aw > bx and ay < by + bh and ay + ah > by


class Paddle:
    def __init__(self, speed, width=config.PADDLE_WIDTH, height=config.PADDLE_HEIGHT):
        self.base_width = width
        self.width = width
        self.height = height
        self.x = config.WIDTH / 2 - width / 2
        self.y = config.HEIGHT - height - config.PADDLE_MARGIN
        self.speed = speed
        self.move_direction = 0

    @property
    def center_x(self):
        return self.x + self.width / 2

    @property
    def box(self):
        return (self.x, self.y, self.width, self.height)

    def move(self):
        self.x += self.speed * self.move_direction
        self.clamp()

    def clamp(self):
        self.x = max(0.0, min(config.WIDTH - self.width, self.x))

    def resize(self, width):
        """Change width around the current centre, staying inside the playfield."""
        center_x = self.center_x
        self.width = width
        self.x = center_x - width / 2
        self.clamp()

    def rect(self):
        return pygame.Rect(int(self.x), int(self.y), int(self.width), int(self.height))


class Ball:
    def __init__(self, x, y, dx, dy, radius=config.BALL_RADIUS):
        self.x = x
        self.y = y
        self.dx = dx
        self.dy = dy
        self.radius = radius

    @property
    def box(self):
        r = self.radius
        return (self.x - r, self.y - r, 2 * r, 2 * r)

    def move(self):
        self.x += self.dx
        self.y += self.dy

    def overlaps(self, box):
        return overlaps(self.box, box)

    def copy(self):
        return Ball(self.x, self.y, self.dx, self.dy, self.radius)

    def __repr__(self):
        return f"Ball(x={self.x:.1f}, y={self.y:.1f}, dx={self.dx:.2f}, dy={self.dy:.2f})"


class Brick:
    def __init__(self, x, y, width, height, strength, row=0):
        self.x = x
        self.y = y
        self.width = width
        self.height = height
        self.strength = strength
        self.row = row
        self.active = strength > 0

    @property
    def box(self):
        return (self.x, self.y, self.width, self.height)

    @property
    def center(self):
        return (self.x + self.width / 2, self.y + self.height / 2)

    def hit(self):
        """Take one hit. Returns True if this hit destroyed the brick."""
        if not self.active:
            return False
        self.strength -= 1
        if self.strength <= 0:
            self.destroy()
            return True
        return False

    def destroy(self):
        self.strength = 0
        self.active = False

    def rect(self):
        return pygame.Rect(int(self.x), int(self.y), int(self.width), int(self.height))


class Pickup:
    def __init__(self, center, kind, size=config.POWERUP_SIZE):
        self.x = center[0] - size / 2
        self.y = center[1]
        self.width = size
        self.height = size
        self.kind = kind

    @property
    def box(self):
        return (self.x, self.y, self.width, self.height)

    def fall(self):
        self.y += config.POWERUP_SPEED

    def rect(self):
        return pygame.Rect(int(self.x), int(self.y), int(self.width), int(self.height))


class Laser:
    def __init__(self, center_x, y):
        self.x = center_x - config.LASER_WIDTH / 2
        self.y = y
        self.width = config.LASER_WIDTH
        self.height = config.LASER_HEIGHT
        self.alive = True

    @property
    def box(self):
        return (self.x, self.y, self.width, self.height)

    def rise(self):
        self.y -= config.LASER_SPEED

    def rect(self):
        return pygame.Rect(int(self.x), int(self.y), int(self.width), int(self.height))


class ActiveEffects:
    def __init__(self):
        self.laser = False
        self.wide = False
        self.multi = False

    def is_active(self, kind):
        return getattr(self, kind)

    def set(self, kind, on):
        setattr(self, kind, on)

    def as_dict(self):
        return {kind: getattr(self, kind) for kind in config.POWERUP_KINDS}


class Phase(enum.Enum):
    PLAYING = "playing"
    LEVEL_TRANSITION = "level_transition"
    GAME_OVER = "game_over"
    WON = "won"


class GameState:
    """Everything the simulation mutates. Owned by the environment."""

    def __init__(self, paddle, lives=config.INITIAL_LIVES):
        self.score = 0
        self.lives = lives
        self.current_level = 1
        self.phase = Phase.PLAYING
        self.paddle = paddle
        self.balls = []
        self.bricks = []
        self.pickups = []
        self.lasers = []
        self.effects = ActiveEffects()
        self.level_token = None

    @property
    def terminal(self):
        return self.phase in (Phase.GAME_OVER, Phase.WON)

    def active_bricks(self):
        return [b for b in self.bricks if b.active]
