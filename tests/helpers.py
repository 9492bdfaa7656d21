# tests/helpers.py
import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import numpy as np

from brickstorm.game_env import GameEnv
from brickstorm.presentation import Presentation


class ScriptedRandom:
    """Stand-in for numpy's Generator that replays queued values.

    Once a queue runs dry the matching default is returned. Array draws
    (``random(size)``) are always filled with ``default``.
    """

    def __init__(self, randoms=(), uniforms=(), integers=(), default=0.75):
        self.randoms = list(randoms)
        self.uniforms = list(uniforms)
        self.ints = list(integers)
        self.default = default

    def random(self, size=None):
        if size is not None:
            return np.full(size, self.default)
        return self.randoms.pop(0) if self.randoms else self.default

    def uniform(self, low=0.0, high=1.0, size=None):
        return self.uniforms.pop(0) if self.uniforms else (low + high) / 2

    def integers(self, low, high=None, size=None):
        return self.ints.pop(0) if self.ints else 0


class RecordingPresentation(Presentation):
    """Headless adapter that remembers every notification."""

    def __init__(self):
        self.calls = []

    def new_game(self):
        self.calls.append(("new_game",))

    def update_score_display(self, score):
        self.calls.append(("score", score))

    def update_lives_display(self, lives):
        self.calls.append(("lives", lives))

    def set_powerup_indicator(self, kind, on):
        self.calls.append(("indicator", kind, on))

    def show_banner(self, text):
        self.calls.append(("banner", text))

    def clear_banner(self):
        self.calls.append(("clear_banner",))

    def show_terminal_screen(self, title, subtitle, final_score):
        self.calls.append(("terminal", title, subtitle, final_score))

    def named(self, name):
        return [call for call in self.calls if call[0] == name]


def make_env(rng=None, start_level=1):
    """A headless environment, optionally driven by a scripted random source."""
    presentation = RecordingPresentation()
    env = GameEnv(presentation=presentation)
    if rng is not None:
        env.np_random = rng
    env.reset(options={"start_level": start_level})
    presentation.calls.clear()
    return env


def park_balls(env, x=400.0, y=300.0):
    """Stop every ball in open space so nothing is hit or lost."""
    for ball in env.state.balls:
        ball.x, ball.y, ball.dx, ball.dy = x, y, 0.0, 0.0


def aim_at_underside(ball, brick, speed=4.0):
    """Put ``ball`` just under ``brick``, moving straight up into it."""
    ball.x = brick.x + brick.width / 2
    ball.y = brick.y + brick.height + ball.radius + 2
    ball.dx = 0.0
    ball.dy = -speed
