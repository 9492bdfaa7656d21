"""Timed power-up effects: laser, wide paddle and multi-ball."""

import logging

from . import config
from .entities import Laser
from .scheduler import CancelToken

logger = logging.getLogger(__name__)


class PowerupController:
    """Applies and expires timed effects on a ``GameState``.

    Every effect runs for ``EFFECT_DURATION_TICKS`` from its latest pickup.
    Picking up an effect that is already running restarts its timer but does
    not apply it a second time. Expiry callbacks are scheduled under a token
    derived from the current level token, so a level change silently drops
    them.
    """

    def __init__(self, state, queue, presentation, rng):
        self.state = state
        self.queue = queue
        self.presentation = presentation
        self.rng = rng
        self._tokens = {}

    def activate(self, kind):
        if kind not in config.POWERUP_KINDS:
            logger.debug("Ignoring unknown power-up kind %r", kind)
            return False

        effects = self.state.effects
        if not effects.is_active(kind):
            getattr(self, f"_apply_{kind}")()
            effects.set(kind, True)
            self.presentation.set_powerup_indicator(kind, True)
            logger.debug("Activated %s at tick %d", kind, self.queue.now)
        else:
            logger.debug("Restarted %s timer at tick %d", kind, self.queue.now)

        old = self._tokens.get(kind)
        if old is not None:
            old.cancel()
        token = CancelToken(parent=self.state.level_token)
        self._tokens[kind] = token
        self.queue.schedule(config.EFFECT_DURATION_TICKS, lambda: self.expire(kind), token)
        return True

    def expire(self, kind):
        effects = self.state.effects
        if not effects.is_active(kind):
            return
        getattr(self, f"_revert_{kind}")()
        effects.set(kind, False)
        self.presentation.set_powerup_indicator(kind, False)
        token = self._tokens.pop(kind, None)
        if token is not None:
            token.cancel()
        logger.debug("Expired %s at tick %d", kind, self.queue.now)

    def clear_all(self):
        for kind in config.POWERUP_KINDS:
            self.expire(kind)
        for token in self._tokens.values():
            token.cancel()
        self._tokens.clear()

    def fire_laser(self):
        if not self.state.effects.laser:
            return False
        paddle = self.state.paddle
        self.state.lasers.append(Laser(paddle.center_x, paddle.y - config.LASER_HEIGHT))
        # sfx: laser
        return True

    # --- Effect bodies ---
    def _apply_laser(self):
        pass

    def _revert_laser(self):
        pass

    def _apply_wide(self):
        paddle = self.state.paddle
        paddle.resize(paddle.base_width * config.WIDE_FACTOR)

    def _revert_wide(self):
        paddle = self.state.paddle
        paddle.resize(paddle.base_width)

    def _apply_multi(self):
        clones = []
        for ball in self.state.balls:
            clone = ball.copy()
            clone.dx = ball.dx * (1 if self.rng.random() > 0.5 else -1)
            clones.append(clone)
        self.state.balls.extend(clones)

    def _revert_multi(self):
        del self.state.balls[1:]
