import logging

import gymnasium as gym
from gymnasium.spaces import MultiDiscrete
import numpy as np

from . import config
from .effects import PowerupController
from .entities import Ball, Brick, GameState, Paddle, Phase, Pickup, overlaps
from .levels import brick_layout, build_catalog, difficulty, level_config
from .presentation import PygameRenderer
from .scheduler import CancelToken, DeferredQueue

logger = logging.getLogger(__name__)


class GameEnv(gym.Env):
    """
    A thirty-level brick breaker. The paddle deflects one or more balls into a
    wall of bricks; broken bricks may drop laser, wide-paddle or multi-ball
    pickups. Each level is faster and tougher than the last. The game ends
    when all lives are lost or the thirtieth wall falls.

    Every call to ``step`` (or ``tick``) advances the game by one logical tick
    at 60 Hz. All timed behaviour runs off the tick counter, and all
    randomness comes from ``self.np_random``.
    """
    metadata = {"render_modes": ["rgb_array"], "render_fps": config.TICK_RATE}

    # Must be a short, user-facing control string:
    user_guide = (
        "Controls: ←→ to move the paddle. Press space to fire while the laser power-up is lit."
    )

    # Must be a short, user-facing description of the game:
    game_description = (
        "Break every brick across 30 increasingly hard levels. Catch falling power-ups for "
        "lasers, a wider paddle or extra balls, and don't let the ball reach the floor."
    )

    # Should frames auto-advance or wait for user input?
    auto_advance = True

    # --- Constants ---
    WIDTH, HEIGHT = config.WIDTH, config.HEIGHT
    MAX_LEVELS = config.MAX_LEVELS
    MAX_STEPS = config.MAX_STEPS

    def __init__(self, render_mode="rgb_array", presentation=None):
        super().__init__()
        self.render_mode = render_mode

        # EXACT spaces:
        self.observation_space = gym.spaces.Box(
            low=0, high=255, shape=(self.HEIGHT, self.WIDTH, 3), dtype=np.uint8
        )
        self.action_space = MultiDiscrete([5, 2, 2])

        self.presentation = presentation if presentation is not None else PygameRenderer()

        # Initialize state variables (properly set in reset)
        self.steps = 0
        self.catalog = ()
        self.state = None
        self.queue = DeferredQueue()
        self.powerups = None
        self.prev_space_held = False
        self._fire_requested = False

        self.reset()

    def reset(self, seed=None, options=None):
        super().reset(seed=seed)
        options = options or {}

        self.steps = 0
        self.queue = DeferredQueue()
        self.prev_space_held = False
        self._fire_requested = False

        self.catalog = build_catalog(self.np_random)
        start_level = max(1, min(int(options.get("start_level", 1)), self.MAX_LEVELS))

        paddle = Paddle(speed=level_config(self.catalog, start_level).paddle_speed)
        self.state = GameState(paddle)
        self.powerups = PowerupController(self.state, self.queue, self.presentation, self.np_random)

        self.presentation.new_game()
        self._enter_level(start_level)
        self.presentation.update_score_display(self.state.score)
        self.presentation.update_lives_display(self.state.lives)

        return self._get_observation(), self._get_info()

    # --- Input ---
    def set_paddle_direction(self, direction):
        if direction not in (-1, 0, 1):
            raise ValueError(f"paddle direction must be -1, 0 or 1, got {direction!r}")
        if self.state.terminal:
            return
        self.state.paddle.move_direction = direction

    def fire_laser(self):
        """Queue a laser shot for the next tick. Ignored unless the laser effect is active."""
        if self.state.terminal:
            logger.debug("Fire request ignored (game has ended)")
            return False
        if not self.state.effects.laser:
            logger.debug("Fire request ignored (laser inactive)")
            return False
        self._fire_requested = True
        return True

    # --- Gym interface ---
    def step(self, action):
        if self.state.terminal:
            return self._get_observation(), 0.0, True, False, self._get_info()

        movement = action[0]
        space_held = action[1] == 1

        if movement == 3:  # Left
            self.set_paddle_direction(-1)
        elif movement == 4:  # Right
            self.set_paddle_direction(1)
        else:
            self.set_paddle_direction(0)

        # Fire on the press, not while held
        if space_held and not self.prev_space_held:
            self.fire_laser()
        self.prev_space_held = space_held

        events = self.tick()
        self.steps += 1

        reward = events["points"] / config.BRICK_POINTS
        reward -= events["lives_lost"]
        reward += 10 * events["levels_cleared"]
        if events["won"]:
            reward += 100
        if events["game_over"]:
            reward -= 100

        terminated = self.state.terminal
        truncated = not terminated and self.steps >= self.MAX_STEPS

        return (
            self._get_observation(),
            float(reward),
            terminated,
            truncated,
            self._get_info()
        )

    def render(self):
        return self._get_observation()

    def close(self):
        self.presentation.close()

    # --- Simulation ---
    def tick(self):
        """Advance the game by one logical tick and report what happened."""
        events = {"points": 0, "lives_lost": 0, "levels_cleared": 0, "won": False, "game_over": False}
        state = self.state
        if state.terminal:
            return events

        self.queue.advance()
        if state.phase is not Phase.PLAYING:
            return events

        state.paddle.move()

        if self._fire_requested:
            self._fire_requested = False
            self.powerups.fire_laser()

        if not self._update_balls(events):
            return events

        self._update_lasers(events)

        if not state.active_bricks():
            self._advance_level(events)
            return events

        self._update_pickups()
        return events

    def _update_balls(self, events):
        """Move balls and resolve wall, floor, paddle and brick contacts. False once the game is over."""
        state = self.state
        paddle = state.paddle

        for ball in state.balls:
            ball.move()

            # Wall collisions
            if ball.x - ball.radius < 0:
                ball.x = ball.radius
                ball.dx = abs(ball.dx)
            elif ball.x + ball.radius > self.WIDTH:
                ball.x = self.WIDTH - ball.radius
                ball.dx = -abs(ball.dx)
            if ball.y - ball.radius < 0:
                ball.y = ball.radius
                ball.dy = abs(ball.dy)

            # Floor
            if ball.y + ball.radius > self.HEIGHT:
                self._lose_life(events)
                if state.terminal:
                    return False
                self._serve_ball(ball)
                continue

            # Paddle collision
            if ball.y + ball.radius > paddle.y and paddle.x < ball.x < paddle.x + paddle.width:
                ball.dy = -abs(ball.dy)
                ball.dx += self.np_random.uniform(-config.BOUNCE_JITTER, config.BOUNCE_JITTER)
                # sfx: paddle_hit

            # Brick collisions: every touched brick takes a hit, the ball bounces once
            hit = False
            for brick in state.bricks:
                if brick.active and ball.overlaps(brick.box):
                    hit = True
                    if brick.hit():
                        self._on_brick_destroyed(brick, events, may_drop=True)
            if hit:
                ball.dy = -ball.dy
                # sfx: brick_hit

        return True

    def _update_lasers(self, events):
        state = self.state
        for laser in state.lasers:
            laser.rise()
            for brick in state.bricks:
                if brick.active and overlaps(laser.box, brick.box):
                    brick.destroy()
                    self._on_brick_destroyed(brick, events, may_drop=False)
                    laser.alive = False
                    break
            if laser.y < 0:
                laser.alive = False
        state.lasers = [laser for laser in state.lasers if laser.alive]

    def _update_pickups(self):
        state = self.state
        remaining = []
        for pickup in state.pickups:
            pickup.fall()
            if overlaps(pickup.box, state.paddle.box):
                self.powerups.activate(pickup.kind)
                # sfx: powerup
            elif pickup.y <= self.HEIGHT:
                remaining.append(pickup)
        state.pickups = remaining

    def _on_brick_destroyed(self, brick, events, may_drop):
        state = self.state
        state.score += config.BRICK_POINTS
        events["points"] += config.BRICK_POINTS
        self.presentation.update_score_display(state.score)

        chance = level_config(self.catalog, state.current_level).powerup_chance
        if may_drop and self.np_random.random() < chance:
            kind = config.POWERUP_KINDS[int(self.np_random.integers(len(config.POWERUP_KINDS)))]
            state.pickups.append(Pickup(brick.center, kind))
            logger.debug("Dropped %s pickup at %s", kind, brick.center)

    def _serve_ball(self, ball=None):
        """Place ``ball`` (or a new one) above the paddle, heading up at the level's speed."""
        speed = level_config(self.catalog, self.state.current_level).ball_speed
        paddle = self.state.paddle
        if ball is None:
            ball = Ball(0.0, 0.0, 0.0, 0.0)
        ball.x = paddle.center_x
        ball.y = paddle.y - ball.radius
        ball.dx = speed * (1 if self.np_random.random() > 0.5 else -1)
        ball.dy = -speed
        return ball

    def _lose_life(self, events):
        state = self.state
        state.lives -= 1
        events["lives_lost"] += 1
        self.presentation.update_lives_display(state.lives)
        # sfx: life_lost
        if state.lives <= 0:
            self._game_over(events)

    # --- Level / game flow ---
    def _enter_level(self, level):
        state = self.state
        if state.level_token is not None:
            state.level_token.cancel()
        state.level_token = CancelToken()
        self.powerups.clear_all()

        cfg = level_config(self.catalog, level)
        state.current_level = cfg.index
        state.paddle.speed = cfg.paddle_speed
        state.balls = [self._serve_ball()]
        state.pickups = []
        state.lasers = []
        state.bricks = [
            Brick(x, y, w, h, strength, row=row)
            for row, x, y, w, h, strength in brick_layout(cfg.brick_grid)
        ]
        logger.debug("Level %d: %d bricks, %d hits to clear", cfg.index, cfg.brick_count, difficulty(cfg.brick_grid))
        self._fire_requested = False

    def _advance_level(self, events):
        state = self.state
        events["levels_cleared"] += 1
        next_level = state.current_level + 1
        if next_level > self.MAX_LEVELS:
            state.current_level = next_level
            self._game_won(events)
            return

        logger.info("Level %d cleared with score %d", state.current_level, state.score)
        self._enter_level(next_level)
        state.phase = Phase.LEVEL_TRANSITION
        self.presentation.show_banner(f"Level {next_level}!")
        self.queue.schedule(config.LEVEL_BANNER_TICKS, self._end_transition, state.level_token)

    def _end_transition(self):
        if self.state.phase is Phase.LEVEL_TRANSITION:
            self.state.phase = Phase.PLAYING
            self.presentation.clear_banner()

    def _halt(self):
        self.powerups.clear_all()
        self.state.level_token.cancel()
        self.queue.clear()
        self._fire_requested = False

    def _game_over(self, events):
        state = self.state
        state.phase = Phase.GAME_OVER
        events["game_over"] = True
        self._halt()
        self.presentation.show_terminal_screen("Game Over!", None, state.score)
        logger.info("Game over on level %d with score %d", state.current_level, state.score)

    def _game_won(self, events):
        state = self.state
        state.phase = Phase.WON
        events["won"] = True
        self._halt()
        self.presentation.show_terminal_screen("Congratulations!", "You Beat All Levels!", state.score)
        logger.info("All %d levels cleared with score %d", self.MAX_LEVELS, state.score)

    # --- Observation / info ---
    def _get_observation(self):
        s = self.state
        return self.presentation.render(s.paddle, s.balls, s.bricks, s.pickups, s.current_level, lasers=s.lasers)

    def _get_info(self):
        s = self.state
        return {
            "score": s.score,
            "lives": s.lives,
            "level": s.current_level,
            "phase": s.phase.value,
            "steps": self.steps,
            "balls": len(s.balls),
            "effects": s.effects.as_dict(),
        }

    def validate_implementation(self):
        # Test action space
        assert self.action_space.shape == (3,)
        assert self.action_space.nvec.tolist() == [5, 2, 2]

        # Test reset
        obs, info = self.reset()
        assert obs.shape == (self.HEIGHT, self.WIDTH, 3)
        assert obs.dtype == np.uint8
        assert isinstance(info, dict)

        # Test step
        obs, reward, term, trunc, info = self.step(self.action_space.sample())
        assert obs.shape == (self.HEIGHT, self.WIDTH, 3)
        assert isinstance(reward, float)
        assert isinstance(term, bool)
        assert trunc == False

        # A single-hit brick just above the served ball breaks on the next tick
        self.reset()
        ball = self.state.balls[0]
        target = Brick(ball.x - 20, ball.y - ball.radius - 30, 40, 20, 1)
        spare = Brick(0, 60, 40, 20, 1)
        self.state.bricks = [target, spare]
        for _ in range(10):
            self.tick()
            if not target.active:
                break
        assert not target.active
        assert self.state.score == config.BRICK_POINTS
        assert spare.active

        self.reset()
        logger.info("Implementation validated successfully")
