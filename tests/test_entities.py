# tests/test_entities.py
import unittest

from brickstorm import config
from brickstorm.entities import ActiveEffects, Ball, Brick, GameState, Paddle, Phase, Pickup, overlaps


class TestPaddle(unittest.TestCase):
    def setUp(self):
        self.paddle = Paddle(speed=8)

    def test_starts_centred_above_the_floor(self):
        self.assertEqual(self.paddle.x, 350)
        self.assertEqual(self.paddle.y, config.HEIGHT - config.PADDLE_HEIGHT - config.PADDLE_MARGIN)
        self.assertEqual(self.paddle.center_x, 400)

    def test_move_clamps_to_playfield(self):
        self.paddle.move_direction = -1
        for _ in range(100):
            self.paddle.move()
        self.assertEqual(self.paddle.x, 0)

        self.paddle.move_direction = 1
        for _ in range(200):
            self.paddle.move()
        self.assertEqual(self.paddle.x, config.WIDTH - self.paddle.width)

    def test_resize_keeps_centre_and_bounds(self):
        self.paddle.resize(150)
        self.assertEqual(self.paddle.center_x, 400)

        self.paddle.x = config.WIDTH - self.paddle.width
        self.paddle.resize(225)
        self.assertEqual(self.paddle.x, config.WIDTH - 225)


class TestBrick(unittest.TestCase):
    def test_strength_is_number_of_hits(self):
        for strength in (1, 2, 3):
            brick = Brick(0, 0, 10, 10, strength)
            results = [brick.hit() for _ in range(strength)]
            self.assertEqual(results, [False] * (strength - 1) + [True])
            self.assertFalse(brick.active)
            self.assertEqual(brick.strength, 0)

    def test_inactive_brick_stays_inactive(self):
        brick = Brick(0, 0, 10, 10, 1)
        brick.hit()
        self.assertFalse(brick.hit())
        self.assertFalse(brick.active)
        self.assertEqual(brick.strength, 0)

    def test_destroy_ignores_strength(self):
        brick = Brick(0, 0, 10, 10, 3)
        brick.destroy()
        self.assertFalse(brick.active)


class TestGeometry(unittest.TestCase):
    def test_overlap_is_strict(self):
        self.assertTrue(overlaps((0, 0, 10, 10), (5, 5, 10, 10)))
        self.assertFalse(overlaps((0, 0, 10, 10), (10, 0, 10, 10)))
        self.assertFalse(overlaps((0, 0, 10, 10), (0, 10, 10, 10)))

    def test_ball_box_uses_radius(self):
        ball = Ball(100, 100, 0, 0, radius=8)
        self.assertEqual(ball.box, (92, 92, 16, 16))
        self.assertTrue(ball.overlaps((107, 100, 10, 10)))
        self.assertFalse(ball.overlaps((108, 100, 10, 10)))

    def test_ball_copy_is_independent(self):
        ball = Ball(1, 2, 3, 4)
        clone = ball.copy()
        clone.dx = -3
        self.assertEqual(ball.dx, 3)

    def test_pickup_is_centred_on_spawn_point(self):
        pickup = Pickup((100, 60), "wide")
        self.assertEqual(pickup.box, (90, 60, 20, 20))
        pickup.fall()
        self.assertEqual(pickup.y, 60 + config.POWERUP_SPEED)


class TestState(unittest.TestCase):
    def test_fresh_state(self):
        state = GameState(Paddle(speed=8))
        self.assertEqual(state.score, 0)
        self.assertEqual(state.lives, 3)
        self.assertEqual(state.current_level, 1)
        self.assertIs(state.phase, Phase.PLAYING)
        self.assertFalse(state.terminal)

    def test_terminal_phases(self):
        state = GameState(Paddle(speed=8))
        for phase, terminal in ((Phase.LEVEL_TRANSITION, False), (Phase.GAME_OVER, True), (Phase.WON, True)):
            state.phase = phase
            self.assertEqual(state.terminal, terminal)

    def test_effect_flags(self):
        effects = ActiveEffects()
        self.assertEqual(effects.as_dict(), {"laser": False, "wide": False, "multi": False})
        effects.set("wide", True)
        self.assertTrue(effects.is_active("wide"))


if __name__ == "__main__":
    unittest.main()
