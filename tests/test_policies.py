# tests/test_policies.py
import unittest

from helpers import ScriptedRandom, make_env

from brickstorm.play import parse_arguments
from brickstorm.policies import policy


class TestPolicy(unittest.TestCase):
    def test_moves_toward_falling_ball(self):
        env = make_env(rng=ScriptedRandom())
        ball = env.state.balls[0]
        ball.x, ball.y, ball.dx, ball.dy = 700, 400, 0, 4
        self.assertEqual(policy(env)[0], 4)
        ball.x = 50
        self.assertEqual(policy(env)[0], 3)
        ball.x = env.state.paddle.center_x + 1
        self.assertEqual(policy(env)[0], 0)

    def test_fires_only_with_laser(self):
        env = make_env(rng=ScriptedRandom())
        self.assertEqual(policy(env)[1], 0)
        env.powerups.activate("laser")
        self.assertEqual(policy(env)[1], 1)

    def test_autopilot_plays_a_while(self):
        env = make_env()
        env.reset(seed=5)
        for _ in range(3000):
            _, _, terminated, truncated, info = env.step(policy(env))
            if terminated or truncated:
                break
        self.assertGreater(info["score"], 0)
        self.assertGreaterEqual(info["lives"], 0)


class TestArguments(unittest.TestCase):
    def test_defaults(self):
        args = parse_arguments([])
        self.assertIsNone(args.seed)
        self.assertEqual(args.start_level, 1)
        self.assertFalse(args.autoplay)
        self.assertFalse(args.debug)

    def test_flags(self):
        args = parse_arguments(["--seed", "4", "--start-level", "12", "--autoplay", "--debug"])
        self.assertEqual((args.seed, args.start_level, args.autoplay, args.debug), (4, 12, True, True))


if __name__ == "__main__":
    unittest.main()
