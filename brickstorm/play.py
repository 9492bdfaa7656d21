import argparse
import logging
import os

import numpy as np
import pygame

from . import config
from .game_env import GameEnv
from .policies import policy

logger = logging.getLogger(__name__)


def parse_arguments(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Brickstorm - a thirty-level brick breaker")
    parser.add_argument("--seed", type=int, default=None,
                        help="Seed for level layouts and bounces (default: random)")
    parser.add_argument("--start-level", type=int, default=1,
                        help=f"Level to start on, 1-{config.MAX_LEVELS} (default: 1)")
    parser.add_argument("--autoplay", action="store_true",
                        help="Let the built-in policy drive the paddle")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_arguments(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    # A real window is needed for human play
    if os.environ.get("SDL_VIDEODRIVER") == "dummy":
        del os.environ["SDL_VIDEODRIVER"]

    env = GameEnv(render_mode="rgb_array")
    obs, info = env.reset(seed=args.seed, options={"start_level": args.start_level})

    pygame.display.init()
    screen_display = pygame.display.set_mode((GameEnv.WIDTH, GameEnv.HEIGHT))
    pygame.display.set_caption("Brickstorm")
    clock = pygame.time.Clock()
    print(env.user_guide)

    held = {"left": False, "right": False}
    running = True
    while running:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key in (pygame.K_LEFT, pygame.K_a):
                    held["left"] = True
                elif event.key in (pygame.K_RIGHT, pygame.K_d):
                    held["right"] = True
                elif event.key == pygame.K_SPACE:
                    env.fire_laser()
            elif event.type == pygame.KEYUP:
                if event.key in (pygame.K_LEFT, pygame.K_a):
                    held["left"] = False
                elif event.key in (pygame.K_RIGHT, pygame.K_d):
                    held["right"] = False

        if args.autoplay:
            obs, reward, terminated, truncated, info = env.step(policy(env))
        else:
            env.set_paddle_direction(int(held["right"]) - int(held["left"]))
            env.tick()
            obs = env.render()

        surf = pygame.surfarray.make_surface(np.transpose(obs, (1, 0, 2)))
        screen_display.blit(surf, (0, 0))
        pygame.display.flip()

        clock.tick(config.TICK_RATE)

    env.close()
    logger.info("Final score: %d (level %d)", env.state.score, min(env.state.current_level, config.MAX_LEVELS))


if __name__ == "__main__":
    main()
