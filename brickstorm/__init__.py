from .game_env import GameEnv

__all__ = ["GameEnv"]
