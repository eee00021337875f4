from threes.envs.env import ThreesEnv

__all__ = ["ThreesEnv"]
