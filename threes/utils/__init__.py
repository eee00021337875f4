from threes.utils.config import AgentConfig
from threes.utils.statistics import EpisodeStatistics
from threes.utils.trajectory import Step, Trajectory, terminal_step

__all__ = ["AgentConfig", "EpisodeStatistics", "Step", "Trajectory", "terminal_step"]
