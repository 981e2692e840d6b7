"""
Training infrastructure for the n-tuple player.

This package provides:
- Config: Parameters of a self-play training run
- Trajectory: Afterstates and rewards of one episode
- Learner: Backward TD(0) update of the network
"""

from .config import TrainConfig
from .learner import UPDATE_RATE, TemporalDifferenceLearner
from .trajectory import Trajectory, Transition

__all__ = [
    # Config
    'TrainConfig',
    # Trajectory
    'Trajectory',
    'Transition',
    # Learner
    'TemporalDifferenceLearner',
    'UPDATE_RATE',
]
