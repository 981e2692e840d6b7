"""
Temporal-difference learner for the n-tuple network.

TD(0) over afterstates, run once per episode on the whole trajectory, from the last move backwards.
For a trajectory ``[(s_1, r_1), ..., (s_n, r_n)]``:

- the terminal afterstate ``s_n`` is pulled towards 0, as no reward follows it:
  ``target = 0 - V(s_n)``;
- for ``i = n - 1 .. 1``: ``target = r_{i+1} + V(s_{i+1}) - V(s_i)``.

Every weight addressed by ``V(s_i)`` then receives ``update_rate * target``. Because the pass runs
backwards, ``V(s_{i+1})`` is read after ``s_{i+1}`` itself was updated.
"""

import logging

from reinforce.network.network import NTupleNetwork
from reinforce.training.trajectory import Trajectory

# ##>: Default rate of the weight update, shared by the 32 weights of a board.
UPDATE_RATE = 0.1 / 32

# ##>: Module logger.
_logger = logging.getLogger(__name__)


class TemporalDifferenceLearner:
    """
    Backward TD(0) update of an n-tuple network.

    Attributes
    ----------
    network : NTupleNetwork
        The value function being learned.
    update_rate : float
        Factor applied to each TD target before it is added to the weights.
    """

    def __init__(self, network: NTupleNetwork, update_rate: float = UPDATE_RATE):
        self.network = network
        self.update_rate = update_rate

    def _update(self, trajectory: Trajectory, index: int, target: float) -> float:
        self.network.update(trajectory[index].afterstate, self.update_rate * target)
        return abs(target)

    def learn(self, trajectory: Trajectory) -> float:
        """
        Update the network from a finished episode.

        Parameters
        ----------
        trajectory : Trajectory
            The moves of the episode, in chronological order.

        Returns
        -------
        float
            Mean absolute TD error over the trajectory, 0 for an empty one.
        """
        if not len(trajectory):
            return 0.0

        value = self.network.value
        last = len(trajectory) - 1

        # ##: Terminal afterstate: nothing follows, drive its value towards 0.
        total_error = self._update(trajectory, last, 0.0 - value(trajectory[last].afterstate))

        # ##: Walk backwards through the rest of the episode.
        for index in range(last - 1, -1, -1):
            following = trajectory[index + 1]
            target = following.reward + value(following.afterstate) - value(trajectory[index].afterstate)
            total_error += self._update(trajectory, index, target)

        mean_error = total_error / len(trajectory)
        _logger.debug('TD update over %d afterstates, mean |error| %.4f', len(trajectory), mean_error)
        return mean_error
