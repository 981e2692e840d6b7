"""
Tests for the temporal-difference learner and the episode trajectory.
"""

from unittest import TestCase, main

from reinforce.network.network import PATTERNS, NTupleNetwork
from reinforce.network.weights import WeightStore
from reinforce.training.learner import UPDATE_RATE, TemporalDifferenceLearner
from reinforce.training.trajectory import Trajectory
from twentyfortyeight.core.gameboard import Board


def board_from(ranks: list[int]) -> Board:
    return Board(ranks + [0] * (16 - len(ranks)))


class TestTrajectory(TestCase):
    """Test the trajectory container."""

    def test_append_and_clear(self):
        """Transitions are kept in order and cleared on demand."""
        trajectory = Trajectory()
        trajectory.append(board_from([1]), 0)
        trajectory.append(board_from([2]), 4)
        self.assertEqual(len(trajectory), 2)
        self.assertEqual(trajectory[1].reward, 4)
        self.assertEqual(trajectory.score, 4)

        trajectory.clear(capacity=100)
        self.assertEqual(len(trajectory), 0)


class TestTemporalDifferenceLearner(TestCase):
    """Test the backward TD(0) pass."""

    def setUp(self):
        self.network = NTupleNetwork(WeightStore.init(len(PATTERNS)))
        self.learner = TemporalDifferenceLearner(self.network)

    def test_empty_trajectory(self):
        """Nothing to learn from an empty episode."""
        self.assertEqual(self.learner.learn(Trajectory()), 0.0)

    def test_terminal_value_moves_towards_zero(self):
        """A single afterstate with reward 0 sees its value shrink towards 0."""
        board = board_from([1, 2, 3, 4, 5])
        self.network.update(board, 1.0)
        before = self.network.value(board)
        self.assertGreater(before, 0.0)

        trajectory = Trajectory()
        trajectory.append(board, 0)
        self.learner.learn(trajectory)

        after = self.network.value(board)
        self.assertLess(abs(after), abs(before))
        self.assertGreater(after, 0.0)

    def test_terminal_zero_value_unchanged(self):
        """An afterstate already valued 0 stays at 0."""
        board = board_from([1, 2, 3])
        trajectory = Trajectory()
        trajectory.append(board, 0)
        self.learner.learn(trajectory)
        self.assertEqual(self.network.value(board), 0.0)

    def test_reward_of_next_move_is_learned(self):
        """The afterstate before a rewarded move is pulled towards that reward."""
        first, second = board_from([1, 2]), board_from([3, 0, 0, 0, 4])
        trajectory = Trajectory()
        trajectory.append(first, 0)
        trajectory.append(second, 4)
        self.learner.learn(trajectory)

        # ##>: Terminal target is 0, then every lookup of the first afterstate gains rate * 4.
        self.assertAlmostEqual(self.network.value(first), 32 * UPDATE_RATE * 4, places=5)

    def test_update_rate_scales_delta(self):
        """The update rate multiplies the TD target."""
        learner = TemporalDifferenceLearner(self.network, update_rate=0.001)
        first, second = board_from([1, 2]), board_from([3, 0, 0, 0, 4])
        trajectory = Trajectory()
        trajectory.append(first, 0)
        trajectory.append(second, 8)
        learner.learn(trajectory)
        self.assertAlmostEqual(self.network.value(first), 32 * 0.001 * 8, places=5)

    def test_backward_pass_reads_updated_values(self):
        """Each afterstate learns from the value its successor just received."""
        # ##>: Dense boards over disjoint ranks share no weight.
        first, second, third = Board([1, 2] * 8), Board([3, 4] * 8), Board([5, 6] * 8)
        trajectory = Trajectory()
        trajectory.append(first, 0)
        trajectory.append(second, 0)
        trajectory.append(third, 8)
        error = self.learner.learn(trajectory)

        self.assertEqual(self.network.value(third), 0.0)
        self.assertAlmostEqual(self.network.value(second), 32 * UPDATE_RATE * 8, places=5)
        # ##>: Zero when the value of `second` is read before its own update.
        self.assertAlmostEqual(self.network.value(first), 32 * UPDATE_RATE * 32 * UPDATE_RATE * 8, places=5)
        self.assertAlmostEqual(error, (8 + 32 * UPDATE_RATE * 8) / 3, places=4)


if __name__ == '__main__':
    main()
