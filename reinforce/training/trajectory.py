"""
Episode trajectory: the afterstates reached by the player and the rewards collected on the way.
"""

from collections.abc import Iterator
from typing import NamedTuple

from twentyfortyeight.core.gameboard import Board


class Transition(NamedTuple):
    """
    One move of the player.

    Attributes
    ----------
    afterstate : Board
        The board right after the move, before the environment places a tile.
    reward : int
        Reward of the move.
    """

    afterstate: Board
    reward: int


class Trajectory:
    """Chronological list of the transitions of one episode."""

    def __init__(self):
        self._transitions: list[Transition] = []

    def __len__(self) -> int:
        """Return trajectory length."""
        return len(self._transitions)

    def __iter__(self) -> Iterator[Transition]:
        return iter(self._transitions)

    def __getitem__(self, index: int) -> Transition:
        return self._transitions[index]

    def append(self, afterstate: Board, reward: int) -> None:
        """Record a move."""
        self._transitions.append(Transition(afterstate, reward))

    def clear(self, capacity: int = 0) -> None:  # noqa: ARG002
        """
        Forget every transition.

        Parameters
        ----------
        capacity : int
            Expected episode length. Python lists grow on demand, so this is only a hint.
        """
        self._transitions = []

    @property
    def score(self) -> int:
        """Sum of the rewards."""
        return sum(transition.reward for transition in self._transitions)
