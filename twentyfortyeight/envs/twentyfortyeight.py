"""Episode bookkeeping for the sliding-tile puzzle."""

from dataclasses import dataclass

from twentyfortyeight.core.action import Action, Place, Slide
from twentyfortyeight.core.gameboard import ILLEGAL, Board


@dataclass(frozen=True)
class EpisodeRecord:
    """
    Summary of a finished episode.

    Attributes
    ----------
    score : int
        Sum of the rewards of every slide.
    moves : int
        Number of slides played.
    placements : int
        Number of tiles placed by the environment, opening tiles included.
    max_tile : int
        Largest tile value on the final board.
    """

    score: int
    moves: int
    placements: int
    max_tile: int


class Episode:
    """
    A single episode of the puzzle.

    This class owns the live board and applies the actions chosen by the agents, keeping track of the
    score and of how many actions each side played.
    """

    def __init__(self):
        """Initialize an empty board."""
        self.board = Board()
        self.score = 0
        self._moves = 0
        self._placements = 0

    def apply(self, action: Action) -> bool:
        """
        Apply an agent's action to the live board.

        Parameters
        ----------
        action : Action
            The action chosen by the player or the environment.

        Returns
        -------
        bool
            False when the action is a no-op or is rejected by the board, True otherwise.
        """
        reward = action.apply(self.board)
        if reward == ILLEGAL:
            return False

        if isinstance(action, Slide):
            self.score += reward
            self._moves += 1
        elif isinstance(action, Place):
            self._placements += 1
        return True

    def record(self) -> EpisodeRecord:
        """Summarize the episode so far."""
        max_rank = self.board.max_rank()
        return EpisodeRecord(
            score=self.score,
            moves=self._moves,
            placements=self._placements,
            max_tile=(1 << max_rank) if max_rank else 0,
        )
