"""
n-tuple network: a linear value function over pattern samples of the board.

Each pattern labels up to six cells of the 4x4 grid with their sampling order 1..6. A pattern is expanded
into its eight symmetric orderings and every ordering reads the board at the labeled cells, label ``l``
giving digit ``l - 1`` of a base-15 feature code (most significant digit first). The value of a board is
the sum of the weights addressed by all codes: 4 patterns x 8 orderings = 32 lookups.

The eight orderings of a pattern index the pattern's table and are never merged into one canonical
sample: each ordering is a lookup of its own, so a board symmetric under some transform reads the
same cell several times.
"""

from __future__ import annotations

from numpy import arange, array, int64, ndarray

from reinforce.network.symmetry import dihedral_orderings
from reinforce.network.weights import WeightStore
from twentyfortyeight.core.gameboard import Board

RANK_BASE = 15

# ##>: Label grids of the four 6-tuples; 0 marks an unsampled cell.
PATTERNS = (
    (
        (1, 2, 3, 4),
        (5, 6, 0, 0),
        (0, 0, 0, 0),
        (0, 0, 0, 0),
    ),
    (
        (0, 0, 0, 0),
        (1, 2, 3, 4),
        (5, 6, 0, 0),
        (0, 0, 0, 0),
    ),
    (
        (1, 2, 3, 0),
        (4, 5, 6, 0),
        (0, 0, 0, 0),
        (0, 0, 0, 0),
    ),
    (
        (0, 0, 0, 0),
        (1, 2, 3, 0),
        (4, 5, 6, 0),
        (0, 0, 0, 0),
    ),
)


class Pattern:
    """
    A fixed sampling pattern and its symmetric orderings.

    Attributes
    ----------
    labels : ndarray
        The 4x4 label grid.
    positions : ndarray
        Array of shape (8, length): for each ordering, the linear board positions sampled by labels 1..length.
    powers : ndarray
        Place value of each sampled rank in the feature code.
    """

    def __init__(self, labels):
        self.labels = array(labels, dtype=int64)
        length = int(self.labels.max())
        if sorted(self.labels[self.labels > 0].tolist()) != list(range(1, length + 1)):
            raise ValueError('Pattern labels must be 1..n, each used once.')

        # ##>: Linear position of each label, for every ordering of the label grid.
        self.positions = array(
            [
                [int((ordering.ravel() == label).argmax()) for label in range(1, length + 1)]
                for ordering in dihedral_orderings(self.labels)
            ],
            dtype=int64,
        )
        self.powers = RANK_BASE ** arange(length - 1, -1, -1, dtype=int64)

    def __len__(self) -> int:
        return self.positions.shape[1]

    def codes(self, ranks: ndarray) -> ndarray:
        """
        Encode the samples of every ordering.

        Parameters
        ----------
        ranks : ndarray
            Flat array of the 16 board ranks, all below ``RANK_BASE``.

        Returns
        -------
        ndarray
            The eight feature codes, one per ordering.
        """
        return ranks[self.positions] @ self.powers


class NTupleNetwork:
    """
    Value function of the learner.

    Parameters
    ----------
    weights : WeightStore
        One table per pattern, written only through ``update``.
    patterns : tuple
        Label grids of the patterns.
    """

    def __init__(self, weights: WeightStore, patterns=PATTERNS):
        self.patterns = [Pattern(labels) for labels in patterns]
        if len(weights) != len(self.patterns):
            raise ValueError(f'Expected {len(self.patterns)} weight tables, got {len(weights)}.')
        self.weights = weights

    @staticmethod
    def _ranks(board: Board) -> ndarray:
        ranks = board.cells.ravel()
        if ranks.max() >= RANK_BASE:
            raise ValueError(f'Rank {ranks.max()} cannot be encoded, ranks must be below {RANK_BASE}.')
        return ranks

    def feature_codes(self, board: Board) -> ndarray:
        """
        Compute every index read when evaluating a board.

        Parameters
        ----------
        board : Board
            The board to sample.

        Returns
        -------
        ndarray
            Array of shape (patterns, 8): code of each pattern under each ordering.

        Raises
        ------
        ValueError
            If a rank is 15 or above.
        """
        ranks = self._ranks(board)
        return array([pattern.codes(ranks) for pattern in self.patterns], dtype=int64)

    def value(self, board: Board) -> float:
        """
        Estimate the value of a board.

        Parameters
        ----------
        board : Board
            The board to evaluate, usually an afterstate.

        Returns
        -------
        float
            Sum of the 32 addressed weights.
        """
        codes = self.feature_codes(board)
        tables = self.weights.tables
        return float(sum(tables[index, code].sum(dtype='float64') for index, code in enumerate(codes)))

    def update(self, board: Board, delta: float) -> None:
        """
        Add ``delta`` to the weights addressed by a board.

        A cell addressed by several orderings of the same pattern is updated once.

        Parameters
        ----------
        board : Board
            The board whose weights are updated.
        delta : float
            Amount added to each addressed weight.
        """
        codes = self.feature_codes(board)
        tables = self.weights.tables
        for index, code in enumerate(codes):
            tables[index, code] += delta
