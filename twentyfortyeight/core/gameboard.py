"""
Core functionality for the puzzle board: rank storage, sliding, merging and tile placement.

Cells hold ranks: 0 is an empty cell and a rank ``k > 0`` stands for the tile ``2**k``.
"""

from __future__ import annotations

from numpy import all as np_all
from numpy import any as np_any
from numpy import array, array_equal, flatnonzero, int64, ndarray, rot90, zeros, zeros_like

from twentyfortyeight.core.gamemove import Direction, can_move

# ##>: Reward returned for a move or placement that is not allowed.
ILLEGAL = -1

BOARD_SIZE = 4


def merge_column(column: ndarray) -> tuple[int, ndarray]:
    """
    Merge adjacent equal ranks in a line and compute the total reward.

    Parameters
    ----------
    column : ndarray
        A 1D array representing one line of the board.

    Returns
    -------
    score : int
        The total reward obtained from merging.
    merged_column : ndarray
        The non-empty ranks after merging.

    Notes
    -----
    - Zeros (empty cells) are ignored and removed before merging.
    - Merging occurs from the start of the line towards the end.
    - Each rank can only be merged once per function call; two rank ``r`` tiles give one
      rank ``r + 1`` tile and a reward of ``2 ** (r + 1)``.
    """
    # ##: Handle empty lines.
    non_zero = column[column != 0]
    if len(non_zero) <= 1:
        return 0, non_zero

    result = []
    score = 0

    # ##: Iterate over the line and merge ranks.
    i = 0
    while i < len(non_zero) - 1:
        if non_zero[i] == non_zero[i + 1]:
            merged = int(non_zero[i]) + 1
            result.append(merged)
            score += 1 << merged
            i += 2
        else:
            result.append(non_zero[i])
            i += 1

    if i == len(non_zero) - 1:
        result.append(non_zero[-1])

    return score, array(result, dtype=column.dtype)


def slide_and_merge(board: ndarray) -> tuple[int, ndarray]:
    """
    Slide the grid to the left, merge adjacent cells, and compute the reward.

    Parameters
    ----------
    board : ndarray
        The grid of ranks.

    Returns
    -------
    score : int
        The total reward obtained from all merges.
    updated_board : ndarray
        The updated grid after sliding and merging.

    Notes
    -----
    For other directions, rotate the grid before calling this function.
    """
    result = zeros_like(board)
    score = 0

    for i, row in enumerate(board):
        score_row, merged_row = merge_column(row)
        score += score_row
        result[i, : len(merged_row)] = merged_row

    return score, result


class Board:
    """
    A 4x4 grid of ranks together with the direction of the last move applied to it.

    Positions are linear indices in row-major order::

         0  1  2  3
         4  5  6  7
         8  9 10 11
        12 13 14 15

    ``last_direction`` is None until a slide has been applied, which the environment reads as
    "first move of the episode".
    """

    def __init__(self, cells: ndarray | list | None = None, last_direction: Direction | None = None):
        if cells is None:
            self._cells = zeros((BOARD_SIZE, BOARD_SIZE), dtype=int64)
        else:
            self._cells = array(cells, dtype=int64).reshape(BOARD_SIZE, BOARD_SIZE)
        self.last_direction = last_direction

    @property
    def cells(self) -> ndarray:
        """
        Get the grid of ranks.

        Returns
        -------
        ndarray
            A read-only 4x4 view of the ranks.
        """
        view = self._cells.view()
        view.flags.writeable = False
        return view

    def __getitem__(self, position: int) -> int:
        return int(self._cells.flat[position])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return array_equal(self._cells, other._cells)

    def __repr__(self) -> str:
        return f'Board({self._cells.ravel().tolist()}, last_direction={self.last_direction!r})'

    def __str__(self) -> str:
        rows = ['+' + '-' * 24 + '+']
        for row in self._cells.tolist():
            rows.append('|' + ''.join(f'{(1 << rank) if rank else 0:6d}' for rank in row) + '|')
        rows.append('+' + '-' * 24 + '+')
        return '\n'.join(rows)

    def copy(self) -> Board:
        """Return an independent copy, including the last direction."""
        return Board(self._cells.copy(), self.last_direction)

    def slide(self, direction: Direction | int) -> int:
        """
        Slide every tile in the given direction, merging equal neighbours once.

        Parameters
        ----------
        direction : Direction | int
            The direction to slide.

        Returns
        -------
        int
            The reward of the move, or ``ILLEGAL`` (-1) when nothing moves. An illegal move leaves
            the board untouched.
        """
        direction = Direction(direction)
        rotated = rot90(self._cells, k=direction.rotation)
        if not can_move(rotated):
            return ILLEGAL

        reward, updated_board = slide_and_merge(rotated)
        self._cells = rot90(updated_board, k=-direction.rotation).copy()
        self.last_direction = direction
        return reward

    def place(self, position: int, rank: int) -> int:
        """
        Put a tile on an empty cell.

        Parameters
        ----------
        position : int
            Linear position of the cell (0..15).
        rank : int
            Rank of the new tile, must be positive.

        Returns
        -------
        int
            0 when the tile was placed, ``ILLEGAL`` (-1) when the position is out of range,
            already occupied or the rank is not positive.
        """
        if not 0 <= position < BOARD_SIZE * BOARD_SIZE or rank <= 0:
            return ILLEGAL
        if self._cells.flat[position] != 0:
            return ILLEGAL
        self._cells.flat[position] = rank
        return 0

    def empty_positions(self) -> list[int]:
        """List the linear positions of empty cells."""
        return flatnonzero(self._cells == 0).tolist()

    def max_rank(self) -> int:
        """Return the highest rank on the board."""
        return int(self._cells.max())

    def is_done(self) -> bool:
        """
        Check if no slide is possible anymore.

        Returns
        -------
        bool
            True when the board is full and no two neighbours share a rank.
        """
        state = self._cells
        return bool(
            np_all(state != 0) and not np_any(state[:-1] == state[1:]) and not np_any(state[:, :-1] == state[:, 1:])
        )
