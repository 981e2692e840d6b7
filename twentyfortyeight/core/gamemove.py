"""
Slide directions of the puzzle board and the left-move check the board engine rotates into.
"""

from enum import IntEnum

from numpy import ndarray


class Direction(IntEnum):
    """
    Slide directions, in the fixed order used whenever all moves are scanned.
    """

    UP = 0
    RIGHT = 1
    DOWN = 2
    LEFT = 3

    @property
    def rotation(self) -> int:
        """
        Number of counter-clockwise quarter turns that turn this move into a left slide.

        Returns
        -------
        int
            The ``k`` argument for ``numpy.rot90``.
        """
        return (self.value + 1) % 4


def can_move(board: ndarray) -> bool:
    """
    Check if any tile can move left on the given grid.

    Parameters
    ----------
    board : ndarray
        The grid to check.

    Returns
    -------
    bool
        True if a left move is possible, False otherwise.

    Notes
    -----
    - This function only checks for left movement.
    - For other directions, rotate the grid before calling this function.
    """
    left_cols = board[:, :-1]
    right_cols = board[:, 1:]

    # ##>: Condition 1: Empty cell left of non-empty cell (can slide).
    can_slide = (left_cols == 0) & (right_cols != 0)
    if can_slide.any():
        return True

    # ##>: Condition 2: Two adjacent equal non-zero ranks (can merge).
    can_merge = (left_cols != 0) & (left_cols == right_cols)
    return bool(can_merge.any())
