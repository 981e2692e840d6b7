"""
Symmetries of the square over a 4x4 grid.

The eight transforms of the dihedral group are built from two primitives, a horizontal reflection
and a transpose. A clockwise quarter turn is a transpose followed by a reflection.
"""

from numpy import ndarray

SYMMETRY_COUNT = 8


def reflect(grid: ndarray) -> ndarray:
    """Swap opposing columns within each row."""
    return grid[:, ::-1]


def transpose(grid: ndarray) -> ndarray:
    """Swap cell (i, j) with cell (j, i)."""
    return grid.T


def rotate(grid: ndarray) -> ndarray:
    """Rotate the grid a quarter turn clockwise."""
    return reflect(transpose(grid))


def dihedral_step(grid: ndarray, step: int) -> ndarray:
    """
    Move from one ordering of the group to the next.

    Parameters
    ----------
    grid : ndarray
        The ordering number ``step``.
    step : int
        Position of ``grid`` in the generation sequence.

    Returns
    -------
    ndarray
        The ordering number ``step + 1``.

    Notes
    -----
    Every step rotates the grid; after each fourth rotation the grid is also reflected, so the
    sequence covers 2 reflection states x 4 rotations and is back to the identity after 8 steps.
    """
    grid = rotate(grid)
    if step % 4 == 3:
        grid = reflect(grid)
    return grid


def dihedral_orderings(grid: ndarray) -> list[ndarray]:
    """
    Generate the eight orderings of a grid, starting with the grid itself.

    The generation order is fixed. Weights are addressed per ordering, so the same order must be
    used everywhere a grid is sampled.

    Parameters
    ----------
    grid : ndarray
        A 4x4 grid.

    Returns
    -------
    list[ndarray]
        The eight transformed grids, identity first.
    """
    orderings = []
    for step in range(SYMMETRY_COUNT):
        orderings.append(grid.copy())
        grid = dihedral_step(grid, step)
    return orderings
