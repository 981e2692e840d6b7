"""
Tile supply for the environment.

The supply is a bag holding one tile of each rank 1, 2 and 3. Tiles are drawn without replacement
and the bag is shuffled and refilled once it is empty, so every three consecutive draws starting
from a refill contain each rank exactly once.
"""

from numpy.random import Generator, default_rng

BAG_RANKS = (1, 2, 3)


class TileBag:
    """
    Refillable bag of tile ranks.

    Parameters
    ----------
    seed : int, optional
        Seed of the bag's own random generator.
    rng : Generator, optional
        Generator to draw shuffles from; takes precedence over ``seed``.
    """

    def __init__(self, seed: int | None = None, rng: Generator | None = None):
        self._rng = rng if rng is not None else default_rng(seed)
        self._bag: list[int] = []

    def __iter__(self):
        return self

    def __next__(self) -> int:
        if not self._bag:
            self.refill()
        return self._bag.pop()

    def __len__(self) -> int:
        return len(self._bag)

    def refill(self) -> None:
        """Put every rank back into the bag in a fresh random order."""
        self._bag = [int(rank) for rank in self._rng.permutation(BAG_RANKS)]
