"""
Actions exchanged between agents and the board.

An action is one of three immutable variants: a slide chosen by the player, a tile placement
chosen by the environment, or a no-op meaning the agent has nothing to do.
"""

from __future__ import annotations

from dataclasses import dataclass

from twentyfortyeight.core.gameboard import ILLEGAL, Board
from twentyfortyeight.core.gamemove import Direction


@dataclass(frozen=True)
class Slide:
    """Slide every tile in one direction."""

    direction: Direction

    def apply(self, board: Board) -> int:
        """Apply the slide and return its reward, or -1 if illegal."""
        return board.slide(self.direction)

    def __str__(self) -> str:
        return f'#{self.direction.name}'


@dataclass(frozen=True)
class Place:
    """Put a tile of the given rank on an empty cell."""

    position: int
    tile: int

    def apply(self, board: Board) -> int:
        """Place the tile and return 0, or -1 if the cell is not available."""
        return board.place(self.position, self.tile)

    def __str__(self) -> str:
        return f'{self.position:X}{self.tile:X}'


@dataclass(frozen=True)
class NoOp:
    """Nothing to do: no legal slide or no free cell."""

    def apply(self, board: Board) -> int:  # noqa: ARG002
        return ILLEGAL

    def __str__(self) -> str:
        return '??'


Action = Slide | Place | NoOp
