# -*- coding: utf-8 -*-
"""
This module provides the board and move engine of the puzzle: ranks storage, sliding and merging,
tile placement, the action variants exchanged by agents and the tile supply.
"""

from .action import Action, NoOp, Place, Slide
from .gameboard import ILLEGAL, Board, merge_column, slide_and_merge
from .gamemove import Direction
from .tiles import TileBag

__all__ = [
    "Action",
    "Board",
    "Direction",
    "ILLEGAL",
    "NoOp",
    "Place",
    "Slide",
    "TileBag",
    "merge_column",
    "slide_and_merge",
]
