# -*- coding: utf-8 -*-
"""
Episode bookkeeping for the sliding-tile puzzle.

This module provides the `Episode` class, which owns the live board of one episode and applies the actions
chosen by the agents, and the `EpisodeRecord` summary it produces.
"""

from .twentyfortyeight import Episode, EpisodeRecord

__all__ = ["Episode", "EpisodeRecord"]
