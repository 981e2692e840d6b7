# -*- coding: utf-8 -*-
"""
Agents of the self-play loop.

Two kinds of agents share the same interface: the ``Player``, which slides tiles and learns, and the
``Environment``, which places a new tile after every move. Each is built from a configuration string
and composes the facets it needs (random generator, weight persistence, learning rate) from it.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from numpy.random import Generator, default_rng

from reinforce.addons.config import AgentConfig
from reinforce.network.network import PATTERNS, NTupleNetwork
from reinforce.network.weights import WeightStore
from reinforce.training.learner import UPDATE_RATE, TemporalDifferenceLearner
from reinforce.training.trajectory import Trajectory
from twentyfortyeight.core.action import Action, NoOp, Place, Slide
from twentyfortyeight.core.gameboard import ILLEGAL, Board
from twentyfortyeight.core.gamemove import Direction
from twentyfortyeight.core.tiles import TileBag

DEFAULT_ALPHA = 0.1

# ##>: Transitions reserved for an episode's trajectory when it opens.
TRAJECTORY_CAPACITY = 20000

# ##>: Cells a new tile may appear on after each slide: the edge opposite to the slide.
OPPOSITE_EDGES = {
    Direction.UP: (12, 13, 14, 15),
    Direction.RIGHT: (0, 4, 8, 12),
    Direction.DOWN: (0, 1, 2, 3),
    Direction.LEFT: (3, 7, 11, 15),
}
ALL_POSITIONS = tuple(range(16))

# ##>: Module logger.
_logger = logging.getLogger(__name__)


def make_generator(config: AgentConfig) -> Generator:
    """Create the agent's own random generator, seeded from the configuration or the OS."""
    return default_rng(config.seed)


def make_weights(config: AgentConfig, table_count: int) -> WeightStore:
    """
    Create the weight tables an agent starts from.

    ``load`` takes precedence over ``init``. Without either the tables are zero-initialized and a warning
    is logged.
    """
    if config.load is not None:
        return WeightStore.load(config.load)
    if not config.init:
        _logger.warning('Agent %s has neither `init` nor `load`, starting from zero weights', config.name)
    return WeightStore.init(table_count)


class Agent(ABC):
    """
    Interface shared by the player and the environment.

    Attributes
    ----------
    config : AgentConfig
        The parsed configuration.
    """

    def __init__(self, config: AgentConfig):
        self.config = config

    @property
    def name(self) -> str:
        return self.config.property('name')

    @property
    def role(self) -> str:
        return self.config.property('role')

    def notify(self, message: str) -> None:
        """
        Update one property of the agent at runtime.

        Parameters
        ----------
        message : str
            A ``key=value`` token, for example ``name=renamed``.
        """
        self.config = self.config.notify(message)

    def open_episode(self, flag: str = '') -> None:  # noqa: ARG002
        """Prepare for a new episode."""

    def close_episode(self, flag: str = '') -> None:  # noqa: ARG002
        """Wrap up the finished episode."""

    @abstractmethod
    def take_action(self, board: Board, tiles: TileBag) -> Action:
        """Choose the agent's next action for the given board."""


class Player(Agent):
    """
    Learning player choosing moves by one-ply lookahead on an n-tuple network.

    The player evaluates the four slides in the fixed order up, right, down, left and plays the one with the
    largest ``reward + V(afterstate)``; the first one wins a tie. Every move played is recorded and the
    network is trained on the whole episode when it closes.

    Parameters
    ----------
    args : str
        Configuration string. Recognized keys: ``alpha``, ``beta``, ``init``, ``load`` and ``save``.
        Move selection is deterministic, so the player draws no randomness and ignores ``seed``.
    """

    def __init__(self, args: str = ''):
        super().__init__(AgentConfig.from_args(args, defaults='name=ntuple role=player'))
        self.weights = make_weights(self.config, len(PATTERNS))
        self.network = NTupleNetwork(self.weights)
        self.alpha = self.config.alpha if self.config.alpha is not None else DEFAULT_ALPHA
        self.learner = TemporalDifferenceLearner(
            self.network, update_rate=self.config.beta if self.config.beta is not None else UPDATE_RATE
        )
        self.trajectory = Trajectory()

    def open_episode(self, flag: str = '') -> None:
        self.trajectory.clear(capacity=TRAJECTORY_CAPACITY)

    def close_episode(self, flag: str = '') -> None:
        self.learner.learn(self.trajectory)

    def take_action(self, board: Board, tiles: TileBag) -> Action:  # noqa: ARG002
        """
        Choose the best slide for a board.

        Parameters
        ----------
        board : Board
            The live board; it is never modified.
        tiles : TileBag
            Tile supply, unused by the player.

        Returns
        -------
        Action
            ``Slide`` of the best direction, or ``NoOp`` when no slide is legal. The trajectory is only
            extended in the first case.
        """
        best = None
        for direction in Direction:
            afterstate = board.copy()
            reward = afterstate.slide(direction)
            if reward == ILLEGAL:
                continue

            estimate = reward + self.network.value(afterstate)
            if best is None or estimate > best[0]:
                best = (estimate, direction, afterstate, reward)

        if best is None:
            return NoOp()

        _, direction, afterstate, reward = best
        self.trajectory.append(afterstate, reward)
        return Slide(direction)

    def shutdown(self) -> None:
        """Persist the weights if a ``save`` path is configured."""
        if self.config.save is not None:
            self.weights.save(self.config.save)


class Environment(Agent):
    """
    Environment placing one tile after every slide.

    On the first move of an episode, when the board has no last direction, any empty cell may receive the
    tile. Afterwards only the edge opposite to the last slide is considered, which is where a tile would have
    slid to had it been on the board before the move. Candidates are scanned in random order.

    Parameters
    ----------
    args : str
        Configuration string; ``seed`` seeds the candidate shuffles.
    """

    def __init__(self, args: str = ''):
        super().__init__(AgentConfig.from_args(args, defaults='name=random role=environment'))
        self._rng = make_generator(self.config)

    def take_action(self, board: Board, tiles: TileBag) -> Action:
        """
        Place a tile from the supply.

        Parameters
        ----------
        board : Board
            The afterstate of the player's move.
        tiles : TileBag
            Supply of the tile rank to place.

        Returns
        -------
        Action
            ``Place`` on the first empty candidate, or ``NoOp`` when every candidate is occupied.
        """
        if board.last_direction is None:
            candidates = ALL_POSITIONS
        else:
            candidates = OPPOSITE_EDGES[board.last_direction]

        for position in self._rng.permutation(candidates).tolist():
            if board[position] != 0:
                continue
            return Place(position, next(tiles))
        return NoOp()
