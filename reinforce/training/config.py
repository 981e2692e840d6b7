"""
Configuration of the self-play training loop.
"""

from dataclasses import dataclass


@dataclass
class TrainConfig:
    """
    Configuration of a training run.

    Attributes are organized into sections: run length, agents, and environment.
    """

    # ##>: Run length.
    total_episodes: int = 1000  # Episodes to play
    block_size: int = 100  # Episodes per statistics summary

    # ##>: Agents, as `key=value` argument strings.
    player_args: str = 'init'
    environment_args: str = ''

    # ##>: Environment.
    opening_tiles: int = 2  # Tiles placed before the first move
    tile_seed: int | None = None  # Seed of the tile bag

    def __post_init__(self):
        if self.total_episodes < 0:
            raise ValueError(f'total_episodes must be >= 0, got {self.total_episodes}')
        if self.block_size <= 0:
            raise ValueError(f'block_size must be > 0, got {self.block_size}')
