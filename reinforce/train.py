# -*- coding: utf-8 -*-
"""
Script for training the n-tuple player by self-play against the environment.
"""
import argparse
import logging
from collections import Counter

from tqdm import tqdm

from reinforce.module.agent import Agent, Environment, Player
from reinforce.training.config import TrainConfig
from twentyfortyeight.core.tiles import TileBag
from twentyfortyeight.envs import Episode, EpisodeRecord

# ##>: Module logger.
_logger = logging.getLogger(__name__)


def play_episode(player: Agent, environment: Agent, tiles: TileBag, opening_tiles: int = 2) -> EpisodeRecord:
    """
    Play one episode to the end.

    The environment first places ``opening_tiles`` tiles, then player and environment alternate until one of
    them has no action left.

    Parameters
    ----------
    player : Agent
        The agent sliding tiles.
    environment : Agent
        The agent placing tiles.
    tiles : TileBag
        Supply of new tiles.
    opening_tiles : int
        Number of tiles on the board before the first move.

    Returns
    -------
    EpisodeRecord
        Summary of the episode.
    """
    episode = Episode()
    player.open_episode()
    environment.open_episode()

    for _ in range(opening_tiles):
        episode.apply(environment.take_action(episode.board, tiles))

    while episode.apply(player.take_action(episode.board, tiles)):
        if not episode.apply(environment.take_action(episode.board, tiles)):
            break

    player.close_episode()
    environment.close_episode()

    record = episode.record()
    _logger.debug('Episode finished: score %d, %d moves, max tile %d', record.score, record.moves, record.max_tile)
    return record


def summarize(records: list[EpisodeRecord]) -> dict:
    """
    Compute statistics of a block of episodes.

    Parameters
    ----------
    records : list[EpisodeRecord]
        The episodes of the block.

    Returns
    -------
    dict
        Mean and max score, mean number of moves, and the share of episodes reaching each max tile.
    """
    scores = [record.score for record in records]
    tiles = Counter(record.max_tile for record in records)
    return {
        'episodes': len(records),
        'avg_score': sum(scores) / len(records),
        'max_score': max(scores),
        'avg_moves': sum(record.moves for record in records) / len(records),
        'max_tiles': {tile: count / len(records) for tile, count in sorted(tiles.items())},
    }


def train_agent(config: TrainConfig, show_progress: bool = True) -> list[dict]:
    """
    Run a full training session.

    Parameters
    ----------
    config : TrainConfig
        The training configuration.
    show_progress : bool
        Whether to show a progress bar.

    Returns
    -------
    list[dict]
        One summary per block of episodes.
    """
    player = Player(config.player_args)
    environment = Environment(config.environment_args)
    tiles = TileBag(seed=config.tile_seed)
    _logger.info('Training %s against %s for %d episodes', player.name, environment.name, config.total_episodes)

    summaries = []
    block = []
    try:
        for _ in tqdm(range(config.total_episodes), desc='Training', unit='episode', disable=not show_progress):
            block.append(play_episode(player, environment, tiles, config.opening_tiles))
            if len(block) == config.block_size:
                summaries.append(summarize(block))
                block = []
                stats = summaries[-1]
                print(
                    f'{len(summaries) * config.block_size}\t'
                    f'avg = {stats["avg_score"]:.0f}, max = {stats["max_score"]}, moves = {stats["avg_moves"]:.1f}'
                )
                for tile, share in stats['max_tiles'].items():
                    print(f'\t{tile}\t{share:.1%}')
        if block:
            summaries.append(summarize(block))
    finally:
        player.shutdown()

    print('Finish ...')
    return summaries


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description='Train an n-tuple player by self-play.')
    parser.add_argument('--total', type=int, default=1000, help='Number of episodes to play')
    parser.add_argument('--block', type=int, default=100, help='Episodes per statistics summary')
    parser.add_argument('--play', type=str, default='init', help='Player arguments, e.g. "seed=1 init save=w.bin"')
    parser.add_argument('--evil', type=str, default='', help='Environment arguments, e.g. "seed=2"')
    parser.add_argument('--tile-seed', type=int, default=None, help='Seed of the tile bag')
    parser.add_argument('--verbose', action='store_true', help='Log every episode')
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s %(name)s %(levelname)s %(message)s',
    )

    config = TrainConfig(
        total_episodes=args.total,
        block_size=args.block,
        player_args=args.play,
        environment_args=args.evil,
        tile_seed=args.tile_seed,
    )
    train_agent(config)


if __name__ == '__main__':
    main()
