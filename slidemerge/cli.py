# -*- coding: utf-8 -*-
"""
Play the sliding-tile game from the terminal.
"""
import logging
import sys
from argparse import ArgumentParser, Namespace
from typing import TextIO

from numpy.random import default_rng

from slidemerge.core.board import Board
from slidemerge.core.errors import SnapshotError
from slidemerge.envs.config import GameConfiguration
from slidemerge.envs.game import SlidingGame

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> Namespace:
    """
    Parse the command line.

    Parameters
    ----------
    argv : list[str], optional
        Arguments to parse (default is ``sys.argv[1:]``).

    Returns
    -------
    Namespace
        The parsed arguments.
    """
    parser = ArgumentParser(prog='slidemerge', description='Play a 2048-style sliding-tile game with w, a, s, d.')
    parser.add_argument('--size', type=int, default=4, help='number of rows and columns of a new board')
    parser.add_argument('--seed', type=int, default=None, help='seed of the random tile generator')
    parser.add_argument('--load', type=str, default=None, help='resume from a JSON snapshot')
    parser.add_argument('--save', type=str, default=None, help='write a JSON snapshot when the game stops')
    parser.add_argument('--log-level', type=str, default='INFO', choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'])
    args = parser.parse_args(argv)
    if args.size < 2:
        parser.error(f'--size must be >= 2, got {args.size}')
    return args


def play(game: SlidingGame, stream: TextIO) -> None:
    """
    Read directions from a stream until the game is over or the stream ends.

    Parameters
    ----------
    game : SlidingGame
        The game to play.
    stream : TextIO
        Source of the directions, one per line.
    """
    while not game.is_finished:
        logger.info('%s', game.board)

        while True:
            logger.info('Input direction(w,a,s,d): ')
            line = stream.readline()
            if not line:
                logger.info('End of input, stopping.')
                return

            direction = game.ACTIONS.get(line.strip().lower())
            if direction is None:
                logger.warning('Invalid input!')
                continue

            traces, _ = game.step(direction)
            logger.debug('Traces: %s', traces)
            if traces:
                break

    logger.info('%s', game.board)


def main(argv: list[str] | None = None, stream: TextIO | None = None) -> int:
    """
    Run the terminal game.

    Returns
    -------
    int
        Exit code: 0 when the game stops normally, 1 when a snapshot cannot be read or written.
    """
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format='%(levelname)s %(name)s: %(message)s')
    logger.info('Welcome to 2048 ~')

    try:
        if args.load is not None:
            board = Board.load(args.load, rng=default_rng(args.seed))
            game = SlidingGame(config=GameConfiguration(size=board.size), board=board)
        else:
            game = SlidingGame(config=GameConfiguration(size=args.size), seed=args.seed)
    except SnapshotError as error:
        logger.error('%s', error)
        return 1

    play(game, stream if stream is not None else sys.stdin)
    logger.info('Score: %d, moves: %d', game.score, game.moves)

    if args.save is not None:
        try:
            game.board.save(args.save)
        except SnapshotError as error:
            logger.error('%s', error)
            return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
