"""A commandline tool for tabulating ranked-choice elections from files.

Loads the candidates and ballots from a ballot file, evaluates the election
by instant runoff and shows the winner or the tied candidates.
"""

import argparse
import io
import logging
import sys
import warnings
from typing import List

import rcvlib.io.blt
import rcvlib.io.ranks
from rcvlib.election import Count
from rcvlib.io.core import BallotFile, NotSupportedInFormat, ParseError

argparser = argparse.ArgumentParser(
    description=__doc__,
    formatter_class=argparse.ArgumentDefaultsHelpFormatter,
)
argparser.add_argument(
    '-i', '--input-file',
    type=argparse.FileType('r', encoding='utf8'),
    help='file to load the candidates and ballots from',
)
argparser.add_argument(
    '-I', '--use-stdin',
    action='store_true',
    help='load the candidates and ballots from standard input',
)
argparser.add_argument(
    '-f', '--input-format',
    help='format of the ballot file',
    choices=['ranks', 'blt'],
    default='ranks',
)
argparser.add_argument(
    '-c', '--show-counts',
    action='store_true',
    help='show vote totals after every elimination round',
)
argparser.add_argument(
    '-v', '--verbose',
    action='store_true',
    help='show all tabulation log messages',
)
argparser.add_argument(
    '-q', '--quiet',
    action='store_true',
    help='do not show any tabulation log messages',
)

INPUT_FORMATS = {
    'ranks': rcvlib.io.ranks.load,
    'blt': rcvlib.io.blt.load,
}


def main(input_file: io.TextIOBase,
         use_stdin: bool = False,
         input_format: str = 'ranks',
         show_counts: bool = False,
         verbose: bool = False,
         quiet: bool = False,
         ) -> None:
    logging.basicConfig(
        level=(
            logging.DEBUG if verbose
            else (logging.WARNING if quiet else logging.INFO)
        ),
        format='%(levelname)-10s %(message)s'
    )
    if use_stdin:
        input_file = sys.stdin
    try:
        ballot_file = load_ballots(input_file, input_format=input_format)
        election = ballot_file.to_election()
    except (ParseError, NotSupportedInFormat) as e:
        argparser.error(str(e))
    if not ballot_file.ballots:
        warnings.warn('no ballots cast: all candidates will tie')
    show_ballot_stats(ballot_file)
    print()
    print('Evaluating the election...')
    winners = election.select_winner()
    if show_counts:
        print()
        show_counts_full(election.rounds)
    print()
    print('Election result:')
    show_winners(winners)


def load_ballots(input_file: io.TextIOBase,
                 input_format: str,
                 ) -> BallotFile:
    """Load ballots from the given file, expecting the given format."""
    try:
        loader = INPUT_FORMATS[input_format]
    except KeyError as e:
        raise ValueError(
            f'invalid input ballot file format: {input_format}, '
            'supported: ' + ', '.join(INPUT_FORMATS.keys())
        ) from e
    return loader(input_file)


def show_ballot_stats(ballot_file: BallotFile) -> None:
    if ballot_file.election_name is not None:
        print(f'Tabulating {ballot_file.election_name}')
    print(f'Received {len(ballot_file.ballots)} ballots')
    print(f'{len(ballot_file.candidates)} candidates'
          f' (in the order of the ballot file):')
    for cand in ballot_file.candidates:
        print(' ' * 10 + cand)


def show_counts_full(rounds: List[Count]) -> None:
    """Show vote totals of the remaining candidates after each round."""
    if not rounds:
        print('Decided on first preferences')
        return
    for count in rounds:
        print(f'Count {count.number}: eliminated {", ".join(count.eliminated)}'
              f' ({count.transferred} transferred,'
              f' {count.exhausted} exhausted)')
        n_just_chars = max(len(name) for name in count.totals)
        for name, votes in count.totals.items():
            print(' ' * 4, name.ljust(n_just_chars), ' ', votes)


def show_winners(winners: List[str]) -> None:
    if not winners:
        print('Nobody elected')
    elif len(winners) == 1:
        print('Elected', ' ', winners[0])
    else:
        print(f'Tie between {len(winners)} candidates:')
        for name in winners:
            print(' ' * 10 + name)


if __name__ == '__main__':
    args = argparser.parse_args()
    if not args.input_file and not args.use_stdin:
        argparser.print_usage()
    else:
        main(**vars(args))
