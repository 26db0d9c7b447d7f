"""Plain rank files.

A rank file lists the number of candidates on its first line, then the
names of the candidates, one per line, and then the ballots, one per line.
Each ballot line contains the ranks given to the candidates in the order in
which they are listed, separated by whitespace::

    # Music awards 2023
    3
    Beyonce
    Lizzo
    Taylor Swift
    1 2 3
    2 1 3
    3 1 2

Empty lines and lines starting with ``#`` are ignored, except that a comment
on the first non-empty line is read as the title of the election.
"""

import logging
from typing import Iterable, Iterator, List, Optional, Tuple

import rcvlib.io.core
from rcvlib.io.core import BallotFile

logger = logging.getLogger(__name__)

COMMENT_MARK = '#'


class RanksParseError(rcvlib.io.core.ParseError):
    pass


def load_lines(lines: Iterable[str]) -> BallotFile:
    lines = [line.strip() for line in lines]
    election_name = _parse_title(lines)
    content = _content_lines(lines)
    try:
        n_cands = _parse_count(next(content))
    except StopIteration as e:
        raise RanksParseError('empty rank file') from e
    candidates = _parse_candidates(content, n_cands)
    ballots = [_parse_ranks(line) for line in content]
    logger.debug('loaded %d candidates and %d ballots',
                 len(candidates), len(ballots))
    return BallotFile(candidates, ballots, election_name)


load, loads = rcvlib.io.core.loaders(load_lines)


def dump_lines(ballot_file: BallotFile,
               title: Optional[str] = None,
               ) -> Iterable[str]:
    if title is None:
        title = ballot_file.election_name
    if title is not None:
        yield f'{COMMENT_MARK} {title}'
    yield str(len(ballot_file.candidates))
    for name in ballot_file.candidates:
        yield name
    for ranks in ballot_file.ballots:
        yield ' '.join(str(rank) for rank in ranks)


dump, dumps = rcvlib.io.core.dumpers(dump_lines)


def _parse_title(lines: List[str]) -> Optional[str]:
    for line in lines:
        if line:
            if line.startswith(COMMENT_MARK):
                return line[len(COMMENT_MARK):].strip() or None
            return None
    return None


def _content_lines(lines: Iterable[str]) -> Iterator[str]:
    for line in lines:
        line = line.strip()
        if line and not line.startswith(COMMENT_MARK):
            yield line


def _parse_count(line: str) -> int:
    if not line.isdigit():
        raise RanksParseError(f'need a candidate count on the first line,'
                              f' got {line!r}')
    return int(line)


def _parse_candidates(content: Iterator[str], n_cands: int) -> List[str]:
    candidates = []
    while len(candidates) < n_cands:
        try:
            candidates.append(next(content))
        except StopIteration as e:
            raise RanksParseError(
                f'not enough candidate names: {len(candidates)} given,'
                f' {n_cands} declared'
            ) from e
    return candidates


def _parse_ranks(line: str) -> Tuple[int, ...]:
    ranks = []
    for i, item in enumerate(line.split()):
        if not item.isdigit():
            raise RanksParseError(f'invalid rank item {i}: {item!r}'
                                  f' in ballot line {line!r}')
        ranks.append(int(item))
    return tuple(ranks)
