"""BLT ballot files, as used by OpenSTV and other counting programs.

Only single-winner files with complete rankings are supported: the seat
count in the header must be 1, every ballot must rank all candidates and
ballot weights must be whole numbers (a weight of ``n`` stands for ``n``
identical ballots). Withdrawn candidates are not supported.
"""

import collections
import logging
from typing import Dict, List, Iterable, Optional, Tuple

import rcvlib.io
import rcvlib.io.core
from rcvlib.io.core import BallotFile

logger = logging.getLogger(__name__)


class NotSupportedInBLT(rcvlib.io.core.NotSupportedInFormat):
    FORMAT = 'BLT file reader'


class BLTParseError(rcvlib.io.core.ParseError):
    pass


def dump_lines(ballot_file: BallotFile) -> Iterable[str]:
    yield _dump_numline([len(ballot_file.candidates), 1])
    for ranks, n_votes in collections.Counter(ballot_file.ballots).items():
        yield _dump_numline(
            [n_votes] + rcvlib.io.preferences_from_ranks(ranks) + [0]
        )
    yield _dump_numline([0])
    for cand in ballot_file.candidates:
        yield _dump_strline(cand)
    if ballot_file.election_name is not None:
        yield _dump_strline(ballot_file.election_name)


dump, dumps = rcvlib.io.core.dumpers(dump_lines)


def _dump_numline(nums: List[int]) -> str:
    return ' '.join(str(num) for num in nums)


def _dump_strline(string: str) -> str:
    return f'"{string}"'


def load_lines(blt_lines: Iterable[str]) -> BallotFile:
    try:
        n_cands, n_seats = _parse_header(next(blt_lines))
    except StopIteration as e:
        raise BLTParseError('empty BLT file') from e
    if n_seats != 1:
        raise NotSupportedInBLT(f'multi-seat election ({n_seats} seats)')
    preferences = _parse_body(blt_lines)
    candidates, election_name = _parse_strings(blt_lines, n_cands)
    if candidates is None:
        candidates = _numeric_candidates(n_cands)
    ballots = []
    for prefs, n_votes in preferences.items():
        ranks = _ranks_from_preferences(prefs, n_cands)
        ballots.extend([ranks] * n_votes)
    logger.debug('loaded %d candidates and %d ballots',
                 len(candidates), len(ballots))
    return BallotFile(candidates, ballots, election_name)


load, loads = rcvlib.io.core.loaders(load_lines)


def _numeric_candidates(n_cands: int) -> List[str]:
    return [str(i+1) for i in range(n_cands)]


def _ranks_from_preferences(prefs: Tuple[int, ...],
                            n_cands: int,
                            ) -> Tuple[int, ...]:
    try:
        ranks = rcvlib.io.ranks_from_preferences(prefs, n_cands)
    except ValueError as e:
        raise BLTParseError(f'invalid BLT ballot {prefs!r}: {e}') from e
    if 0 in ranks:
        raise NotSupportedInBLT(f'partial ranking {prefs!r}')
    return ranks


def _parse_header(blt_line: str) -> Tuple[int, int]:
    blt_result = _parse_numline(blt_line)
    if len(blt_result) == 2:
        return tuple(blt_result)
    else:
        raise BLTParseError(f'need two integers (candidate and seat count)'
                            f' in BLT file header line, got {blt_result!r}')


def _parse_body(blt_lines: Iterable[str]) -> Dict[Tuple[int, ...], int]:
    ballots = {}
    for line in blt_lines:
        result = _parse_numline(line, allow_negative=True)
        if not result:
            continue    # ignore empty lines
        elif result == [0]:
            # End-of-ballots line, return.
            return ballots
        elif result[0] < 0:
            raise NotSupportedInBLT(f'withdrawn candidates {line!r}')
        else:
            weight, ballot = _parse_ballot(result)
            if weight < 1:
                raise BLTParseError(f'ballot weight <1: {line!r}')
            if ballot not in ballots:
                ballots[ballot] = 0
            ballots[ballot] += weight
    raise BLTParseError('incomplete BLT file:'
                        ' EOF before ballot list terminator')


def _parse_strings(blt_lines: Iterable[str],
                   n_cands: int,
                   ) -> Tuple[Optional[List[str]], Optional[str]]:
    parsed_lines = []
    empty_encountered = False
    for blt_line in blt_lines:
        blt_line = _clean_line(blt_line)
        if len(blt_line) > 1 and blt_line.startswith('"') and blt_line.endswith('"'):
            if empty_encountered:
                raise BLTParseError(f'nonempty line after empty: {blt_line!r}')
            parsed_lines.append(blt_line[1:-1])
        elif not blt_line:
            empty_encountered = True
        else:
            raise BLTParseError(f'invalid BLT string line: {blt_line!r}')
    if not parsed_lines:
        return None, None
    if len(parsed_lines) == 1 and n_cands != 1:
        return None, parsed_lines[0]
    elif len(parsed_lines) < n_cands:
        raise BLTParseError(f'not enough candidate names: {len(parsed_lines)}'
                            f' given, {n_cands} set in header')
    elif len(parsed_lines) == n_cands:
        return parsed_lines, None
    elif len(parsed_lines) == n_cands + 1:
        return parsed_lines[:-1], parsed_lines[-1]
    else:
        raise BLTParseError(f'too many strings: {len(parsed_lines)} found'
                            f' but expecting {n_cands} candidate names + title')


def _clean_line(blt_line: str) -> str:
    blt_line = blt_line.strip()
    # Ignore everything after the first hash sign after the last double quote.
    hash_search_start = blt_line.rfind('"') if '"' in blt_line else 0
    leftmost_hash = blt_line[hash_search_start:].find('#')
    if leftmost_hash == -1:
        return blt_line
    else:
        return blt_line[:(hash_search_start + leftmost_hash)].rstrip()


def _parse_ballot(nums: List[int]) -> Tuple[int, Tuple[int, ...]]:
    # Assumes a line with at least one leading positive element.
    # Check the trailing zero and strip it.
    if nums[-1] != 0:
        raise BLTParseError('ballot line must be zero-terminated,'
                            f' got {nums!r}')
    nums = nums[:-1]
    # The first element is weight, the rest are candidate numbers.
    return nums[0], tuple(nums[1:])


def _parse_numline(blt_line: str,
                   allow_negative: bool = False,
                   ) -> List[int]:
    blt_line = _clean_line(blt_line)
    # Return empty lines as empty lists.
    if not blt_line:
        return []
    # Split the line by spaces to obtain numbers.
    nums = []
    for i, numstr in enumerate(blt_line.split()):
        if numstr.isdigit():
            nums.append(int(numstr))
        elif allow_negative and numstr.startswith('-') and numstr[1:].isdigit():
            nums.append(int(numstr))
        elif i == 0 and allow_negative and _is_decimal(numstr):
            raise NotSupportedInBLT(f'fractional ballot weight {numstr!r}')
        else:
            raise BLTParseError(f'invalid BLT numberline item {i}: {numstr!r}')
    return nums


def _is_decimal(numstr: str) -> bool:
    whole, dot, fraction = numstr.partition('.')
    return bool(dot) and (whole + fraction).isdigit()
