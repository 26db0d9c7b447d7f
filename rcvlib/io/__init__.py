"""Input/output of ballot files such as BLT files.

This subpackage is structured into modules by file format. Its root namespace
contains some general-purpose functions to convert between the preference
orderings used by many file formats and the rank arrays used by Rcvlib.
"""

from typing import List, Sequence, Tuple


def ranks_from_preferences(preferences: Sequence[int],
                           n_candidates: int,
                           ) -> Tuple[int, ...]:
    '''Transform a preference ordering of candidates to a rank array.

    :param preferences: 1-based candidate numbers, the most preferred first.
    :param n_candidates: Number of candidates in the election.
    :returns: A rank array - the i-th item is the rank of the i-th candidate.
        Candidates not listed in the preferences get a rank of 0, which makes
        the rank array invalid as a ballot.
    :raises ValueError: If a candidate number is out of range or repeated.
    '''
    ranks = [0] * n_candidates
    for position, cand_number in enumerate(preferences):
        if not 1 <= cand_number <= n_candidates:
            raise ValueError(
                f'candidate number out of range: {cand_number},'
                f' must be between 1 and {n_candidates}'
            )
        if ranks[cand_number - 1]:
            raise ValueError(f'candidate {cand_number} ranked twice'
                             f' in {list(preferences)!r}')
        ranks[cand_number - 1] = position + 1
    return tuple(ranks)


def preferences_from_ranks(ranks: Sequence[int]) -> List[int]:
    '''Transform a rank array to a preference ordering of candidates.

    :param ranks: A valid rank array.
    :returns: 1-based candidate numbers, the most preferred first.
    '''
    return [
        cand_i + 1 for cand_i in sorted(range(len(ranks)), key=ranks.__getitem__)
    ]
