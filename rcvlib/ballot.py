'''Ranked ballots and their validation.

A ballot in an instant-runoff election ranks every candidate standing in it.
It is represented by a rank array: the i-th item is the rank the voter gave
to the i-th candidate of the election (candidates are numbered in the order
they were added), with 1 meaning the most preferred one. A valid rank array
for an election with ``n`` candidates is thus a permutation of ``1..n``.

Rank arrays are checked by :class:`RankedBallotValidator` before they are
admitted into an election. If the array is invalid, the validator raises
a subclass of :class:`InvalidBallot`.
Admitted arrays are wrapped in :class:`Ballot` objects, which keep track of
the candidates eliminated while the ballot was being counted.
'''

import abc
import collections.abc
from numbers import Integral
from typing import Any, Sequence, Set, Tuple


class BallotError(Exception, metaclass=abc.ABCMeta):
    '''A ballot cannot be used in the requested way.'''
    pass


class InvalidBallot(BallotError):
    '''A rank array does not form a valid ballot for the election.'''
    pass


class BallotTypeError(InvalidBallot):
    '''A rank array is not a sequence of integer ranks.

    :param ranks: The offending rank array.
    '''
    def __init__(self, ranks: Any):
        self.ranks = ranks
        super().__init__(
            f'invalid ballot type: {ranks!r}, must be a sequence of integers'
        )


class BallotLengthError(InvalidBallot):
    '''A rank array does not rank exactly the candidates of the election.

    :param length: Length of the rank array.
    :param expected: Number of candidates in the election.
    '''
    def __init__(self, length: int, expected: int):
        self.length = length
        self.expected = expected
        super().__init__(
            f'invalid ballot length: {length}, must be {expected}'
        )


class BallotRankError(InvalidBallot):
    '''A rank array is not a permutation of ranks 1 to n.

    :param ranks: The offending rank array.
    '''
    def __init__(self, ranks: Sequence[int]):
        self.ranks = ranks
        super().__init__(
            f'invalid ballot ranks: {list(ranks)!r},'
            f' must be a permutation of 1..{len(ranks)}'
        )


class BallotExhausted(BallotError):
    '''All candidates ranked on the ballot have been eliminated.'''
    pass


class RankedBallotValidator:
    '''Validate that a rank array is a complete ranking of all candidates.

    :param n_candidates: Number of candidates in the election; every rank
        array must have exactly this many items.
    '''
    def __init__(self, n_candidates: int):
        self.n_candidates = n_candidates

    def validate(self, ranks: Sequence[int]) -> None:
        '''Check if the rank array is a permutation of ranks 1 to n.

        :param ranks: Rank array to be checked.
        :raises BallotTypeError: If the ranks are not a sequence of integers.
        :raises BallotLengthError: If the rank array length does not match
            the number of candidates.
        :raises BallotRankError: If the ranks are not a permutation of 1..n.
        '''
        if (isinstance(ranks, (str, bytes))
                or not isinstance(ranks, collections.abc.Sequence)):
            raise BallotTypeError(ranks)
        for rank in ranks:
            if isinstance(rank, bool) or not isinstance(rank, Integral):
                raise BallotTypeError(ranks)
        if len(ranks) != self.n_candidates:
            raise BallotLengthError(len(ranks), self.n_candidates)
        if sorted(ranks) != list(range(1, self.n_candidates + 1)):
            raise BallotRankError(ranks)

    def is_valid(self, ranks: Sequence[int]) -> bool:
        '''Return True if the rank array is valid, False otherwise.'''
        try:
            self.validate(ranks)
        except InvalidBallot:
            return False
        else:
            return True


class Ballot:
    '''A single voter's ranking of all candidates.

    The rank array is assumed to be valid (use :class:`RankedBallotValidator`
    to check it first); invalid arrays give undefined top candidates.

    :param ranks: Rank array; the i-th item is the rank of the i-th
        candidate, 1 being the most preferred.
    '''
    def __init__(self, ranks: Sequence[int]):
        self.ranks: Tuple[int, ...] = tuple(int(rank) for rank in ranks)
        self.eliminated: Set[int] = set()

    def top_candidate(self) -> int:
        '''Return the index of the most preferred uneliminated candidate.

        :raises BallotExhausted: If all candidates have been eliminated.
        '''
        best = None
        for index, rank in enumerate(self.ranks):
            if index in self.eliminated:
                continue
            if best is None or rank < self.ranks[best]:
                best = index
        if best is None:
            raise BallotExhausted(
                f'all {len(self.ranks)} candidates eliminated on {self!r}'
            )
        return best

    def eliminate_candidate(self, index: int) -> None:
        '''Mark the candidate as no longer eligible to receive this ballot.

        The ballot is not moved anywhere; whoever holds it must find the new
        top candidate and hand the ballot over.
        '''
        self.eliminated.add(index)

    @property
    def is_exhausted(self) -> bool:
        return all(i in self.eliminated for i in range(len(self.ranks)))

    def __repr__(self) -> str:
        return (
            '<Ballot(' + ','.join(str(rank) for rank in self.ranks)
            + (f';-{sorted(self.eliminated)}' if self.eliminated else '')
            + ')>'
        )
