'''Candidates standing in an instant-runoff election.

A :class:`Candidate` is identified by its name and holds the ballots on which
it is currently the most preferred remaining choice; its vote count is the
number of those ballots. Ballots are only ever released all at once, when
the candidate is eliminated from the race.
'''

from __future__ import annotations

from typing import Any, List, Optional

from rcvlib.ballot import Ballot


class CandidateError(Exception):
    '''A candidate cannot be added or used in the given context.

    :param candidate: Candidate (or its name) that was found to be invalid.
    :param reason: Why the candidate was rejected.
    '''
    def __init__(self, candidate: Any, reason: Optional[str] = None):
        self.candidate = candidate
        self.reason = reason
        message = f'invalid candidate: {candidate}'
        if reason:
            message += f', {reason}'
        super().__init__(message)


class CandidateCapacityError(CandidateError):
    '''More candidates were added to an election than it was declared for.

    :param candidate: Name of the candidate that did not fit.
    :param capacity: Number of candidates the election was declared for.
    '''
    def __init__(self, candidate: Any, capacity: int):
        self.capacity = capacity
        super().__init__(
            candidate, f'election declared for {capacity} candidates is full'
        )


class Candidate:
    '''A named contestant holding the ballots currently assigned to it.

    :param name: Name of the candidate, used in election results.
    :param number: 1-based position of the candidate in the election, which
        is also its column in the rank arrays of the ballots.
    '''
    def __init__(self, name: str, number: Optional[int] = None):
        self._name = name
        self.number = number
        self.ballots: List[Ballot] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def votes(self) -> int:
        '''Number of ballots currently assigned to the candidate.'''
        return len(self.ballots)

    def add_ballot(self, ballot: Ballot) -> None:
        self.ballots.append(ballot)

    def eliminate(self) -> List[Ballot]:
        '''Release all ballots held by the candidate.

        :returns: The released ballots, to be reassigned by the election.
            The candidate holds no ballots afterwards.
        '''
        released = self.ballots
        self.ballots = []
        return released

    def __repr__(self) -> str:
        return (
            f'<Candidate({self._name}'
            + (f',{self.number}' if self.number is not None else '')
            + f';{self.votes})>'
        )
