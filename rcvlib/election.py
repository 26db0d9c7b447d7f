'''Instant-runoff tabulation of a single-winner election.

An :class:`Election` is declared for a fixed number of candidates. The
candidates are added first, then the ballots; every admitted ballot is handed
to the candidate ranked first on it. :meth:`Election.select_winner` then
evaluates the election:

1.  If any candidate holds more than half of the votes held by the candidates
    still in the race, that candidate wins.
2.  If all remaining candidates hold the same number of votes, they all win
    (the tie is not broken; a separate election would be needed).
3.  Otherwise, all candidates with the fewest votes are eliminated together
    and their ballots are transferred to the next preference on each ballot
    that is still in the race. Then, the process repeats from step 1.

A single remaining candidate always wins, even with no votes. Ballots whose
candidates have all been eliminated are exhausted and no longer counted.
'''

import dataclasses
import logging
from typing import Dict, List, Optional, Sequence, Set, Tuple

from rcvlib.ballot import Ballot, RankedBallotValidator
from rcvlib.candidate import Candidate, CandidateCapacityError

logger = logging.getLogger(__name__)


class ElectionError(Exception):
    '''An election was used in a state that does not permit the operation.'''
    pass


class ElectionSetupError(ElectionError):
    '''Ballots were cast before all declared candidates were added.'''
    pass


@dataclasses.dataclass(frozen=True)
class Count:
    '''A record of a single elimination round.'''
    number: int
    eliminated: Tuple[str, ...]
    transferred: int
    exhausted: int
    totals: Dict[str, int]


class Election:
    '''An instant-runoff election among a fixed number of candidates.

    :param n_candidates: Number of candidates standing in the election. Every
        ballot must rank exactly this many candidates.
    '''
    def __init__(self, n_candidates: int):
        if n_candidates < 0:
            raise ValueError(f'negative number of candidates: {n_candidates}')
        self.n_candidates = n_candidates
        self.validator = RankedBallotValidator(n_candidates)
        self.n_ballots = 0
        self.exhausted: List[Ballot] = []
        self.rounds: List[Count] = []
        self._ballots: List[Ballot] = []
        self._candidates: List[Candidate] = []
        self._eliminated: Set[int] = set()

    def add_candidate(self, name: str) -> Candidate:
        '''Add the next candidate to the election.

        Candidates are numbered in the order of addition; the i-th candidate
        added corresponds to the i-th item of the ballot rank arrays.

        :param name: Name of the candidate.
        :returns: The newly created candidate.
        :raises CandidateCapacityError: If all declared candidates have
            already been added.
        '''
        if len(self._candidates) >= self.n_candidates:
            raise CandidateCapacityError(name, self.n_candidates)
        candidate = Candidate(name, number=len(self._candidates) + 1)
        self._candidates.append(candidate)
        return candidate

    def add_ballot(self, ranks: Sequence[int]) -> None:
        '''Validate a rank array and admit it into the election as a ballot.

        :param ranks: Ranks given to the candidates in the order they were
            added; must be a permutation of 1 to the number of candidates.
        :raises InvalidBallot: If the rank array is not a valid ballot.
            The ballot is not admitted.
        :raises ElectionSetupError: If not all declared candidates have been
            added yet.
        '''
        self.validator.validate(ranks)
        if len(self._candidates) < self.n_candidates:
            raise ElectionSetupError(
                f'cannot admit ballots with {len(self._candidates)}'
                f' of {self.n_candidates} candidates added'
            )
        ballot = Ballot(ranks)
        self._assign(ballot)
        self._ballots.append(ballot)
        self.n_ballots += 1

    def get_candidates(self) -> List[Candidate]:
        '''Return all candidates in the order they were added.

        Eliminated candidates are included (with no votes).
        '''
        return list(self._candidates)

    def select_winner(self) -> List[str]:
        '''Determine the winner of the election.

        Every call tabulates from scratch: all ballots return to their first
        preferences, and :attr:`rounds` and :attr:`exhausted` describe only
        this tabulation. Ballots stay where the count left them until the
        next call.

        :returns: A list with the name of the winner, or the names of all
            tied candidates in the order they were added. Empty if there are
            no candidates.
        '''
        candidates = self.get_candidates()
        self._restart()
        logger.info('tabulating %d ballots for %d candidates',
                    self.n_ballots, len(candidates))
        if not candidates:
            logger.info('no candidates, nobody elected')
            return []
        winners = self.reassign(candidates)
        logger.info('elected: %s', ', '.join(cand.name for cand in winners))
        return [cand.name for cand in winners]

    def reassign(self, candidates: List[Candidate]) -> List[Candidate]:
        '''Eliminate candidates and transfer their ballots until decided.

        Each round, all candidates with the lowest number of votes are
        eliminated and their ballots passed on to the next preference still
        in the race. The rounds are recorded in :attr:`rounds`.

        :param candidates: Candidates still in the race.
        :returns: The winning candidate in a list, or all candidates that
            ended up tied.
        '''
        remaining = list(candidates)
        while True:
            decided = self._decide(remaining)
            if decided is not None:
                return decided
            self._eliminate_lowest(remaining)

    def votes_equal(self, candidates: List[Candidate]) -> bool:
        '''Return True if all the candidates have the same number of votes.'''
        return len(set(cand.votes for cand in candidates)) <= 1

    def votes_more_than_half(self,
                             candidates: List[Candidate],
                             ) -> Optional[Candidate]:
        '''Return the candidate with over half of the votes, if there is one.

        Only the votes of the given candidates are counted towards the total,
        exhausted ballots and eliminated candidates do not matter.
        '''
        leader = None
        total = 0
        for cand in candidates:
            if leader is None or cand.votes > leader.votes:
                leader = cand
            total += cand.votes
        if leader is not None and 2 * leader.votes > total:
            return leader
        return None

    def _decide(self,
                remaining: List[Candidate],
                ) -> Optional[List[Candidate]]:
        if len(remaining) == 1:
            logger.info('%s is the only remaining candidate',
                        remaining[0].name)
            return remaining
        elif self.votes_equal(remaining):
            logger.info('%s tied with %d votes each',
                        [cand.name for cand in remaining],
                        remaining[0].votes if remaining else 0)
            return remaining
        leader = self.votes_more_than_half(remaining)
        if leader is not None:
            logger.info('%s has a majority of %d votes',
                        leader.name, leader.votes)
            return [leader]
        return None

    def _restart(self) -> None:
        for cand in self._candidates:
            cand.eliminate()
        self._eliminated.clear()
        self.exhausted = []
        self.rounds = []
        for ballot in self._ballots:
            ballot.eliminated.clear()
            self._assign(ballot)

    def _eliminate_lowest(self, remaining: List[Candidate]) -> None:
        min_votes = min(cand.votes for cand in remaining)
        lowest = [cand for cand in remaining if cand.votes == min_votes]
        logger.info('eliminating %s with %d votes',
                    [cand.name for cand in lowest], min_votes)
        # the whole bottom group leaves before any transfer so that ballots
        # skip over all of its members
        released = []
        for cand in lowest:
            self._eliminated.add(cand.number - 1)
            released.extend(cand.eliminate())
        n_transferred = 0
        n_exhausted = 0
        for ballot in released:
            receiver = self._assign(ballot)
            if receiver is None:
                n_exhausted += 1
            else:
                n_transferred += 1
        remaining[:] = [cand for cand in remaining if cand not in lowest]
        count = Count(
            number=len(self.rounds) + 1,
            eliminated=tuple(cand.name for cand in lowest),
            transferred=n_transferred,
            exhausted=n_exhausted,
            totals={cand.name: cand.votes for cand in remaining},
        )
        self.rounds.append(count)
        logger.info('count %d: %d ballots transferred, %d exhausted',
                    count.number, n_transferred, n_exhausted)
        logger.info('current vote totals: %s', count.totals)

    def _assign(self, ballot: Ballot) -> Optional[Candidate]:
        while not ballot.is_exhausted:
            index = ballot.top_candidate()
            if index in self._eliminated:
                ballot.eliminate_candidate(index)
            else:
                receiver = self._candidates[index]
                receiver.add_ballot(ballot)
                logger.debug('%r assigned to %s', ballot, receiver.name)
                return receiver
        logger.debug('%r exhausted', ballot)
        self.exhausted.append(ballot)
        return None
