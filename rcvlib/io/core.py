"""Shared functionality for ballot file I/O. Internal."""

from __future__ import annotations

import dataclasses
import typing
from typing import Any, List, Tuple, Callable, Iterable, TextIO, Optional

from rcvlib.ballot import InvalidBallot
from rcvlib.election import Election


class NotSupportedInFormat(Exception):
    """Signals that the given element is not supported by the I/O format."""

    FORMAT: str = NotImplemented

    def __init__(self, what: str):
        super().__init__(f'{what} not supported by {self.FORMAT}')


class ParseError(Exception):
    """An input that is invalid according to the given format was detected."""
    pass


@dataclasses.dataclass
class BallotFile:
    """A container for data returnable from a ballot file."""
    candidates: List[str]
    ballots: List[Tuple[int, ...]] = dataclasses.field(default_factory=list)
    election_name: Optional[str] = None

    def to_election(self) -> Election:
        """Create an election with the candidates and ballots of the file.

        :raises ParseError: If any of the ballots is invalid for the election.
        """
        election = Election(len(self.candidates))
        for name in self.candidates:
            election.add_candidate(name)
        for i, ranks in enumerate(self.ballots):
            try:
                election.add_ballot(ranks)
            except InvalidBallot as e:
                raise ParseError(f'ballot {i + 1}: {e}') from e
        return election


def loaders(line_loader: Callable[..., BallotFile]
            ) -> Tuple[Callable[..., BallotFile], Callable[..., BallotFile]]:
    """Create load() and loads() functions from an iterating function."""
    return_annot = typing.get_type_hints(line_loader).get('return')
    if return_annot is None:
        return_annot = Any

    def load(file: TextIO, **kwargs) -> return_annot:
        return line_loader(iter(file), **kwargs)

    def loads(text: str, **kwargs) -> return_annot:
        return line_loader(iter(text.split('\n')), **kwargs)

    return load, loads


def dumpers(line_dumper: Callable[..., Iterable[str]]
            ) -> Tuple[Callable[..., None], Callable[..., str]]:
    """Create dump() and dumps() functions from a line generator function."""

    def dump(file: TextIO, *args, **kwargs) -> None:
        for line in line_dumper(*args, **kwargs):
            if not line.endswith('\n'):
                line += '\n'
            file.write(line)

    def dumps(*args, **kwargs) -> str:
        return ''.join(
            line + ('' if line.endswith('\n') else '\n')
            for line in line_dumper(*args, **kwargs)
        )

    return dump, dumps
