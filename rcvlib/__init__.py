"""Rcvlib - a library for tabulating ranked-choice elections.

Rcvlib evaluates single-winner ranked-choice elections by instant runoff:
the candidates with the fewest first preferences are eliminated round by
round and their ballots transferred to the next preference, until one
candidate holds a majority of the remaining votes or all remaining
candidates are tied.

The tabulation itself is done by the :class:`election.Election` object,
which holds the candidates (:mod:`candidate` module) and the ballots
(:mod:`ballot` module), and validates every ballot before admitting it.
The :mod:`io` subpackage loads elections from ballot files and the package
can also be run from the command line as ``python -m rcvlib``.
"""
