
import sys
import os

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))
import rcvlib.io.blt
import rcvlib.io.core

DATA_DIR = os.path.join(os.path.dirname(__file__), 'data')


def test_gardening_blt():
    with open(os.path.join(DATA_DIR, 'gardening.blt'), encoding='utf8') as infile:
        ballot_file = rcvlib.io.blt.load(infile)
    assert ballot_file.election_name == 'Gardening Club Election'
    assert ballot_file.candidates == ['Amy', 'Bob', 'Chuck']
    assert len(ballot_file.ballots) == 9
    assert ballot_file.ballots.count((1, 2, 3)) == 4
    assert ballot_file.ballots.count((2, 1, 3)) == 3
    assert ballot_file.ballots.count((2, 3, 1)) == 2
    assert ballot_file.to_election().select_winner() == ['Amy']


def test_numeric_candidates():
    ballot_file = rcvlib.io.blt.loads('2 1\n1 2 1 0\n0\n')
    assert ballot_file.candidates == ['1', '2']
    assert ballot_file.ballots == [(2, 1)]
    assert ballot_file.election_name is None


def test_title_only():
    ballot_file = rcvlib.io.blt.loads('2 1\n1 2 1 0\n0\n"Poll"\n')
    assert ballot_file.candidates == ['1', '2']
    assert ballot_file.election_name == 'Poll'


def test_single_candidate_name():
    ballot_file = rcvlib.io.blt.loads('1 1\n3 1 0\n0\n"Lizzo"\n')
    assert ballot_file.candidates == ['Lizzo']
    assert ballot_file.ballots == [(1, ), (1, ), (1, )]


def test_custom_out():
    ballot_file = rcvlib.io.core.BallotFile(
        ['A', 'B'], [(1, 2), (2, 1), (1, 2)], 'Test'
    )
    blt_text = rcvlib.io.blt.dumps(ballot_file)
    assert blt_text == '2 1\n2 1 2 0\n1 2 1 0\n0\n"A"\n"B"\n"Test"\n'
    assert sorted(rcvlib.io.blt.loads(blt_text).ballots) == [
        (1, 2), (1, 2), (2, 1)
    ]


def test_incomplete_header():
    with pytest.raises(rcvlib.io.blt.BLTParseError):
        rcvlib.io.blt.loads('2')


def test_empty():
    with pytest.raises(rcvlib.io.blt.BLTParseError):
        rcvlib.io.blt.loads('')


@pytest.mark.parametrize('text', [
    '2 2\n1 1 2 0\n0\n',
    '3 1\n-2\n1 1 3 0\n0\n',
    '2 1\n1.5 1 2 0\n0\n',
    '3 1\n1 1 2 0\n0\n',
])
def test_not_supported(text):
    with pytest.raises(rcvlib.io.blt.NotSupportedInBLT):
        rcvlib.io.blt.loads(text)


@pytest.mark.parametrize('text', [
    '2 1\n1 1 2\n0\n',
    '2 1\n1 1 2 0\n',
    '2 1\n1 1 3 0\n0\n',
    '2 1\n1 1 1 0\n0\n',
    '2 1\n0 1 2 0\n0\n',
    '2 1\n1 1 x 0\n0\n',
    '2 1\n1 1 2 0\n0\n"A"\nB\n',
    '2 1\n1 1 2 0\n0\n"A"\n"B"\n"C"\n"D"\n',
    '3 1\n1 1 2 3 0\n0\n"A"\n"B"\n',
])
def test_parse_errors(text):
    with pytest.raises(rcvlib.io.blt.BLTParseError):
        rcvlib.io.blt.loads(text)


def test_error_hierarchy():
    assert issubclass(rcvlib.io.blt.BLTParseError, rcvlib.io.core.ParseError)
    assert issubclass(
        rcvlib.io.blt.NotSupportedInBLT, rcvlib.io.core.NotSupportedInFormat
    )
