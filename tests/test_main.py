
import sys
import os
import io

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
import rcvlib.__main__

DATA_DIR = os.path.join(os.path.dirname(__file__), 'io', 'data')


def test_ranks_file(capsys):
    with open(os.path.join(DATA_DIR, 'music.txt'), encoding='utf8') as infile:
        rcvlib.__main__.main(infile)
    out = capsys.readouterr().out
    assert 'Tabulating Music awards 2023' in out
    assert 'Received 9 ballots' in out
    assert out.rstrip().endswith('Beyonce')
    assert 'Elected' in out


def test_blt_file_counts(capsys):
    with open(os.path.join(DATA_DIR, 'gardening.blt'), encoding='utf8') as infile:
        rcvlib.__main__.main(infile, input_format='blt', show_counts=True)
    out = capsys.readouterr().out
    assert 'Tabulating Gardening Club Election' in out
    assert 'Count 1: eliminated Chuck (2 transferred, 0 exhausted)' in out
    assert out.rstrip().endswith('Amy')


def test_tie(capsys):
    rcvlib.__main__.main(io.StringIO('2\nA\nB\n1 2\n2 1\n'), show_counts=True)
    out = capsys.readouterr().out
    assert 'Decided on first preferences' in out
    assert 'Tie between 2 candidates:' in out


def test_nobody_elected(capsys):
    with pytest.warns(UserWarning):
        rcvlib.__main__.main(io.StringIO('0\n'))
    assert 'Nobody elected' in capsys.readouterr().out


def test_invalid_format():
    with pytest.raises(ValueError):
        rcvlib.__main__.load_ballots(io.StringIO('0\n'), 'abif')


def test_argparser():
    args = rcvlib.__main__.argparser.parse_args(['-I', '-f', 'blt', '-c'])
    assert args.use_stdin
    assert args.input_format == 'blt'
    assert args.show_counts
    assert args.input_file is None


def test_invalid_ballot_reported(capsys):
    with pytest.raises(SystemExit) as excinfo:
        rcvlib.__main__.main(io.StringIO('2\nA\nB\n1 2\n1 1\n'))
    assert excinfo.value.code == 2
    err = capsys.readouterr().err
    assert 'usage:' in err
    assert 'ballot 2' in err


def test_malformed_file_reported(capsys):
    with pytest.raises(SystemExit):
        rcvlib.__main__.main(io.StringIO('three\nA\nB\nC\n'))
    assert 'candidate count' in capsys.readouterr().err


def test_unsupported_blt_reported(capsys):
    with pytest.raises(SystemExit):
        rcvlib.__main__.main(io.StringIO('2 2\n1 1 2 0\n0\n"A"\n"B"\n'),
                             input_format='blt')
    assert 'not supported' in capsys.readouterr().err
