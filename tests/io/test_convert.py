
import sys
import os

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))
import rcvlib.io


@pytest.mark.parametrize(('preferences', 'ranks'), [
    ([1, 2, 3], (1, 2, 3)),
    ([3, 1, 2], (2, 3, 1)),
    ([2, 3, 1], (3, 1, 2)),
    ([], ()),
])
def test_ranks_from_preferences(preferences, ranks):
    assert rcvlib.io.ranks_from_preferences(preferences, len(ranks)) == ranks
    assert rcvlib.io.preferences_from_ranks(ranks) == preferences


def test_partial_preferences():
    assert rcvlib.io.ranks_from_preferences([2], 3) == (0, 1, 0)


@pytest.mark.parametrize('preferences', [[0, 1], [1, 4], [2, 2]])
def test_invalid_preferences(preferences):
    with pytest.raises(ValueError):
        rcvlib.io.ranks_from_preferences(preferences, 3)
