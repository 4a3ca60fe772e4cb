import pytest

from vibesync.utils.time import format_duration


@pytest.mark.parametrize('msec, expected', [
    (0, '0:00'),
    (999, '0:00'),
    (59999, '0:59'),
    (60000, '1:00'),
    (215000, '3:35'),
    (3725000, '62:05'),
])
def test_format_duration(msec, expected):
    assert format_duration(msec) == expected
