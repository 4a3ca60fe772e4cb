"""
Utility methods for converting between human and machine readable time formats.
"""

from math import floor
from typing import Union


def format_duration(msec: Union[int, float]) -> str:
    """
    Turn milliseconds into a minutes:seconds string, e.g. 215000 -> "3:35".
    Minutes are not wrapped into hours.
    """
    minute, sec = divmod(floor(msec / 1000), 60)
    return f'{minute}:{sec:02d}'
