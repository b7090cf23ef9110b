import re
from bisect import bisect_left
from collections import defaultdict

from .exceptions import InvalidPickNumber

PICK_MIN = 0
PICK_MAX = 999
DRAW_RESULT_RE = re.compile(r'[0-9]{3}')


def format_pick_number(value):
    return str(value).zfill(3)


def normalize_pick_number(value):
    """
    Turn an int or a string of up to three digits into the stored
    zero-padded form ("7" -> "007").
    """
    if isinstance(value, bool) or value is None:
        raise InvalidPickNumber()
    if isinstance(value, int):
        if not PICK_MIN <= value <= PICK_MAX:
            raise InvalidPickNumber()
        return format_pick_number(value)
    if not isinstance(value, str) or not value.strip():
        raise InvalidPickNumber()
    value = format_pick_number(value.strip())
    if not DRAW_RESULT_RE.fullmatch(value):
        raise InvalidPickNumber()
    return value


def is_draw_result(value):
    return isinstance(value, str) and bool(DRAW_RESULT_RE.fullmatch(value))


def distance(pick_number, result):
    return abs(int(pick_number) - int(result))


def take_closest(list_, number):
    pos = bisect_left(list_, number)
    if pos == 0:
        return [list_[0]]
    if pos == len(list_):
        return [list_[-1]]
    before = list_[pos - 1]
    after = list_[pos]
    if after - number == number - before:
        return [after, before]
    elif after - number < number - before:
        return [after]
    else:
        return [before]


def tie_break_key(value, result):
    # Below the result beats at-or-above it, then the smaller number wins.
    return (value >= result, value)


def closest_pick(picks, result):
    """
    Winning pick among ``picks`` for a drawn ``result`` (both as 3-digit
    strings on the picks, int for the result).

    Several members holding the very same number resolve to the earliest
    placed pick.
    """
    by_value = defaultdict(list)
    for pick in picks:
        by_value[int(pick.pick_number)].append(pick)
    if not by_value:
        return None
    candidates = take_closest(sorted(by_value), result)
    value = min(candidates, key=lambda v: tie_break_key(v, result))
    return min(by_value[value], key=lambda p: p.pk)
