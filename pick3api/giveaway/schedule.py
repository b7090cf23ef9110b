import datetime
from zoneinfo import ZoneInfo

from django.conf import settings

SATURDAY = 5
SUNDAY = 6


def reference_zone():
    return ZoneInfo(settings.GIVEAWAY['TIMEZONE'])


def next_business_day(d):
    """The first day after ``d`` that is not a Saturday or Sunday."""
    d = d + datetime.timedelta(days=1)
    while d.weekday() in (SATURDAY, SUNDAY):
        d += datetime.timedelta(days=1)
    return d


def draw_schedule(now):
    """
    Draw date and entry cutoff for a giveaway that starts filling at ``now``.

    Anchored on tomorrow in the reference zone, pushed past weekends. The
    cutoff is on the same local day as the draw.
    """
    tz = reference_zone()
    day = next_business_day(now.astimezone(tz).date())
    draw_date = datetime.datetime.combine(day, settings.GIVEAWAY['DRAW_TIME'], tzinfo=tz)
    entry_cutoff = datetime.datetime.combine(day, settings.GIVEAWAY['ENTRY_CUTOFF_TIME'], tzinfo=tz)
    return draw_date, entry_cutoff
