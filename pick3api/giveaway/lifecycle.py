r"""
Giveaway state machine.

    OPEN -> FILLING -> CLOSED -> COMPLETED
      \________\_________\____-> CANCELLED

COMPLETED and CANCELLED are terminal. FILLING is entered by the pick
allocator, COMPLETED by the winner resolver and CANCELLED by cancellation;
this module owns the table and the close/schedule operations.
"""
import logging

from django.db import transaction
from django.utils import timezone

from .exceptions import (
    AlreadyCancelled,
    AlreadyCompleted,
    CannotCancelCompleted,
    InvalidTransition,
)
from .models import ACCEPTING_PICKS, Giveaway, Status
from .schedule import draw_schedule

logger = logging.getLogger('giveaway.lifecycle')

TRANSITIONS = {
    Status.OPEN: frozenset({Status.FILLING, Status.CANCELLED}),
    Status.FILLING: frozenset({Status.CLOSED, Status.CANCELLED}),
    Status.CLOSED: frozenset({Status.COMPLETED, Status.CANCELLED}),
    Status.COMPLETED: frozenset(),
    Status.CANCELLED: frozenset(),
}


def can_transition(current, target):
    return target in TRANSITIONS[current]


def ensure_transition(giveaway, target):
    current = giveaway.status
    if can_transition(current, target):
        return
    if current == Status.COMPLETED:
        if target == Status.COMPLETED:
            raise AlreadyCompleted()
        if target == Status.CANCELLED:
            raise CannotCancelCompleted()
    if current == Status.CANCELLED:
        raise AlreadyCancelled()
    raise InvalidTransition(current, target)


def lock(giveaway_id):
    """Row-locked giveaway, must be called inside a transaction."""
    return Giveaway.objects.select_for_update().get(pk=giveaway_id)


def mark_filling(giveaway, now):
    """
    OPEN -> FILLING with a fresh draw schedule. Returns False, changing
    nothing, when the giveaway is already FILLING so concurrent crossings of
    the threshold keep the first schedule.
    """
    if giveaway.status == Status.FILLING:
        return False
    ensure_transition(giveaway, Status.FILLING)
    giveaway.draw_date, giveaway.entry_cutoff = draw_schedule(now)
    giveaway.status = Status.FILLING
    giveaway.save(update_fields=['status', 'total_picks', 'draw_date', 'entry_cutoff'])
    logger.info(
        f'Giveaway {giveaway.pk} reached {giveaway.total_picks} picks, '
        f'draw at {giveaway.draw_date.isoformat()} (cutoff {giveaway.entry_cutoff.isoformat()})'
    )
    return True


def _close(giveaway, now):
    giveaway.status = Status.CLOSED
    giveaway.closed_at = now
    giveaway.save(update_fields=['status', 'closed_at'])


def close(giveaway_id, now=None):
    """Manual close, only while FILLING."""
    now = now or timezone.now()
    with transaction.atomic():
        giveaway = lock(giveaway_id)
        if giveaway.status != Status.FILLING:
            raise InvalidTransition(
                giveaway.status, Status.CLOSED, 'Can only close FILLING giveaways.',
            )
        _close(giveaway, now)
    logger.info(f'Giveaway {giveaway.pk} closed manually')
    return giveaway


def close_expired(now=None):
    """
    Close every FILLING giveaway whose entry cutoff has passed. Returns the
    ids that were closed.
    """
    now = now or timezone.now()
    candidates = list(
        Giveaway.objects.filter(status=Status.FILLING, entry_cutoff__lte=now)
        .order_by('pk')
        .values_list('pk', flat=True)
    )
    closed = []
    for giveaway_id in candidates:
        with transaction.atomic():
            giveaway = lock(giveaway_id)
            # Re-checked under the lock, an operator may have got there first
            if giveaway.status != Status.FILLING or giveaway.entry_cutoff > now:
                continue
            _close(giveaway, now)
        closed.append(giveaway_id)
    if closed:
        logger.info(f'Closed {len(closed)} giveaways past their entry cutoff: {closed}')
    return closed


def recalculate_schedule(giveaway_id, now=None):
    """
    Operator action: recompute draw date and cutoff anchored on the day after
    ``now``. Calling it on a later day moves the draw later.
    """
    now = now or timezone.now()
    with transaction.atomic():
        giveaway = lock(giveaway_id)
        if giveaway.status not in ACCEPTING_PICKS:
            raise InvalidTransition(
                giveaway.status, giveaway.status,
                'Can only recalculate draw for open/filling giveaways.',
            )
        previous = giveaway.draw_date
        giveaway.draw_date, giveaway.entry_cutoff = draw_schedule(now)
        giveaway.save(update_fields=['draw_date', 'entry_cutoff'])
    if previous and giveaway.draw_date > previous:
        logger.warning(
            f'Giveaway {giveaway.pk} draw pushed from {previous.isoformat()} '
            f'to {giveaway.draw_date.isoformat()}'
        )
    return giveaway
