import logging
from collections import defaultdict

from django.db import transaction
from django.utils import timezone

from .exceptions import InvalidDrawResult, InvariantViolation
from .lifecycle import ensure_transition, lock
from .models import Pick, Status, Winner
from .notifications import notify_winners
from .utils import closest_pick, distance, is_draw_result

logger = logging.getLogger('giveaway.resolver')


def resolve_slots(giveaway, picks, pick3_result):
    """
    Unsaved Winner per slot that has picks, box topper first. ``picks`` may
    be any iterable of the giveaway's picks.
    """
    result = int(pick3_result)
    by_slot = defaultdict(list)
    for pick in picks:
        by_slot[pick.slot].append(pick)

    winners = []
    for slot in giveaway.slots:
        slot_picks = by_slot.get(slot)
        if not slot_picks:
            continue
        pick = closest_pick(slot_picks, result)
        winners.append(Winner(
            giveaway=giveaway,
            member_id=pick.member_id,
            slot=slot,
            pick_number=pick.pick_number,
            distance=distance(pick.pick_number, pick3_result),
        ))
    return winners


def resolve(giveaway_id, pick3_result, now=None):
    """
    Settle a CLOSED giveaway against the published Pick 3 result.

    Winners are written and the giveaway marked COMPLETED in one transaction.
    Members are emailed once it has committed.
    """
    if not is_draw_result(pick3_result):
        raise InvalidDrawResult()
    now = now or timezone.now()

    with transaction.atomic():
        giveaway = lock(giveaway_id)
        ensure_transition(giveaway, Status.COMPLETED)

        picks = list(Pick.objects.filter(giveaway=giveaway).order_by('slot', 'pk'))
        winners = resolve_slots(giveaway, picks, pick3_result)
        if picks and not winners:
            raise InvariantViolation(f'Giveaway {giveaway.pk} has picks but resolved no winners')

        Winner.objects.bulk_create(winners)
        giveaway.status = Status.COMPLETED
        giveaway.pick3_result = pick3_result
        giveaway.pick3_date = now
        giveaway.save(update_fields=['status', 'pick3_result', 'pick3_date'])

        winners = list(Winner.objects.filter(giveaway=giveaway).select_related('member'))
        transaction.on_commit(lambda: notify_winners(giveaway, winners))

    logger.info(
        f'Giveaway {giveaway.pk} completed with Pick 3 result {pick3_result}, '
        f'{len(winners)} winning slots'
    )
    return winners
