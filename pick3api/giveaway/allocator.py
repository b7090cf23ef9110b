import logging
from dataclasses import dataclass, field

from django.conf import settings
from django.db import IntegrityError, transaction
from django.utils import timezone

from credits import ledger
from credits.exceptions import InsufficientFunds

from .exceptions import (
    DuplicatePick,
    EntryCutoffPassed,
    GiveawayNotAcceptingPicks,
    InsufficientCredits,
    InvalidSlot,
    NoFreeEntriesRemaining,
)
from .lifecycle import lock, mark_filling
from .models import ACCEPTING_PICKS, BOX_TOPPER_SLOT, Pick, Status
from .suggestions import suggest
from .utils import normalize_pick_number

logger = logging.getLogger('giveaway.allocator')

PICK_REASON = 'giveaway pick'


def pick_cost(giveaway, slot):
    cost = giveaway.credit_cost_per_pick or 1
    if slot == BOX_TOPPER_SLOT:
        return cost * settings.GIVEAWAY['BOX_TOPPER_MULTIPLIER']
    return cost


def _ensure_accepting(giveaway, now):
    if giveaway.status not in ACCEPTING_PICKS:
        raise GiveawayNotAcceptingPicks()
    if giveaway.entry_cutoff and now > giveaway.entry_cutoff:
        raise EntryCutoffPassed()


def _validate_slot(giveaway, slot):
    min_slot = BOX_TOPPER_SLOT if giveaway.has_box_topper else 1
    if isinstance(slot, bool) or not isinstance(slot, int) or not min_slot <= slot <= giveaway.slot_count:
        raise InvalidSlot(min_slot, giveaway.slot_count)


def free_entries_used(giveaway, member):
    return Pick.objects.filter(giveaway=giveaway, member=member, is_free_entry=True).count()


def refresh_total_picks(giveaway, now):
    """
    Recount the giveaway's picks from the table and move it to FILLING when
    the count first reaches the participation threshold.
    """
    giveaway.total_picks = Pick.objects.filter(giveaway=giveaway).count()
    if giveaway.status == Status.OPEN and giveaway.total_picks >= giveaway.min_participation:
        mark_filling(giveaway, now)
    else:
        giveaway.save(update_fields=['total_picks'])


def _create_pick(giveaway, member, slot, pick_number, use_free_entry):
    if Pick.objects.filter(
        giveaway=giveaway, member=member, slot=slot, pick_number=pick_number,
    ).exists():
        raise DuplicatePick(slot, pick_number)

    box_topper = slot == BOX_TOPPER_SLOT
    cost = pick_cost(giveaway, slot)

    # Box topper picks are always paid, whatever was asked for
    if use_free_entry and not box_topper:
        if free_entries_used(giveaway, member) >= giveaway.free_entries_per_user:
            raise NoFreeEntriesRemaining(giveaway.free_entries_per_user)
        return Pick.objects.create(
            giveaway=giveaway,
            member=member,
            slot=slot,
            pick_number=pick_number,
            is_free_entry=True,
            credit_cost=0,
        )

    try:
        ledger.debit(member, cost, PICK_REASON, reference=f'giveaway:{giveaway.pk}:pick')
    except InsufficientFunds as e:
        raise InsufficientCredits(e.required, e.available, box_topper=box_topper)
    return Pick.objects.create(
        giveaway=giveaway,
        member=member,
        slot=slot,
        pick_number=pick_number,
        is_free_entry=False,
        credit_cost=cost,
    )


def place_pick(giveaway_id, member, slot, pick_number, use_free_entry=False, now=None):
    """
    Reserve ``pick_number`` in ``slot`` for ``member``.

    Charging (free entry or ledger debit), creating the pick and refreshing
    the giveaway's count and status happen in one transaction; any
    GiveawayError leaves everything untouched.
    """
    now = now or timezone.now()
    try:
        with transaction.atomic():
            giveaway = lock(giveaway_id)
            _ensure_accepting(giveaway, now)
            _validate_slot(giveaway, slot)
            pick_number = normalize_pick_number(pick_number)
            pick = _create_pick(giveaway, member, slot, pick_number, use_free_entry)
            refresh_total_picks(giveaway, now)
    except IntegrityError:
        # Lost a race against the same member placing the same pick
        raise DuplicatePick(slot, pick_number)

    logger.info(
        f'{member} picked {pick.pick_number} in slot {pick.slot} of giveaway {giveaway.pk} '
        f'({"free" if pick.is_free_entry else f"{pick.credit_cost} credits"})'
    )
    return pick


@dataclass
class BulkPickResult:
    picks: list = field(default_factory=list)
    credits_used: int = 0
    free_entries_used: int = 0

    @property
    def picks_created(self):
        return len(self.picks)


def auto_pick(giveaway_id, member, count=1, target_slot=None, use_free_entries=False, now=None):
    """
    Place up to ``count`` picks at suggested numbers. Stops at the first pick
    the member can no longer pay for.
    """
    now = now or timezone.now()
    count = min(max(1, count or 1), settings.GIVEAWAY['BULK_PICK_MAX'])
    result = BulkPickResult()

    with transaction.atomic():
        giveaway = lock(giveaway_id)
        _ensure_accepting(giveaway, now)
        if target_slot is not None:
            _validate_slot(giveaway, target_slot)

        member.refresh_from_db(fields=['credits'])
        free_left = giveaway.free_entries_per_user - free_entries_used(giveaway, member)
        for _ in range(count):
            suggestion = suggest(giveaway, member, slot=target_slot)
            if suggestion.pick_number is None:
                break
            slot = suggestion.slot
            use_free = use_free_entries and free_left > 0 and slot != BOX_TOPPER_SLOT
            cost = pick_cost(giveaway, slot)
            if not use_free and member.credits < cost:
                break
            pick = _create_pick(giveaway, member, slot, suggestion.pick_number, use_free)
            result.picks.append(pick)
            if pick.is_free_entry:
                free_left -= 1
                result.free_entries_used += 1
            else:
                result.credits_used += pick.credit_cost

        if result.picks:
            refresh_total_picks(giveaway, now)

    logger.info(
        f'{member} auto-picked {result.picks_created} in giveaway {giveaway_id} '
        f'({result.credits_used} credits, {result.free_entries_used} free)'
    )
    return result
