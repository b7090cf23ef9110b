import logging
from dataclasses import dataclass

from django.db import transaction
from django.db.models import Sum
from django.utils import timezone

from api.models import Member
from credits import ledger
from credits.models import SYSTEM_ACTOR

from .lifecycle import ensure_transition, lock
from .models import Pick, Status

logger = logging.getLogger('giveaway.cancellation')

REFUND_REASON = 'giveaway cancelled — credits refunded'


@dataclass(frozen=True)
class RefundSummary:
    total_credits_refunded: int
    users_refunded: int
    total_picks: int


def refund_reference(giveaway):
    return f'giveaway:{giveaway.pk}:refund'


def paid_costs_by_member(giveaway):
    """Credits each member actually paid for non-free picks, by member id."""
    rows = (
        Pick.objects.filter(giveaway=giveaway, is_free_entry=False)
        .order_by('member')
        .values('member')
        .annotate(paid=Sum('credit_cost'))
        .values_list('member', 'paid')
    )
    return {member_id: paid for member_id, paid in rows if paid}


def cancel(giveaway_id, actor=SYSTEM_ACTOR, now=None):
    """
    Cancel a giveaway that has not been drawn yet and give back every credit
    spent on it. Free entries are simply voided.

    Members already holding a refund entry for this giveaway are skipped, so
    re-running after an interrupted cancellation never refunds twice.
    """
    now = now or timezone.now()
    with transaction.atomic():
        giveaway = lock(giveaway_id)
        ensure_transition(giveaway, Status.CANCELLED)

        reference = refund_reference(giveaway)
        total = 0
        refunded = 0
        costs = paid_costs_by_member(giveaway)
        for member in Member.objects.filter(pk__in=list(costs)).order_by('pk'):
            amount = costs[member.pk]
            if ledger.has_reference(member, reference):
                logger.warning(f'{member} already refunded for giveaway {giveaway.pk}, skipping')
                continue
            ledger.credit(member, amount, REFUND_REASON, actor=actor, reference=reference)
            total += amount
            refunded += 1

        giveaway.status = Status.CANCELLED
        giveaway.cancelled_at = now
        giveaway.save(update_fields=['status', 'cancelled_at'])

    logger.info(
        f'Giveaway {giveaway.pk} cancelled by {actor}: refunded {total} credits to {refunded} members'
    )
    return RefundSummary(
        total_credits_refunded=total,
        users_refunded=refunded,
        total_picks=giveaway.total_picks,
    )
