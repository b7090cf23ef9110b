"""
Credit ledger.

A member's ``credits`` column is the running balance; every change to it goes
through this module and appends exactly one ``CreditLedgerEntry`` in the same
transaction, so the balance always equals the sum of the member's entries.
"""
import logging

from django.db import transaction
from django.db.models import Sum

from api.models import Member

from .exceptions import InsufficientFunds, NothingToAdjust
from .models import SYSTEM_ACTOR, CreditLedgerEntry


logger = logging.getLogger('credits.ledger')


def _locked(member):
    return Member.objects.select_for_update().get(pk=member.pk)


def _record(locked, amount, reason, actor, reference):
    balance_before = locked.credits
    balance_after = balance_before + amount
    locked.credits = balance_after
    locked.save(update_fields=['credits'])
    return CreditLedgerEntry.objects.create(
        member=locked,
        amount=amount,
        reason=reason,
        balance_before=balance_before,
        balance_after=balance_after,
        actor=actor,
        reference=reference,
    )


def _positive(amount):
    if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
        raise ValueError(f'Credit amount must be a positive integer, got {amount!r}.')


def credit(member, amount, reason, actor=SYSTEM_ACTOR, reference=None):
    """Add credits to a member. Returns the new balance."""
    _positive(amount)
    with transaction.atomic():
        locked = _locked(member)
        entry = _record(locked, amount, reason, actor, reference)
    member.credits = entry.balance_after
    logger.info(f'Credited {locked} with {amount} ({reason}), balance {entry.balance_after}')
    return entry.balance_after


def debit(member, amount, reason, actor=SYSTEM_ACTOR, reference=None):
    """
    Remove credits from a member. Returns the new balance.

    Raises InsufficientFunds, leaving the balance untouched, when the member
    holds fewer than ``amount`` credits.
    """
    _positive(amount)
    with transaction.atomic():
        locked = _locked(member)
        if amount > locked.credits:
            raise InsufficientFunds(amount, locked.credits)
        entry = _record(locked, -amount, reason, actor, reference)
    member.credits = entry.balance_after
    return entry.balance_after


def adjust(member, amount, reason, actor):
    """
    Operator override. Applies a signed delta, flooring the balance at zero.

    The entry stores the delta actually applied so the ledger keeps summing
    to the balance.
    """
    if isinstance(amount, bool) or not isinstance(amount, int) or amount == 0:
        raise ValueError('Amount is required.')
    with transaction.atomic():
        locked = _locked(member)
        applied = max(0, locked.credits + amount) - locked.credits
        if applied == 0:
            raise NothingToAdjust(locked.credits)
        if applied != amount:
            logger.warning(
                f'Adjustment of {amount} for {locked} floored at zero, applying {applied}'
            )
        entry = _record(locked, applied, reason, actor, None)
    member.credits = entry.balance_after
    return entry


def ledger_balance(member):
    return CreditLedgerEntry.objects.filter(member=member).aggregate(
        total=Sum('amount')
    )['total'] or 0


def has_reference(member, reference):
    return CreditLedgerEntry.objects.filter(member=member, reference=reference).exists()


def reconcile():
    """
    Members whose running balance diverges from their ledger, as
    ``(member, balance, ledger_sum)`` tuples.
    """
    mismatches = []
    ledger_sums = dict(
        CreditLedgerEntry.objects.order_by().values('member').annotate(total=Sum('amount')).values_list(
            'member', 'total'
        )
    )
    for member in Member.objects.order_by('pk'):
        total = ledger_sums.get(member.pk, 0)
        if total != member.credits:
            mismatches.append((member, member.credits, total))
    return mismatches

