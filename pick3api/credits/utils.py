from django.conf import settings
from django.db import IntegrityError, transaction

from giveaway.lifecycle import lock
from giveaway.models import ACCEPTING_PICKS

from . import ledger
from .exceptions import AlreadyClaimed, ClaimUnavailable
from .models import CreditClaim


CLAIM_REASON = 'free giveaway credits'


def claim_free_credits(member, giveaway_id):
    """
    Grant the configured free credits for one giveaway, once per member and
    only while the giveaway takes picks. Returns the new balance.
    """
    amount = settings.GIVEAWAY['CLAIM_CREDITS']
    try:
        with transaction.atomic():
            giveaway = lock(giveaway_id)
            if giveaway.status not in ACCEPTING_PICKS:
                raise ClaimUnavailable()
            if CreditClaim.objects.filter(member=member, giveaway=giveaway).exists():
                raise AlreadyClaimed()
            CreditClaim.objects.create(member=member, giveaway=giveaway, credits_claimed=amount)
            return ledger.credit(
                member, amount, CLAIM_REASON, reference=f'giveaway:{giveaway.pk}:claim',
            )
    except IntegrityError:
        raise AlreadyClaimed()
