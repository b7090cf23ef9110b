import logging
from collections import defaultdict

from django.conf import settings
from django.core.mail import send_mail

logger = logging.getLogger('giveaway.notifications')


def winners_by_member(winners):
    grouped = defaultdict(list)
    for winner in winners:
        grouped[winner.member].append(winner.slot)
    return grouped


def notify_winners(giveaway, winners):
    """
    One email per winning member covering every slot they won. Failures are
    logged and skipped, never raised. Returns how many were sent.
    """
    sent = 0
    for member, slots in winners_by_member(winners).items():
        if not member.email:
            logger.info(f'Winner {member} has no email address, not notified')
            continue
        slots = sorted(slots)
        label = 'slot' if len(slots) == 1 else 'slots'
        try:
            send_mail(
                f'You won {giveaway.title}!',
                f'Congratulations {member.username}, you won {label} '
                f'{", ".join(str(s) for s in slots)} in {giveaway.title} '
                f'(Pick 3 result {giveaway.pick3_result}).',
                settings.DEFAULT_FROM_EMAIL,
                [member.email],
            )
        except Exception:
            logger.error(
                f'Failed to notify {member} of giveaway {giveaway.pk} win', exc_info=True,
            )
            continue
        sent += 1
    return sent
