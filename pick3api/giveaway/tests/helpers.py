import itertools

from api.models import Member, Role
from credits import ledger
from giveaway.models import Giveaway, Pick

_sequence = itertools.count(1)


def make_member(credits=0, role=Role.USER, email=None):
    n = next(_sequence)
    member = Member.objects.create(
        username=f'member{n}', email=email, role=role, api_token=f'token-{n}',
    )
    if credits:
        ledger.credit(member, credits, 'test top-up')
    return member


def make_giveaway(**kwargs):
    fields = {
        'title': 'Booster Box',
        'slot_count': 1,
        'min_participation': 100,
        'free_entries_per_user': 1,
        'credit_cost_per_pick': 1,
    }
    fields.update(kwargs)
    return Giveaway.objects.create(**fields)


def make_pick(giveaway, member, slot, pick_number, free=False, cost=None):
    if cost is None:
        cost = 0 if free else giveaway.credit_cost_per_pick
    pick = Pick.objects.create(
        giveaway=giveaway,
        member=member,
        slot=slot,
        pick_number=pick_number,
        is_free_entry=free,
        credit_cost=cost,
    )
    giveaway.total_picks = Pick.objects.filter(giveaway=giveaway).count()
    giveaway.save(update_fields=['total_picks'])
    return pick
