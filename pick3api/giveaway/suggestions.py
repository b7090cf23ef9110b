"""
Advisory slot/number suggestions. Nothing here is enforced, the allocator
validates whatever the member finally submits.
"""
from dataclasses import dataclass
from typing import Optional

from django.db.models import Count

from .models import Pick
from .utils import PICK_MAX, PICK_MIN, format_pick_number

DOMAIN_SIZE = PICK_MAX - PICK_MIN + 1
MIDDLE = 500


@dataclass(frozen=True)
class Suggestion:
    slot: int
    pick_number: Optional[str]
    slot_pick_count: int
    rationale: str


@dataclass(frozen=True)
class Gap:
    start: int
    end: int

    @property
    def size(self):
        return self.end - self.start + 1


def slot_pick_counts(giveaway):
    """Picks per regular slot, zero for empty ones. The box topper is left out."""
    counts = dict.fromkeys(range(1, giveaway.slot_count + 1), 0)
    rows = (
        Pick.objects.filter(giveaway=giveaway, slot__gte=1)
        .order_by()
        .values('slot')
        .annotate(n=Count('id'))
        .values_list('slot', 'n')
    )
    for slot, n in rows:
        counts[slot] = n
    return counts


def least_contended_slot(counts):
    # Lowest count, lowest slot number on ties
    return min(counts, key=lambda slot: (counts[slot], slot))


def _gap_candidates(taken):
    """
    ``(size, candidate, limit)`` for the leading, interior and trailing gaps
    of the sorted ``taken`` values, in ascending order. ``limit`` is the first
    value past the gap.
    """
    first, last = taken[0], taken[-1]
    if first > PICK_MIN:
        yield first, first // 2, first
    for low, high in zip(taken, taken[1:]):
        size = high - low - 1
        if size > 0:
            yield size, low + size // 2 + 1, high
    if last < PICK_MAX:
        size = PICK_MAX - last
        yield size, last + size // 2 + 1, PICK_MAX + 1


def _first_free(excluded):
    for value in range(PICK_MIN, PICK_MAX + 1):
        if value not in excluded:
            return value
    return None


def suggest_number(taken, held=frozenset()):
    """
    Number to suggest given the sorted distinct ``taken`` values of a slot
    and the values the requesting member already ``held`` there.

    Returns None only when the member already holds every number.
    """
    if not taken:
        return MIDDLE
    if len(taken) >= DOMAIN_SIZE:
        return _first_free(held)

    best = None
    max_gap = 0
    for size, candidate, limit in _gap_candidates(taken):
        if size <= max_gap:
            continue
        max_gap = size
        while candidate in held and candidate < limit:
            candidate += 1
        if candidate < limit and candidate not in held:
            best = candidate

    if best is None:
        best = _first_free(set(taken) | set(held))
    return best


def suggest(giveaway, member=None, slot=None):
    """
    Suggest where ``member`` should pick next: the slot with the fewest picks
    (unless ``slot`` is forced) and the middle of its widest free range.
    """
    if slot is None:
        slot = least_contended_slot(slot_pick_counts(giveaway))

    numbers = list(
        Pick.objects.filter(giveaway=giveaway, slot=slot).values_list('pick_number', flat=True)
    )
    taken = sorted({int(n) for n in numbers})
    held = set()
    if member is not None:
        held = {
            int(n) for n in Pick.objects.filter(
                giveaway=giveaway, slot=slot, member=member,
            ).values_list('pick_number', flat=True)
        }

    number = suggest_number(taken, held)
    pick_number = format_pick_number(number) if number is not None else None
    if pick_number is None:
        rationale = f'You already hold every number in slot {slot}.'
    else:
        rationale = (
            f'Slot {slot} has the fewest picks ({len(numbers)}). '
            f'Number {pick_number} has the best gap from existing picks.'
        )
    return Suggestion(slot=slot, pick_number=pick_number, slot_pick_count=len(numbers), rationale=rationale)


def free_ranges(taken):
    """Maximal runs of untaken values in ``taken`` (any iterable of ints)."""
    taken = sorted(set(taken))
    gaps = []
    start = PICK_MIN
    for value in taken:
        if value > start:
            gaps.append(Gap(start, value - 1))
        start = value + 1
    if start <= PICK_MAX:
        gaps.append(Gap(start, PICK_MAX))
    return gaps


def slot_overview(giveaway, slot, limit=5):
    """
    Public view of one slot: taken numbers (no member info) and the largest
    free ranges, biggest first.
    """
    numbers = sorted(
        Pick.objects.filter(giveaway=giveaway, slot=slot).values_list('pick_number', flat=True)
    )
    distinct = {int(n) for n in numbers}
    gaps = sorted(free_ranges(distinct), key=lambda g: (-g.size, g.start))
    return {
        'slot': slot,
        'taken_numbers': numbers,
        'total_taken': len(numbers),
        'total_available': DOMAIN_SIZE - len(distinct),
        'largest_gaps': [
            {'start': g.start, 'end': g.end, 'size': g.size} for g in gaps[:limit]
        ],
    }
