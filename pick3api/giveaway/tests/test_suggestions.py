from django.test import SimpleTestCase, TestCase

from giveaway.suggestions import Gap, free_ranges, slot_overview, suggest, suggest_number

from .helpers import make_giveaway, make_member, make_pick


class SuggestNumberTests(SimpleTestCase):
    def test_empty_slot_suggests_the_middle(self):
        self.assertEqual(suggest_number([]), 500)

    def test_widest_gap_wins(self):
        self.assertEqual(suggest_number([100, 900]), 500)
        self.assertEqual(suggest_number([0]), 500)
        self.assertEqual(suggest_number([999]), 499)

    def test_leading_gap_beats_equal_trailing_gap(self):
        # 500 free below, 499 free above
        self.assertEqual(suggest_number([500]), 250)

    def test_only_free_number(self):
        taken = [n for n in range(1000) if n != 7]

        self.assertEqual(suggest_number(taken), 7)

    def test_saturated_slot_suggests_a_number_the_member_lacks(self):
        taken = list(range(1000))

        self.assertEqual(suggest_number(taken, held={0, 1}), 2)
        self.assertEqual(suggest_number(taken), 0)
        self.assertIsNone(suggest_number(taken, held=set(taken)))


class FreeRangeTests(SimpleTestCase):
    def test_free_ranges(self):
        self.assertEqual(free_ranges([]), [Gap(0, 999)])
        self.assertEqual(free_ranges([0, 999]), [Gap(1, 998)])
        self.assertEqual(free_ranges([5, 5, 6, 10]), [Gap(0, 4), Gap(7, 9), Gap(11, 999)])
        self.assertEqual(free_ranges(range(1000)), [])

    def test_gap_size_is_inclusive(self):
        self.assertEqual(Gap(7, 9).size, 3)
        self.assertEqual(Gap(4, 4).size, 1)


class SuggestTests(TestCase):
    def setUp(self):
        self.giveaway = make_giveaway(slot_count=3, has_box_topper=True)
        self.member = make_member()
        self.other = make_member()

    def test_least_contended_slot_is_suggested(self):
        make_pick(self.giveaway, self.other, 1, '100')
        make_pick(self.giveaway, self.other, 1, '200')
        make_pick(self.giveaway, self.other, 2, '300')
        make_pick(self.giveaway, self.other, 3, '400')
        make_pick(self.giveaway, self.other, 0, '500')

        suggestion = suggest(self.giveaway, self.member)

        self.assertEqual(suggestion.slot, 2)
        self.assertEqual(suggestion.slot_pick_count, 1)
        self.assertEqual(suggestion.pick_number, '650')
        self.assertIn('Slot 2', suggestion.rationale)

    def test_empty_giveaway(self):
        suggestion = suggest(self.giveaway)

        self.assertEqual((suggestion.slot, suggestion.pick_number, suggestion.slot_pick_count), (1, '500', 0))

    def test_forced_slot(self):
        make_pick(self.giveaway, self.other, 0, '500')

        suggestion = suggest(self.giveaway, self.member, slot=0)

        self.assertEqual(suggestion.slot, 0)
        self.assertEqual(suggestion.pick_number, '250')

    def test_never_suggests_a_number_the_member_holds(self):
        make_pick(self.giveaway, self.member, 1, '500')

        suggestion = suggest(self.giveaway, self.member, slot=1)

        self.assertNotEqual(suggestion.pick_number, '500')


class SlotOverviewTests(TestCase):
    def test_overview(self):
        giveaway = make_giveaway(slot_count=2)
        make_pick(giveaway, make_member(), 1, '100')
        make_pick(giveaway, make_member(), 1, '100')
        make_pick(giveaway, make_member(), 1, '900')
        make_pick(giveaway, make_member(), 2, '555')

        overview = slot_overview(giveaway, 1)

        self.assertEqual(overview['slot'], 1)
        self.assertEqual(overview['taken_numbers'], ['100', '100', '900'])
        self.assertEqual(overview['total_taken'], 3)
        self.assertEqual(overview['total_available'], 998)
        self.assertEqual(overview['largest_gaps'], [
            {'start': 101, 'end': 899, 'size': 799},
            {'start': 0, 'end': 99, 'size': 100},
            {'start': 901, 'end': 999, 'size': 99},
        ])

    def test_gap_limit(self):
        giveaway = make_giveaway()
        member = make_member()
        for number in ('100', '200', '300', '400', '500', '600', '700'):
            make_pick(giveaway, member, 1, number)

        self.assertEqual(len(slot_overview(giveaway, 1, limit=3)['largest_gaps']), 3)
        self.assertEqual(len(slot_overview(giveaway, 1)['largest_gaps']), 5)
