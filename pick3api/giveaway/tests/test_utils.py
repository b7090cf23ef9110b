from types import SimpleNamespace

from django.test import SimpleTestCase

from giveaway.exceptions import InvalidPickNumber
from giveaway.utils import (
    closest_pick,
    distance,
    is_draw_result,
    normalize_pick_number,
    take_closest,
    tie_break_key,
)


class TakeClosestTests(SimpleTestCase):
    def test_take_closest(self):
        self.assertEqual(take_closest([100, 900], 50), [100])
        self.assertEqual(take_closest([100, 900], 950), [900])
        self.assertEqual(take_closest([100, 900], 400), [100])
        self.assertEqual(take_closest([100, 900], 600), [900])
        self.assertEqual(take_closest([40, 60], 50), [60, 40])
        self.assertEqual(take_closest([40, 50, 60], 50), [50])

    def test_tie_break_prefers_below_then_smaller(self):
        self.assertEqual(min([60, 40], key=lambda v: tie_break_key(v, 50)), 40)
        self.assertLess(tie_break_key(49, 50), tie_break_key(50, 50))


class ClosestPickTests(SimpleTestCase):
    def pick(self, pk, number):
        return SimpleNamespace(pk=pk, pick_number=number)

    def test_closest(self):
        picks = [self.pick(1, '900'), self.pick(2, '100')]

        self.assertEqual(closest_pick(picks, 50).pk, 2)

    def test_same_number_goes_to_lowest_pk(self):
        picks = [self.pick(5, '123'), self.pick(3, '123'), self.pick(4, '124')]

        self.assertEqual(closest_pick(picks, 120).pk, 3)

    def test_no_picks(self):
        self.assertIsNone(closest_pick([], 500))


class PickNumberTests(SimpleTestCase):
    def test_normalize(self):
        self.assertEqual(normalize_pick_number(7), '007')
        self.assertEqual(normalize_pick_number('7'), '007')
        self.assertEqual(normalize_pick_number(' 42 '), '042')
        self.assertEqual(normalize_pick_number('999'), '999')

    def test_rejects(self):
        for value in (True, None, 1000, -5, '', '   ', '12a', '0999', 7.0, '-7', '12\n3'):
            with self.subTest(value=value):
                with self.assertRaises(InvalidPickNumber):
                    normalize_pick_number(value)

    def test_draw_result(self):
        self.assertTrue(is_draw_result('000'))
        self.assertTrue(is_draw_result('517'))
        self.assertFalse(is_draw_result('57'))
        self.assertFalse(is_draw_result(517))
        self.assertFalse(is_draw_result('5177'))
        self.assertFalse(is_draw_result('517\n'))
        self.assertFalse(is_draw_result('\uff15\uff11\uff17'))

    def test_distance(self):
        self.assertEqual(distance('100', '050'), 50)
        self.assertEqual(distance('000', '999'), 999)
