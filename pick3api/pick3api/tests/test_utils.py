import datetime

import yaml
from django.test import SimpleTestCase

from pick3api.utils import parse_clock


class ParseClockTests(SimpleTestCase):
    def test_unquoted_yaml_times(self):
        loaded = yaml.safe_load('draw_time: 19:30\nentry_cutoff_time: 17:00\n')

        self.assertEqual(parse_clock(loaded['draw_time'], '00:00'), datetime.time(19, 30))
        self.assertEqual(parse_clock(loaded['entry_cutoff_time'], '00:00'), datetime.time(17, 0))

    def test_quoted_yaml_times(self):
        loaded = yaml.safe_load('draw_time: "19:30"\nentry_cutoff_time: "1700"\n')

        self.assertEqual(parse_clock(loaded['draw_time'], '00:00'), datetime.time(19, 30))
        self.assertEqual(parse_clock(loaded['entry_cutoff_time'], '00:00'), datetime.time(17, 0))

    def test_default(self):
        self.assertEqual(parse_clock(None, '19:30'), datetime.time(19, 30))
        self.assertEqual(parse_clock(datetime.time(8, 5), '19:30'), datetime.time(8, 5))

    def test_invalid(self):
        for value in ('25:00', 'noon', 24 * 60, True):
            with self.subTest(value=value):
                with self.assertRaises(ValueError):
                    parse_clock(value, '19:30')
