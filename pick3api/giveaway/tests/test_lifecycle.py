import datetime

from django.test import SimpleTestCase, TestCase, override_settings

from giveaway import lifecycle
from giveaway.exceptions import (
    AlreadyCancelled,
    AlreadyCompleted,
    CannotCancelCompleted,
    InvalidTransition,
)
from giveaway.models import Status
from giveaway.schedule import draw_schedule, next_business_day

from .helpers import make_giveaway

UTC = datetime.timezone.utc


class ScheduleTests(SimpleTestCase):
    def test_next_business_day(self):
        # 2025-01-15 is a Wednesday
        self.assertEqual(next_business_day(datetime.date(2025, 1, 15)), datetime.date(2025, 1, 16))
        self.assertEqual(next_business_day(datetime.date(2025, 1, 17)), datetime.date(2025, 1, 20))
        self.assertEqual(next_business_day(datetime.date(2025, 1, 18)), datetime.date(2025, 1, 20))
        self.assertEqual(next_business_day(datetime.date(2025, 1, 19)), datetime.date(2025, 1, 20))

    def test_midweek_draw_is_tomorrow_evening(self):
        draw, cutoff = draw_schedule(datetime.datetime(2025, 1, 15, 12, 0, tzinfo=UTC))

        self.assertEqual(draw, datetime.datetime(2025, 1, 17, 0, 30, tzinfo=UTC))
        self.assertEqual(cutoff, datetime.datetime(2025, 1, 16, 22, 0, tzinfo=UTC))
        self.assertLess(cutoff, draw)

    def test_friday_rolls_to_monday(self):
        draw, cutoff = draw_schedule(datetime.datetime(2025, 1, 17, 15, 0, tzinfo=UTC))

        self.assertEqual(draw, datetime.datetime(2025, 1, 21, 0, 30, tzinfo=UTC))
        self.assertEqual(cutoff, datetime.datetime(2025, 1, 20, 22, 0, tzinfo=UTC))

    def test_weekend_rolls_to_monday(self):
        draw, _ = draw_schedule(datetime.datetime(2025, 1, 18, 15, 0, tzinfo=UTC))

        self.assertEqual(draw.astimezone(UTC).date(), datetime.date(2025, 1, 21))

    def test_day_is_taken_in_the_reference_zone(self):
        # Friday 03:00 UTC is still Thursday evening in New York
        draw, _ = draw_schedule(datetime.datetime(2025, 1, 17, 3, 0, tzinfo=UTC))

        self.assertEqual(draw, datetime.datetime(2025, 1, 18, 0, 30, tzinfo=UTC))

    def test_daylight_saving_time(self):
        draw, cutoff = draw_schedule(datetime.datetime(2025, 7, 9, 12, 0, tzinfo=UTC))

        self.assertEqual(draw, datetime.datetime(2025, 7, 10, 23, 30, tzinfo=UTC))
        self.assertEqual(cutoff, datetime.datetime(2025, 7, 10, 21, 0, tzinfo=UTC))

    @override_settings(GIVEAWAY={
        'TIMEZONE': 'UTC',
        'DRAW_TIME': datetime.time(12, 0),
        'ENTRY_CUTOFF_TIME': datetime.time(10, 0),
    })
    def test_schedule_follows_settings(self):
        draw, cutoff = draw_schedule(datetime.datetime(2025, 1, 15, 12, 0, tzinfo=UTC))

        self.assertEqual(draw, datetime.datetime(2025, 1, 16, 12, 0, tzinfo=UTC))
        self.assertEqual(cutoff, datetime.datetime(2025, 1, 16, 10, 0, tzinfo=UTC))


class TransitionTests(SimpleTestCase):
    def test_table(self):
        self.assertTrue(lifecycle.can_transition(Status.OPEN, Status.FILLING))
        self.assertTrue(lifecycle.can_transition(Status.FILLING, Status.CLOSED))
        self.assertTrue(lifecycle.can_transition(Status.CLOSED, Status.COMPLETED))
        for status in (Status.OPEN, Status.FILLING, Status.CLOSED):
            self.assertTrue(lifecycle.can_transition(status, Status.CANCELLED))

        self.assertFalse(lifecycle.can_transition(Status.OPEN, Status.COMPLETED))
        self.assertFalse(lifecycle.can_transition(Status.FILLING, Status.OPEN))
        for target in Status:
            self.assertFalse(lifecycle.can_transition(Status.COMPLETED, target))
            self.assertFalse(lifecycle.can_transition(Status.CANCELLED, target))


class CloseTests(TestCase):
    def setUp(self):
        self.now = datetime.datetime(2025, 1, 16, 23, 0, tzinfo=UTC)

    def test_close_filling_giveaway(self):
        giveaway = make_giveaway(status=Status.FILLING)

        closed = lifecycle.close(giveaway.pk, now=self.now)

        self.assertEqual(closed.status, Status.CLOSED)
        giveaway.refresh_from_db()
        self.assertEqual(giveaway.status, Status.CLOSED)
        self.assertEqual(giveaway.closed_at, self.now)

    def test_only_filling_giveaways_close(self):
        for status in (Status.OPEN, Status.CLOSED, Status.COMPLETED, Status.CANCELLED):
            giveaway = make_giveaway(status=status)
            with self.subTest(status=status):
                with self.assertRaisesMessage(InvalidTransition, 'Can only close FILLING giveaways.'):
                    lifecycle.close(giveaway.pk, now=self.now)

    def test_close_expired(self):
        past = make_giveaway(status=Status.FILLING, entry_cutoff=self.now - datetime.timedelta(hours=1))
        due = make_giveaway(status=Status.FILLING, entry_cutoff=self.now)
        future = make_giveaway(status=Status.FILLING, entry_cutoff=self.now + datetime.timedelta(hours=1))
        still_open = make_giveaway(status=Status.OPEN)

        closed = lifecycle.close_expired(now=self.now)

        self.assertEqual(closed, [past.pk, due.pk])
        for giveaway, expected in (
            (past, Status.CLOSED),
            (due, Status.CLOSED),
            (future, Status.FILLING),
            (still_open, Status.OPEN),
        ):
            giveaway.refresh_from_db()
            self.assertEqual(giveaway.status, expected)

    def test_close_expired_is_repeatable(self):
        make_giveaway(status=Status.FILLING, entry_cutoff=self.now - datetime.timedelta(hours=1))

        self.assertEqual(len(lifecycle.close_expired(now=self.now)), 1)
        self.assertEqual(lifecycle.close_expired(now=self.now), [])


class EnsureTransitionTests(TestCase):
    def test_terminal_errors(self):
        completed = make_giveaway(status=Status.COMPLETED)
        cancelled = make_giveaway(status=Status.CANCELLED)

        with self.assertRaises(AlreadyCompleted):
            lifecycle.ensure_transition(completed, Status.COMPLETED)
        with self.assertRaises(CannotCancelCompleted):
            lifecycle.ensure_transition(completed, Status.CANCELLED)
        with self.assertRaises(AlreadyCancelled):
            lifecycle.ensure_transition(cancelled, Status.CANCELLED)
        with self.assertRaises(AlreadyCancelled):
            lifecycle.ensure_transition(cancelled, Status.COMPLETED)

    def test_mark_filling_only_from_open(self):
        giveaway = make_giveaway(status=Status.CLOSED)

        with self.assertRaises(InvalidTransition):
            lifecycle.mark_filling(giveaway, datetime.datetime(2025, 1, 15, tzinfo=UTC))


class RecalculateScheduleTests(TestCase):
    def test_recalculate_moves_the_draw_later(self):
        giveaway = make_giveaway()
        wednesday = datetime.datetime(2025, 1, 15, 12, 0, tzinfo=UTC)
        lifecycle.mark_filling(giveaway, wednesday)

        with self.assertLogs('giveaway.lifecycle', level='WARNING'):
            updated = lifecycle.recalculate_schedule(giveaway.pk, now=wednesday + datetime.timedelta(days=1))

        self.assertEqual(updated.status, Status.FILLING)
        self.assertEqual(updated.draw_date, datetime.datetime(2025, 1, 18, 0, 30, tzinfo=UTC))
        self.assertEqual(updated.entry_cutoff, datetime.datetime(2025, 1, 17, 22, 0, tzinfo=UTC))

    def test_recalculate_sets_schedule_on_open_giveaway(self):
        giveaway = make_giveaway()

        updated = lifecycle.recalculate_schedule(
            giveaway.pk, now=datetime.datetime(2025, 1, 15, 12, 0, tzinfo=UTC),
        )

        self.assertEqual(updated.status, Status.OPEN)
        self.assertEqual(updated.draw_date, datetime.datetime(2025, 1, 17, 0, 30, tzinfo=UTC))

    def test_recalculate_rejected_after_close(self):
        for status in (Status.CLOSED, Status.COMPLETED, Status.CANCELLED):
            giveaway = make_giveaway(status=status)
            with self.subTest(status=status):
                with self.assertRaises(InvalidTransition):
                    lifecycle.recalculate_schedule(giveaway.pk)
