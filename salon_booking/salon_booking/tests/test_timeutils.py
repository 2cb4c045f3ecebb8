"""
Tests for scheduling/timeutils.py

Tests "HH:MM" parsing, DateKey, weekday ids, week ranges and local time
normalisation.
"""

import unittest
from datetime import date, datetime, time, timedelta
import pytz

from salon_booking.salon_booking.scheduling.timeutils import (
	DateKey,
	date_range,
	format_minutes,
	get_timezone,
	parse_hhmm,
	parse_instant,
	time_slot_labels,
	to_local,
	week_days,
	weekday_id,
)


class TestParseHHMM(unittest.TestCase):
	"""Tests for time parsing."""

	def test_parse_string(self):
		self.assertEqual(parse_hhmm("09:30"), 570)
		self.assertEqual(parse_hhmm("00:00"), 0)
		self.assertEqual(parse_hhmm("23:59:00"), 1439)

	def test_parse_time_and_timedelta(self):
		"""Test values as returned by the database (time / timedelta)."""
		self.assertEqual(parse_hhmm(time(8, 15)), 495)
		self.assertEqual(parse_hhmm(timedelta(hours=13)), 780)
		self.assertEqual(parse_hhmm(600), 600)

	def test_end_of_day_only_when_allowed(self):
		with self.assertRaises(ValueError):
			parse_hhmm("24:00")
		self.assertEqual(parse_hhmm("24:00", allow_end_of_day=True), 1440)

	def test_invalid_values(self):
		for value in ("25:00", "12:60", "noon", "", "9", None, True):
			with self.subTest(value=value):
				with self.assertRaises(ValueError):
					parse_hhmm(value)

	def test_format_minutes(self):
		self.assertEqual(format_minutes(545), "09:05")
		self.assertEqual(format_minutes(0), "00:00")
		self.assertEqual(format_minutes(1425), "23:45")


class TestDateKey(unittest.TestCase):
	"""Tests for the per-day key."""

	def test_str_is_iso(self):
		self.assertEqual(str(DateKey(2026, 1, 5)), "2026-01-05")

	def test_parse_and_to_date(self):
		key = DateKey.parse("2026-01-20")
		self.assertEqual(key, DateKey(2026, 1, 20))
		self.assertEqual(key.to_date(), date(2026, 1, 20))

	def test_from_datetime_ignores_time(self):
		self.assertEqual(
			DateKey.from_date(datetime(2026, 1, 20, 23, 59)),
			DateKey.from_date(date(2026, 1, 20))
		)

	def test_usable_as_dict_key(self):
		data = {DateKey(2026, 1, 20): ["09:00"]}
		self.assertEqual(data[DateKey.parse("2026-01-20")], ["09:00"])


class TestWeekdays(unittest.TestCase):
	"""Tests for weekday ids and week ranges."""

	def test_weekday_id(self):
		self.assertEqual(weekday_id(date(2026, 1, 18)), "sunday")
		self.assertEqual(weekday_id(date(2026, 1, 19)), "monday")
		self.assertEqual(weekday_id(datetime(2026, 1, 24, 10, 0)), "saturday")

	def test_week_days_starts_on_sunday(self):
		days = week_days(date(2026, 1, 21))
		self.assertEqual(len(days), 7)
		self.assertEqual(days[0], date(2026, 1, 18))
		self.assertEqual(days[-1], date(2026, 1, 24))

	def test_week_days_anchor_on_sunday(self):
		days = week_days(date(2026, 1, 18))
		self.assertEqual(days[0], date(2026, 1, 18))

	def test_week_days_starts_on_monday(self):
		days = week_days(date(2026, 1, 18), week_starts_on=1)
		self.assertEqual(days[0], date(2026, 1, 12))
		self.assertEqual(days[-1], date(2026, 1, 18))

	def test_date_range_inclusive(self):
		days = list(date_range(date(2026, 1, 30), date(2026, 2, 2)))
		self.assertEqual(len(days), 4)
		self.assertEqual(days[-1], date(2026, 2, 2))

	def test_time_slot_labels(self):
		labels = time_slot_labels()
		self.assertEqual(len(labels), 96)
		self.assertEqual(labels[0], "00:00")
		self.assertEqual(labels[1], "00:15")
		self.assertEqual(labels[-1], "23:45")


class TestLocalTime(unittest.TestCase):
	"""Tests for timezone normalisation."""

	def test_naive_is_kept(self):
		value = datetime(2026, 1, 20, 9, 0)
		self.assertEqual(to_local(value, pytz.timezone("Asia/Jerusalem")), value)

	def test_aware_is_converted(self):
		tz = pytz.timezone("Asia/Jerusalem")
		value = pytz.UTC.localize(datetime(2026, 1, 20, 7, 0))
		# Invierno: UTC+2
		self.assertEqual(to_local(value, tz), datetime(2026, 1, 20, 9, 0))

	def test_parse_instant_iso_z(self):
		tz = pytz.timezone("Asia/Jerusalem")
		self.assertEqual(
			parse_instant("2026-01-20T09:00:00.000Z", tz),
			datetime(2026, 1, 20, 11, 0)
		)

	def test_parse_instant_plain(self):
		self.assertEqual(
			parse_instant("2026-01-20 09:15:00"),
			datetime(2026, 1, 20, 9, 15)
		)
		self.assertEqual(parse_instant(date(2026, 1, 20)), datetime(2026, 1, 20, 0, 0))

	def test_parse_instant_invalid(self):
		with self.assertRaises(ValueError):
			parse_instant("mañana")

	def test_get_timezone(self):
		self.assertIsNone(get_timezone(None))
		self.assertEqual(get_timezone("America/Bogota").zone, "America/Bogota")
		with self.assertRaises(ValueError):
			get_timezone("Nowhere/Atlantis")
