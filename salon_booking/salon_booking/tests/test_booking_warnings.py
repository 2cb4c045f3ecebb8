"""
Tests for scheduling/booking_warnings.py

Tests the warnings shown when creating or moving an appointment in the
admin calendar.
"""

import unittest
from datetime import date, datetime

from salon_booking.salon_booking.scheduling.booking_warnings import (
	CALENDAR_CLOSED,
	COLLISION,
	COLLISION_MESSAGE,
	ENDS_OUTSIDE_HOURS,
	ENDS_OUTSIDE_HOURS_MESSAGE,
	blocks_save,
	calendar_closed_message,
	check_appointment,
	evaluate_warnings,
)
from salon_booking.salon_booking.scheduling.holidays import Holiday, build_holiday_lookup
from salon_booking.salon_booking.scheduling.models import Appointment
from salon_booking.salon_booking.scheduling.rules import BusinessHoursRule


def _at(hour, minute=0, day=20):
	return datetime(2026, 1, day, hour, minute)


class TestBookingWarnings(unittest.TestCase):
	"""Tests for evaluate_warnings."""

	def setUp(self):
		self.opening = [BusinessHoursRule("09:00", "17:00")]
		self.closing = [BusinessHoursRule("13:00", "14:00", days=["monday"], name="Lunch")]
		self.existing = Appointment("APT-1", "dana", _at(10), _at(11))

	def _evaluate(self, start, end, appointments=(), exclude=None, holiday_lookup=None):
		return evaluate_warnings(
			start,
			end,
			"dana",
			list(appointments),
			exclude,
			self.opening,
			self.closing,
			holiday_lookup
		)

	def test_no_warnings(self):
		self.assertEqual(self._evaluate(_at(16), _at(17)), [])

	def test_closed_start_blocks_save(self):
		"""An appointment at 08:00 with 09:00-17:00 hours cannot be saved."""
		warnings = self._evaluate(_at(8), _at(9))

		self.assertEqual([w.code for w in warnings], [CALENDAR_CLOSED])
		self.assertEqual(warnings[0].message, calendar_closed_message())
		self.assertIsNone(warnings[0].rule_name)
		self.assertTrue(blocks_save(warnings))

	def test_closed_message_includes_rule_name(self):
		warnings = self._evaluate(_at(13, 30, day=19), _at(14, 30, day=19))

		self.assertEqual(warnings[0].code, CALENDAR_CLOSED)
		self.assertEqual(warnings[0].rule_name, "Lunch")
		self.assertIn("(Lunch)", warnings[0].message)
		self.assertEqual(str(warnings[0]), warnings[0].message)

	def test_ends_outside_hours_is_advisory(self):
		warnings = self._evaluate(_at(16, 30), _at(17, 30))

		self.assertEqual([w.code for w in warnings], [ENDS_OUTSIDE_HOURS])
		self.assertEqual(warnings[0].message, ENDS_OUTSIDE_HOURS_MESSAGE)
		self.assertFalse(blocks_save(warnings))

	def test_end_boundary_is_exclusive(self):
		"""Ending exactly at closing time is not 'outside hours'."""
		self.assertEqual(self._evaluate(_at(12), _at(13, 0, day=20)), [])
		self.assertEqual(self._evaluate(_at(12, 0, day=19), _at(13, 0, day=19)), [])

	def test_ends_in_closing_rule(self):
		warnings = self._evaluate(_at(12, 30, day=19), _at(13, 30, day=19))
		self.assertEqual([w.code for w in warnings], [ENDS_OUTSIDE_HOURS])
		self.assertEqual(warnings[0].rule_name, "Lunch")

	def test_collision_is_advisory(self):
		warnings = self._evaluate(_at(10, 30), _at(11, 30), [self.existing])

		self.assertEqual([w.code for w in warnings], [COLLISION])
		self.assertEqual(warnings[0].message, COLLISION_MESSAGE)
		self.assertFalse(blocks_save(warnings))

	def test_touching_is_not_collision(self):
		self.assertEqual(self._evaluate(_at(11), _at(12), [self.existing]), [])

	def test_edited_appointment_excluded(self):
		self.assertEqual(self._evaluate(_at(10, 30), _at(11, 30), [self.existing], exclude="APT-1"), [])

	def test_cancelled_and_other_calendar_ignored(self):
		appointments = [
			Appointment("APT-2", "dana", _at(10), _at(11), status="cancelled"),
			Appointment("APT-3", "noa", _at(10), _at(11)),
		]
		self.assertEqual(self._evaluate(_at(10), _at(11), appointments), [])

	def test_all_rules_evaluated(self):
		warnings = self._evaluate(_at(8, 30), _at(10, 30), [self.existing])

		self.assertEqual([w.code for w in warnings], [CALENDAR_CLOSED, COLLISION])
		self.assertTrue(blocks_save(warnings))

	def test_day_off_holiday(self):
		lookup = build_holiday_lookup([Holiday(date(2026, 1, 20), "Passover", "jewish", True)])
		warnings = self._evaluate(_at(10), _at(11), holiday_lookup=lookup)

		self.assertEqual(warnings[0].code, CALENDAR_CLOSED)
		self.assertEqual(warnings[0].rule_name, "Passover")
		self.assertTrue(blocks_save(warnings))


class TestCheckAppointment(unittest.TestCase):
	"""Tests for the serializable result."""

	def test_result_shape(self):
		opening = [BusinessHoursRule("09:00", "17:00")]
		existing = [Appointment("APT-1", "dana", _at(16), _at(17))]

		result = check_appointment(_at(16, 30), _at(17, 30), "dana", existing, None, opening, [])

		self.assertEqual(result["codes"], [ENDS_OUTSIDE_HOURS, COLLISION])
		self.assertEqual(result["warnings"], [ENDS_OUTSIDE_HOURS_MESSAGE, COLLISION_MESSAGE])
		self.assertFalse(result["blocks_save"])

	def test_closed_messages(self):
		self.assertEqual(
			calendar_closed_message("Vacaciones"),
			"El calendario está cerrado (Vacaciones) en el horario seleccionado"
		)
		self.assertEqual(
			calendar_closed_message(),
			"El calendario está cerrado en el horario seleccionado"
		)
