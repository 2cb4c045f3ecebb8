"""
Tests for scheduling/overlap.py and scheduling/models.py

Tests overlap detection, appointment construction and service durations.
"""

import unittest
from datetime import datetime
import pytz

from salon_booking.salon_booking.scheduling.models import (
	Appointment,
	Service,
	total_blocking_minutes,
)
from salon_booking.salon_booking.scheduling.overlap import (
	check_overlap,
	find_overlapping_appointments,
	intervals_overlap,
)


class TestOverlap(unittest.TestCase):
	"""Tests for overlap detection functions."""

	def setUp(self):
		self.appointments = [
			Appointment("APT-1", "dana", datetime(2026, 1, 20, 10, 0), datetime(2026, 1, 20, 11, 0)),
			Appointment("APT-2", "dana", datetime(2026, 1, 20, 10, 30), datetime(2026, 1, 20, 11, 30), status="cancelled"),
			Appointment("APT-3", "noa", datetime(2026, 1, 20, 10, 0), datetime(2026, 1, 20, 11, 0)),
		]

	def test_intervals_overlap(self):
		nine, ten, eleven = (datetime(2026, 1, 20, h, 0) for h in (9, 10, 11))
		self.assertTrue(intervals_overlap(nine, eleven, ten, eleven))
		# Rangos que solo se tocan no se solapan
		self.assertFalse(intervals_overlap(nine, ten, ten, eleven))

	def test_no_overlap(self):
		result = check_overlap(
			datetime(2026, 1, 20, 11, 0),
			datetime(2026, 1, 20, 12, 0),
			self.appointments,
			calendar_id="dana"
		)
		self.assertFalse(result["has_overlap"])
		self.assertEqual(result["overlapping_appointments"], [])

	def test_with_overlap(self):
		result = check_overlap(
			datetime(2026, 1, 20, 10, 45),
			datetime(2026, 1, 20, 11, 15),
			self.appointments,
			calendar_id="dana"
		)
		self.assertTrue(result["has_overlap"])
		self.assertEqual(result["overlapping_appointments"], ["APT-1"])

	def test_without_calendar_filter(self):
		overlapping = find_overlapping_appointments(
			datetime(2026, 1, 20, 10, 0),
			datetime(2026, 1, 20, 10, 15),
			self.appointments
		)
		self.assertEqual([a.id for a in overlapping], ["APT-1", "APT-3"])

	def test_exclude_appointment(self):
		result = check_overlap(
			datetime(2026, 1, 20, 10, 0),
			datetime(2026, 1, 20, 11, 0),
			self.appointments,
			calendar_id="dana",
			exclude_appointment="APT-1"
		)
		self.assertFalse(result["has_overlap"])


class TestAppointment(unittest.TestCase):
	"""Tests for the Appointment model."""

	def test_start_must_precede_end(self):
		with self.assertRaises(ValueError):
			Appointment("APT-1", "dana", datetime(2026, 1, 20, 11, 0), datetime(2026, 1, 20, 10, 0))
		with self.assertRaises(ValueError):
			Appointment("APT-1", "dana", datetime(2026, 1, 20, 10, 0), datetime(2026, 1, 20, 10, 0))

	def test_unknown_status(self):
		with self.assertRaises(ValueError):
			Appointment(
				"APT-1", "dana", datetime(2026, 1, 20, 10, 0), datetime(2026, 1, 20, 11, 0), status="deleted"
			)

	def test_aware_datetimes_normalised(self):
		"""Aware start/end are stored as naive business wall-clock time."""
		tz = pytz.timezone("Asia/Jerusalem")
		appointment = Appointment(
			"APT-1",
			"dana",
			pytz.utc.localize(datetime(2026, 1, 20, 8, 0)),
			tz.localize(datetime(2026, 1, 20, 11, 0)),
			tz=tz
		)

		self.assertIsNone(appointment.start.tzinfo)
		self.assertEqual(appointment.start, datetime(2026, 1, 20, 10, 0))
		self.assertEqual(appointment.end, datetime(2026, 1, 20, 11, 0))
		self.assertTrue(appointment.overlaps(datetime(2026, 1, 20, 10, 30), datetime(2026, 1, 20, 12, 0)))

	def test_from_dict_stored_shape(self):
		tz = pytz.timezone("Asia/Jerusalem")
		appointment = Appointment.from_dict({
			"id": "abc123",
			"calendarId": "dana",
			"clientId": "client-7",
			"serviceId": "haircut, color",
			"start": "2026-01-20T08:00:00.000Z",
			"end": "2026-01-20T09:30:00.000Z",
			"status": "pending_cancellation",
			"notes": "Primera visita",
		}, tz)

		self.assertEqual(appointment.calendar_id, "dana")
		self.assertEqual(appointment.client_id, "client-7")
		self.assertEqual(appointment.service_ids, ("haircut", "color"))
		self.assertEqual(appointment.start, datetime(2026, 1, 20, 10, 0))
		self.assertEqual(appointment.duration_minutes, 90)
		self.assertFalse(appointment.is_cancelled)
		self.assertEqual(appointment.as_dict()["notes"], "Primera visita")

	def test_from_document_shape(self):
		appointment = Appointment.from_dict({
			"name": "APT-2026-00001",
			"calendar": "dana",
			"start_datetime": datetime(2026, 1, 20, 10, 0),
			"end_datetime": datetime(2026, 1, 20, 10, 45),
			"status": "cancelled",
		})

		self.assertEqual(appointment.id, "APT-2026-00001")
		self.assertTrue(appointment.is_cancelled)
		self.assertEqual(appointment.as_dict()["start"], "2026-01-20T10:00:00")


class TestServices(unittest.TestCase):
	"""Tests for multi-service durations."""

	def test_total_blocking_minutes(self):
		services = [
			Service("haircut", duration=45, break_time=15),
			Service.from_dict({"id": "blow-dry", "duration": 30}),
		]
		self.assertEqual(services[0].blocking_minutes, 60)
		self.assertEqual(total_blocking_minutes(services), 90)
		self.assertEqual(total_blocking_minutes([]), 0)

	def test_negative_duration(self):
		with self.assertRaises(ValueError):
			Service("broken", duration=-5)
