"""
Tests for scheduling/slots.py

Tests bookable slot generation from resolved timelines.
"""

import unittest
from datetime import date, datetime

from provider_availability.provider_availability.doctype.appointment.appointment import Appointment
from provider_availability.provider_availability.doctype.availability_slot.availability_slot import AvailabilitySlot
from provider_availability.provider_availability.doctype.calendar_exception.calendar_exception import CalendarException
from provider_availability.provider_availability.doctype.provider_settings.provider_settings import ProviderSettings
from provider_availability.provider_availability.doctype.scope import Recurring
from provider_availability.provider_availability.scheduling.slots import generate_available_slots

MONDAY = date(2026, 1, 19)


class TestGenerateSlots(unittest.TestCase):
	"""Tests for generate_available_slots()."""

	def setUp(self):
		"""Set up test data before each test."""
		self.slot = AvailabilitySlot(id="AVS-00001", scope=Recurring(1), start_time=540, end_time=660)
		self.settings = ProviderSettings(provider="Dr. Test", slot_duration_minutes=30)

	def test_basic_slots(self):
		"""Test that a 09:00-11:00 slot yields four 30 minute slots."""
		slots = generate_available_slots(MONDAY, MONDAY, [self.slot], [], settings=self.settings, today=MONDAY)

		self.assertEqual(
			[(s["start"], s["end"]) for s in slots],
			[("09:00", "09:30"), ("09:30", "10:00"), ("10:00", "10:30"), ("10:30", "11:00")]
		)
		self.assertTrue(all(s["date"] == "2026-01-19" and s["is_available"] for s in slots))

	def test_time_off_removes_slots(self):
		lunch = CalendarException(id="EXC-00001", scope=Recurring(1), start_time=570, end_time=630)

		slots = generate_available_slots(MONDAY, MONDAY, [self.slot], [lunch], settings=self.settings, today=MONDAY)

		self.assertEqual([s["start"] for s in slots], ["09:00", "10:30"])

	def test_appointments_block_slots(self):
		"""Test that booked time is never offered, even when hidden from the timeline."""
		appointment = Appointment(
			id="APT-00001",
			start_datetime=datetime(2026, 1, 19, 9, 30),
			end_datetime=datetime(2026, 1, 19, 10, 0),
			status="confirmed"
		)
		settings = ProviderSettings(slot_duration_minutes=30, show_appointments=False)

		slots = generate_available_slots(
			MONDAY, MONDAY, [self.slot], [], [appointment], settings=settings, today=MONDAY
		)

		self.assertEqual([s["start"] for s in slots], ["09:00", "10:00", "10:30"])

	def test_cancelled_appointment_frees_slot(self):
		appointment = Appointment(
			id="APT-00001",
			start_datetime=datetime(2026, 1, 19, 9, 30),
			end_datetime=datetime(2026, 1, 19, 10, 0),
			status="cancelled"
		)

		slots = generate_available_slots(
			MONDAY, MONDAY, [self.slot], [], [appointment], settings=self.settings, today=MONDAY
		)

		self.assertEqual(len(slots), 4)

	def test_partial_slot_discarded(self):
		"""Test that a trailing slot shorter than the duration is not offered."""
		settings = ProviderSettings(slot_duration_minutes=45)

		slots = generate_available_slots(MONDAY, MONDAY, [self.slot], [], settings=settings, today=MONDAY)

		self.assertEqual([(s["start"], s["end"]) for s in slots], [("09:00", "09:45"), ("09:45", "10:30")])

	def test_past_dates_skipped(self):
		"""Test that dates before today produce no slots."""
		slots = generate_available_slots(
			MONDAY, date(2026, 1, 26), [self.slot], [], settings=self.settings, today=date(2026, 1, 20)
		)

		self.assertEqual({s["date"] for s in slots}, {"2026-01-26"})
