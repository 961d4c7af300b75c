"""
Tests for scheduling/overlap.py

Tests overlap detection, scope matching and Replace/Merge plans.
"""

import unittest
from datetime import date

from provider_availability.exceptions import InvalidInterval, MissingScope, ValidationError
from provider_availability.provider_availability.doctype.availability_slot.availability_slot import AvailabilitySlot
from provider_availability.provider_availability.doctype.calendar_exception.calendar_exception import CalendarException
from provider_availability.provider_availability.doctype.scope import DateRange, Recurring, SpecificDate
from provider_availability.provider_availability.scheduling.overlap import (
	CANCEL,
	MERGE,
	REPLACE,
	check_overlap,
	expand_scope_units,
	plan_merge,
	plan_replace,
	plan_resolution,
	scope_conflicts,
)

TUESDAY = date(2026, 1, 20)


class TestCheckOverlap(unittest.TestCase):
	"""Tests for check_overlap()."""

	def setUp(self):
		"""Set up test data before each test."""
		self.existing = AvailabilitySlot(
			id="AVS-00001", scope=Recurring(2), start_time=600, end_time=840
		)
		self.proposed = AvailabilitySlot(scope=Recurring(2), start_time=540, end_time=720)

	def test_recurring_overlap_and_merge_candidate(self):
		"""Test Tuesday 10:00-14:00 existing vs proposed 09:00-12:00."""
		result = check_overlap(self.proposed, [self.existing])

		self.assertTrue(result["has_overlap"])
		self.assertEqual(result["overlapping_entries"], [self.existing])
		self.assertIs(result["replace_candidate"], self.proposed)
		self.assertEqual(result["merge_candidate"], (540, 840))

	def test_no_overlap(self):
		"""Test that touching intervals are not an overlap."""
		proposed = AvailabilitySlot(scope=Recurring(2), start_time=840, end_time=900)

		result = check_overlap(proposed, [self.existing])

		self.assertFalse(result["has_overlap"])
		self.assertEqual(result["overlapping_entries"], [])
		self.assertNotIn("merge_candidate", result)

	def test_other_weekday_ignored(self):
		proposed = AvailabilitySlot(scope=Recurring(3), start_time=540, end_time=720)
		self.assertFalse(check_overlap(proposed, [self.existing])["has_overlap"])

	def test_merge_uses_first_overlap_only(self):
		"""Test that only the first overlapping entry feeds the merge candidate."""
		late = AvailabilitySlot(id="AVS-00002", scope=Recurring(2), start_time=900, end_time=1000)
		proposed = AvailabilitySlot(scope=Recurring(2), start_time=540, end_time=960)

		result = check_overlap(proposed, [self.existing, late])

		self.assertEqual([r.id for r in result["overlapping_entries"]], ["AVS-00001", "AVS-00002"])
		self.assertEqual(result["merge_candidate"], (540, 960))

	def test_exclude_id(self):
		"""Test that the record being edited is not reported against itself."""
		result = check_overlap(self.proposed, [self.existing], exclude_id="AVS-00001")
		self.assertFalse(result["has_overlap"])

	def test_invalid_interval_raises_before_comparing(self):
		proposed = AvailabilitySlot(scope=Recurring(2), start_time=720, end_time=720)

		with self.assertRaises(InvalidInterval):
			check_overlap(proposed, [self.existing])

	def test_missing_scope_raises(self):
		proposed = AvailabilitySlot(scope=None, start_time=540, end_time=600)

		with self.assertRaises(MissingScope):
			check_overlap(proposed, [])

	def test_invalid_day_of_week_raises(self):
		proposed = AvailabilitySlot(scope=Recurring(7), start_time=540, end_time=600)

		with self.assertRaises(MissingScope):
			check_overlap(proposed, [])

	def test_other_doctype_ignored(self):
		"""Test that exceptions are never compared against availability slots."""
		exception = CalendarException(id="EXC-00001", scope=Recurring(2), start_time=600, end_time=840)

		self.assertFalse(check_overlap(self.proposed, [exception])["has_overlap"])


class TestScopeConflicts(unittest.TestCase):
	"""Tests for scope_conflicts()."""

	def test_specific_date_vs_recurring_same_weekday(self):
		"""Test that a specific date is compared with recurring records of its weekday."""
		self.assertTrue(scope_conflicts(SpecificDate(TUESDAY), Recurring(2)))
		self.assertFalse(scope_conflicts(SpecificDate(TUESDAY), Recurring(1)))

	def test_specific_date_vs_specific_date(self):
		self.assertTrue(scope_conflicts(SpecificDate(TUESDAY), SpecificDate(TUESDAY)))
		self.assertFalse(scope_conflicts(SpecificDate(TUESDAY), SpecificDate(date(2026, 1, 27))))

	def test_recurring_only_vs_recurring(self):
		"""Test that a recurring day is never compared with specific-date records."""
		self.assertTrue(scope_conflicts(Recurring(2), Recurring(2)))
		self.assertFalse(scope_conflicts(Recurring(2), SpecificDate(TUESDAY)))
		self.assertFalse(scope_conflicts(Recurring(2), DateRange(TUESDAY, TUESDAY)))

	def test_date_range(self):
		proposed = DateRange(date(2026, 1, 19), date(2026, 1, 21))

		self.assertTrue(scope_conflicts(proposed, DateRange(date(2026, 1, 21), date(2026, 1, 25))))
		self.assertFalse(scope_conflicts(proposed, DateRange(date(2026, 1, 22), date(2026, 1, 25))))
		self.assertTrue(scope_conflicts(proposed, Recurring(3)))
		self.assertFalse(scope_conflicts(proposed, Recurring(0)))

	def test_exception_date_range_against_recurring(self):
		"""Test a one-day exception against a recurring exception of the same weekday."""
		existing = CalendarException(id="EXC-00001", scope=Recurring(2), start_time=720, end_time=780)
		proposed = CalendarException(scope=DateRange(TUESDAY, TUESDAY), start_time=750, end_time=810)

		result = check_overlap(proposed, [existing])

		self.assertTrue(result["has_overlap"])
		self.assertEqual(result["merge_candidate"], (720, 810))


class TestPlans(unittest.TestCase):
	"""Tests for Replace / Merge / Cancel plans."""

	def setUp(self):
		"""Set up test data before each test."""
		self.existing = AvailabilitySlot(id="AVS-00001", scope=Recurring(2), start_time=600, end_time=840)
		self.proposed = AvailabilitySlot(scope=Recurring(2), start_time=540, end_time=720)
		self.result = check_overlap(self.proposed, [self.existing])

	def test_plan_replace(self):
		plan = plan_replace(self.result, self.proposed)

		self.assertEqual(plan["to_delete"], ["AVS-00001"])
		self.assertIs(plan["to_insert"], self.proposed)

	def test_plan_merge(self):
		"""Test that Merge inserts a single record spanning the merge candidate."""
		plan = plan_merge(self.result, self.proposed)

		self.assertEqual(plan["to_delete"], ["AVS-00001"])
		self.assertEqual((plan["to_insert"].start_time, plan["to_insert"].end_time), (540, 840))
		self.assertEqual(plan["to_insert"].scope, Recurring(2))
		self.assertIsNone(plan["to_insert"].id)

	def test_plan_merge_without_overlap(self):
		with self.assertRaises(ValidationError):
			plan_merge({"has_overlap": False, "overlapping_entries": []}, self.proposed)

	def test_plan_resolution(self):
		self.assertIsNone(plan_resolution(self.result, self.proposed, CANCEL))
		self.assertEqual(plan_resolution(self.result, self.proposed, REPLACE)["to_insert"], self.proposed)
		self.assertEqual(plan_resolution(self.result, self.proposed, MERGE)["to_insert"].end_time, 840)

		with self.assertRaises(ValidationError):
			plan_resolution(self.result, self.proposed, "overwrite")

	def test_expand_scope_units(self):
		"""Test that a multi-day write becomes one record per scope."""
		units = expand_scope_units(self.proposed, [Recurring(1), Recurring(3), Recurring(5)])

		self.assertEqual([u.scope.day_of_week for u in units], [1, 3, 5])
		self.assertTrue(all((u.start_time, u.end_time) == (540, 720) for u in units))
