"""
Tests for repository/memory.py and repository/factory.py
"""

import threading
import unittest

from provider_availability.exceptions import RepositoryError
from provider_availability.provider_availability.doctype.availability_slot.availability_slot import AvailabilitySlot
from provider_availability.provider_availability.doctype.calendar_exception.calendar_exception import CalendarException
from provider_availability.provider_availability.doctype.provider_settings.provider_settings import ProviderSettings
from provider_availability.provider_availability.doctype.scope import Recurring
from provider_availability.provider_availability.repository.factory import get_repository, reset_repository
from provider_availability.provider_availability.repository.memory import InMemoryRepository

PROVIDER = "Dr. Test"


class TestInMemoryRepository(unittest.TestCase):
	"""Tests for InMemoryRepository."""

	def setUp(self):
		"""Set up test data before each test."""
		self.repo = InMemoryRepository()
		self.slot = AvailabilitySlot(scope=Recurring(1), start_time=540, end_time=600)

	def test_naming_series(self):
		"""Test that ids follow the naming series of each doctype."""
		first = self.repo.insert_record(AvailabilitySlot.doctype, PROVIDER, self.slot)
		second = self.repo.insert_record(AvailabilitySlot.doctype, PROVIDER, self.slot)
		exc = self.repo.insert_record(
			CalendarException.doctype, PROVIDER, CalendarException(scope=Recurring(1), is_all_day=True)
		)

		self.assertEqual([first.id, second.id, exc.id], ["AVS-00001", "AVS-00002", "EXC-00001"])

	def test_read_after_write(self):
		inserted = self.repo.insert_record(AvailabilitySlot.doctype, PROVIDER, self.slot)
		self.assertEqual(self.repo.get_availability_slots(PROVIDER), [inserted])

		self.repo.delete_record(AvailabilitySlot.doctype, PROVIDER, inserted.id)
		self.assertEqual(self.repo.get_availability_slots(PROVIDER), [])

	def test_created_at_assigned(self):
		inserted = self.repo.insert_record(AvailabilitySlot.doctype, PROVIDER, self.slot)
		self.assertIsNotNone(inserted.created_at)
		self.assertIsNone(inserted.created_at.tzinfo)

	def test_providers_isolated(self):
		self.repo.insert_record(AvailabilitySlot.doctype, PROVIDER, self.slot)
		self.assertEqual(self.repo.get_availability_slots("Dr. Other"), [])

	def test_errors(self):
		"""Test unknown ids, duplicate ids and wrong record types."""
		with self.assertRaises(RepositoryError):
			self.repo.delete_record(AvailabilitySlot.doctype, PROVIDER, "AVS-99999")

		inserted = self.repo.insert_record(AvailabilitySlot.doctype, PROVIDER, self.slot)
		with self.assertRaises(RepositoryError):
			self.repo.insert_record(AvailabilitySlot.doctype, PROVIDER, inserted)

		with self.assertRaises(RepositoryError):
			self.repo.insert_record(CalendarException.doctype, PROVIDER, self.slot)

		with self.assertRaises(RepositoryError):
			self.repo.list_records("Unknown Doctype", PROVIDER)

	def test_settings(self):
		self.assertEqual(self.repo.get_settings(PROVIDER).timezone, "UTC")

		self.repo.save_settings(ProviderSettings(provider=PROVIDER, timezone="America/Bogota"))

		self.assertEqual(self.repo.get_settings(PROVIDER).timezone, "America/Bogota")


class TestRepositoryFactory(unittest.TestCase):
	"""Tests for get_repository()."""

	def tearDown(self):
		reset_repository()

	def test_shared_instance(self):
		self.assertIs(get_repository(), get_repository("memory"))
		self.assertIsInstance(get_repository(), InMemoryRepository)

	def test_unknown_backend(self):
		with self.assertRaises(ValueError):
			get_repository("postgres")


class TestConcurrentInserts(unittest.TestCase):
	"""Tests for naming series under concurrent inserts."""

	def test_ids_unique_across_providers(self):
		"""Test that inserts for different providers never mint the same id."""
		repo = InMemoryRepository()
		slot = AvailabilitySlot(scope=Recurring(1), start_time=540, end_time=600)
		providers = [f"Dr. {n}" for n in range(8)]

		def insert_many(provider):
			for _ in range(50):
				repo.insert_record(AvailabilitySlot.doctype, provider, slot)

		threads = [threading.Thread(target=insert_many, args=(p,)) for p in providers]
		for thread in threads:
			thread.start()
		for thread in threads:
			thread.join()

		ids = [r.id for p in providers for r in repo.get_availability_slots(p)]
		self.assertEqual(len(ids), 400)
		self.assertEqual(len(set(ids)), 400)
