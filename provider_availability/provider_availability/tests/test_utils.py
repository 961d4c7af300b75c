"""
Tests for utils.py
"""

import unittest

from provider_availability.utils import cint


class TestCint(unittest.TestCase):
	"""Tests for cint()."""

	def test_false_values(self):
		for value in ("0", "false", "False", "no", "off", "", " ", 0, 0.0, False):
			self.assertEqual(cint(value), 0, msg=repr(value))

	def test_true_values(self):
		for value in ("1", "true", "TRUE", "yes", "on", "2", 1, 3, True):
			self.assertEqual(cint(value), 1, msg=repr(value))

	def test_default(self):
		"""Test that None and unparseable strings fall back to default."""
		self.assertEqual(cint(None), 0)
		self.assertEqual(cint(None, default=1), 1)
		self.assertEqual(cint("maybe", default=1), 1)
