"""
In-Memory Repository

Dict-backed store used by the API by default and by the tests. Writes for a
provider are serialised with a lock.
"""

import threading
from collections import OrderedDict, defaultdict
from dataclasses import replace
from typing import Any, Dict, List, Tuple

from provider_availability import hooks
from provider_availability.exceptions import RepositoryError
from provider_availability.provider_availability.doctype.provider_settings.provider_settings import ProviderSettings
from provider_availability.provider_availability.repository.base import DOCTYPES, AvailabilityRepository
from provider_availability.utils import logger, now_datetime


class InMemoryRepository(AvailabilityRepository):
	"""Repository en memoria."""

	def __init__(self):
		self._records: Dict[Tuple[str, str], "OrderedDict[str, Any]"] = defaultdict(OrderedDict)
		self._settings: Dict[str, ProviderSettings] = {}
		self._counters: Dict[str, int] = defaultdict(int)
		self._locks: Dict[str, threading.RLock] = defaultdict(threading.RLock)
		self._guard = threading.Lock()

	def lock_for(self, provider: str) -> threading.RLock:
		"""Lock de escritura del proveedor."""
		with self._guard:
			return self._locks[provider]

	def _check_doctype(self, doctype: str) -> None:
		if doctype not in DOCTYPES:
			raise RepositoryError(f"Unsupported doctype: {doctype}")

	def _next_name(self, doctype: str) -> str:
		# Naming series estilo AVS-00001, compartida entre proveedores
		with self._guard:
			self._counters[doctype] += 1
			number = self._counters[doctype]
		prefix = hooks.naming_series.get(doctype, "REC-")
		return f"{prefix}{number:05d}"

	def list_records(self, doctype: str, provider: str) -> List[Any]:
		self._check_doctype(doctype)
		with self.lock_for(provider):
			return list(self._records[(doctype, provider)].values())

	def insert_record(self, doctype: str, provider: str, record: Any) -> Any:
		self._check_doctype(doctype)
		if not isinstance(record, DOCTYPES[doctype]):
			raise RepositoryError(f"Expected {doctype}, got {type(record).__name__}")

		with self.lock_for(provider):
			records = self._records[(doctype, provider)]

			if record.id is None:
				record = replace(record, id=self._next_name(doctype))
			elif record.id in records:
				raise RepositoryError(f"{doctype} {record.id} already exists")

			if hasattr(record, "created_at") and record.created_at is None:
				settings = self._settings.get(provider) or ProviderSettings(provider=provider)
				record = replace(record, created_at=now_datetime(settings.timezone))

			records[record.id] = record

		logger("repository").debug("Inserted %s %s for %s", doctype, record.id, provider)
		return record

	def delete_record(self, doctype: str, provider: str, record_id: str) -> None:
		self._check_doctype(doctype)
		with self.lock_for(provider):
			records = self._records[(doctype, provider)]
			if record_id not in records:
				raise RepositoryError(f"{doctype} {record_id} not found")
			del records[record_id]

		logger("repository").debug("Deleted %s %s for %s", doctype, record_id, provider)

	def get_settings(self, provider: str) -> ProviderSettings:
		return self._settings.get(provider) or ProviderSettings(provider=provider)

	def save_settings(self, settings: ProviderSettings) -> ProviderSettings:
		settings.validate()
		if not settings.provider:
			raise RepositoryError("Provider Settings requiere provider")
		self._settings[settings.provider] = settings
		return settings
