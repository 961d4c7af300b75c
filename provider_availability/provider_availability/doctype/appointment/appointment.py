# Copyright (c) 2026, Sebastian Ortiz Valencia and contributors
# For license information, please see license.txt

"""
Appointment

Cita reservada por el subsistema de booking. Es de solo lectura para el
motor: solo se proyecta sobre la linea de tiempo del dia en que empieza.
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, ClassVar, Dict, Optional, Tuple

from provider_availability.exceptions import InvalidInterval, ValidationError
from provider_availability.provider_availability.scheduling.intervals import (
	MINUTES_PER_DAY,
	datetime_to_minutes,
)
from provider_availability.utils import get_datetime, throw, to_local_naive

STATUSES = ("pending", "confirmed", "completed", "cancelled", "no_show")


@dataclass(frozen=True)
class Appointment:
	"""
	Appointment con datetimes absolutos.

	Validations:
	- start_datetime < end_datetime
	- status en STATUSES
	"""

	doctype: ClassVar[str] = "Appointment"

	start_datetime: datetime
	end_datetime: datetime
	status: str = "pending"
	client_name: str = ""
	id: Optional[str] = None

	def validate(self) -> None:
		"""Validación antes de guardar."""
		self._validate_datetime_consistency()
		self._validate_status()

	# ===== VALIDATION METHODS =====

	def _validate_datetime_consistency(self) -> None:
		"""Valida que start_datetime < end_datetime."""
		if not self.start_datetime or not self.end_datetime:
			throw("Start DateTime y End DateTime son requeridos")

		if self.start_datetime >= self.end_datetime:
			throw("Start DateTime debe ser menor que End DateTime", InvalidInterval)

	def _validate_status(self) -> None:
		if self.status not in STATUSES:
			throw(f"Status invalido: {self.status!r}", ValidationError)

	# ===== TIMELINE HELPERS =====

	def local_date(self, tz_name: Optional[str] = None) -> date:
		"""Fecha (en hora local del proveedor) en que empieza la cita."""
		return to_local_naive(self.start_datetime, tz_name).date()

	def minutes_on(self, target_date: date, tz_name: Optional[str] = None) -> Tuple[int, int]:
		"""
		Convierte la cita a minutos del dia target_date.

		Si la cita termina en una fecha posterior, el fin se corta a 24:00.

		Returns:
			tuple: (start_minutes, end_minutes)
		"""
		start = to_local_naive(self.start_datetime, tz_name)
		end = to_local_naive(self.end_datetime, tz_name)

		start_minutes = datetime_to_minutes(start) if start.date() == target_date else 0
		end_minutes = datetime_to_minutes(end) if end.date() == target_date else MINUTES_PER_DAY

		return start_minutes, end_minutes

	@classmethod
	def from_dict(cls, data: Dict[str, Any]) -> "Appointment":
		"""
		Args:
			data: {
				"id": "APT-00001",
				"start_datetime": "2026-01-20 10:00:00",
				"end_datetime": "2026-01-20 11:00:00",
				"status": "confirmed",
				"client_name": "Ana"
			}
		"""
		return cls(
			id=data.get("id"),
			start_datetime=get_datetime(data["start_datetime"]),
			end_datetime=get_datetime(data["end_datetime"]),
			status=(data.get("status") or "pending").lower(),
			client_name=data.get("client_name") or ""
		)

	def as_dict(self) -> Dict[str, Any]:
		return {
			"id": self.id,
			"doctype": self.doctype,
			"start_datetime": self.start_datetime.isoformat(),
			"end_datetime": self.end_datetime.isoformat(),
			"status": self.status,
			"client_name": self.client_name
		}
