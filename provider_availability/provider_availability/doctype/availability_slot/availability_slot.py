# Copyright (c) 2026, Sebastian Ortiz Valencia and contributors
# For license information, please see license.txt

"""
Availability Slot

Franja de disponibilidad de un proveedor:
- Recurring: se repite cada semana en un dia fijo
- SpecificDate: solo para una fecha (reemplaza a las recurrentes de ese dia)
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, ClassVar, Dict, Optional, Union

from provider_availability.provider_availability.doctype.scope import (
	Recurring,
	SpecificDate,
	scope_from_dict,
	validate_scope,
)
from provider_availability.provider_availability.scheduling.intervals import (
	minutes_to_time_string,
	to_minutes,
	validate_interval,
)
from provider_availability.utils import get_datetime


@dataclass(frozen=True)
class AvailabilitySlot:
	"""
	Availability Slot inmutable; se modifica borrando y recreando.

	Validations:
	- scope requerido (Recurring o SpecificDate)
	- 0 <= start_time < end_time <= 24:00
	"""

	doctype: ClassVar[str] = "Availability Slot"

	scope: Union[Recurring, SpecificDate]
	start_time: int
	end_time: int
	id: Optional[str] = None
	created_at: Optional[datetime] = field(default=None, compare=False)

	def validate(self) -> None:
		"""Validación antes de guardar."""
		validate_scope(self.scope, (Recurring, SpecificDate))
		validate_interval(self.start_time, self.end_time)

	@property
	def is_recurring(self) -> bool:
		return isinstance(self.scope, Recurring)

	def with_times(self, start_time: int, end_time: int) -> "AvailabilitySlot":
		"""Copia sin id con otro horario (usado por Merge)."""
		return replace(self, id=None, start_time=start_time, end_time=end_time)

	@classmethod
	def from_dict(cls, data: Dict[str, Any]) -> "AvailabilitySlot":
		"""
		Construye el slot desde un dict plano.

		Args:
			data: {
				"id": "AVS-00001" (opcional),
				"day_of_week": 1 | "specific_date": "2026-01-20",
				"start_time": "09:00",
				"end_time": "17:00",
				"created_at": "2026-01-01 10:00:00" (opcional)
			}
		"""
		created_at = data.get("created_at")
		return cls(
			id=data.get("id"),
			scope=scope_from_dict(data),
			start_time=to_minutes(data["start_time"]),
			end_time=to_minutes(data["end_time"]),
			created_at=get_datetime(created_at) if created_at else None
		)

	def as_dict(self) -> Dict[str, Any]:
		result = {
			"id": self.id,
			"doctype": self.doctype,
			"is_recurring": self.is_recurring,
			"start_time": minutes_to_time_string(self.start_time),
			"end_time": minutes_to_time_string(self.end_time),
			"created_at": self.created_at.isoformat() if self.created_at else None
		}
		result.update(self.scope.as_dict())
		return result
