# Copyright (c) 2026, Sebastian Ortiz Valencia and contributors
# For license information, please see license.txt

"""
Calendar Exception

Time-off del proveedor:
- Recurring: se repite cada semana en un dia fijo
- DateRange: aplica a cada fecha del rango (un solo dia si start = end)
- is_all_day: fuerza 00:00-24:00
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, ClassVar, Dict, Optional, Union

from provider_availability.provider_availability.doctype.scope import (
	DateRange,
	Recurring,
	scope_from_dict,
	validate_scope,
)
from provider_availability.provider_availability.scheduling.intervals import (
	MINUTES_PER_DAY,
	minutes_to_time_string,
	to_minutes,
	validate_interval,
)
from provider_availability.utils import cint, get_datetime


@dataclass(frozen=True)
class CalendarException:
	"""
	Calendar Exception inmutable.

	Validations:
	- scope requerido (Recurring o DateRange con start <= end)
	- 0 <= start_time < end_time <= 24:00
	"""

	doctype: ClassVar[str] = "Calendar Exception"

	scope: Union[Recurring, DateRange]
	start_time: int = 0
	end_time: int = MINUTES_PER_DAY
	is_all_day: bool = False
	reason: str = ""
	id: Optional[str] = None
	created_at: Optional[datetime] = field(default=None, compare=False)

	def __post_init__(self) -> None:
		# All-day siempre cubre el dia completo, sin importar los tiempos recibidos
		if self.is_all_day:
			object.__setattr__(self, "start_time", 0)
			object.__setattr__(self, "end_time", MINUTES_PER_DAY)

	def validate(self) -> None:
		"""Validación antes de guardar."""
		validate_scope(self.scope, (Recurring, DateRange))
		validate_interval(self.start_time, self.end_time)

	@property
	def is_recurring(self) -> bool:
		return isinstance(self.scope, Recurring)

	def with_times(self, start_time: int, end_time: int) -> "CalendarException":
		"""Copia sin id con otro horario (usado por Merge)."""
		return replace(
			self,
			id=None,
			start_time=start_time,
			end_time=end_time,
			is_all_day=(start_time == 0 and end_time == MINUTES_PER_DAY)
		)

	@classmethod
	def from_dict(cls, data: Dict[str, Any]) -> "CalendarException":
		"""
		Construye la excepcion desde un dict plano.

		Args:
			data: {
				"id": "EXC-00001" (opcional),
				"day_of_week": 1 | "start_date": "2026-01-20", "end_date": "2026-01-22",
				"start_time": "12:00" (opcional si is_all_day),
				"end_time": "13:00" (opcional si is_all_day),
				"is_all_day": False,
				"reason": "Almuerzo",
				"created_at": "2026-01-01 10:00:00" (opcional)
			}
		"""
		is_all_day = bool(cint(data.get("is_all_day")))
		created_at = data.get("created_at")

		if is_all_day:
			start_time, end_time = 0, MINUTES_PER_DAY
		else:
			start_time = to_minutes(data["start_time"])
			end_time = to_minutes(data["end_time"])

		return cls(
			id=data.get("id"),
			scope=scope_from_dict(data),
			start_time=start_time,
			end_time=end_time,
			is_all_day=is_all_day,
			reason=data.get("reason") or "",
			created_at=get_datetime(created_at) if created_at else None
		)

	def as_dict(self) -> Dict[str, Any]:
		result = {
			"id": self.id,
			"doctype": self.doctype,
			"is_recurring": self.is_recurring,
			"start_time": minutes_to_time_string(self.start_time),
			"end_time": minutes_to_time_string(self.end_time),
			"is_all_day": self.is_all_day,
			"reason": self.reason,
			"created_at": self.created_at.isoformat() if self.created_at else None
		}
		result.update(self.scope.as_dict())
		return result
