# Copyright (c) 2026, Sebastian Ortiz Valencia and contributors
# For license information, please see license.txt

"""
Time Block

Bloque calculado de la linea de tiempo de una fecha. Nunca se persiste.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from provider_availability.provider_availability.scheduling.intervals import minutes_to_time_string

AVAILABILITY = "Availability"
TIME_OFF = "TimeOff"
APPOINTMENT = "Appointment"

# Desempate cuando dos bloques empiezan en el mismo minuto
KIND_PRIORITY = {
	TIME_OFF: 0,
	AVAILABILITY: 1,
	APPOINTMENT: 2,
}


@dataclass(frozen=True)
class TimeBlock:
	id: str
	kind: str
	start_time: int
	end_time: int
	source_ref: str
	reason: Optional[str] = None
	client_name: Optional[str] = None
	original_range: Optional[Tuple[int, int]] = None
	is_all_day: bool = False
	is_recurring: bool = False
	status: Optional[str] = None

	@property
	def is_split(self) -> bool:
		return self.original_range is not None

	def sort_key(self) -> Tuple[int, int, int, str]:
		return (self.start_time, KIND_PRIORITY[self.kind], self.end_time, self.id or "")

	def as_dict(self) -> Dict[str, Any]:
		return {
			"id": self.id,
			"kind": self.kind,
			"start_time": minutes_to_time_string(self.start_time),
			"end_time": minutes_to_time_string(self.end_time),
			"start_minutes": self.start_time,
			"end_minutes": self.end_time,
			"source_ref": self.source_ref,
			"reason": self.reason,
			"client_name": self.client_name,
			"original_range": (
				[minutes_to_time_string(m) for m in self.original_range]
				if self.original_range else None
			),
			"is_all_day": self.is_all_day,
			"is_recurring": self.is_recurring,
			"status": self.status
		}
