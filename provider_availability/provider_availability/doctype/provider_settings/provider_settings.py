# Copyright (c) 2026, Sebastian Ortiz Valencia and contributors
# For license information, please see license.txt

"""
Provider Settings

Configuracion por proveedor: timezone (reloj de "hoy"), duracion de slot
y que citas se muestran en la linea de tiempo.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, Optional, Tuple

import pytz

from provider_availability import hooks
from provider_availability.exceptions import ValidationError
from provider_availability.provider_availability.doctype.appointment.appointment import STATUSES
from provider_availability.utils import cint, now_datetime, throw


@dataclass(frozen=True)
class ProviderSettings:
	"""
	Validations:
	- timezone conocido por pytz
	- slot_duration_minutes > 0
	- visible_appointment_statuses dentro de los estados de Appointment
	"""

	provider: Optional[str] = None
	timezone: str = hooks.default_timezone
	slot_duration_minutes: int = hooks.default_slot_duration_minutes
	show_appointments: bool = True
	visible_appointment_statuses: Tuple[str, ...] = field(
		default_factory=lambda: tuple(hooks.visible_appointment_statuses)
	)

	def validate(self) -> None:
		"""Validación antes de guardar."""
		if self.timezone not in pytz.all_timezones_set:
			throw(f"Timezone desconocido: {self.timezone}")

		if not self.slot_duration_minutes or self.slot_duration_minutes <= 0:
			throw("Slot Duration debe ser mayor que 0")

		unknown = [s for s in self.visible_appointment_statuses if s not in STATUSES]
		if unknown:
			throw(f"Estados de cita desconocidos: {', '.join(unknown)}", ValidationError)

	def today(self) -> date:
		"""Fecha actual en el timezone del proveedor."""
		return now_datetime(self.timezone).date()

	def shows_appointment(self, status: str) -> bool:
		return self.show_appointments and status in self.visible_appointment_statuses

	@classmethod
	def from_dict(cls, data: Dict[str, Any]) -> "ProviderSettings":
		statuses = data.get("visible_appointment_statuses")
		return cls(
			provider=data.get("provider"),
			timezone=data.get("timezone") or hooks.default_timezone,
			slot_duration_minutes=int(data.get("slot_duration_minutes") or hooks.default_slot_duration_minutes),
			show_appointments=bool(cint(data.get("show_appointments"), default=1)),
			visible_appointment_statuses=tuple(statuses) if statuses is not None
				else tuple(hooks.visible_appointment_statuses)
		)

	def as_dict(self) -> Dict[str, Any]:
		return {
			"provider": self.provider,
			"timezone": self.timezone,
			"slot_duration_minutes": self.slot_duration_minutes,
			"show_appointments": self.show_appointments,
			"visible_appointment_statuses": list(self.visible_appointment_statuses)
		}
