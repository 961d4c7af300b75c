"""
Slot Generation Service

Generates discrete bookable slots for booking widgets, considering:
- The resolved timeline (availability already cut by time-off)
- Existing appointments
- slot_duration_minutes of the provider
"""

from dataclasses import replace
from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Union

from provider_availability.provider_availability.doctype.appointment.appointment import Appointment
from provider_availability.provider_availability.doctype.availability_slot.availability_slot import AvailabilitySlot
from provider_availability.provider_availability.doctype.calendar_exception.calendar_exception import CalendarException
from provider_availability.provider_availability.doctype.provider_settings.provider_settings import ProviderSettings
from provider_availability.provider_availability.doctype.time_block.time_block import (
	APPOINTMENT,
	AVAILABILITY,
	TimeBlock,
)
from provider_availability.provider_availability.scheduling.intervals import (
	intervals_overlap,
	minutes_to_time_string,
	split_around,
)
from provider_availability.provider_availability.scheduling.timeline import resolve_timelines


def slots_for_timeline(blocks: Iterable[TimeBlock], slot_duration_minutes: int) -> List[Dict[str, int]]:
	"""
	Slots libres de una linea de tiempo ya resuelta.

	Args:
		blocks: TimeBlocks de una fecha
		slot_duration_minutes: duracion de cada slot

	Returns:
		list[dict]: [{"start": int, "end": int}, ...] en minutos del dia

	Algoritmo:
		1. Por cada bloque Availability, restar las citas que lo solapan
		2. En cada intervalo libre, generar slots cada slot_duration_minutes
		3. Descartar el ultimo slot si no cabe completo
	"""
	blocks = list(blocks)
	appointments = [b for b in blocks if b.kind == APPOINTMENT]

	slots = []
	for block in blocks:
		if block.kind != AVAILABILITY:
			continue

		booked = [a for a in appointments if intervals_overlap(block, a)]
		for free in split_around(block, booked):
			current_start = free["start"]
			while current_start + slot_duration_minutes <= free["end"]:
				slots.append({"start": current_start, "end": current_start + slot_duration_minutes})
				current_start += slot_duration_minutes

	slots.sort(key=lambda s: s["start"])
	return slots


def generate_available_slots(
	start_date: Union[date, str],
	end_date: Union[date, str],
	availability_slots: Iterable[AvailabilitySlot],
	exceptions: Iterable[CalendarException],
	appointments: Iterable[Appointment] = (),
	settings: Optional[ProviderSettings] = None,
	today: Optional[date] = None
) -> List[Dict[str, Any]]:
	"""
	Genera slots discretos disponibles para UI.

	Returns:
		list[dict]: [
			{
				"date": "2026-01-15",
				"start": "09:00",
				"end": "09:30",
				"is_available": True
			},
			...
		]

	Las fechas anteriores a today no generan slots. Las citas visibles
	siempre ocupan su horario, aunque show_appointments este apagado.
	"""
	settings = replace(settings or ProviderSettings(), show_appointments=True)
	if today is None:
		today = settings.today()

	timelines = resolve_timelines(
		start_date, end_date, availability_slots, exceptions, appointments,
		settings=settings, today=today
	)

	result = []
	for date_str, blocks in timelines.items():
		if date_str < today.strftime("%Y-%m-%d"):
			continue

		for slot in slots_for_timeline(blocks, settings.slot_duration_minutes):
			result.append({
				"date": date_str,
				"start": minutes_to_time_string(slot["start"]),
				"end": minutes_to_time_string(slot["end"]),
				"is_available": True
			})

	return result
