"""
Timeline Service

Combines resolved availability, resolved time-off and appointments into one
sorted sequence of TimeBlocks per date:
- Availability is cut by time-off (never the other way around)
- Appointments are projected as-is
- Ties on start minute: TimeOff < Availability < Appointment
"""

from collections import OrderedDict
from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional, Tuple, Union

from provider_availability.provider_availability.doctype.appointment.appointment import Appointment
from provider_availability.provider_availability.doctype.availability_slot.availability_slot import AvailabilitySlot
from provider_availability.provider_availability.doctype.calendar_exception.calendar_exception import CalendarException
from provider_availability.provider_availability.doctype.provider_settings.provider_settings import ProviderSettings
from provider_availability.provider_availability.doctype.time_block.time_block import (
	APPOINTMENT,
	AVAILABILITY,
	TimeBlock,
)
from provider_availability.provider_availability.scheduling.availability import resolve_availability
from provider_availability.provider_availability.scheduling.intervals import intervals_overlap, split_around
from provider_availability.provider_availability.scheduling.time_off import resolve_exceptions
from provider_availability.utils import getdate


def _availability_blocks(
	slots: List[AvailabilitySlot],
	time_off: List[TimeBlock]
) -> List[TimeBlock]:
	"""Parte cada slot alrededor de los bloques TimeOff que lo solapan."""
	blocks = []

	for slot in slots:
		overlapping = sorted(
			(block for block in time_off if intervals_overlap(slot, block)),
			key=lambda b: b.start_time
		)

		if not overlapping:
			blocks.append(TimeBlock(
				id=slot.id,
				kind=AVAILABILITY,
				start_time=slot.start_time,
				end_time=slot.end_time,
				source_ref=slot.id,
				is_recurring=slot.is_recurring
			))
			continue

		for index, segment in enumerate(split_around(slot, overlapping), 1):
			blocks.append(TimeBlock(
				id=f"{slot.id}-split-{index}",
				kind=AVAILABILITY,
				start_time=segment["start"],
				end_time=segment["end"],
				source_ref=slot.id,
				original_range=(slot.start_time, slot.end_time),
				is_recurring=slot.is_recurring
			))

	return blocks


def _appointment_blocks(
	appointments: Iterable[Appointment],
	target_date: date,
	settings: ProviderSettings
) -> List[TimeBlock]:
	"""Citas visibles que empiezan en target_date, en minutos del dia."""
	blocks = []

	if not settings.show_appointments:
		return blocks

	for appt in appointments:
		if not settings.shows_appointment(appt.status):
			continue
		if appt.local_date(settings.timezone) != target_date:
			continue

		start_minutes, end_minutes = appt.minutes_on(target_date, settings.timezone)
		if end_minutes <= start_minutes:
			continue

		blocks.append(TimeBlock(
			id=appt.id,
			kind=APPOINTMENT,
			start_time=start_minutes,
			end_time=end_minutes,
			source_ref=appt.id,
			client_name=appt.client_name,
			status=appt.status
		))

	return blocks


def resolve_timeline(
	target_date: Union[date, str],
	availability_slots: Iterable[AvailabilitySlot],
	exceptions: Iterable[CalendarException],
	appointments: Iterable[Appointment] = (),
	settings: Optional[ProviderSettings] = None,
	today: Optional[date] = None
) -> List[TimeBlock]:
	"""
	Linea de tiempo de un proveedor para una fecha.

	Args:
		target_date: fecha (date o string YYYY-MM-DD)
		availability_slots: todos los Availability Slots del proveedor
		exceptions: todas las Calendar Exceptions del proveedor
		appointments: citas del proveedor (se filtran por fecha y estado)
		settings: Provider Settings (timezone, citas visibles)
		today: fecha actual; por defecto settings.today()

	Returns:
		list[TimeBlock]: ordenada por start_time, desempate por tipo

	Algoritmo:
		1. Resolver disponibilidad (specific-date vs recurring)
		2. Resolver excepciones (one-time vs recurring)
		3. Partir disponibilidad alrededor de las excepciones
		4. Agregar excepciones sin partir y citas del dia
		5. Ordenar
	"""
	settings = settings or ProviderSettings()
	target_date = getdate(target_date)
	if today is None:
		today = settings.today()

	slots = resolve_availability(availability_slots, target_date, today, settings.timezone)
	time_off = resolve_exceptions(exceptions, target_date, today, settings.timezone)

	blocks = _availability_blocks(slots, time_off)
	blocks.extend(time_off)
	blocks.extend(_appointment_blocks(appointments, target_date, settings))

	blocks.sort(key=lambda b: b.sort_key())
	return blocks


def resolve_timelines(
	start_date: Union[date, str],
	end_date: Union[date, str],
	availability_slots: Iterable[AvailabilitySlot],
	exceptions: Iterable[CalendarException],
	appointments: Iterable[Appointment] = (),
	settings: Optional[ProviderSettings] = None,
	today: Optional[date] = None
) -> Dict[str, List[TimeBlock]]:
	"""
	Lineas de tiempo para un rango de fechas (inclusive).

	Returns:
		dict: {
			"2026-01-15": [TimeBlock, ...],
			"2026-01-16": [...],
			...
		}
	"""
	settings = settings or ProviderSettings()
	start_date = getdate(start_date)
	end_date = getdate(end_date)
	if today is None:
		today = settings.today()

	availability_slots = list(availability_slots)
	exceptions = list(exceptions)
	appointments = list(appointments)

	result = OrderedDict()
	current_date = start_date

	while current_date <= end_date:
		result[current_date.strftime("%Y-%m-%d")] = resolve_timeline(
			current_date, availability_slots, exceptions, appointments,
			settings=settings, today=today
		)
		current_date += timedelta(days=1)

	return result


def partition_all_day(blocks: Iterable[TimeBlock]) -> Tuple[List[TimeBlock], List[TimeBlock]]:
	"""
	Separa bloques all-day de los bloques con horario.

	Returns:
		tuple: (all_day, timed), ambos conservando el orden recibido
	"""
	all_day, timed = [], []
	for block in blocks:
		(all_day if block.is_all_day else timed).append(block)
	return all_day, timed
