"""
Time-Off Service

Resolves which Calendar Exceptions apply to a date and arbitrates between
them:
- One-time (date range) exceptions always win and are never split here
- Recurring exceptions are dropped when fully covered, or split around the
  blocks already accepted
"""

from datetime import date
from typing import Iterable, List, Optional

from provider_availability.provider_availability.doctype.calendar_exception.calendar_exception import CalendarException
from provider_availability.provider_availability.doctype.scope import DateRange, Recurring
from provider_availability.provider_availability.doctype.time_block.time_block import TIME_OFF, TimeBlock
from provider_availability.provider_availability.scheduling.availability import is_active_on
from provider_availability.provider_availability.scheduling.intervals import (
	covers,
	intervals_overlap,
	split_around,
)


def get_exception_candidates(
	exceptions: Iterable[CalendarException],
	target_date: date,
	today: date,
	tz_name: Optional[str] = None
) -> List[CalendarException]:
	"""
	Excepciones que aplican a target_date, sin arbitrar.

	- DateRange: start_date <= target_date <= end_date
	- Recurring: mismo dia de la semana + regla de activacion
	"""
	candidates = []

	for exc in exceptions:
		if isinstance(exc.scope, DateRange):
			if exc.scope.matches(target_date):
				candidates.append(exc)
		elif isinstance(exc.scope, Recurring):
			if exc.scope.matches(target_date) and is_active_on(exc.created_at, target_date, today, tz_name):
				candidates.append(exc)

	return candidates


def _to_block(exc: CalendarException) -> TimeBlock:
	return TimeBlock(
		id=exc.id,
		kind=TIME_OFF,
		start_time=exc.start_time,
		end_time=exc.end_time,
		source_ref=exc.id,
		reason=exc.reason,
		is_all_day=exc.is_all_day,
		is_recurring=exc.is_recurring
	)


def resolve_exceptions(
	exceptions: Iterable[CalendarException],
	target_date: date,
	today: date,
	tz_name: Optional[str] = None
) -> List[TimeBlock]:
	"""
	Resuelve las excepciones de una fecha en bloques TimeOff.

	Args:
		exceptions: todas las Calendar Exceptions del proveedor
		target_date: fecha a resolver
		today: fecha actual del proveedor

	Returns:
		list[TimeBlock]: bloques aceptados, en orden de procesamiento

	Algoritmo:
		1. Obtener candidatas (one-time y recurring) para la fecha
		2. Ordenar: one-time primero, luego por start_time
		3. Por cada candidata c, buscar bloques aceptados que se solapan:
			a. Ninguno -> aceptar c
			b. c es one-time -> aceptar c sin cambios
			c. Algun bloque aceptado cubre c completo -> descartar c
			d. Si no -> partir c alrededor de los solapados y aceptar
			   cada segmento (source_ref = c.id)
	"""
	candidates = get_exception_candidates(exceptions, target_date, today, tz_name)
	candidates.sort(key=lambda e: (e.is_recurring, e.start_time, e.end_time, e.id or ""))

	accepted: List[TimeBlock] = []

	for exc in candidates:
		overlapping = [block for block in accepted if intervals_overlap(exc, block)]

		if not overlapping or not exc.is_recurring:
			accepted.append(_to_block(exc))
			continue

		if any(covers(block, exc) for block in overlapping):
			continue

		segments = split_around(exc, overlapping)
		for index, segment in enumerate(segments, 1):
			accepted.append(TimeBlock(
				id=f"{exc.id}-split-{index}",
				kind=TIME_OFF,
				start_time=segment["start"],
				end_time=segment["end"],
				source_ref=exc.id,
				reason=exc.reason,
				original_range=(exc.start_time, exc.end_time),
				is_all_day=exc.is_all_day,
				is_recurring=True
			))

	return accepted
