"""
Availability Service

Resolves which Availability Slots apply to a date, considering:
- Specific-date slots (override every recurring slot of that date)
- Recurring weekly slots
- Activation date (recurring records never appear on past dates before
  they were created)
"""

from datetime import date, datetime, time
from typing import Iterable, List, Optional

from provider_availability.provider_availability.doctype.availability_slot.availability_slot import AvailabilitySlot
from provider_availability.provider_availability.doctype.scope import Recurring, SpecificDate
from provider_availability.utils import to_local_naive


def is_active_on(
	created_at: Optional[datetime],
	target_date: date,
	today: date,
	tz_name: Optional[str] = None
) -> bool:
	"""
	Regla de activacion para registros recurrentes.

	Args:
		created_at: momento de creacion del registro (None = siempre activo)
		target_date: fecha a resolver
		today: fecha actual del proveedor

	Returns:
		bool: True si el registro aplica a target_date

	Para fechas pasadas solo aplica si se creo antes de que empezara
	target_date. Para hoy y fechas futuras aplica siempre.
	"""
	if target_date >= today:
		return True

	if created_at is None:
		return True

	return to_local_naive(created_at, tz_name) < datetime.combine(target_date, time.min)


def resolve_availability(
	slots: Iterable[AvailabilitySlot],
	target_date: date,
	today: date,
	tz_name: Optional[str] = None
) -> List[AvailabilitySlot]:
	"""
	Obtiene los Availability Slots que aplican a una fecha.

	Args:
		slots: todos los slots del proveedor
		target_date: fecha a resolver
		today: fecha actual del proveedor (para la regla de activacion)
		tz_name: timezone del proveedor para normalizar created_at

	Returns:
		list: slots ordenados por start_time

	Algoritmo:
		1. Si hay slots SpecificDate para target_date, retornar SOLO esos
		   (los recurrentes del dia se ignoran aunque cubran otras horas)
		2. Si no, retornar los Recurring del dia de la semana que cumplan
		   la regla de activacion
	"""
	slots = list(slots)

	specific = [
		slot for slot in slots
		if isinstance(slot.scope, SpecificDate) and slot.scope.matches(target_date)
	]
	if specific:
		return sorted(specific, key=lambda s: (s.start_time, s.end_time))

	recurring = [
		slot for slot in slots
		if isinstance(slot.scope, Recurring)
		and slot.scope.matches(target_date)
		and is_active_on(slot.created_at, target_date, today, tz_name)
	]
	return sorted(recurring, key=lambda s: (s.start_time, s.end_time))
