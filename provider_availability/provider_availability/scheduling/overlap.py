"""
Overlap Detection Service

Write-path guard for Availability Slots and Calendar Exceptions:
- Detects overlaps against existing records of the same type before commit
- Proposes Replace / Merge candidates
- Builds delete/insert plans once the caller picks a resolution
"""

from dataclasses import replace
from typing import Any, Dict, Iterable, List, Optional

from provider_availability.exceptions import ValidationError
from provider_availability.provider_availability.doctype.scope import (
	DateRange,
	Recurring,
	Scope,
	SpecificDate,
	weekday_of,
)
from provider_availability.provider_availability.scheduling.intervals import intervals_overlap, merge
from provider_availability.utils import throw

CANCEL = "cancel"
REPLACE = "replace"
MERGE = "merge"

RESOLUTIONS = (CANCEL, REPLACE, MERGE)


def scope_conflicts(proposed: Scope, existing: Scope) -> bool:
	"""
	True si dos scopes pueden chocar en algun dia.

	- SpecificDate: contra SpecificDate de la misma fecha y Recurring del
	  mismo dia de la semana
	- Recurring: solo contra Recurring del mismo dia
	- DateRange: contra DateRange que se cruzan y Recurring de cualquier
	  dia de la semana dentro del rango
	"""
	if isinstance(proposed, Recurring):
		return isinstance(existing, Recurring) and existing.day_of_week == proposed.day_of_week

	if isinstance(proposed, SpecificDate):
		if isinstance(existing, SpecificDate):
			return existing.date == proposed.date
		if isinstance(existing, Recurring):
			return existing.day_of_week == weekday_of(proposed.date)
		return False

	if isinstance(proposed, DateRange):
		if isinstance(existing, DateRange):
			return proposed.intersects(existing)
		if isinstance(existing, Recurring):
			return existing.day_of_week in proposed.weekdays()
		return False

	return False


def check_overlap(
	proposed: Any,
	existing: Iterable[Any],
	exclude_id: Optional[str] = None
) -> Dict[str, Any]:
	"""
	Detecta overlaps de un registro propuesto con registros existentes.

	Args:
		proposed: AvailabilitySlot o CalendarException a guardar
		existing: registros existentes del mismo tipo
		exclude_id: id a ignorar (para ediciones)

	Returns:
		dict: {
			"has_overlap": bool,
			"overlapping_entries": [records],
			"replace_candidate": proposed (solo si has_overlap),
			"merge_candidate": (start, end) (solo si has_overlap)
		}

	Raises:
		InvalidInterval, MissingScope: antes de comparar nada

	Algoritmo:
		1. Validar el registro propuesto
		2. Filtrar existentes por scope compatible
		3. Filtrar los que se solapan en horario
		4. Merge candidate = merge(proposed, overlapping[0]); los demas
		   solapados se reportan pero no entran en el merge
	"""
	proposed.validate()

	candidates = [
		record for record in existing
		if record.doctype == proposed.doctype
		and (exclude_id is None or record.id != exclude_id)
		and scope_conflicts(proposed.scope, record.scope)
	]

	overlapping = [record for record in candidates if intervals_overlap(proposed, record)]

	if not overlapping:
		return {
			"has_overlap": False,
			"overlapping_entries": []
		}

	first = overlapping[0]
	return {
		"has_overlap": True,
		"overlapping_entries": overlapping,
		"replace_candidate": proposed,
		"merge_candidate": merge(proposed.start_time, proposed.end_time, first.start_time, first.end_time)
	}


def plan_commit(proposed: Any) -> Dict[str, Any]:
	"""Plan para un registro sin conflictos: solo insertar."""
	return {"to_delete": [], "to_insert": proposed}


def plan_replace(overlap_result: Dict[str, Any], proposed: Any) -> Dict[str, Any]:
	"""
	Replace: borrar todos los solapados e insertar el propuesto tal cual.

	Returns:
		dict: {"to_delete": [ids], "to_insert": record}
	"""
	return {
		"to_delete": [record.id for record in overlap_result.get("overlapping_entries", [])],
		"to_insert": proposed
	}


def plan_merge(overlap_result: Dict[str, Any], proposed: Any) -> Dict[str, Any]:
	"""
	Merge: borrar todos los solapados e insertar un registro que cubre
	merge_candidate (con el scope y datos del propuesto).
	"""
	if not overlap_result.get("has_overlap"):
		throw("No hay overlap que combinar", ValidationError)

	start_time, end_time = overlap_result["merge_candidate"]
	return {
		"to_delete": [record.id for record in overlap_result["overlapping_entries"]],
		"to_insert": proposed.with_times(start_time, end_time)
	}


def plan_resolution(
	overlap_result: Dict[str, Any],
	proposed: Any,
	resolution: str
) -> Optional[Dict[str, Any]]:
	"""
	Plan segun la decision del caller.

	Returns:
		dict | None: None para Cancel (no se toca nada)
	"""
	if resolution == CANCEL:
		return None
	elif resolution == REPLACE:
		return plan_replace(overlap_result, proposed)
	elif resolution == MERGE:
		return plan_merge(overlap_result, proposed)
	else:
		throw(f"Resolucion invalida: {resolution!r} (use {', '.join(RESOLUTIONS)})", ValidationError)


def expand_scope_units(proposed: Any, scopes: Iterable[Scope]) -> List[Any]:
	"""
	Una escritura que cubre varios dias se procesa como una unidad por scope.

	Ej: un slot recurrente para lunes, miercoles y viernes produce tres
	registros, cada uno con su propio Recurring(day_of_week).
	"""
	return [replace(proposed, id=None, scope=scope) for scope in scopes]
