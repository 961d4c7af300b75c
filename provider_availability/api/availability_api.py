"""
Availability API Endpoints

Functions for the presentation layer (calendar views, booking widgets,
availability dialogs). Every endpoint:
- Validates string inputs before touching the repository
- Loads the provider's records from the repository
- Delegates to the scheduling services
- Returns plain dicts/lists ready to be serialised as JSON
"""

from typing import Any, Dict, List, Optional

from provider_availability.api.shared import (
	validate_date_string,
	validate_day_of_week,
	validate_days_of_week,
	validate_docname,
	validate_doctype,
	validate_resolution,
	validate_time_string,
)
from provider_availability.exceptions import MissingScope, SchedulingError, ValidationError
from provider_availability.provider_availability.doctype.availability_slot.availability_slot import AvailabilitySlot
from provider_availability.provider_availability.doctype.calendar_exception.calendar_exception import CalendarException
from provider_availability.provider_availability.doctype.provider_settings.provider_settings import ProviderSettings
from provider_availability.provider_availability.doctype.scope import DateRange, Recurring, SpecificDate
from provider_availability.provider_availability.repository.base import AvailabilityRepository
from provider_availability.provider_availability.repository.factory import get_repository
from provider_availability.provider_availability.scheduling.overlap import check_overlap, expand_scope_units
from provider_availability.provider_availability.scheduling.slots import generate_available_slots
from provider_availability.provider_availability.scheduling.timeline import resolve_timeline, resolve_timelines
from provider_availability.provider_availability.scheduling.writes import commit_batch, submit_entry
from provider_availability.utils import cint, getdate, log_error, throw

RECORD_CLASSES = {
	AvailabilitySlot.doctype: AvailabilitySlot,
	CalendarException.doctype: CalendarException,
}

SCOPE_FIELDS = ("day_of_week", "specific_date", "start_date", "end_date", "days_of_week", "dates")


# ===================
# Helpers
# ===================

def _repo(repository: Optional[AvailabilityRepository]) -> AvailabilityRepository:
	return repository or get_repository()


def _validate_entry_fields(doctype: str, entry: Dict[str, Any]) -> None:
	"""Valida formatos de tiempo y fecha de un entry antes de construir el registro."""
	if not isinstance(entry, dict):
		throw("entry must be a dict", ValidationError)

	if not (doctype == CalendarException.doctype and cint(entry.get("is_all_day"))):
		validate_time_string(entry.get("start_time"), "start_time")
		validate_time_string(entry.get("end_time"), "end_time")

	for field_name in ("specific_date", "start_date", "end_date"):
		if entry.get(field_name):
			validate_date_string(entry[field_name], field_name)

	if entry.get("day_of_week") is not None:
		validate_day_of_week(entry["day_of_week"])


def _scope_units(doctype: str, entry: Dict[str, Any]) -> Optional[List[Any]]:
	"""
	Scopes de una escritura que cubre varios dias.

	- "days_of_week": [1, 3, 5] -> un Recurring por dia
	- "dates": ["2026-01-20", ...] -> un SpecificDate (slots) o un
	  DateRange de un dia (excepciones) por fecha

	Returns:
		list | None: None si el entry tiene un solo scope
	"""
	if entry.get("days_of_week") is not None:
		return [Recurring(day) for day in validate_days_of_week(entry["days_of_week"])]

	if entry.get("dates") is not None:
		if not entry["dates"]:
			throw("dates must be a non-empty list", MissingScope)
		dates = [getdate(validate_date_string(d, "dates")) for d in entry["dates"]]
		if doctype == AvailabilitySlot.doctype:
			return [SpecificDate(d) for d in dates]
		return [DateRange(d, d) for d in dates]

	return None


def _build_units(doctype: str, entry: Dict[str, Any]) -> List[Any]:
	"""Construye y valida los registros (uno por scope) de un entry."""
	validate_doctype(doctype)
	_validate_entry_fields(doctype, entry)

	record_class = RECORD_CLASSES[doctype]
	scopes = _scope_units(doctype, entry)

	if scopes is None:
		units = [record_class.from_dict(entry)]
	else:
		base = {key: value for key, value in entry.items() if key not in SCOPE_FIELDS}
		base.update(scopes[0].as_dict())
		record = record_class.from_dict(base)
		units = expand_scope_units(record, scopes)

	for unit in units:
		unit.validate()

	return units


def _serialize_overlap(result: Dict[str, Any]) -> Dict[str, Any]:
	serialized = {
		"has_overlap": result["has_overlap"],
		"overlapping_entries": [record.as_dict() for record in result["overlapping_entries"]]
	}
	if result["has_overlap"]:
		start_time, end_time = result["merge_candidate"]
		serialized["replace_candidate"] = result["replace_candidate"].as_dict()
		serialized["merge_candidate"] = result["replace_candidate"].with_times(start_time, end_time).as_dict()
	return serialized


def _serialize_batch(result: Dict[str, List[Any]]) -> Dict[str, Any]:
	return {
		"committed": [record.as_dict() for record in result["committed"]],
		"deferred": [
			{"entry": item["entry"].as_dict(), "overlap": _serialize_overlap(item["overlap"])}
			for item in result["deferred"]
		],
		"failed": [
			{"entry": item["entry"].as_dict(), "error": item["error"]}
			for item in result["failed"]
		],
		"has_conflicts": bool(result["deferred"])
	}


# ===================
# Timeline
# ===================

def get_timeline(
	provider: str,
	date: str,
	repository: Optional[AvailabilityRepository] = None
) -> List[Dict[str, Any]]:
	"""
	Linea de tiempo de un proveedor para una fecha.

	Args:
		provider: nombre del proveedor
		date: fecha (YYYY-MM-DD)

	Returns:
		list[dict]: TimeBlocks ordenados, ej:
			[
				{"kind": "Availability", "start_time": "09:00", "end_time": "12:00", ...},
				{"kind": "TimeOff", "start_time": "12:00", "end_time": "13:00", ...},
				...
			]
	"""
	provider = validate_docname(provider, "provider")
	date = validate_date_string(date, "date")

	repo = _repo(repository)
	blocks = resolve_timeline(
		date,
		repo.get_availability_slots(provider),
		repo.get_exceptions(provider),
		repo.get_appointments(provider),
		settings=repo.get_settings(provider)
	)
	return [block.as_dict() for block in blocks]


def get_effective_timeline(
	provider: str,
	from_date: str,
	to_date: str,
	repository: Optional[AvailabilityRepository] = None
) -> Dict[str, List[Dict[str, Any]]]:
	"""
	Lineas de tiempo para un rango de fechas (vista semanal / mensual).

	Returns:
		dict: {"2026-01-20": [blocks], "2026-01-21": [...], ...}
	"""
	provider = validate_docname(provider, "provider")
	start_date = getdate(validate_date_string(from_date, "from_date"))
	end_date = getdate(validate_date_string(to_date, "to_date"))

	if start_date > end_date:
		throw("from_date debe ser menor o igual que to_date", ValidationError)

	repo = _repo(repository)
	timelines = resolve_timelines(
		start_date,
		end_date,
		repo.get_availability_slots(provider),
		repo.get_exceptions(provider),
		repo.get_appointments(provider),
		settings=repo.get_settings(provider)
	)
	return {day: [block.as_dict() for block in blocks] for day, blocks in timelines.items()}


def get_available_slots(
	provider: str,
	from_date: str,
	to_date: str,
	repository: Optional[AvailabilityRepository] = None
) -> List[Dict[str, Any]]:
	"""
	Slots disponibles para reservar en un rango de fechas.

	Returns:
		list[dict]: [{"date": "2026-01-20", "start": "09:00", "end": "09:30", "is_available": True}, ...]
	"""
	provider = validate_docname(provider, "provider")
	start_date = getdate(validate_date_string(from_date, "from_date"))
	end_date = getdate(validate_date_string(to_date, "to_date"))

	if start_date > end_date:
		throw("from_date debe ser menor o igual que to_date", ValidationError)

	repo = _repo(repository)
	return generate_available_slots(
		start_date,
		end_date,
		repo.get_availability_slots(provider),
		repo.get_exceptions(provider),
		repo.get_appointments(provider),
		settings=repo.get_settings(provider)
	)


# ===================
# Overlap checks
# ===================

def validate_entry(
	provider: str,
	doctype: str,
	entry: Dict[str, Any],
	repository: Optional[AvailabilityRepository] = None
) -> Dict[str, Any]:
	"""
	Valida un entry ANTES de guardarlo.
	Útil para mostrar errores/warnings en el dialogo antes de submit.

	Returns:
		dict: {
			"valid": bool,
			"errors": list[str],
			"warnings": list[str],
			"overlap_info": list[dict] (una por unidad)
		}
	"""
	errors = []
	warnings = []
	overlap_info = []

	try:
		provider = validate_docname(provider, "provider")
		units = _build_units(doctype, entry)
	except SchedulingError as e:
		errors.append(str(e))
		return {"valid": False, "errors": errors, "warnings": warnings, "overlap_info": overlap_info}

	existing = _repo(repository).list_records(doctype, provider)

	for unit in units:
		result = check_overlap(unit, existing, exclude_id=entry.get("id"))
		overlap_info.append(_serialize_overlap(result))
		if result["has_overlap"]:
			names = ", ".join(record.id for record in result["overlapping_entries"])
			warnings.append(f"El horario se solapa con {names}")

	return {"valid": True, "errors": errors, "warnings": warnings, "overlap_info": overlap_info}


def check_availability_overlap(
	provider: str,
	entry: Dict[str, Any],
	repository: Optional[AvailabilityRepository] = None
) -> Dict[str, Any]:
	"""
	Detecta overlaps de un Availability Slot propuesto (una sola unidad).

	Args:
		entry: {"day_of_week": 2 | "specific_date": "2026-01-20", "start_time": "09:00", "end_time": "12:00"}

	Returns:
		dict: {"has_overlap", "overlapping_entries", "replace_candidate", "merge_candidate"}
	"""
	return _check_single_overlap(provider, AvailabilitySlot.doctype, entry, repository)


def check_time_off_overlap(
	provider: str,
	entry: Dict[str, Any],
	repository: Optional[AvailabilityRepository] = None
) -> Dict[str, Any]:
	"""Detecta overlaps de una Calendar Exception propuesta (una sola unidad)."""
	return _check_single_overlap(provider, CalendarException.doctype, entry, repository)


def _check_single_overlap(
	provider: str,
	doctype: str,
	entry: Dict[str, Any],
	repository: Optional[AvailabilityRepository]
) -> Dict[str, Any]:
	provider = validate_docname(provider, "provider")
	units = _build_units(doctype, entry)
	if len(units) != 1:
		throw("Use validate_entry para escrituras de varios dias", ValidationError)

	existing = _repo(repository).list_records(doctype, provider)
	return _serialize_overlap(check_overlap(units[0], existing, exclude_id=entry.get("id")))


# ===================
# Writes
# ===================

def create_availability(
	provider: str,
	entry: Dict[str, Any],
	repository: Optional[AvailabilityRepository] = None
) -> Dict[str, Any]:
	"""
	Crea Availability Slots (uno o varios dias).

	Las unidades sin conflicto se guardan de inmediato; las que se solapan
	quedan en "deferred" hasta que el caller llame a resolve_overlap.

	Args:
		entry: {
			"days_of_week": [1, 3] | "day_of_week": 1 | "specific_date": "..." | "dates": [...],
			"start_time": "09:00",
			"end_time": "17:00"
		}

	Returns:
		dict: {"committed": [...], "deferred": [...], "failed": [...], "has_conflicts": bool}
	"""
	return _create(provider, AvailabilitySlot.doctype, entry, repository)


def create_time_off(
	provider: str,
	entry: Dict[str, Any],
	repository: Optional[AvailabilityRepository] = None
) -> Dict[str, Any]:
	"""
	Crea Calendar Exceptions (recurrentes por dia, o por rango de fechas).

	Args:
		entry: {
			"days_of_week": [1] | "start_date": "2026-01-20", "end_date": "2026-01-22",
			"start_time": "12:00", "end_time": "13:00" (o "is_all_day": True),
			"reason": "Vacaciones"
		}
	"""
	return _create(provider, CalendarException.doctype, entry, repository)


def _create(
	provider: str,
	doctype: str,
	entry: Dict[str, Any],
	repository: Optional[AvailabilityRepository]
) -> Dict[str, Any]:
	provider = validate_docname(provider, "provider")
	units = _build_units(doctype, entry)

	result = commit_batch(_repo(repository), provider, units)
	return _serialize_batch(result)


def resolve_overlap(
	provider: str,
	doctype: str,
	entry: Dict[str, Any],
	resolution: str,
	repository: Optional[AvailabilityRepository] = None
) -> Dict[str, Any]:
	"""
	Aplica la decision del usuario sobre un conflicto (una sola unidad).

	El overlap se vuelve a calcular contra el estado actual del repository,
	asi un conflicto resuelto en otra pestaña no borra registros nuevos.

	Args:
		doctype: "Availability Slot" o "Calendar Exception"
		entry: el entry diferido (mismo formato que en create_*)
		resolution: "cancel", "replace" o "merge"

	Returns:
		dict: {
			"status": "committed" | "cancelled" | "conflict",
			"deleted": [ids],
			"inserted": dict | None
		}

	Raises:
		PersistenceFailure: si el repository falla a mitad del Replace/Merge
	"""
	provider = validate_docname(provider, "provider")
	resolution = validate_resolution(resolution)
	units = _build_units(doctype, entry)
	if len(units) != 1:
		throw("resolve_overlap acepta una sola unidad", ValidationError)

	try:
		outcome = submit_entry(_repo(repository), provider, units[0], resolution=resolution)
	except SchedulingError as e:
		log_error(f"Error in resolve_overlap for {provider}: {e}", "API Error")
		raise

	return {
		"status": outcome["status"],
		"deleted": outcome.get("deleted", []),
		"inserted": outcome["inserted"].as_dict() if outcome.get("inserted") else None
	}


def delete_entry(
	provider: str,
	doctype: str,
	entry_id: str,
	repository: Optional[AvailabilityRepository] = None
) -> Dict[str, Any]:
	"""Borra un Availability Slot o Calendar Exception completo."""
	provider = validate_docname(provider, "provider")
	doctype = validate_doctype(doctype)
	entry_id = validate_docname(entry_id, "entry_id")

	_repo(repository).delete_record(doctype, provider, entry_id)
	return {"deleted": [entry_id]}


# ===================
# Provider Settings
# ===================

def save_provider_settings(
	provider: str,
	settings: Dict[str, Any],
	repository: Optional[AvailabilityRepository] = None
) -> Dict[str, Any]:
	"""
	Guarda la configuracion del proveedor.

	Args:
		settings: {"timezone": "America/Bogota", "slot_duration_minutes": 30, "show_appointments": True}
	"""
	provider = validate_docname(provider, "provider")
	record = ProviderSettings.from_dict({**settings, "provider": provider})
	return _repo(repository).save_settings(record).as_dict()


def get_provider_settings(
	provider: str,
	repository: Optional[AvailabilityRepository] = None
) -> Dict[str, Any]:
	provider = validate_docname(provider, "provider")
	return _repo(repository).get_settings(provider).as_dict()
