"""
Write Service

Executes overlap-checked writes against a repository:
- Deletes of a Replace/Merge plan always finish before the insert starts
- Repository failures become PersistenceFailure with the completed steps
- Multi-unit writes commit unit by unit (no cross-unit atomicity)
"""

from typing import Any, Dict, Iterable, List, Optional

from provider_availability.exceptions import PersistenceFailure
from provider_availability.provider_availability.repository.base import AvailabilityRepository
from provider_availability.provider_availability.scheduling.overlap import (
	check_overlap,
	plan_commit,
	plan_resolution,
)
from provider_availability.utils import log_error, logger

COMMITTED = "committed"
CONFLICT = "conflict"
CANCELLED = "cancelled"


def apply_plan(
	repository: AvailabilityRepository,
	doctype: str,
	provider: str,
	plan: Dict[str, Any]
) -> Dict[str, Any]:
	"""
	Ejecuta un plan {"to_delete", "to_insert"} en orden.

	Args:
		repository: store de registros
		doctype: tipo de registro del plan
		provider: nombre del proveedor
		plan: resultado de plan_commit / plan_replace / plan_merge

	Returns:
		dict: {"deleted": [ids], "inserted": record}

	Raises:
		PersistenceFailure: con los ids borrados antes del fallo
	"""
	deleted: List[str] = []

	for record_id in plan["to_delete"]:
		try:
			repository.delete_record(doctype, provider, record_id)
		except Exception as e:
			log_error(
				f"Error deleting {doctype} {record_id} for {provider}: {e} (ya borrados: {deleted})",
				"Apply Plan"
			)
			raise PersistenceFailure(
				f"Error al borrar {doctype} {record_id}: {e}",
				deleted=deleted,
				failed_operation="delete",
				failed_id=record_id
			) from e
		deleted.append(record_id)

	try:
		inserted = repository.insert_record(doctype, provider, plan["to_insert"])
	except Exception as e:
		log_error(
			f"Error inserting {doctype} for {provider}: {e} (ya borrados: {deleted})",
			"Apply Plan"
		)
		raise PersistenceFailure(
			f"Error al insertar {doctype}: {e}",
			deleted=deleted,
			failed_operation="insert"
		) from e

	logger("writes").info(
		f"{doctype} {inserted.id} guardado para {provider} "
		f"(reemplaza: {', '.join(deleted) or '-'})"
	)

	return {"deleted": deleted, "inserted": inserted}


def submit_entry(
	repository: AvailabilityRepository,
	provider: str,
	proposed: Any,
	resolution: Optional[str] = None,
	exclude_id: Optional[str] = None
) -> Dict[str, Any]:
	"""
	Guarda un registro pasando por la guarda de overlaps.

	Args:
		repository: store de registros
		provider: nombre del proveedor
		proposed: AvailabilitySlot o CalendarException
		resolution: None (solo detectar), "cancel", "replace" o "merge"
		exclude_id: id a ignorar al buscar overlaps (para ediciones)

	Returns:
		dict: {
			"status": "committed" | "conflict" | "cancelled",
			"overlap": resultado de check_overlap,
			"deleted": [ids] (si committed),
			"inserted": record (si committed)
		}

	Flujo:
		1. Sin overlap -> insertar de inmediato
		2. Con overlap y sin resolution -> retornar el conflicto sin tocar nada
		3. Con resolution -> ejecutar el plan (Cancel no toca nada)

	Raises:
		PersistenceFailure: si falla la lectura, un delete o el insert
	"""
	doctype = proposed.doctype

	with repository.lock_for(provider):
		try:
			existing = repository.list_records(doctype, provider)
		except Exception as e:
			log_error(f"Error reading {doctype} for {provider}: {e}", "Submit Entry")
			raise PersistenceFailure(
				f"Error al leer {doctype}: {e}",
				failed_operation="read"
			) from e

		overlap_result = check_overlap(proposed, existing, exclude_id=exclude_id)

		if not overlap_result["has_overlap"]:
			outcome = apply_plan(repository, doctype, provider, plan_commit(proposed))
			return {"status": COMMITTED, "overlap": overlap_result, **outcome}

		if resolution is None:
			logger("writes").info(
				f"{doctype} para {provider} se solapa con "
				f"{', '.join(r.id for r in overlap_result['overlapping_entries'])}"
			)
			return {"status": CONFLICT, "overlap": overlap_result}

		plan = plan_resolution(overlap_result, proposed, resolution)
		if plan is None:
			return {"status": CANCELLED, "overlap": overlap_result}

		outcome = apply_plan(repository, doctype, provider, plan)
		return {"status": COMMITTED, "overlap": overlap_result, **outcome}


def commit_batch(
	repository: AvailabilityRepository,
	provider: str,
	units: Iterable[Any]
) -> Dict[str, List[Any]]:
	"""
	Guarda varias unidades (ej: un slot recurrente para varios dias).

	Cada unidad pasa por la guarda de overlaps por separado:
	- sin conflicto -> se guarda de inmediato
	- con conflicto -> se difiere para que el caller decida
	- fallo del repository -> se reporta y se sigue con las demas

	Las unidades ya guardadas quedan guardadas aunque otra falle.

	Returns:
		dict: {
			"committed": [records],
			"deferred": [{"entry": record, "overlap": dict}],
			"failed": [{"entry": record, "error": dict}]
		}

	Raises:
		InvalidInterval, MissingScope: si alguna unidad es invalida
			(se valida todo antes de escribir nada)
	"""
	units = list(units)
	for unit in units:
		unit.validate()

	result = {"committed": [], "deferred": [], "failed": []}

	for unit in units:
		try:
			outcome = submit_entry(repository, provider, unit)
		except PersistenceFailure as e:
			result["failed"].append({"entry": unit, "error": e.as_dict()})
			continue

		if outcome["status"] == COMMITTED:
			result["committed"].append(outcome["inserted"])
		else:
			result["deferred"].append({"entry": unit, "overlap": outcome["overlap"]})

	if result["failed"]:
		logger("writes").warning(
			f"Batch para {provider}: {len(result['committed'])} guardadas, "
			f"{len(result['failed'])} fallidas"
		)

	return result
