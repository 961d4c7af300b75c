"""
Scheduling Exceptions

Typed errors raised by the availability engine and its collaborators.

Overlaps are NOT errors: check_overlap returns them as data so the caller
can decide between Cancel, Replace and Merge.
"""

from typing import Any, List, Optional


class SchedulingError(Exception):
	"""Base de todos los errores del motor."""
	pass


class ValidationError(SchedulingError):
	"""Error estructural detectado antes de cualquier I/O."""
	pass


class InvalidInterval(ValidationError):
	"""end_time <= start_time, o tiempos fuera de 00:00-24:00."""
	pass


class MissingScope(ValidationError):
	"""No hay day_of_week, fecha ni rango de fechas valido."""
	pass


class RepositoryError(SchedulingError):
	"""Error opaco levantado por un repository al borrar o insertar."""
	pass


class PersistenceFailure(SchedulingError):
	"""
	Fallo del repository durante un Replace/Merge.

	Registra exactamente que operaciones se completaron antes del fallo
	para que el caller decida si reintentar o reconciliar a mano.

	Attributes:
		deleted: ids borrados antes del fallo
		inserted: registro insertado (None si el insert no llego a ejecutarse)
		failed_operation: "read", "delete" o "insert"
		failed_id: id del registro cuyo delete fallo (None para insert)
	"""

	def __init__(
		self,
		message: str,
		deleted: Optional[List[str]] = None,
		inserted: Any = None,
		failed_operation: Optional[str] = None,
		failed_id: Optional[str] = None
	):
		super().__init__(message)
		self.deleted = list(deleted or [])
		self.inserted = inserted
		self.failed_operation = failed_operation
		self.failed_id = failed_id

	def as_dict(self) -> dict:
		return {
			"error": str(self),
			"deleted": list(self.deleted),
			"inserted": getattr(self.inserted, "id", None),
			"failed_operation": self.failed_operation,
			"failed_id": self.failed_id
		}
