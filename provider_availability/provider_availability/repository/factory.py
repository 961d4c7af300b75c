"""
Repository Factory

Factory pattern to get the configured repository backend.
"""

from typing import Dict, Optional

from provider_availability import hooks
from provider_availability.provider_availability.repository.base import AvailabilityRepository

_instances: Dict[str, AvailabilityRepository] = {}


def get_repository(backend: Optional[str] = None) -> AvailabilityRepository:
	"""
	Factory para obtener el repository segun backend.

	Args:
		backend: "memory" (default: hooks.repository_backend)

	Returns:
		AvailabilityRepository: instancia compartida del backend

	Raises:
		ValueError: si backend no es soportado
	"""
	backend = backend or hooks.repository_backend

	if backend not in _instances:
		if backend == "memory":
			from .memory import InMemoryRepository
			_instances[backend] = InMemoryRepository()
		else:
			raise ValueError(f"Unsupported repository backend: {backend}")

	return _instances[backend]


def reset_repository(backend: Optional[str] = None) -> None:
	"""Descarta la instancia compartida (usado por los tests)."""
	_instances.pop(backend or hooks.repository_backend, None)
