"""
Base Repository

Defines the interface every record store must implement.

Contract:
- Read-after-write: list_records reflects every insert/delete that returned
- delete_record / insert_record are single calls; the caller issues them in
  order and waits for each one to return before the next
"""

from abc import ABC, abstractmethod
from contextlib import nullcontext
from typing import Any, ContextManager, List

from provider_availability.provider_availability.doctype.appointment.appointment import Appointment
from provider_availability.provider_availability.doctype.availability_slot.availability_slot import AvailabilitySlot
from provider_availability.provider_availability.doctype.calendar_exception.calendar_exception import CalendarException
from provider_availability.provider_availability.doctype.provider_settings.provider_settings import ProviderSettings

DOCTYPES = {
	AvailabilitySlot.doctype: AvailabilitySlot,
	CalendarException.doctype: CalendarException,
	Appointment.doctype: Appointment,
}


class AvailabilityRepository(ABC):
	"""
	Interfaz base para stores de registros de disponibilidad.

	Todos los stores deben implementar estos métodos.
	"""

	@abstractmethod
	def list_records(self, doctype: str, provider: str) -> List[Any]:
		"""
		Registros de un tipo para un proveedor, en orden de insercion.

		Args:
			doctype: "Availability Slot", "Calendar Exception" o "Appointment"
			provider: nombre del proveedor
		"""
		pass

	@abstractmethod
	def insert_record(self, doctype: str, provider: str, record: Any) -> Any:
		"""
		Inserta un registro y lo retorna con id (y created_at) asignados.

		Raises:
			RepositoryError: si falla la insercion
		"""
		pass

	@abstractmethod
	def delete_record(self, doctype: str, provider: str, record_id: str) -> None:
		"""
		Borra un registro completo por id.

		Raises:
			RepositoryError: si el registro no existe o falla el borrado
		"""
		pass

	@abstractmethod
	def get_settings(self, provider: str) -> ProviderSettings:
		"""Provider Settings del proveedor (defaults si no tiene)."""
		pass

	@abstractmethod
	def save_settings(self, settings: ProviderSettings) -> ProviderSettings:
		pass

	def lock_for(self, provider: str) -> ContextManager:
		"""
		Lock para serializar check + write de un proveedor.

		Stores con su propio aislamiento pueden dejar el default (sin lock).
		"""
		return nullcontext()

	def get_availability_slots(self, provider: str) -> List[AvailabilitySlot]:
		return self.list_records(AvailabilitySlot.doctype, provider)

	def get_exceptions(self, provider: str) -> List[CalendarException]:
		return self.list_records(CalendarException.doctype, provider)

	def get_appointments(self, provider: str) -> List[Appointment]:
		return self.list_records(Appointment.doctype, provider)
