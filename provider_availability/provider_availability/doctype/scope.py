"""
Record Scopes

Where a record applies:
- Recurring: every week on a fixed day (0 = Sunday ... 6 = Saturday)
- SpecificDate: one calendar date
- DateRange: every date between start_date and end_date (inclusive)
"""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any, Dict, Iterator, Optional, Set, Tuple, Union

from provider_availability.exceptions import MissingScope
from provider_availability.utils import getdate, throw

DAYS_OF_WEEK = [
	"Sunday",
	"Monday",
	"Tuesday",
	"Wednesday",
	"Thursday",
	"Friday",
	"Saturday",
]


def weekday_of(target_date: date) -> int:
	"""Dia de la semana con 0 = Sunday (date.weekday() usa 0 = Monday)."""
	return (target_date.weekday() + 1) % 7


@dataclass(frozen=True)
class Recurring:
	day_of_week: int

	def matches(self, target_date: date) -> bool:
		return weekday_of(target_date) == self.day_of_week

	@property
	def day_name(self) -> str:
		return DAYS_OF_WEEK[self.day_of_week]

	def as_dict(self) -> Dict[str, Any]:
		return {"day_of_week": self.day_of_week}


@dataclass(frozen=True)
class SpecificDate:
	date: date

	def matches(self, target_date: date) -> bool:
		return self.date == target_date

	def as_dict(self) -> Dict[str, Any]:
		return {"specific_date": self.date.isoformat()}


@dataclass(frozen=True)
class DateRange:
	start_date: date
	end_date: date

	def matches(self, target_date: date) -> bool:
		return self.start_date <= target_date <= self.end_date

	def intersects(self, other: "DateRange") -> bool:
		return self.start_date <= other.end_date and other.start_date <= self.end_date

	def dates(self) -> Iterator[date]:
		current = self.start_date
		while current <= self.end_date:
			yield current
			current += timedelta(days=1)

	def weekdays(self) -> Set[int]:
		"""Dias de la semana cubiertos por el rango."""
		if (self.end_date - self.start_date).days >= 6:
			return set(range(7))
		return {weekday_of(d) for d in self.dates()}

	def as_dict(self) -> Dict[str, Any]:
		return {
			"start_date": self.start_date.isoformat(),
			"end_date": self.end_date.isoformat()
		}


Scope = Union[Recurring, SpecificDate, DateRange]


def validate_scope(scope: Any, allowed: Tuple[type, ...]) -> None:
	"""
	Valida que el scope exista, sea de un tipo permitido y tenga valores validos.

	Raises:
		MissingScope
	"""
	if scope is None:
		throw("Se requiere day_of_week, fecha o rango de fechas", MissingScope)

	if not isinstance(scope, allowed):
		names = ", ".join(t.__name__ for t in allowed)
		throw(f"Scope {type(scope).__name__} no permitido (use {names})", MissingScope)

	if isinstance(scope, Recurring):
		if isinstance(scope.day_of_week, bool) or not isinstance(scope.day_of_week, int) \
				or not 0 <= scope.day_of_week <= 6:
			throw(f"day_of_week invalido: {scope.day_of_week!r} (use 0-6, 0 = Sunday)", MissingScope)

	elif isinstance(scope, SpecificDate):
		if not isinstance(scope.date, date):
			throw(f"Fecha invalida: {scope.date!r}", MissingScope)

	elif isinstance(scope, DateRange):
		if not isinstance(scope.start_date, date) or not isinstance(scope.end_date, date):
			throw("Rango de fechas invalido", MissingScope)
		if scope.start_date > scope.end_date:
			throw("Start Date debe ser menor o igual que End Date", MissingScope)


def scope_from_dict(data: Dict[str, Any]) -> Optional[Scope]:
	"""
	Construye el scope desde un dict plano.

	Reconoce day_of_week, specific_date, o start_date/end_date
	(end_date opcional: un solo dia). Retorna None si no hay ninguno.
	"""
	if data.get("day_of_week") is not None:
		day = data["day_of_week"]
		if isinstance(day, str) and day in DAYS_OF_WEEK:
			day = DAYS_OF_WEEK.index(day)
		elif isinstance(day, str) and day.isdigit():
			day = int(day)
		return Recurring(day)

	if data.get("specific_date"):
		return SpecificDate(getdate(data["specific_date"]))

	if data.get("start_date"):
		start = getdate(data["start_date"])
		end = getdate(data["end_date"]) if data.get("end_date") else start
		return DateRange(start, end)

	return None
