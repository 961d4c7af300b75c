"""
Shared utilities: logging, error raising, date parsing and timezones.
"""

import logging
from datetime import date, datetime
from typing import Any, Optional, Type, Union

import pytz
from dateutil import parser as date_parser

from provider_availability import hooks
from provider_availability.exceptions import ValidationError


def logger(module: Optional[str] = None) -> logging.Logger:
	"""
	Logger del app (namespace provider_availability).

	Args:
		module: sufijo opcional, ej: "writes" -> provider_availability.writes
	"""
	name = hooks.logger_name
	if module:
		name = f"{name}.{module}"
	return logging.getLogger(name)


def log_error(message: str, title: Optional[str] = None) -> None:
	"""Registra un error con titulo, como en el Error Log."""
	if title:
		logger().error("%s: %s", title, message)
	else:
		logger().error(message)


def throw(message: str, exc: Type[Exception] = ValidationError) -> None:
	"""Levanta exc con el mensaje dado."""
	raise exc(message)


def cint(value: Any, default: int = 0) -> int:
	"""
	Convierte un campo check (bool, int o string) a 0/1.

	"1", "true", "yes" -> 1; "0", "false", "no", "" -> 0. Cualquier otro
	string numerico se evalua como numero; lo demas retorna default.
	"""
	if value is None:
		return default
	if isinstance(value, bool):
		return int(value)
	if isinstance(value, (int, float)):
		return 1 if value else 0

	text = str(value).strip().lower()
	if text in ("", "0", "false", "no", "off"):
		return 0
	if text in ("1", "true", "yes", "on"):
		return 1
	try:
		return 1 if float(text) else 0
	except ValueError:
		return default


def getdate(value: Union[date, datetime, str]) -> date:
	"""
	Convierte date, datetime o string (YYYY-MM-DD) a date.

	Raises:
		ValidationError: si el string no es una fecha valida
	"""
	if isinstance(value, datetime):
		return value.date()
	if isinstance(value, date):
		return value

	try:
		return date_parser.isoparse(str(value).strip()).date()
	except (ValueError, OverflowError):
		throw(f"Fecha invalida: {value}")


def get_datetime(value: Union[datetime, date, str]) -> datetime:
	"""
	Convierte datetime, date o string a datetime.

	Acepta "YYYY-MM-DD HH:MM:SS" e ISO 8601 (con o sin offset).
	"""
	if isinstance(value, datetime):
		return value
	if isinstance(value, date):
		return datetime.combine(value, datetime.min.time())

	try:
		return date_parser.parse(str(value).strip())
	except (ValueError, OverflowError):
		throw(f"Fecha/hora invalida: {value}")


def get_timezone(tz_name: Optional[str]) -> pytz.BaseTzInfo:
	"""
	Obtiene el timezone pytz; si el nombre es invalido usa UTC y loguea.
	"""
	tz_name = tz_name or hooks.default_timezone
	try:
		return pytz.timezone(tz_name)
	except pytz.UnknownTimeZoneError:
		log_error(f"Invalid timezone '{tz_name}', usando UTC", "Get Timezone")
		return pytz.UTC


def now_datetime(tz_name: Optional[str] = None) -> datetime:
	"""Fecha y hora actual (naive) en el timezone dado."""
	tz = get_timezone(tz_name)
	return datetime.now(pytz.UTC).astimezone(tz).replace(tzinfo=None)


def to_local_naive(value: datetime, tz_name: Optional[str] = None) -> datetime:
	"""
	Normaliza un datetime al reloj local del proveedor sin tzinfo.

	Los datetimes naive se asumen ya expresados en hora local.
	"""
	if value.tzinfo is None:
		return value
	return value.astimezone(get_timezone(tz_name)).replace(tzinfo=None)
