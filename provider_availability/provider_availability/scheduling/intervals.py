"""
Interval Calculus

Minute-of-day arithmetic shared by every resolver:
- Overlap test (half-open intervals)
- Merge of two intervals
- Splitting an interval around blockers
"""

from datetime import datetime, time, timedelta
from typing import Any, Dict, Iterable, List, Tuple, Union

from provider_availability.exceptions import InvalidInterval
from provider_availability.utils import throw

MINUTES_PER_DAY = 24 * 60

Interval = Dict[str, int]


def to_minutes(time_value: Union[int, time, timedelta, str]) -> int:
	"""
	Convierte diferentes formatos de tiempo a minutos desde medianoche.

	Args:
		time_value: int (minutos), time, timedelta (desde medianoche),
			o string "HH:MM" / "HH:MM:SS" ("24:00" = fin del dia)

	Returns:
		int: minutos desde medianoche (0..1440)
	"""
	if isinstance(time_value, bool):
		raise ValueError(f"Cannot convert {type(time_value)} to minutes")
	if isinstance(time_value, int):
		return time_value
	elif isinstance(time_value, time):
		return time_value.hour * 60 + time_value.minute
	elif isinstance(time_value, timedelta):
		# timedelta representa tiempo desde medianoche
		return int(time_value.total_seconds() // 60)
	elif isinstance(time_value, str):
		parts = time_value.strip().split(":")
		if len(parts) not in (2, 3) or not all(p.isdigit() for p in parts):
			raise ValueError(f"Invalid time string: {time_value!r}")
		hours, minutes = int(parts[0]), int(parts[1])
		if minutes > 59:
			raise ValueError(f"Invalid time string: {time_value!r}")
		return hours * 60 + minutes
	else:
		raise ValueError(f"Cannot convert {type(time_value)} to minutes")


def minutes_to_time_string(minutes: int) -> str:
	"""Formatea minutos como "HH:MM" (1440 -> "24:00")."""
	return f"{minutes // 60:02d}:{minutes % 60:02d}"


def datetime_to_minutes(value: datetime) -> int:
	return value.hour * 60 + value.minute


def validate_interval(start: int, end: int) -> None:
	"""
	Valida 0 <= start < end <= 1440.

	Raises:
		InvalidInterval
	"""
	if start < 0 or end > MINUTES_PER_DAY:
		throw(
			f"Intervalo fuera del dia: {minutes_to_time_string(start)}-{minutes_to_time_string(end)}",
			InvalidInterval
		)
	if end <= start:
		throw(
			f"End Time ({minutes_to_time_string(end)}) debe ser mayor que Start Time ({minutes_to_time_string(start)})",
			InvalidInterval
		)


def as_interval(value: Any) -> Interval:
	"""
	Normaliza a {"start": int, "end": int}.

	Acepta dicts con start/end, tuplas (start, end) u objetos con
	start_time/end_time (records y TimeBlocks).
	"""
	if isinstance(value, dict):
		return {"start": value["start"], "end": value["end"]}
	if isinstance(value, tuple):
		return {"start": value[0], "end": value[1]}
	return {"start": value.start_time, "end": value.end_time}


def overlaps(a_start: int, a_end: int, b_start: int, b_end: int) -> bool:
	"""
	True si dos intervalos half-open se solapan.

	Los extremos que solo se tocan (10:00-11:00 y 11:00-12:00) no cuentan.
	"""
	return a_start < b_end and b_start < a_end


def intervals_overlap(a: Any, b: Any) -> bool:
	"""overlaps() sobre cualquier cosa que as_interval acepte."""
	a, b = as_interval(a), as_interval(b)
	return overlaps(a["start"], a["end"], b["start"], b["end"])


def merge(a_start: int, a_end: int, b_start: int, b_end: int) -> Tuple[int, int]:
	"""El intervalo mas pequeño que contiene a ambos."""
	return min(a_start, b_start), max(a_end, b_end)


def covers(outer: Any, inner: Any) -> bool:
	"""True si outer contiene completamente a inner."""
	outer, inner = as_interval(outer), as_interval(inner)
	return outer["start"] <= inner["start"] and outer["end"] >= inner["end"]


def split_around(base: Any, blockers: Iterable[Any]) -> List[Interval]:
	"""
	Parte un intervalo alrededor de bloqueos.

	Args:
		base: intervalo a partir
		blockers: bloqueos (se ordenan por start si no lo estan)

	Returns:
		list: segmentos de base no cubiertos por ningun bloqueo, en orden

	Algoritmo:
		1. cursor = base.start
		2. Por cada bloqueo (ordenado por start):
			a. Si bloqueo.start > cursor, emitir [cursor, bloqueo.start)
			b. cursor = max(cursor, bloqueo.end)
		3. Si cursor < base.end, emitir [cursor, base.end)
	"""
	base = as_interval(base)
	ordered = sorted((as_interval(b) for b in blockers), key=lambda x: x["start"])

	segments = []
	cursor = base["start"]

	for blocker in ordered:
		if blocker["start"] > cursor:
			# Un bloqueo que empieza despues del fin no recorta nada
			segments.append({"start": cursor, "end": min(blocker["start"], base["end"])})
		cursor = max(cursor, blocker["end"])
		if cursor >= base["end"]:
			break

	if cursor < base["end"]:
		segments.append({"start": cursor, "end": base["end"]})

	return [s for s in segments if s["end"] > s["start"]]


def merge_intervals(intervals: Iterable[Any]) -> List[Interval]:
	"""
	Une intervalos adyacentes o overlapping.

	Returns:
		list: intervalos merged, ordenados por start
	"""
	ordered = sorted((as_interval(i) for i in intervals), key=lambda x: x["start"])
	if not ordered:
		return []

	merged = [ordered[0]]

	for current in ordered[1:]:
		last_merged = merged[-1]

		# Si current se solapa o es adyacente a last_merged, merge
		if current["start"] <= last_merged["end"]:
			if current["end"] > last_merged["end"]:
				last_merged["end"] = current["end"]
		else:
			merged.append(current)

	return merged
