"""
Business Hours Rules

Opening and closing rules of the salon:
- opening: franjas en las que se puede reservar
- closing: franjas que anulan opening (almuerzo, vacaciones)
"""

from datetime import date, datetime
from typing import Any, Dict, FrozenSet, Iterable, List, Optional, Union

from .timeutils import WEEKDAY_IDS, format_minutes, parse_hhmm, parse_instant


class BusinessHoursRule:
	"""
	Regla recurrente o con rango de fechas.

	- days vacío = todos los días
	- date_from/date_to ausentes = sin límite
	- el rango horario es semiabierto: [start_time, end_time)
	"""

	def __init__(
		self,
		start_time: Any,
		end_time: Any,
		days: Optional[Iterable[str]] = None,
		date_from: Optional[Union[date, datetime, str]] = None,
		date_to: Optional[Union[date, datetime, str]] = None,
		name: Optional[str] = None,
		id: Optional[Any] = None,
		tz=None,
	) -> None:
		self.id = id
		self.name = name
		self.start_minutes = parse_hhmm(start_time)
		self.end_minutes = parse_hhmm(end_time, allow_end_of_day=True)
		self.days: FrozenSet[str] = frozenset(d.strip().lower() for d in (days or []) if d and d.strip())
		self.date_from = _to_date(date_from, tz)
		self.date_to = _to_date(date_to, tz)

		unknown = self.days.difference(WEEKDAY_IDS)
		if unknown:
			raise ValueError(f"Unknown weekday id(s): {', '.join(sorted(unknown))}")
		if self.start_minutes >= self.end_minutes:
			raise ValueError(
				f"Start time ({self.start_time}) must be before end time ({self.end_time})"
			)
		if self.date_from and self.date_to and self.date_from > self.date_to:
			raise ValueError("Date range 'from' must be on or before 'to'")

	@classmethod
	def from_dict(cls, data: Dict[str, Any], tz=None) -> "BusinessHoursRule":
		"""
		Construye una regla desde un dict.

		Acepta la forma almacenada (startTime, endTime, dateRange: {from, to})
		y la forma snake_case (start_time, end_time, date_from, date_to).
		"""
		date_range = data.get("dateRange") or data.get("date_range") or {}
		days = data.get("days") or []
		if isinstance(days, str):
			days = days.split(",")

		return cls(
			start_time=data.get("startTime", data.get("start_time")),
			end_time=data.get("endTime", data.get("end_time")),
			days=days,
			date_from=date_range.get("from", data.get("date_from")),
			date_to=date_range.get("to", data.get("date_to")),
			name=data.get("name", data.get("rule_name")),
			id=data.get("id"),
			tz=tz,
		)

	@property
	def start_time(self) -> str:
		return format_minutes(self.start_minutes)

	@property
	def end_time(self) -> str:
		return format_minutes(self.end_minutes)

	def matches_day(self, day_id: str) -> bool:
		return not self.days or day_id in self.days

	def covers_date(self, day: date) -> bool:
		if self.date_from and day < self.date_from:
			return False
		if self.date_to and day > self.date_to:
			return False
		return True

	def covers_minute(self, minute: int) -> bool:
		return self.start_minutes <= minute < self.end_minutes

	def applies_to(self, day: date, day_id: str, minute: int) -> bool:
		return self.matches_day(day_id) and self.covers_date(day) and self.covers_minute(minute)

	def as_dict(self) -> Dict[str, Any]:
		return {
			"id": self.id,
			"name": self.name or "",
			"startTime": self.start_time,
			"endTime": self.end_time,
			"days": sorted(self.days, key=WEEKDAY_IDS.index),
			"dateRange": {
				"from": self.date_from.isoformat() if self.date_from else None,
				"to": self.date_to.isoformat() if self.date_to else None,
			},
		}

	def __repr__(self) -> str:
		label = f" {self.name!r}" if self.name else ""
		return f"<BusinessHoursRule{label} {self.start_time}-{self.end_time}>"


class BusinessHours:
	"""Par de listas opening/closing, en el orden en que se evalúan."""

	def __init__(
		self,
		opening: Optional[List[BusinessHoursRule]] = None,
		closing: Optional[List[BusinessHoursRule]] = None,
	) -> None:
		self.opening = list(opening or [])
		self.closing = list(closing or [])

	@classmethod
	def from_dict(cls, data: Optional[Dict[str, Any]], tz=None) -> "BusinessHours":
		"""
		Args:
			data: {"opening": [...], "closing": [...]}; None = sin reglas
		"""
		data = data or {}
		opening = [BusinessHoursRule.from_dict(r, tz) for r in data.get("opening") or []]
		closing = []
		for raw in data.get("closing") or []:
			rule = BusinessHoursRule.from_dict(raw, tz)
			# Reglas de cierre antiguas no tenían nombre
			rule.name = rule.name or ""
			closing.append(rule)
		return cls(opening, closing)

	def as_dict(self) -> Dict[str, List[Dict[str, Any]]]:
		return {
			"opening": [r.as_dict() for r in self.opening],
			"closing": [r.as_dict() for r in self.closing],
		}


def _to_date(value: Optional[Union[date, datetime, str]], tz=None) -> Optional[date]:
	if value in (None, ""):
		return None
	if isinstance(value, datetime):
		return parse_instant(value, tz).date()
	if isinstance(value, date):
		return value
	return parse_instant(value, tz).date()
