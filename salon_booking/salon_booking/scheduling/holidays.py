"""
Holiday Calendar

Holidays keyed by calendar date. A holiday marked as day off closes the whole
day; the rest are informational (their name is shown in the calendar header).
"""

import json
import os
from datetime import date, datetime
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

from .rules import BusinessHoursRule
from .timeutils import DateKey, MINUTES_PER_DAY

DEFAULT_HOLIDAYS_FILE = os.path.join(
	os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "data", "holidays.json"
)


class Holiday:
	def __init__(self, holiday_date: Union[date, str], name: str, type: str = "international", is_day_off: bool = False) -> None:
		if isinstance(holiday_date, str):
			holiday_date = DateKey.parse(holiday_date).to_date()
		self.date = holiday_date
		self.name = name
		self.type = type
		self.is_day_off = bool(is_day_off)

	@classmethod
	def from_dict(cls, data: Dict[str, Any]) -> "Holiday":
		return cls(
			holiday_date=data.get("date") or data.get("holiday_date"),
			name=data.get("name") or data.get("holiday_name") or "",
			type=data.get("type") or data.get("holiday_type") or "international",
			is_day_off=data.get("isDayOff", data.get("is_day_off", False)),
		)

	def as_closing_rule(self) -> BusinessHoursRule:
		"""Regla de cierre sintética: todo el día, con el nombre del feriado."""
		return BusinessHoursRule(
			start_time=0,
			end_time=MINUTES_PER_DAY,
			name=self.name,
			id=f"holiday:{self.date.isoformat()}",
		)

	def __repr__(self) -> str:
		return f"<Holiday {self.date.isoformat()} {self.name!r} day_off={self.is_day_off}>"


HolidayLookup = Callable[[date], Optional[Holiday]]


def build_holiday_lookup(holidays: Iterable[Union[Holiday, Dict[str, Any]]]) -> HolidayLookup:
	"""
	Crea la función de búsqueda `date -> Holiday | None`.

	Si hay dos feriados en la misma fecha gana el último (igual que un Map).
	"""
	by_key: Dict[DateKey, Holiday] = {}
	for item in holidays:
		holiday = item if isinstance(item, Holiday) else Holiday.from_dict(item)
		by_key[DateKey.from_date(holiday.date)] = holiday

	def lookup(day: Union[date, datetime]) -> Optional[Holiday]:
		return by_key.get(DateKey.from_date(day))

	return lookup


def no_holidays(day: Union[date, datetime]) -> Optional[Holiday]:
	return None


def load_default_holidays(path: str = DEFAULT_HOLIDAYS_FILE) -> List[Holiday]:
	"""Calendario de feriados por defecto (se siembra al instalar la app)."""
	with open(path, encoding="utf-8") as f:
		return [Holiday.from_dict(row) for row in json.load(f)]
