"""
Time Utilities

Shared helpers for the scheduling engine:
- "HH:MM" parsing and formatting
- DateKey (explicit per-day key)
- Weekday ids (sunday..saturday)
- Local time normalisation (pytz)
- Day and week ranges on the 15 minute grid
"""

from datetime import datetime, date, time, timedelta
from typing import Iterator, List, NamedTuple, Optional, Union
import pytz

SLOT_INTERVAL_MINUTES = 15
MINUTES_PER_DAY = 24 * 60

WEEKDAY_IDS = (
	"sunday",
	"monday",
	"tuesday",
	"wednesday",
	"thursday",
	"friday",
	"saturday",
)
SUNDAY = 0

TimeValue = Union[str, time, timedelta, int]


class DateKey(NamedTuple):
	"""Clave de día independiente de locale/timezone."""

	year: int
	month: int
	day: int

	@classmethod
	def from_date(cls, value: Union[date, datetime]) -> "DateKey":
		return cls(value.year, value.month, value.day)

	@classmethod
	def parse(cls, value: str) -> "DateKey":
		"""Parsea 'YYYY-MM-DD'."""
		return cls.from_date(date.fromisoformat(str(value).strip()[:10]))

	def to_date(self) -> date:
		return date(self.year, self.month, self.day)

	def __str__(self) -> str:
		return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"


def parse_hhmm(value: TimeValue, allow_end_of_day: bool = False) -> int:
	"""
	Convierte un tiempo a minutos desde medianoche.

	Args:
		value: "HH:MM" (o "HH:MM:SS"), datetime.time, timedelta desde medianoche
			o minutos enteros
		allow_end_of_day: acepta "24:00" (1440), válido solo como fin de rango

	Returns:
		int: minutos desde medianoche

	Raises:
		ValueError: si el valor no es un tiempo válido
	"""
	limit = MINUTES_PER_DAY if allow_end_of_day else MINUTES_PER_DAY - 1

	if isinstance(value, bool):
		raise ValueError(f"Cannot convert {type(value)} to time")

	if isinstance(value, int):
		minutes = value
	elif isinstance(value, time):
		minutes = value.hour * 60 + value.minute
	elif isinstance(value, timedelta):
		# timedelta representa tiempo desde medianoche (así lo devuelve MariaDB)
		minutes = int(value.total_seconds() // 60)
	elif isinstance(value, str):
		parts = value.strip().split(":")
		if len(parts) not in (2, 3) or not all(p.isdigit() for p in parts):
			raise ValueError(f"Invalid time value: {value!r}. Use HH:MM")
		hour, minute = int(parts[0]), int(parts[1])
		if minute > 59 or (len(parts) == 3 and int(parts[2]) > 59):
			raise ValueError(f"Invalid time value: {value!r}")
		minutes = hour * 60 + minute
	else:
		raise ValueError(f"Cannot convert {type(value)} to time")

	if minutes < 0 or minutes > limit:
		raise ValueError(f"Time out of range: {value!r}")
	return minutes


def format_minutes(minutes: int) -> str:
	"""Minutos desde medianoche -> 'HH:MM'."""
	return f"{minutes // 60:02d}:{minutes % 60:02d}"


def minute_of_day(value: datetime) -> int:
	return value.hour * 60 + value.minute


def weekday_id(value: Union[date, datetime]) -> str:
	"""Id del día de la semana ('sunday'..'saturday')."""
	# date.weekday(): lunes=0; WEEKDAY_IDS empieza en domingo
	return WEEKDAY_IDS[(value.weekday() + 1) % 7]


def get_timezone(tz_name: Optional[str]) -> Optional[pytz.BaseTzInfo]:
	"""
	Resuelve el nombre de la timezone del negocio.

	Returns:
		pytz timezone, o None si no se configuró (se asume hora local)

	Raises:
		ValueError: timezone desconocida
	"""
	if not tz_name:
		return None
	try:
		return pytz.timezone(tz_name)
	except pytz.UnknownTimeZoneError:
		raise ValueError(f"Unknown timezone: {tz_name}")


def to_local(value: datetime, tz: Optional[pytz.BaseTzInfo] = None) -> datetime:
	"""
	Normaliza un datetime a hora local naive (wall clock del negocio).

	Todas las comparaciones del motor se hacen en hora local naive:
	- aware + tz: se convierte a tz y se quita tzinfo
	- aware sin tz: se quita tzinfo tras convertir a UTC
	- naive: se asume que ya está en hora local
	"""
	if value.tzinfo is None:
		return value
	if tz is None:
		tz = pytz.UTC
	return value.astimezone(tz).replace(tzinfo=None)


def parse_instant(value: Union[str, datetime, date], tz: Optional[pytz.BaseTzInfo] = None) -> datetime:
	"""
	Parsea un instante ISO ('2026-01-20T09:00:00.000Z', '2026-01-20 09:00:00')
	y lo normaliza a hora local naive.
	"""
	if isinstance(value, datetime):
		return to_local(value, tz)
	if isinstance(value, date):
		return datetime.combine(value, time.min)
	text = str(value).strip()
	if text.endswith("Z"):
		text = text[:-1] + "+00:00"
	try:
		parsed = datetime.fromisoformat(text)
	except ValueError:
		raise ValueError(f"Invalid datetime value: {value!r}")
	return to_local(parsed, tz)


def start_of_day(value: Union[date, datetime]) -> datetime:
	if isinstance(value, datetime):
		value = value.date()
	return datetime.combine(value, time.min)


def at_minutes(day: Union[date, datetime], minutes: int) -> datetime:
	"""datetime del día `day` a `minutes` desde medianoche."""
	return start_of_day(day) + timedelta(minutes=minutes)


def date_range(start_date: date, end_date: date) -> Iterator[date]:
	"""Fechas de start_date a end_date (ambas incluidas)."""
	current = start_date
	while current <= end_date:
		yield current
		current += timedelta(days=1)


def week_days(anchor: Union[date, datetime], week_starts_on: int = SUNDAY) -> List[date]:
	"""
	Los 7 días de la semana que contiene `anchor`.

	Args:
		anchor: cualquier fecha de la semana
		week_starts_on: índice en WEEKDAY_IDS del primer día (0 = domingo)
	"""
	if isinstance(anchor, datetime):
		anchor = anchor.date()
	current_index = WEEKDAY_IDS.index(weekday_id(anchor))
	offset = (current_index - week_starts_on) % 7
	first = anchor - timedelta(days=offset)
	return [first + timedelta(days=i) for i in range(7)]


def time_slot_labels(interval_minutes: int = SLOT_INTERVAL_MINUTES) -> List[str]:
	"""Etiquetas 'HH:MM' de la grilla del día (00:00 .. 23:45)."""
	return [format_minutes(m) for m in range(0, MINUTES_PER_DAY, interval_minutes)]
