"""
Availability Service

Enumerates bookable start times for a requested duration, considering:
- Business hours (opening/closing rules)
- Holidays
- Existing appointments of the calendar
- The current time (no past slots)
"""

from datetime import date, datetime, timedelta
from typing import Dict, Iterable, List, Optional, Sequence, Union

from .holidays import HolidayLookup
from .models import Appointment
from .overlap import find_overlapping_appointments
from .rules import BusinessHoursRule
from .slot_status import is_span_open
from .timeutils import (
	MINUTES_PER_DAY,
	SLOT_INTERVAL_MINUTES,
	SUNDAY,
	DateKey,
	at_minutes,
	date_range,
	format_minutes,
	to_local,
	week_days,
)


def get_available_start_times(
	day: date,
	duration_minutes: int,
	appointments: Sequence[Appointment],
	opening_rules: Sequence[BusinessHoursRule],
	closing_rules: Sequence[BusinessHoursRule],
	holiday_lookup: Optional[HolidayLookup],
	now: datetime,
	calendar_id: Optional[str] = None,
	exclude_appointment: Optional[str] = None,
	interval_minutes: int = SLOT_INTERVAL_MINUTES,
	tz=None
) -> List[str]:
	"""
	Horas de inicio reservables para un día.

	Algoritmo:
		1. Si el día es anterior a hoy -> []
		2. Recorrer candidatos cada `interval_minutes` desde 00:00
		3. Descartar candidatos <= now
		4. Todo el rango [inicio, inicio + duración) debe estar abierto
		   (se verifica cada `interval_minutes`, no solo el inicio)
		5. Descartar candidatos que chocan con citas no canceladas
		6. El orden de recorrido garantiza orden cronológico

	Returns:
		list[str]: ["09:00", "09:15", ...]
	"""
	now = to_local(now, tz)
	if duration_minutes <= 0 or day < now.date():
		return []

	duration = timedelta(minutes=duration_minutes)
	start_times = []

	for minutes in range(0, MINUTES_PER_DAY, interval_minutes):
		candidate_start = at_minutes(day, minutes)
		if candidate_start <= now:
			continue

		candidate_end = candidate_start + duration

		if not is_span_open(
			candidate_start,
			candidate_end,
			opening_rules,
			closing_rules,
			holiday_lookup,
			step_minutes=interval_minutes
		):
			continue

		if find_overlapping_appointments(
			candidate_start,
			candidate_end,
			appointments,
			calendar_id=calendar_id,
			exclude_appointment=exclude_appointment
		):
			continue

		start_times.append(format_minutes(minutes))

	return start_times


def compute_available_slots(
	days: Iterable[Union[date, datetime]],
	duration_minutes: int,
	appointments: Iterable[Appointment],
	opening_rules: Sequence[BusinessHoursRule],
	closing_rules: Sequence[BusinessHoursRule],
	holiday_lookup: Optional[HolidayLookup],
	now: datetime,
	calendar_id: Optional[str] = None,
	exclude_appointment: Optional[str] = None,
	interval_minutes: int = SLOT_INTERVAL_MINUTES,
	tz=None
) -> Dict[DateKey, List[str]]:
	"""
	Slots reservables para varios días.

	Args:
		days: días a escanear (date o datetime)
		duration_minutes: duración bloqueante total (servicios + pausas)
		appointments: citas existentes (se filtran canceladas y otros calendarios)
		opening_rules / closing_rules: reglas de horario
		holiday_lookup: función date -> Holiday | None
		now: instante actual (naive en hora local; si es aware se convierte a tz)
		calendar_id: calendario a validar (None = todas las citas cuentan)
		exclude_appointment: id de la cita que se está moviendo/editando
		tz: timezone del negocio para normalizar un `now` aware

	Returns:
		dict: {DateKey(2026, 1, 20): ["09:00", "09:15", ...], ...}
		Todos los días pedidos tienen clave (lista vacía si no hay slots).
	"""
	appointments = list(appointments)
	now = to_local(now, tz)
	result: Dict[DateKey, List[str]] = {}

	for day in days:
		if isinstance(day, datetime):
			day = day.date()
		result[DateKey.from_date(day)] = get_available_start_times(
			day,
			duration_minutes,
			appointments,
			opening_rules,
			closing_rules,
			holiday_lookup,
			now,
			calendar_id=calendar_id,
			exclude_appointment=exclude_appointment,
			interval_minutes=interval_minutes,
			tz=tz
		)

	return result


def compute_range_slots(
	start_date: date,
	end_date: date,
	duration_minutes: int,
	appointments: Iterable[Appointment],
	opening_rules: Sequence[BusinessHoursRule],
	closing_rules: Sequence[BusinessHoursRule],
	holiday_lookup: Optional[HolidayLookup],
	now: datetime,
	**kwargs
) -> Dict[DateKey, List[str]]:
	"""compute_available_slots de start_date a end_date (incluidos)."""
	return compute_available_slots(
		date_range(start_date, end_date),
		duration_minutes,
		appointments,
		opening_rules,
		closing_rules,
		holiday_lookup,
		now,
		**kwargs
	)


def compute_week_slots(
	anchor: Union[date, datetime],
	duration_minutes: int,
	appointments: Iterable[Appointment],
	opening_rules: Sequence[BusinessHoursRule],
	closing_rules: Sequence[BusinessHoursRule],
	holiday_lookup: Optional[HolidayLookup],
	now: datetime,
	week_starts_on: int = SUNDAY,
	**kwargs
) -> Dict[DateKey, List[str]]:
	"""Slots de la semana (domingo a sábado por defecto) que contiene `anchor`."""
	return compute_available_slots(
		week_days(anchor, week_starts_on),
		duration_minutes,
		appointments,
		opening_rules,
		closing_rules,
		holiday_lookup,
		now,
		**kwargs
	)


def scan_end_date(end_date: date, duration_minutes: int) -> date:
	"""
	Último día que puede tocar un candidato de `end_date`.

	Un candidato de las 23:45 termina al día siguiente (o más tarde si la
	duración supera un día); feriados y citas deben cargarse hasta aquí.
	"""
	return end_date + timedelta(days=1 + max(duration_minutes, 0) // MINUTES_PER_DAY)


def serialize_slots(slots: Dict[DateKey, List[str]]) -> Dict[str, List[str]]:
	"""{DateKey: [...]} -> {"YYYY-MM-DD": [...]} para JSON."""
	return {str(key): times for key, times in slots.items()}
