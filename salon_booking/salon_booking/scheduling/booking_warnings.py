"""
Booking Warnings

Warnings for a candidate or edited appointment in the admin calendar.
Only a closed start blocks saving; the rest are advisory.
"""

from datetime import datetime, timedelta
from typing import Any, Dict, Iterable, List, NamedTuple, Optional, Sequence

from .holidays import HolidayLookup
from .models import Appointment
from .overlap import find_overlapping_appointments
from .rules import BusinessHoursRule
from .slot_status import resolve_status_at

CALENDAR_CLOSED = "calendar_closed"
ENDS_OUTSIDE_HOURS = "ends_outside_hours"
COLLISION = "collision"

BLOCKING_CODES = frozenset([CALENDAR_CLOSED])


class BookingWarning(NamedTuple):
	code: str
	message: str
	rule_name: Optional[str] = None

	def __str__(self) -> str:
		return self.message


def calendar_closed_message(rule_name: Optional[str] = None) -> str:
	if rule_name:
		return f"El calendario está cerrado ({rule_name}) en el horario seleccionado"
	return "El calendario está cerrado en el horario seleccionado"


ENDS_OUTSIDE_HOURS_MESSAGE = "Advertencia: la cita termina fuera del horario de atención"
COLLISION_MESSAGE = "Advertencia: la cita se superpone con una cita existente"


def evaluate_warnings(
	start: datetime,
	end: datetime,
	calendar_id: Optional[str],
	appointments: Iterable[Appointment],
	exclude_appointment_id: Optional[str],
	opening_rules: Sequence[BusinessHoursRule],
	closing_rules: Sequence[BusinessHoursRule],
	holiday_lookup: Optional[HolidayLookup] = None
) -> List[BookingWarning]:
	"""
	Evalúa todas las reglas de advertencia (sin cortocircuito).

	Reglas:
		1. Cerrado al inicio -> CALENDAR_CLOSED (con nombre de la regla si tiene)
		2. Si no, cerrado en el último minuto ocupado (end - 1 min)
		   -> ENDS_OUTSIDE_HOURS
		3. Solape con otra cita no cancelada del mismo calendario -> COLLISION

	Returns:
		list[BookingWarning]: en el orden de las reglas
	"""
	warnings: List[BookingWarning] = []

	status_at_start = resolve_status_at(start, opening_rules, closing_rules, holiday_lookup)
	if not status_at_start.is_open:
		rule_name = status_at_start.rule_name or None
		warnings.append(BookingWarning(CALENDAR_CLOSED, calendar_closed_message(rule_name), rule_name))
	else:
		last_minute = end - timedelta(minutes=1)
		status_at_end = resolve_status_at(last_minute, opening_rules, closing_rules, holiday_lookup)
		if not status_at_end.is_open:
			warnings.append(BookingWarning(
				ENDS_OUTSIDE_HOURS, ENDS_OUTSIDE_HOURS_MESSAGE, status_at_end.rule_name or None
			))

	collisions = find_overlapping_appointments(
		start,
		end,
		appointments,
		calendar_id=calendar_id,
		exclude_appointment=exclude_appointment_id
	)
	if collisions:
		warnings.append(BookingWarning(COLLISION, COLLISION_MESSAGE))

	return warnings


def blocks_save(warnings: Iterable[BookingWarning]) -> bool:
	"""True si alguna advertencia impide guardar (cerrado al inicio)."""
	return any(w.code in BLOCKING_CODES for w in warnings)


def check_appointment(
	start: datetime,
	end: datetime,
	calendar_id: Optional[str],
	appointments: Iterable[Appointment],
	exclude_appointment_id: Optional[str],
	opening_rules: Sequence[BusinessHoursRule],
	closing_rules: Sequence[BusinessHoursRule],
	holiday_lookup: Optional[HolidayLookup] = None
) -> Dict[str, Any]:
	"""
	Resultado serializable para la API.

	Returns:
		dict: {
			"warnings": list[str],
			"codes": list[str],
			"blocks_save": bool
		}
	"""
	warnings = evaluate_warnings(
		start,
		end,
		calendar_id,
		appointments,
		exclude_appointment_id,
		opening_rules,
		closing_rules,
		holiday_lookup
	)
	return {
		"warnings": [w.message for w in warnings],
		"codes": [w.code for w in warnings],
		"blocks_save": blocks_save(warnings)
	}
