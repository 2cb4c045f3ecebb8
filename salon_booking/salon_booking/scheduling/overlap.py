"""
Overlap Detection Service

Detects scheduling conflicts (overlaps) between appointments,
considering:
- Calendar (only appointments of the same calendar collide)
- Appointment status (cancelled never collides)
- The appointment being edited/moved (excluded)
"""

from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from .models import Appointment


def intervals_overlap(start: datetime, end: datetime, other_start: datetime, other_end: datetime) -> bool:
	"""
	Solape de intervalos semiabiertos.

	Dos rangos que solo se tocan (end == other_start) NO se solapan.
	"""
	return not (end <= other_start or start >= other_end)


def find_overlapping_appointments(
	start_datetime: datetime,
	end_datetime: datetime,
	appointments: Iterable[Appointment],
	calendar_id: Optional[str] = None,
	exclude_appointment: Optional[str] = None
) -> List[Appointment]:
	"""
	Citas que chocan con [start_datetime, end_datetime).

	Args:
		start_datetime: inicio del rango a validar
		end_datetime: fin del rango a validar
		appointments: citas candidatas (ya cargadas por el llamador)
		calendar_id: si se indica, solo cuentan citas de ese calendario
		exclude_appointment: id de la cita a excluir (para ediciones)

	Returns:
		list: citas no canceladas que se solapan, en el orden recibido
	"""
	overlapping = []

	for appt in appointments:
		if appt.is_cancelled:
			continue
		if exclude_appointment and appt.id == exclude_appointment:
			continue
		if calendar_id is not None and appt.calendar_id != calendar_id:
			continue
		if appt.overlaps(start_datetime, end_datetime):
			overlapping.append(appt)

	return overlapping


def check_overlap(
	start_datetime: datetime,
	end_datetime: datetime,
	appointments: Iterable[Appointment],
	calendar_id: Optional[str] = None,
	exclude_appointment: Optional[str] = None
) -> Dict[str, Any]:
	"""
	Detecta overlaps con appointments existentes.

	Returns:
		dict: {
			"has_overlap": bool,
			"overlapping_appointments": [list of appointment ids]
		}
	"""
	overlapping = find_overlapping_appointments(
		start_datetime,
		end_datetime,
		appointments,
		calendar_id=calendar_id,
		exclude_appointment=exclude_appointment
	)

	return {
		"has_overlap": bool(overlapping),
		"overlapping_appointments": [appt.id for appt in overlapping]
	}
