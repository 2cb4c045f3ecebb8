"""
Booking API Endpoints

Whitelisted functions for the booking flow and the admin calendar:
available start times per day, slot status, day layout and pre-save
warnings for an appointment.
"""

import frappe
from frappe import _
from frappe.utils import getdate
from datetime import date, timedelta
from typing import Any, Dict, List, Optional

from salon_booking.salon_booking.scheduling.availability import (
	compute_range_slots,
	compute_week_slots,
	scan_end_date,
	serialize_slots,
)
from salon_booking.salon_booking.scheduling.booking_warnings import check_appointment
from salon_booking.salon_booking.scheduling.layout import earliest_opening_hour, layout_day
from salon_booking.salon_booking.scheduling.loaders import (
	day_window,
	get_appointments,
	get_business_hours,
	get_business_timezone,
	get_holiday_lookup,
	get_local_now,
	get_services,
)
from salon_booking.salon_booking.scheduling.models import total_blocking_minutes
from salon_booking.salon_booking.scheduling.slot_status import resolve_status
from salon_booking.salon_booking.scheduling.timeutils import parse_instant, week_days

from salon_booking.api.shared import (
	validate_date_string,
	validate_datetime_string,
	validate_docname,
	validate_positive_int,
	validate_time_string,
)

# Rango máximo de días por consulta de slots
MAX_RANGE_DAYS = 62


@frappe.whitelist(methods=['GET'])
def get_available_slots(
	calendar: str,
	from_date: str,
	to_date: Optional[str] = None,
	services: Optional[str] = None,
	duration_minutes: Optional[int] = None,
	exclude_appointment: Optional[str] = None
) -> Dict[str, List[str]]:
	"""
	Horas de inicio disponibles por día.

	La duración sale de los servicios (Σ duración + pausa) o de
	duration_minutes si no se mandan servicios.

	Args:
		calendar: calendario (empleado) a consultar
		from_date: fecha inicial (YYYY-MM-DD)
		to_date: fecha final (YYYY-MM-DD), por defecto from_date
		services: nombres de Salon Service ("a,b" o lista JSON)
		duration_minutes: duración si no hay servicios
		exclude_appointment: cita que se está moviendo (no cuenta como choque)

	Returns:
		dict: {"2026-01-20": ["09:00", "09:15", ...], ...}

	Example:
		```javascript
		frappe.call({
			method: "salon_booking.api.booking.get_available_slots",
			args: {
				calendar: "Dana",
				from_date: "2026-01-20",
				to_date: "2026-01-24",
				services: "Haircut,Blow Dry"
			},
			callback: function(r) {
				console.log(r.message["2026-01-20"]);
			}
		});
		```
	"""
	calendar = validate_docname(calendar, "calendar")
	from_date = validate_date_string(from_date, "from_date")
	to_date = validate_date_string(to_date, "to_date") if to_date else from_date
	if exclude_appointment:
		exclude_appointment = validate_docname(exclude_appointment, "exclude_appointment")

	start_date = getdate(from_date)
	end_date = getdate(to_date)

	if start_date > end_date:
		frappe.throw(_("from_date debe ser menor o igual que to_date"))

	if (end_date - start_date).days >= MAX_RANGE_DAYS:
		frappe.throw(_(f"El rango no puede superar {MAX_RANGE_DAYS} días"))

	duration = _resolve_duration(services, duration_minutes)

	try:
		tz = get_business_timezone()
		business_hours = get_business_hours()
		slots = compute_range_slots(
			start_date,
			end_date,
			duration,
			_load_appointments(calendar, start_date, end_date, duration, tz),
			business_hours.opening,
			business_hours.closing,
			get_holiday_lookup(start_date, scan_end_date(end_date, duration)),
			get_local_now(tz),
			calendar_id=calendar,
			exclude_appointment=exclude_appointment,
			tz=tz
		)
		return serialize_slots(slots)

	except frappe.ValidationError:
		raise
	except Exception as e:
		frappe.log_error(f"Error in get_available_slots: {str(e)}", "API Error")
		frappe.throw(_(f"Error al obtener slots disponibles: {str(e)}"))


@frappe.whitelist(methods=['GET'])
def get_week_slots(
	calendar: str,
	anchor_date: str,
	services: Optional[str] = None,
	duration_minutes: Optional[int] = None,
	exclude_appointment: Optional[str] = None
) -> Dict[str, List[str]]:
	"""
	Horas disponibles de la semana (domingo a sábado) que contiene anchor_date.

	Returns:
		dict: 7 claves "YYYY-MM-DD", en orden
	"""
	calendar = validate_docname(calendar, "calendar")
	anchor_date = validate_date_string(anchor_date, "anchor_date")
	if exclude_appointment:
		exclude_appointment = validate_docname(exclude_appointment, "exclude_appointment")

	anchor = getdate(anchor_date)
	days = week_days(anchor)
	duration = _resolve_duration(services, duration_minutes)

	try:
		tz = get_business_timezone()
		business_hours = get_business_hours()
		slots = compute_week_slots(
			anchor,
			duration,
			_load_appointments(calendar, days[0], days[-1], duration, tz),
			business_hours.opening,
			business_hours.closing,
			get_holiday_lookup(days[0], scan_end_date(days[-1], duration)),
			get_local_now(tz),
			calendar_id=calendar,
			exclude_appointment=exclude_appointment,
			tz=tz
		)
		return serialize_slots(slots)

	except frappe.ValidationError:
		raise
	except Exception as e:
		frappe.log_error(f"Error in get_week_slots: {str(e)}", "API Error")
		frappe.throw(_(f"Error al obtener slots de la semana: {str(e)}"))


@frappe.whitelist(methods=['GET'])
def get_slot_status(date: str, time: str) -> Dict[str, Any]:
	"""
	Estado de un slot de la grilla del calendario.

	Returns:
		dict: {
			"is_open": bool,
			"rule_name": str | None,   # regla (o feriado) que decidió
			"holiday": str | None      # nombre del feriado del día, si hay
		}
	"""
	date_str = validate_date_string(date, "date")
	time_str = validate_time_string(time, "time")

	day = getdate(date_str)

	try:
		business_hours = get_business_hours()
		holiday_lookup = get_holiday_lookup(day, day)

		status = resolve_status(
			day,
			time_str,
			business_hours.opening,
			business_hours.closing,
			holiday_lookup
		)
		holiday = holiday_lookup(day)

		return {
			"is_open": status.is_open,
			"rule_name": status.rule_name or None,
			"holiday": holiday.name if holiday else None
		}

	except frappe.ValidationError:
		raise
	except Exception as e:
		frappe.log_error(f"Error in get_slot_status: {str(e)}", "API Error")
		frappe.throw(_(f"Error al obtener el estado del slot: {str(e)}"))


@frappe.whitelist(methods=['GET'])
def get_day_layout(calendar: str, date: str) -> Dict[str, Any]:
	"""
	Citas del día con su geometría para la vista de calendario.

	Returns:
		dict: {
			"appointments": [
				{..., "layout": {"top": "360px", "height": "80px", "width": "50%", "left": "0%"}}
			],
			"earliest_hour": int  # hora de apertura más temprana (scroll inicial)
		}
	"""
	calendar = validate_docname(calendar, "calendar")
	day = getdate(validate_date_string(date, "date"))

	try:
		tz = get_business_timezone()
		start, end = day_window(day - timedelta(days=1), day + timedelta(days=1))
		appointments = get_appointments(start, end, calendar=calendar, tz=tz)
		business_hours = get_business_hours()

		return {
			"appointments": [item.as_dict() for item in layout_day(appointments, day=day)],
			"earliest_hour": earliest_opening_hour(business_hours.opening)
		}

	except frappe.ValidationError:
		raise
	except Exception as e:
		frappe.log_error(f"Error in get_day_layout: {str(e)}", "API Error")
		frappe.throw(_(f"Error al obtener el calendario del día: {str(e)}"))


@frappe.whitelist(methods=['GET', 'POST'])
def validate_appointment(
	calendar: str,
	start_datetime: str,
	end_datetime: str,
	appointment_name: Optional[str] = None
) -> Dict[str, Any]:
	"""
	Valida una cita ANTES de guardarla.
	Útil para mostrar las advertencias en el formulario antes del submit.

	Args:
		calendar: calendario de la cita
		start_datetime: inicio (YYYY-MM-DD HH:MM:SS o ISO)
		end_datetime: fin (YYYY-MM-DD HH:MM:SS o ISO)
		appointment_name: cita existente (para ediciones)

	Returns:
		dict: {
			"warnings": list[str],
			"codes": list[str],
			"blocks_save": bool
		}
	"""
	calendar = validate_docname(calendar, "calendar")
	start_datetime = validate_datetime_string(start_datetime, "start_datetime")
	end_datetime = validate_datetime_string(end_datetime, "end_datetime")
	if appointment_name:
		appointment_name = validate_docname(appointment_name, "appointment_name")

	tz = get_business_timezone()

	try:
		start = parse_instant(start_datetime, tz)
		end = parse_instant(end_datetime, tz)
	except ValueError as e:
		frappe.throw(_(str(e)))

	if start >= end:
		frappe.throw(_("Start DateTime debe ser menor que End DateTime"))

	try:
		business_hours = get_business_hours()
		window_start, window_end = day_window(
			start.date() - timedelta(days=1), end.date() + timedelta(days=1)
		)

		return check_appointment(
			start,
			end,
			calendar,
			get_appointments(window_start, window_end, calendar=calendar, tz=tz),
			appointment_name,
			business_hours.opening,
			business_hours.closing,
			get_holiday_lookup(start.date(), end.date())
		)

	except frappe.ValidationError:
		raise
	except Exception as e:
		frappe.log_error(f"Error in validate_appointment: {str(e)}", "API Error")
		frappe.throw(_(f"Error al validar la cita: {str(e)}"))


# ===== HELPERS =====

def _resolve_duration(services: Optional[str], duration_minutes: Optional[int]) -> int:
	"""
	Duración bloqueante: Σ(duración + pausa) de los servicios, o
	duration_minutes si no hay servicios.
	"""
	service_names = _parse_service_names(services)

	if service_names:
		for service_name in service_names:
			validate_docname(service_name, "service")
			if not frappe.db.exists("Salon Service", service_name):
				frappe.throw(_(f"Servicio '{service_name}' no existe"))
		return total_blocking_minutes(get_services(service_names))

	if duration_minutes is None or duration_minutes == "":
		frappe.throw(_("Indique services o duration_minutes"))

	return validate_positive_int(duration_minutes, "duration_minutes")


def _parse_service_names(services) -> List[str]:
	if not services:
		return []
	if isinstance(services, str) and services.strip().startswith("["):
		services = frappe.parse_json(services)
	if isinstance(services, str):
		services = services.split(",")
	return [str(s).strip() for s in services if str(s).strip()]


def _load_appointments(calendar: str, start_date: date, end_date: date, duration: int, tz) -> list:
	"""
	Citas del calendario que pueden chocar con un candidato del rango.

	La ventana cubre hasta scan_end_date (el último día que toca un
	candidato), con un día de margen a cada lado por diferencia de timezone.
	"""
	window_start, window_end = day_window(
		start_date - timedelta(days=1), scan_end_date(end_date, duration) + timedelta(days=1)
	)
	return get_appointments(
		window_start,
		window_end,
		calendar=calendar,
		tz=tz
	)
