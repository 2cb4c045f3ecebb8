"""
Engine Input Loaders

Reads business hours, holidays, services and appointments from Frappe
documents and converts them to scheduling engine types. This is the only
module of the scheduling package that talks to the database.
"""

import frappe
from frappe import _
from frappe.utils import get_datetime, get_system_timezone, getdate, now_datetime
from datetime import date, datetime, time, timedelta
from typing import Iterable, List, Optional

from .holidays import Holiday, HolidayLookup, build_holiday_lookup
from .models import STATUS_CANCELLED, Appointment, Service
from .rules import BusinessHours, BusinessHoursRule
from .timeutils import get_timezone, to_local

SETTINGS_DOCTYPE = "Salon Business Hours"
HOLIDAY_DOCTYPE = "Salon Holiday"
SERVICE_DOCTYPE = "Salon Service"
APPOINTMENT_DOCTYPE = "Salon Appointment"


def get_business_timezone():
	"""
	Timezone del negocio: la de Salon Business Hours o la del sistema.
	"""
	tz_name = frappe.db.get_single_value(SETTINGS_DOCTYPE, "timezone")
	if not tz_name or tz_name == "system timezone":
		tz_name = get_system_timezone()

	try:
		return get_timezone(tz_name)
	except ValueError:
		frappe.log_error(
			f"Invalid timezone '{tz_name}' in {SETTINGS_DOCTYPE}, usando UTC",
			"Salon Booking Timezone"
		)
		return get_timezone("UTC")


def to_business_time(value: datetime, tz=None) -> datetime:
	"""
	Convierte un datetime guardado por Frappe (naive, hora del sistema) a
	hora local naive del negocio.
	"""
	if tz is None or value.tzinfo is not None:
		return to_local(value, tz)
	system_tz = get_timezone(get_system_timezone())
	if system_tz is None or system_tz.zone == tz.zone:
		return value
	return to_local(system_tz.localize(value), tz)


def get_local_now(tz=None) -> datetime:
	"""Ahora en hora local naive del negocio."""
	return to_business_time(now_datetime(), tz)


def get_business_hours() -> BusinessHours:
	"""
	Reglas de apertura y cierre desde el single Salon Business Hours.

	Returns:
		BusinessHours: listas vacías si todavía no se configuró nada
	"""
	settings = frappe.get_cached_doc(SETTINGS_DOCTYPE)

	opening = [rule_from_row(row) for row in (settings.get("opening_rules") or [])]
	closing = [rule_from_row(row) for row in (settings.get("closing_rules") or [])]

	return BusinessHours(opening, closing)


def rule_from_row(row) -> BusinessHoursRule:
	"""Convierte una fila de Business Hours Rule en BusinessHoursRule."""
	try:
		return BusinessHoursRule(
			start_time=row.start_time,
			end_time=row.end_time,
			days=(row.days or "").split(","),
			date_from=getdate(row.date_from) if row.date_from else None,
			date_to=getdate(row.date_to) if row.date_to else None,
			name=row.rule_name or "",
			id=row.name,
		)
	except ValueError as e:
		frappe.throw(_(f"Regla de horario inválida (fila {row.idx}): {str(e)}"))


def get_holidays(start_date: Optional[date] = None, end_date: Optional[date] = None) -> List[Holiday]:
	filters = {}
	if start_date and end_date:
		filters["holiday_date"] = ["between", [start_date, end_date]]

	rows = frappe.get_all(
		HOLIDAY_DOCTYPE,
		filters=filters,
		fields=["holiday_date", "holiday_name", "holiday_type", "is_day_off"],
		order_by="holiday_date asc"
	)
	return [Holiday.from_dict(row) for row in rows]


def get_holiday_lookup(start_date: Optional[date] = None, end_date: Optional[date] = None) -> HolidayLookup:
	return build_holiday_lookup(get_holidays(start_date, end_date))


def get_services(service_names: Iterable[str]) -> List[Service]:
	"""
	Servicios seleccionados, en el orden pedido.

	Raises:
		frappe.DoesNotExistError: si algún servicio no existe
	"""
	services = []
	for service_name in service_names:
		doc = frappe.get_cached_doc(SERVICE_DOCTYPE, service_name)
		services.append(Service(
			id=doc.name,
			duration=doc.duration or 0,
			break_time=doc.break_time or 0,
			name=doc.service_name,
		))
	return services


def get_appointments(
	start_datetime: datetime,
	end_datetime: datetime,
	calendar: Optional[str] = None,
	include_cancelled: bool = False,
	tz=None
) -> List[Appointment]:
	"""
	Citas que se solapan con [start_datetime, end_datetime).

	Condición de overlap: start < end_datetime AND end > start_datetime
	"""
	filters = {
		"start_datetime": ["<", end_datetime],
		"end_datetime": [">", start_datetime]
	}
	if calendar:
		filters["calendar"] = calendar
	if not include_cancelled:
		filters["status"] = ["!=", STATUS_CANCELLED]

	rows = frappe.get_all(
		APPOINTMENT_DOCTYPE,
		filters=filters,
		fields=[
			"name", "calendar", "client", "client_name", "services",
			"start_datetime", "end_datetime", "status"
		],
		order_by="start_datetime asc"
	)

	appointments = []
	for row in rows:
		try:
			appointments.append(appointment_from_row(row, tz))
		except ValueError as e:
			frappe.logger("salon_booking").warning(f"Skipping appointment {row.name}: {str(e)}")
	return appointments


def appointment_from_row(row, tz=None) -> Appointment:
	return Appointment.from_dict({
		"id": row.name,
		"calendar": row.calendar,
		"client": row.client,
		"client_name": row.get("client_name"),
		"serviceId": row.services or "",
		"start_datetime": to_business_time(get_datetime(row.start_datetime), tz),
		"end_datetime": to_business_time(get_datetime(row.end_datetime), tz),
		"status": row.status,
	}, tz)


def day_window(start_date: date, end_date: date) -> tuple:
	"""[start_date 00:00, end_date + 1 día 00:00) para consultas por rango."""
	return (
		datetime.combine(start_date, time.min),
		datetime.combine(end_date + timedelta(days=1), time.min),
	)
