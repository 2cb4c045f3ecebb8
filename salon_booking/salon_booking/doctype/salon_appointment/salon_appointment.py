# Copyright (c) 2026, Salon Booking Contributors and contributors
# For license information, please see license.txt

"""
Salon Appointment DocType

Appointment of a client on a salon calendar, validated against business
hours, holidays and the other appointments of the calendar.
"""

import frappe
from frappe import _
from frappe.model.document import Document
from frappe.utils import add_to_date, get_datetime
from typing import List

from salon_booking.salon_booking.scheduling.booking_warnings import (
	BookingWarning,
	blocks_save,
	evaluate_warnings,
)
from salon_booking.salon_booking.scheduling.loaders import (
	get_appointments,
	get_business_hours,
	get_business_timezone,
	get_holiday_lookup,
	get_services,
	to_business_time,
)
from salon_booking.salon_booking.scheduling.models import (
	APPOINTMENT_STATUSES,
	STATUS_CANCELLED,
	STATUS_SCHEDULED,
	total_blocking_minutes,
)


class SalonAppointment(Document):
	"""
	Salon Appointment with scheduling validation.

	Las citas nunca se borran desde el calendario: se cancelan cambiando
	el status. Las canceladas no bloquean horario.
	"""

	def validate(self) -> None:
		"""
		Validación antes de guardar.

		Ejecuta:
		1. Validar campos requeridos y status
		2. Calcular end_datetime desde los servicios si está vacío
		3. Validar consistencia de fechas
		4. Evaluar advertencias: bloquea si el calendario está cerrado al
		   inicio, el resto solo se informa
		"""
		self._validate_required_fields()
		self._validate_status()
		self._set_end_from_services()
		self._validate_datetime_consistency()
		self._validate_business_hours_and_collisions()

	def on_update(self) -> None:
		"""Registra cambios de status (las transiciones son el historial de la cita)."""
		if self.has_value_changed("status"):
			frappe.logger("salon_booking").info(
				f"Appointment {self.name} status -> {self.status} "
				f"(calendar: {self.calendar}, start: {self.start_datetime})"
			)

	# ===== VALIDATION METHODS =====

	def _validate_required_fields(self) -> None:
		"""Valida que calendar y start_datetime estén presentes."""
		if not self.calendar:
			frappe.throw(_("Calendar es requerido"))

		if not self.start_datetime:
			frappe.throw(_("Start DateTime es requerido"))

	def _validate_status(self) -> None:
		if not self.status:
			self.status = STATUS_SCHEDULED

		if self.status not in APPOINTMENT_STATUSES:
			frappe.throw(_(f"Status inválido: {self.status}"))

	def _set_end_from_services(self) -> None:
		"""
		Si no hay end_datetime, lo calcula como
		start + Σ(duration + break_time) de los servicios.
		"""
		if self.end_datetime or not self.services:
			return

		service_names = [s.strip() for s in self.services.split(",") if s.strip()]
		minutes = total_blocking_minutes(get_services(service_names))
		if minutes > 0:
			self.end_datetime = add_to_date(get_datetime(self.start_datetime), minutes=minutes, as_datetime=True)

	def _validate_datetime_consistency(self) -> None:
		"""Valida que start_datetime < end_datetime."""
		if not self.end_datetime:
			frappe.throw(_("End DateTime es requerido (o seleccione servicios)"))

		start = get_datetime(self.start_datetime)
		end = get_datetime(self.end_datetime)

		if start >= end:
			frappe.throw(_("Start DateTime debe ser menor que End DateTime"))

	def _validate_business_hours_and_collisions(self) -> None:
		"""
		Evalúa las advertencias de la cita.

		- Calendario cerrado al inicio: BLOQUEA (salvo flags.ignore_business_hours)
		- Termina fuera de horario / choca con otra cita: solo informa

		Un cambio de status (confirmar, completar, no-show) no vuelve a
		evaluar el horario; solo reactivar una cita cancelada.
		"""
		if self.status == STATUS_CANCELLED:
			return

		if not self._schedule_changed():
			return

		warnings = self.get_booking_warnings()

		if blocks_save(warnings) and not self.flags.ignore_business_hours:
			frappe.throw(_(warnings[0].message))

		for warning in warnings:
			frappe.msgprint(_(warning.message), indicator="orange", alert=True)

	def _schedule_changed(self) -> bool:
		"""True si la cita es nueva, se movió, o vuelve de cancelled."""
		if self.is_new():
			return True

		if (
			self.has_value_changed("start_datetime")
			or self.has_value_changed("end_datetime")
			or self.has_value_changed("calendar")
		):
			return True

		previous = self.get_doc_before_save()
		return bool(previous and previous.status == STATUS_CANCELLED)

	def get_booking_warnings(self) -> List[BookingWarning]:
		"""Advertencias para el horario actual del documento."""
		tz = get_business_timezone()
		stored_start = get_datetime(self.start_datetime)
		stored_end = get_datetime(self.end_datetime)
		start = to_business_time(stored_start, tz)
		end = to_business_time(stored_end, tz)

		business_hours = get_business_hours()
		holiday_lookup = get_holiday_lookup(start.date(), end.date())
		appointments = get_appointments(stored_start, stored_end, calendar=self.calendar, tz=tz)

		return evaluate_warnings(
			start,
			end,
			self.calendar,
			appointments,
			self.name if not self.is_new() else None,
			business_hours.opening,
			business_hours.closing,
			holiday_lookup
		)
