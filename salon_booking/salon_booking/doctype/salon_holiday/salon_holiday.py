# Copyright (c) 2026, Salon Booking Contributors and contributors
# For license information, please see license.txt

"""
Salon Holiday DocType

Feriados del salón. Un feriado con "Is Day Off" cierra todo el día,
por encima de cualquier regla de horario.
"""

import frappe
from frappe import _
from frappe.model.document import Document


class SalonHoliday(Document):
	"""
	Salon Holiday with validation.

	Validations:
	- holiday_date y holiday_name requeridos
	- Un solo feriado por fecha
	- Aviso si hay citas activas en un día libre
	"""

	def validate(self) -> None:
		self._validate_required_fields()
		self._validate_unique_date()
		self._warn_existing_appointments()

	def _validate_required_fields(self) -> None:
		if not self.holiday_date:
			frappe.throw(_("Holiday Date es requerido"))

		if not self.holiday_name:
			frappe.throw(_("Holiday Name es requerido"))

	def _validate_unique_date(self) -> None:
		"""Valida que no exista otro feriado en la misma fecha."""
		filters = {
			"holiday_date": self.holiday_date,
			"name": ["!=", self.name] if self.name else ["is", "set"]
		}

		existing = frappe.get_all("Salon Holiday", filters=filters, pluck="name", limit=1)
		if existing:
			frappe.throw(_(f"Ya existe un feriado para {self.holiday_date}: {existing[0]}"))

	def _warn_existing_appointments(self) -> None:
		"""Advierte si el día libre ya tiene citas no canceladas."""
		if not self.is_day_off:
			return

		count = frappe.db.count("Salon Appointment", {
			"start_datetime": ["between", [f"{self.holiday_date} 00:00:00", f"{self.holiday_date} 23:59:59"]],
			"status": ["!=", "cancelled"]
		})

		if count:
			frappe.msgprint(
				_(f"Hay {count} cita(s) activas el {self.holiday_date}. "
				  f"El día quedará cerrado para nuevas reservas, pero las citas existentes no se modifican."),
				indicator="orange",
				alert=True
			)
