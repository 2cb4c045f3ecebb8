# Copyright (c) 2026, Salon Booking Contributors and contributors
# For license information, please see license.txt

import frappe
from frappe import _
from frappe.model.document import Document


class SalonService(Document):
	def validate(self) -> None:
		"""Duración positiva; la pausa posterior no puede ser negativa."""
		if not self.duration or self.duration <= 0:
			frappe.throw(_("Duration debe ser mayor que 0"))

		if (self.break_time or 0) < 0:
			frappe.throw(_("Break Time no puede ser negativo"))
