# Copyright (c) 2026, Salon Booking Contributors and contributors
# For license information, please see license.txt

"""
Salon Business Hours DocType

Single con las reglas de apertura y cierre del salón y su timezone.
"""

import frappe
from frappe import _
from frappe.model.document import Document
from frappe.utils import getdate
from typing import Dict, List, Any

from salon_booking.salon_booking.scheduling.timeutils import WEEKDAY_IDS, get_timezone, parse_hhmm


class SalonBusinessHours(Document):
	"""
	Salon Business Hours with validation for rules.

	Validations:
	- timezone válida (si está presente)
	- Cada regla: start_time < end_time, días válidos, date_from <= date_to
	"""

	def validate(self) -> None:
		"""
		Validación antes de guardar.
		"""
		self._validate_timezone()
		self._validate_rules(self.opening_rules, _("Apertura"))
		self._validate_rules(self.closing_rules, _("Cierre"))
		self._warn_overlapping_opening_rules()

	def on_update(self) -> None:
		frappe.logger("salon_booking").info(
			f"Business hours updated: {len(self.opening_rules or [])} opening, "
			f"{len(self.closing_rules or [])} closing rules"
		)

	def _validate_timezone(self) -> None:
		"""Valida que la timezone exista en pytz."""
		if not self.timezone or self.timezone == "system timezone":
			return
		try:
			get_timezone(self.timezone)
		except ValueError:
			frappe.throw(_(f"Timezone inválida: {self.timezone}"))

	def _validate_rules(self, rows, label: str) -> None:
		"""
		Valida cada fila de reglas.

		Args:
			rows: filas de Business Hours Rule
			label: nombre de la tabla para los mensajes
		"""
		for idx, rule in enumerate(rows or [], 1):
			if not rule.start_time:
				frappe.throw(_(f"{label}, fila {idx}: Start Time es requerido"))

			if not rule.end_time:
				frappe.throw(_(f"{label}, fila {idx}: End Time es requerido"))

			try:
				start = parse_hhmm(rule.start_time)
				end = parse_hhmm(rule.end_time, allow_end_of_day=True)
			except ValueError as e:
				frappe.throw(_(f"{label}, fila {idx}: {str(e)}"))

			if start >= end:
				frappe.throw(
					_(f"{label}, fila {idx}: Start Time debe ser menor que End Time")
				)

			days = self._normalize_days(rule.days)
			unknown = [d for d in days if d not in WEEKDAY_IDS]
			if unknown:
				frappe.throw(_(f"{label}, fila {idx}: días inválidos: {', '.join(unknown)}"))
			rule.days = ",".join(days)

			if rule.date_from and rule.date_to and getdate(rule.date_from) > getdate(rule.date_to):
				frappe.throw(_(f"{label}, fila {idx}: Date From debe ser menor o igual que Date To"))

	def _warn_overlapping_opening_rules(self) -> None:
		"""
		Advierte (sin bloquear) si dos reglas de apertura se solapan el mismo día.

		Solapar reglas de apertura es válido (la primera que coincide gana),
		pero suele ser un error de carga.
		"""
		rules_by_day: Dict[str, List[Dict[str, Any]]] = {}

		for idx, rule in enumerate(self.opening_rules or [], 1):
			if rule.date_from or rule.date_to:
				continue
			for day in self._normalize_days(rule.days) or list(WEEKDAY_IDS):
				rules_by_day.setdefault(day, []).append({
					"idx": idx,
					"start": parse_hhmm(rule.start_time),
					"end": parse_hhmm(rule.end_time, allow_end_of_day=True)
				})

		for day, rules in rules_by_day.items():
			rules.sort(key=lambda x: x["start"])
			for current, next_rule in zip(rules, rules[1:]):
				if current["end"] > next_rule["start"]:
					frappe.msgprint(
						_(f"{day}: la regla de apertura fila {current['idx']} se solapa con la fila {next_rule['idx']}"),
						indicator="orange",
						alert=True
					)

	@staticmethod
	def _normalize_days(value) -> List[str]:
		return [d.strip().lower() for d in (value or "").split(",") if d.strip()]
