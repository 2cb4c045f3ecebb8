"""
Install hooks for Salon Booking.
"""

import frappe

from salon_booking.salon_booking.scheduling.holidays import load_default_holidays
from salon_booking.salon_booking.scheduling.loaders import HOLIDAY_DOCTYPE


def after_install() -> None:
	seed_default_holidays()


def before_tests() -> None:
	seed_default_holidays()
	frappe.db.commit()


def seed_default_holidays() -> int:
	"""
	Crea un Salon Holiday por cada feriado por defecto que todavía no existe.

	Los feriados ya cargados (misma fecha) no se tocan, así que se puede
	correr varias veces.

	Returns:
		int: cantidad de feriados creados
	"""
	logger = frappe.logger("salon_booking")
	created = 0

	for holiday in load_default_holidays():
		if frappe.db.exists(HOLIDAY_DOCTYPE, {"holiday_date": holiday.date}):
			continue

		frappe.get_doc({
			"doctype": HOLIDAY_DOCTYPE,
			"holiday_date": holiday.date,
			"holiday_name": holiday.name,
			"holiday_type": holiday.type,
			"is_day_off": 1 if holiday.is_day_off else 0,
		}).insert(ignore_permissions=True)
		created += 1

	logger.info(f"Seeded {created} default holidays")
	return created
