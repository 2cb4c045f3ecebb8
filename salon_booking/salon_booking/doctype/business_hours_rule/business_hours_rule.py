# Copyright (c) 2026, Salon Booking Contributors and contributors
# For license information, please see license.txt

from frappe.model.document import Document


class BusinessHoursRule(Document):
	pass
