"""
Booking API Domain

Available slots, slot status, day layout and appointment warnings.
"""

from salon_booking.api.booking.endpoints import (
	# Availability
	get_available_slots,
	get_week_slots,
	get_slot_status,
	# Calendar view
	get_day_layout,
	# Validation
	validate_appointment,
)

__all__ = [
	"get_available_slots",
	"get_week_slots",
	"get_slot_status",
	"get_day_layout",
	"validate_appointment",
]
