"""
Scheduling Services Module

This module provides the availability engine of the salon:
- Business hours rules (rules.py) and holidays (holidays.py)
- Slot status resolution (slot_status.py)
- Bookable slot scanning (availability.py)
- Overlap detection (overlap.py)
- Day layout for the admin calendar (layout.py)
- Booking warnings (booking_warnings.py)
- Loading engine inputs from Frappe documents (loaders.py)

Everything except loaders.py is pure: inputs are passed in, nothing is read
from the database.
"""
