"""
Slot Status Resolver

Decides whether a date+time is open, and which rule applies.

Precedencia estricta:
1. Feriado con día libre (cierra todo el día)
2. Reglas de cierre (primera que coincide)
3. Reglas de apertura (lista vacía = abierto por defecto)
"""

from datetime import date, datetime, timedelta
from typing import NamedTuple, Optional, Sequence, Union

from .holidays import HolidayLookup
from .rules import BusinessHoursRule
from .timeutils import SLOT_INTERVAL_MINUTES, TimeValue, minute_of_day, parse_hhmm, weekday_id


class SlotStatus(NamedTuple):
	is_open: bool
	rule: Optional[BusinessHoursRule] = None

	@property
	def rule_name(self) -> Optional[str]:
		return self.rule.name if self.rule is not None else None


def resolve_status(
	day: Union[date, datetime],
	time_of_day: TimeValue,
	opening_rules: Sequence[BusinessHoursRule],
	closing_rules: Sequence[BusinessHoursRule],
	holiday_lookup: Optional[HolidayLookup] = None
) -> SlotStatus:
	"""
	Estado (abierto/cerrado) de un slot.

	Args:
		day: fecha del slot (si es datetime solo se usa la fecha)
		time_of_day: hora del slot ("HH:MM", time o minutos)
		opening_rules: reglas de apertura, en orden
		closing_rules: reglas de cierre, en orden
		holiday_lookup: función date -> Holiday | None

	Returns:
		SlotStatus(is_open, rule): rule es la regla que decidió, o None
	"""
	if isinstance(day, datetime):
		day = day.date()

	# 1. Feriado: cierra todo el día sin importar las demás reglas
	if holiday_lookup is not None:
		holiday = holiday_lookup(day)
		if holiday is not None and holiday.is_day_off:
			return SlotStatus(False, holiday.as_closing_rule())

	# 2. Día de la semana y minuto del día
	day_id = weekday_id(day)
	minute = parse_hhmm(time_of_day)

	# 3. Cierre: la primera regla que coincide gana
	rule = _first_match(closing_rules, day, day_id, minute)
	if rule is not None:
		return SlotStatus(False, rule)

	# 4. Apertura
	if not opening_rules:
		return SlotStatus(True)

	rule = _first_match(opening_rules, day, day_id, minute)
	if rule is not None:
		return SlotStatus(True, rule)

	return SlotStatus(False)


def resolve_status_at(
	instant: datetime,
	opening_rules: Sequence[BusinessHoursRule],
	closing_rules: Sequence[BusinessHoursRule],
	holiday_lookup: Optional[HolidayLookup] = None
) -> SlotStatus:
	"""resolve_status para un datetime local."""
	return resolve_status(
		instant.date(), minute_of_day(instant), opening_rules, closing_rules, holiday_lookup
	)


def is_span_open(
	start: datetime,
	end: datetime,
	opening_rules: Sequence[BusinessHoursRule],
	closing_rules: Sequence[BusinessHoursRule],
	holiday_lookup: Optional[HolidayLookup] = None,
	step_minutes: int = SLOT_INTERVAL_MINUTES
) -> bool:
	"""
	True si cada checkpoint de `step_minutes` en [start, end) está abierto.
	"""
	step = timedelta(minutes=step_minutes)
	current = start
	while current < end:
		if not resolve_status_at(current, opening_rules, closing_rules, holiday_lookup).is_open:
			return False
		current += step
	return True


def _first_match(
	rules: Sequence[BusinessHoursRule],
	day: date,
	day_id: str,
	minute: int
) -> Optional[BusinessHoursRule]:
	for rule in rules:
		if rule.applies_to(day, day_id, minute):
			return rule
	return None
