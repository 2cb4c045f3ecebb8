"""
Day Layout Service

Lays out a day's appointments for the admin calendar:
- Groups appointments that visually collide
- Packs each group into side-by-side columns
- Computes top/height (px) and width/left (%) for rendering
"""

from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

from .models import Appointment
from .overlap import intervals_overlap
from .rules import BusinessHoursRule
from .timeutils import SLOT_INTERVAL_MINUTES, DateKey, minute_of_day

SLOT_HEIGHT_PX = 40
DEFAULT_EARLIEST_HOUR = 8


class AppointmentLayout:
	"""Cita + geometría lista para renderizar."""

	def __init__(
		self,
		appointment: Appointment,
		top: float,
		height: float,
		column: int,
		total_columns: int
	) -> None:
		self.appointment = appointment
		self.top = top
		self.height = height
		self.column = column
		self.total_columns = total_columns

	@property
	def width(self) -> float:
		"""Ancho en porcentaje."""
		return 100 / self.total_columns

	@property
	def left(self) -> float:
		"""Desplazamiento horizontal en porcentaje."""
		return (self.column / self.total_columns) * 100

	def as_style(self) -> Dict[str, str]:
		return {
			"top": f"{_number(self.top)}px",
			"height": f"{_number(self.height)}px",
			"width": f"{_number(self.width)}%",
			"left": f"{_number(self.left)}%",
		}

	def as_dict(self) -> Dict[str, Any]:
		data = self.appointment.as_dict()
		data["layout"] = self.as_style()
		return data

	def __repr__(self) -> str:
		return (
			f"<AppointmentLayout {self.appointment.id} col={self.column}/{self.total_columns} "
			f"top={self.top} height={self.height}>"
		)


def group_collisions(appointments: Sequence[Appointment]) -> List[List[Appointment]]:
	"""
	Agrupa citas que se solapan visualmente.

	Pasada greedy única: una cita se une al primer grupo que tenga algún
	miembro que se solape con ella; si no, abre un grupo nuevo. No es un
	cierre transitivo: dos grupos ya formados no se fusionan después.
	"""
	groups: List[List[Appointment]] = []

	for appt in appointments:
		for group in groups:
			if any(intervals_overlap(appt.start, appt.end, other.start, other.end) for other in group):
				group.append(appt)
				break
		else:
			groups.append([appt])

	return groups


def pack_columns(group: Sequence[Appointment]) -> List[List[Appointment]]:
	"""
	Reparte un grupo en columnas (coloreo greedy de grafo de intervalos).

	Cada cita, en orden de inicio, va a la primera columna cuya última
	cita termina <= su inicio; si ninguna sirve, se abre una columna nueva.
	"""
	columns: List[List[Appointment]] = []

	for appt in sorted(group, key=lambda a: a.start):
		for column in columns:
			if column[-1].end <= appt.start:
				column.append(appt)
				break
		else:
			columns.append([appt])

	return columns


def layout_day(
	appointments: Iterable[Appointment],
	day: Optional[Union[date, datetime]] = None,
	day_start_offset_minutes: int = 0,
	slot_interval_minutes: int = SLOT_INTERVAL_MINUTES,
	slot_height_px: float = SLOT_HEIGHT_PX
) -> List[AppointmentLayout]:
	"""
	Geometría de las citas de un día.

	Args:
		appointments: citas (se ignoran las canceladas)
		day: si se indica, solo las citas que empiezan ese día
		day_start_offset_minutes: minuto del primer slot visible
		slot_interval_minutes: minutos por slot de la grilla
		slot_height_px: alto de un slot en px

	Returns:
		list[AppointmentLayout]: en orden de grupo y columna. Las citas que
		empiezan antes de la ventana visible (top < 0) se omiten.
	"""
	if isinstance(day, datetime):
		day = day.date()

	day_appointments = [
		appt for appt in appointments
		if not appt.is_cancelled and (day is None or appt.start.date() == day)
	]
	day_appointments.sort(key=lambda a: a.start)

	layouts = []
	for group in group_collisions(day_appointments):
		columns = pack_columns(group)
		total_columns = len(columns)

		for col_index, column in enumerate(columns):
			for appt in column:
				top = (minute_of_day(appt.start) - day_start_offset_minutes) / slot_interval_minutes * slot_height_px

				# Empieza antes de la ventana visible: no se dibuja
				if top < 0:
					continue

				height = max(
					slot_height_px,
					appt.duration_minutes / slot_interval_minutes * slot_height_px
				)
				layouts.append(AppointmentLayout(appt, top, height, col_index, total_columns))

	return layouts


def layout_days(
	appointments: Iterable[Appointment],
	days: Iterable[Union[date, datetime]],
	**kwargs
) -> Dict[DateKey, List[AppointmentLayout]]:
	"""layout_day para cada día (vista semanal)."""
	appointments = list(appointments)
	result = {}
	for day in days:
		if isinstance(day, datetime):
			day = day.date()
		result[DateKey.from_date(day)] = layout_day(appointments, day=day, **kwargs)
	return result


def earliest_opening_hour(
	opening_rules: Sequence[BusinessHoursRule],
	default: int = DEFAULT_EARLIEST_HOUR
) -> int:
	"""Hora más temprana de apertura (para el scroll inicial de la vista)."""
	if not opening_rules:
		return default
	return min(rule.start_minutes // 60 for rule in opening_rules)


def scroll_top(
	target_hour: int,
	first_visible_minutes: int = 0,
	slot_interval_minutes: int = SLOT_INTERVAL_MINUTES,
	slot_height_px: float = SLOT_HEIGHT_PX
) -> float:
	"""Posición de scroll (px) para que `target_hour` quede arriba."""
	minutes_from_top = target_hour * 60 - first_visible_minutes
	if minutes_from_top < 0:
		return 0
	return minutes_from_top / slot_interval_minutes * slot_height_px


def _number(value: float) -> str:
	if float(value).is_integer():
		return str(int(value))
	return f"{value:g}"
