"""
Appointment and Service models used by the scheduling engine.
"""

from datetime import datetime
from typing import Any, Dict, Iterable, Optional, Tuple

from .timeutils import parse_instant, to_local

STATUS_SCHEDULED = "scheduled"
STATUS_CONFIRMED = "confirmed"
STATUS_PENDING = "pending"
STATUS_PENDING_CANCELLATION = "pending_cancellation"
STATUS_CANCELLED = "cancelled"
STATUS_NO_SHOW = "no-show"
STATUS_COMPLETED = "completed"

APPOINTMENT_STATUSES = (
	STATUS_SCHEDULED,
	STATUS_CONFIRMED,
	STATUS_PENDING,
	STATUS_PENDING_CANCELLATION,
	STATUS_CANCELLED,
	STATUS_NO_SHOW,
	STATUS_COMPLETED,
)


class Appointment:
	"""
	Cita en hora local naive.

	start/end aware se convierten a `tz` (UTC si no se indica).

	Invariante: start < end. Las citas nunca se borran en el motor,
	solo cambian de status.
	"""

	def __init__(
		self,
		id: str,
		calendar_id: Optional[str],
		start: datetime,
		end: datetime,
		status: str = STATUS_SCHEDULED,
		client_id: Optional[str] = None,
		service_ids: Iterable[str] = (),
		tz=None,
		**extra: Any,
	) -> None:
		start = to_local(start, tz)
		end = to_local(end, tz)
		if start >= end:
			raise ValueError(f"Appointment {id}: start ({start}) must be before end ({end})")
		if status not in APPOINTMENT_STATUSES:
			raise ValueError(f"Appointment {id}: unknown status {status!r}")

		self.id = id
		self.calendar_id = calendar_id
		self.start = start
		self.end = end
		self.status = status
		self.client_id = client_id
		self.service_ids: Tuple[str, ...] = tuple(service_ids)
		self.extra = extra

	@classmethod
	def from_dict(cls, data: Dict[str, Any], tz=None) -> "Appointment":
		"""
		Acepta la forma almacenada (calendarId, clientId, serviceId "a,b")
		y la forma snake_case / documento Frappe (calendar, start_datetime...).
		"""
		data = dict(data)
		service_ids = data.pop("service_ids", None) or data.pop("serviceId", None) or ()
		if isinstance(service_ids, str):
			service_ids = [s.strip() for s in service_ids.split(",") if s.strip()]

		known = {
			"id": data.pop("id", None) or data.pop("name", None),
			"calendar_id": _pop_first(data, "calendar_id", "calendarId", "calendar"),
			"start": parse_instant(_pop_first(data, "start", "start_datetime"), tz),
			"end": parse_instant(_pop_first(data, "end", "end_datetime"), tz),
			"status": data.pop("status", None) or STATUS_SCHEDULED,
			"client_id": _pop_first(data, "client_id", "clientId", "client"),
		}
		return cls(service_ids=service_ids, **known, **data)

	@property
	def is_cancelled(self) -> bool:
		return self.status == STATUS_CANCELLED

	@property
	def duration_minutes(self) -> int:
		return int((self.end - self.start).total_seconds() // 60)

	def overlaps(self, start: datetime, end: datetime) -> bool:
		"""Solape estricto: start < self.end AND end > self.start."""
		return start < self.end and end > self.start

	def as_dict(self) -> Dict[str, Any]:
		data = dict(self.extra)
		data.update({
			"id": self.id,
			"calendar_id": self.calendar_id,
			"client_id": self.client_id,
			"start": self.start.isoformat(),
			"end": self.end.isoformat(),
			"status": self.status,
			"service_ids": list(self.service_ids),
		})
		return data

	def __repr__(self) -> str:
		return f"<Appointment {self.id} {self.start:%Y-%m-%d %H:%M}-{self.end:%H:%M} {self.status}>"


class Service:
	def __init__(self, id: str, duration: int, break_time: int = 0, name: Optional[str] = None) -> None:
		if duration is None or duration < 0 or (break_time or 0) < 0:
			raise ValueError(f"Service {id}: duration and break time must be non-negative")
		self.id = id
		self.name = name
		self.duration = int(duration)
		self.break_time = int(break_time or 0)

	@classmethod
	def from_dict(cls, data: Dict[str, Any]) -> "Service":
		return cls(
			id=data.get("id") or data.get("name"),
			duration=data.get("duration") or 0,
			break_time=data.get("breakTime", data.get("break_time")) or 0,
			name=data.get("service_name") or data.get("serviceName") or data.get("name"),
		)

	@property
	def blocking_minutes(self) -> int:
		"""Duración + pausa posterior (ambas bloquean la agenda)."""
		return self.duration + self.break_time


def total_blocking_minutes(services: Iterable[Service]) -> int:
	"""Duración total de una reserva multi-servicio."""
	return sum(service.blocking_minutes for service in services)


def _pop_first(data: Dict[str, Any], *keys: str) -> Any:
	value = None
	for key in keys:
		candidate = data.pop(key, None)
		if value is None and candidate is not None:
			value = candidate
	return value
