"""
Doctor and Appointment records.

Records encode to field-named JSON objects so that optional fields added later
do not break decoding of data written by older versions.
"""
from __future__ import annotations

import json
import uuid
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone
from typing import Any, Iterable, Mapping

DEFAULT_STATUS = "Scheduled"

# Numeric dates in legacy payloads count seconds from this instant.
_LEGACY_EPOCH = datetime(2001, 1, 1, tzinfo=timezone.utc)


def new_id() -> str:
    return str(uuid.uuid4()).upper()


@dataclass
class Doctor:
    name: str
    specialization: str
    experience: int = 0
    contact: str = ""
    id: str = field(default_factory=new_id)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "specialization": self.specialization,
            "experience": self.experience,
            "contact": self.contact,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Doctor":
        return cls(
            id=_optional_text(data, "id") or new_id(),
            name=_text(data, "name"),
            specialization=_text(data, "specialization"),
            experience=_non_negative_int(data.get("experience")),
            contact=_text(data, "contact"),
        )


@dataclass
class Appointment:
    doctor_name: str
    date: date
    time: str
    status: str = DEFAULT_STATUS
    id: str = field(default_factory=new_id)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "doctorName": self.doctor_name,
            "date": self.date.isoformat(),
            "time": self.time,
            "status": self.status,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Appointment":
        return cls(
            id=_optional_text(data, "id") or new_id(),
            doctor_name=_text(data, "doctorName"),
            date=parse_date(data["date"]),
            time=_text(data, "time"),
            status=_optional_text(data, "status") or DEFAULT_STATUS,
        )


# -------------------------- field helpers --------------------------
def _text(data: Mapping[str, Any], key: str) -> str:
    value = data[key]
    if not isinstance(value, str):
        raise TypeError(f"field {key!r} must be a string, got {type(value).__name__}")
    return value


def _optional_text(data: Mapping[str, Any], key: str) -> str | None:
    if data.get(key) is None:
        return None
    return _text(data, key)


def _non_negative_int(value: Any) -> int:
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"experience must be an integer, got {type(value).__name__}")
    years = value
    if years < 0:
        raise ValueError("experience must not be negative")
    return years


def parse_date(value: Any) -> date:
    """Accept ISO dates, ISO datetimes (date part kept) and legacy numeric offsets."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return (_LEGACY_EPOCH + timedelta(seconds=value)).date()
        except OverflowError as exc:
            raise ValueError(f"date offset out of range: {value!r}") from exc
    if isinstance(value, str):
        text = value.strip()
        if len(text) > 10:
            return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
        return date.fromisoformat(text)
    raise TypeError(f"unsupported date value: {value!r}")


# -------------------------- collection codecs --------------------------
def _decode_list(blob: str | bytes) -> list:
    payload = json.loads(blob)
    if not isinstance(payload, list):
        raise ValueError("expected a JSON array of records")
    for item in payload:
        if not isinstance(item, Mapping):
            raise TypeError(f"expected a JSON object per record, got {type(item).__name__}")
    return payload


def encode_doctors(doctors: Iterable[Doctor]) -> str:
    return json.dumps([d.to_dict() for d in doctors], ensure_ascii=False)


def decode_doctors(blob: str | bytes) -> list[Doctor]:
    return [Doctor.from_dict(item) for item in _decode_list(blob)]


def encode_appointments(appointments: Iterable[Appointment]) -> str:
    return json.dumps([a.to_dict() for a in appointments], ensure_ascii=False)


def decode_appointments(blob: str | bytes) -> list[Appointment]:
    return [Appointment.from_dict(item) for item in _decode_list(blob)]
