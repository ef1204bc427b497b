"""
Doctor/appointment view-model.

AppointmentStore owns the in-memory collections, validates input, persists
every mutation through a KeyValueStorage adapter and exposes one-shot
notifications plus change events for a presentation layer to render.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date
from typing import Callable, Iterable, Optional

from clinic.domain.models import (
    DEFAULT_STATUS,
    Appointment,
    Doctor,
    decode_appointments,
    decode_doctors,
    encode_appointments,
    encode_doctors,
    new_id,
)
from clinic.domain.validation import ValidationError, validate_appointment, validate_doctor
from clinic.repositories.base import KeyValueStorage, StorageError, get_storage
from clinic.services.notifications import (
    EVENT_APPOINTMENTS,
    EVENT_DELETE_CONFIRMATION,
    EVENT_DOCTORS,
    EVENT_NOTIFICATION,
    EVENT_SEARCH,
    Listener,
    ListenerRegistry,
    Notification,
)

logger = logging.getLogger(__name__)

DOCTORS_KEY = "Doctors"
APPOINTMENTS_KEY = "Appointments"

DOCTOR_ADDED = "Doctor added successfully!"
DOCTOR_UPDATED = "Doctor updated successfully!"
DOCTOR_DELETED = "Doctor deleted successfully!"
APPOINTMENT_BOOKED = "Appointment booked successfully!"
APPOINTMENT_DELETED = "Appointment deleted successfully!"


def _remove_positions(items: list, indices: Iterable[int]) -> int:
    removed = 0
    for index in sorted(set(indices), reverse=True):
        if 0 <= index < len(items):
            del items[index]
            removed += 1
    return removed


def _owned_copy(record, taken: set[str]):
    """Copy record for the store, issuing a fresh id when its id is already taken."""
    if record.id in taken:
        logger.warning("Id %s already in use; assigning a new one", record.id)
        return replace(record, id=new_id())
    return replace(record)


def _dedupe_ids(records: list) -> list:
    seen: set[str] = set()
    unique = []
    for record in records:
        record = _owned_copy(record, seen)
        seen.add(record.id)
        unique.append(record)
    return unique


class AppointmentStore:
    """Single owner of the doctor and appointment collections."""

    def __init__(self, storage: KeyValueStorage | None = None) -> None:
        self.storage = storage if storage is not None else get_storage()
        self.doctors: list[Doctor] = []
        self.appointments: list[Appointment] = []
        self._search_query = ""

        # transient UI state, never persisted
        self.last_message = ""
        self.show_message = False
        self.pending_notification: Optional[Notification] = None
        self.doctor_to_delete: Optional[set[int]] = None
        self.appointment_to_delete: Optional[set[int]] = None
        self.show_delete_confirmation = False

        self._listeners = ListenerRegistry()
        self.load_doctors()
        self.load_appointments()

    # -------------------------------------- observers --------------------------------------
    def subscribe(self, callback: Listener) -> Callable[[], None]:
        """Register callback(event); returns a function that unregisters it."""
        return self._listeners.subscribe(callback)

    def _notify(self, message: str, level: str = "info") -> None:
        self.last_message = message
        self.show_message = True
        self.pending_notification = Notification(message, level)
        self._listeners.emit(EVENT_NOTIFICATION)

    def clear_notification(self) -> None:
        """Called by the consumer once the pending message has been shown."""
        self.show_message = False
        self.pending_notification = None
        self._listeners.emit(EVENT_NOTIFICATION)

    # -------------------------------------- search --------------------------------------
    @property
    def search_query(self) -> str:
        return self._search_query

    @search_query.setter
    def search_query(self, value: str) -> None:
        self._search_query = value or ""
        self._listeners.emit(EVENT_SEARCH)

    def filtered_doctors(self) -> list[Doctor]:
        query = self._search_query
        if not query:
            return list(self.doctors)
        return [d for d in self.doctors if query in d.name or query in d.specialization]

    # -------------------------------------- doctors --------------------------------------
    def find_doctor(self, doctor_id: str) -> Optional[Doctor]:
        for doctor in self.doctors:
            if doctor.id == doctor_id:
                return doctor
        return None

    def add_doctor(self, doctor: Doctor) -> bool:
        try:
            validate_doctor(doctor)
        except ValidationError as exc:
            self._notify(exc.message, "error")
            return False
        self.doctors.append(_owned_copy(doctor, {d.id for d in self.doctors}))
        self.save_doctors()
        self._listeners.emit(EVENT_DOCTORS)
        self._notify(DOCTOR_ADDED)
        return True

    def update_doctor(self, doctor: Doctor) -> bool:
        for index, current in enumerate(self.doctors):
            if current.id == doctor.id:
                self.doctors[index] = replace(doctor)
                break
        else:
            logger.warning("update_doctor: no doctor with id %s", doctor.id)
            return False
        self.save_doctors()
        self._listeners.emit(EVENT_DOCTORS)
        self._notify(DOCTOR_UPDATED)
        return True

    def delete_doctor(self, indices: Iterable[int]) -> int:
        """Remove doctors by position in the unfiltered list. Prefer delete_doctor_by_id."""
        removed = _remove_positions(self.doctors, indices)
        self.save_doctors()
        self._listeners.emit(EVENT_DOCTORS)
        self._notify(DOCTOR_DELETED)
        return removed

    def delete_doctor_by_id(self, doctor_ids: Iterable[str]) -> int:
        targets = set(doctor_ids)
        before = len(self.doctors)
        self.doctors[:] = [d for d in self.doctors if d.id not in targets]
        self.save_doctors()
        self._listeners.emit(EVENT_DOCTORS)
        self._notify(DOCTOR_DELETED)
        return before - len(self.doctors)

    # -------------------------------------- appointments --------------------------------------
    def add_appointment(self, appointment: Appointment) -> bool:
        try:
            validate_appointment(appointment)
        except ValidationError as exc:
            self._notify(exc.message, "error")
            return False
        self.appointments.append(_owned_copy(appointment, {a.id for a in self.appointments}))
        self.save_appointments()
        self._listeners.emit(EVENT_APPOINTMENTS)
        self._notify(APPOINTMENT_BOOKED)
        return True

    def book_appointment(self, doctor: Doctor, time: str, day: date | None = None) -> Optional[Appointment]:
        """Book ``doctor`` at slot ``time`` on ``day`` (today by default)."""
        appointment = Appointment(
            doctor_name=doctor.name,
            date=day or date.today(),
            time=time,
            status=DEFAULT_STATUS,
        )
        if not self.add_appointment(appointment):
            return None
        return self.appointments[-1]

    def delete_appointment(self, indices: Iterable[int]) -> int:
        removed = _remove_positions(self.appointments, indices)
        self.save_appointments()
        self._listeners.emit(EVENT_APPOINTMENTS)
        self._notify(APPOINTMENT_DELETED)
        return removed

    def delete_appointment_by_id(self, appointment_ids: Iterable[str]) -> int:
        targets = set(appointment_ids)
        before = len(self.appointments)
        self.appointments[:] = [a for a in self.appointments if a.id not in targets]
        self.save_appointments()
        self._listeners.emit(EVENT_APPOINTMENTS)
        self._notify(APPOINTMENT_DELETED)
        return before - len(self.appointments)

    # -------------------------------------- delete confirmation --------------------------------------
    def request_doctor_delete(self, indices: Iterable[int]) -> None:
        self.doctor_to_delete = set(indices)
        self.show_delete_confirmation = True
        self._listeners.emit(EVENT_DELETE_CONFIRMATION)

    def request_appointment_delete(self, indices: Iterable[int]) -> None:
        self.appointment_to_delete = set(indices)
        self.show_delete_confirmation = True
        self._listeners.emit(EVENT_DELETE_CONFIRMATION)

    def confirm_delete(self) -> int:
        """Carry out whichever deletions are pending and reset the markers."""
        removed = 0
        if self.doctor_to_delete is not None:
            removed += self.delete_doctor(self.doctor_to_delete)
        if self.appointment_to_delete is not None:
            removed += self.delete_appointment(self.appointment_to_delete)
        self._reset_delete_markers()
        return removed

    def cancel_delete(self) -> None:
        self._reset_delete_markers()

    def _reset_delete_markers(self) -> None:
        self.doctor_to_delete = None
        self.appointment_to_delete = None
        self.show_delete_confirmation = False
        self._listeners.emit(EVENT_DELETE_CONFIRMATION)

    # -------------------------------------- persistence --------------------------------------
    def _save(self, key: str, encode: Callable[[], str]) -> None:
        try:
            self.storage.save(key, encode())
        except (StorageError, TypeError, ValueError):
            logger.exception("Could not persist %s", key)

    def _load(self, key: str, decode: Callable[[str], list]) -> list:
        try:
            blob = self.storage.load(key)
        except StorageError:
            logger.exception("Could not read %s; starting empty", key)
            return []
        if blob is None:
            return []
        try:
            records = decode(blob)
        except (ValueError, KeyError, TypeError, OverflowError) as exc:
            logger.warning("Discarding unreadable %s data: %s", key, exc)
            return []
        return _dedupe_ids(records)

    def save_doctors(self) -> None:
        self._save(DOCTORS_KEY, lambda: encode_doctors(self.doctors))

    def load_doctors(self) -> None:
        self.doctors = self._load(DOCTORS_KEY, decode_doctors)
        self._listeners.emit(EVENT_DOCTORS)

    def save_appointments(self) -> None:
        self._save(APPOINTMENTS_KEY, lambda: encode_appointments(self.appointments))

    def load_appointments(self) -> None:
        self.appointments = self._load(APPOINTMENTS_KEY, decode_appointments)
        self._listeners.emit(EVENT_APPOINTMENTS)
