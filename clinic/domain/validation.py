"""Required-field rules applied before a record enters the store."""
from __future__ import annotations

from .models import Appointment, Doctor
from .slots import is_valid_slot

DOCTOR_FIELDS_REQUIRED = "All fields are required!"
DOCTOR_EXPERIENCE_INVALID = "Experience must be a non-negative number of years!"
APPOINTMENT_TIME_INVALID = "Please select a valid time for the appointment!"


class ValidationError(Exception):
    """Base class for rejected input. ``message`` is safe to show to the user."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class DoctorValidationError(ValidationError):
    pass


class AppointmentValidationError(ValidationError):
    pass


def validate_doctor(doctor: Doctor) -> None:
    if not doctor.name or not doctor.specialization or not doctor.contact:
        raise DoctorValidationError(DOCTOR_FIELDS_REQUIRED)
    if isinstance(doctor.experience, bool) or not isinstance(doctor.experience, int) or doctor.experience < 0:
        raise DoctorValidationError(DOCTOR_EXPERIENCE_INVALID)


def validate_appointment(appointment: Appointment) -> None:
    if not appointment.doctor_name or not appointment.time:
        raise AppointmentValidationError(APPOINTMENT_TIME_INVALID)
    if not is_valid_slot(appointment.time):
        raise AppointmentValidationError(APPOINTMENT_TIME_INVALID)
