"""Doctor profiles and appointment booking backed by key-value storage."""

from clinic.services.store import AppointmentStore

__all__ = ["AppointmentStore"]
