"""
Smoke tests for SQLStorage against a temporary SQLite database.
"""
from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Garante que o pacote clinic seja importável durante os testes locais
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from clinic.core import config as core_config  # noqa: E402
from clinic.db import create_tables  # noqa: E402
from clinic.db import session as db_session  # noqa: E402
from clinic.domain.models import Doctor  # noqa: E402
from clinic.repositories import StorageError  # noqa: E402
from clinic.repositories.sql_repository import SQLStorage  # noqa: E402
from clinic.services.store import AppointmentStore  # noqa: E402


@pytest.fixture()
def temp_db(tmp_path, monkeypatch):
    """Configura um SQLite temporário e garante teardown completo para não deixar o arquivo bloqueado no Windows."""
    db_file = tmp_path / "test.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{db_file}")
    core_config.get_settings.cache_clear()
    db_session.reset_engine()

    create_tables.create_all(drop_first=True)

    yield db_file

    db_session.reset_engine()
    core_config.get_settings.cache_clear()


def test_save_load_and_overwrite(temp_db):
    storage = SQLStorage()
    assert storage.load("Doctors") is None
    storage.save("Doctors", "[]")
    storage.save("Doctors", '[{"name": "x"}]')
    assert storage.load("Doctors") == '[{"name": "x"}]'
    storage.save("Appointments", "[]")
    assert storage.keys() == ["Appointments", "Doctors"]
    storage.delete("Appointments")
    assert storage.load("Appointments") is None


def test_store_round_trip_over_sql(temp_db):
    store = AppointmentStore(SQLStorage())
    doc = Doctor(name="Dr. A", specialization="Cardiology", experience=5, contact="555-0100")
    assert store.add_doctor(doc)
    assert store.book_appointment(doc, "10:00 AM") is not None

    fresh = AppointmentStore(SQLStorage())
    assert fresh.doctors == [doc]
    assert fresh.appointments == store.appointments


def test_missing_table_surfaces_as_storage_error(temp_db):
    create_tables.Base.metadata.drop_all(bind=db_session.get_engine())
    with pytest.raises(StorageError):
        SQLStorage().load("Doctors")
    # the store swallows it and starts empty
    assert AppointmentStore(SQLStorage()).doctors == []


def test_missing_database_url_is_a_configuration_error(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    core_config.get_settings.cache_clear()
    db_session.reset_engine()
    try:
        with pytest.raises(RuntimeError):
            SQLStorage().load("Doctors")
    finally:
        core_config.get_settings.cache_clear()


def test_keys_and_delete_wrap_database_errors(temp_db):
    create_tables.Base.metadata.drop_all(bind=db_session.get_engine())
    storage = SQLStorage()
    with pytest.raises(StorageError):
        storage.keys()
    with pytest.raises(StorageError):
        storage.delete("Doctors")
