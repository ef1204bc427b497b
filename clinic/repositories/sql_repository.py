"""Key-value storage backed by SQLAlchemy."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError

from clinic.db.models import StorageEntry
from clinic.db.session import get_session

from .base import StorageError


class SQLStorage:
    """One row per key in ``kv_entries``."""

    def load(self, key: str) -> Optional[str]:
        try:
            with get_session() as session:
                entry = session.get(StorageEntry, key)
                return entry.value if entry else None
        except SQLAlchemyError as exc:
            raise StorageError(f"cannot load {key!r}: {exc}") from exc

    def save(self, key: str, value: str) -> None:
        now = datetime.now(timezone.utc)
        try:
            with get_session() as session:
                entry = session.get(StorageEntry, key)
                if not entry:
                    session.add(StorageEntry(key=key, value=value, updated_at=now))
                else:
                    entry.value = value
                    entry.updated_at = now
                session.commit()
        except SQLAlchemyError as exc:
            raise StorageError(f"cannot save {key!r}: {exc}") from exc

    def keys(self) -> list[str]:
        try:
            with get_session() as session:
                return list(session.execute(select(StorageEntry.key).order_by(StorageEntry.key)).scalars())
        except SQLAlchemyError as exc:
            raise StorageError(f"cannot list keys: {exc}") from exc

    def delete(self, key: str) -> None:
        try:
            with get_session() as session:
                session.execute(delete(StorageEntry).where(StorageEntry.key == key))
                session.commit()
        except SQLAlchemyError as exc:
            raise StorageError(f"cannot delete {key!r}: {exc}") from exc
