"""
Create (or recreate) the key-value storage schema.

Uso:
  DATABASE_URL=sqlite:///clinic.db python -m clinic.db.create_tables [--drop]
"""
from __future__ import annotations

import argparse

from sqlalchemy.exc import SQLAlchemyError

from .session import Base, get_engine
from . import models  # noqa: F401  # registers kv_entries on Base.metadata


def create_all(*, drop_first: bool = False) -> None:
    engine = get_engine()
    if drop_first:
        Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)


def main(argv: list[str] | None = None) -> None:
    ap = argparse.ArgumentParser(description="Create the kv_entries table used by the SQL storage backend")
    ap.add_argument("--drop", action="store_true", help="drop existing tables before creating them")
    args = ap.parse_args(argv)
    try:
        create_all(drop_first=args.drop)
    except SQLAlchemyError as exc:
        raise SystemExit(f"Failed to create tables: {exc}") from exc
    print("Database tables created successfully.")


if __name__ == "__main__":
    main()
