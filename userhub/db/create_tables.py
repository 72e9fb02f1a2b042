"""Utility script to create the database schema and seed the fixed managers."""
from __future__ import annotations

from typing import Iterable, Tuple

from loguru import logger
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from .session import Base, get_engine, make_sessionmaker
from .models import Manager

SEED_MANAGERS: Tuple[Tuple[str, bool], ...] = (
    ("3f1c1a50-0c9c-4a7d-9f56-9a0e6b96b8ab", True),
    ("a6e6b813-0b91-4e1b-8d2e-7cdd2fbd3b45", True),
    ("5b2c9e6d-0f7a-4c13-9e6a-2d3c4b5a6e7f", True),
)


def create_all(engine: Engine | None = None) -> None:
    Base.metadata.create_all(bind=engine or get_engine())


def seed_managers(session: Session, managers: Iterable[Tuple[str, bool]] = SEED_MANAGERS) -> int:
    """Insert ``managers`` when the table is empty. Returns the manager count afterwards."""
    count = session.execute(select(func.count()).select_from(Manager)).scalar_one()
    if count:
        return count
    rows = [Manager(manager_id=manager_id, is_active=is_active) for manager_id, is_active in managers]
    session.add_all(rows)
    session.flush()
    return len(rows)


def init_db(engine: Engine | None = None, managers: Iterable[Tuple[str, bool]] = SEED_MANAGERS) -> int:
    engine = engine or get_engine()
    create_all(engine)
    with make_sessionmaker(engine).begin() as session:
        count = seed_managers(session, managers)
    logger.bind(managers=count).info("Store initialized")
    return count


if __name__ == "__main__":
    try:
        total = init_db()
        print(f"Database tables created successfully ({total} managers).")
    except SQLAlchemyError as exc:
        raise SystemExit(f"Failed to create tables: {exc}") from exc
