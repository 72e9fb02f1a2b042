"""High-level data access helpers backed by SQLAlchemy."""
from __future__ import annotations

from contextlib import contextmanager
from typing import Iterable, Iterator, Mapping, Optional, Tuple

from sqlalchemy import delete, func, select, update
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from userhub.db.create_tables import SEED_MANAGERS, init_db
from userhub.db.models import Manager, User
from userhub.db.session import get_engine, make_sessionmaker

EDITABLE_FIELDS = ("full_name", "mob_num", "pan_num", "manager_id")


class ConstraintViolation(Exception):
    """Raised when the database rejects a write (duplicate key, dangling manager)."""


class SQLRepository:
    """Queries over users/managers bound to one transaction-scoped session."""

    def __init__(self, session: Session) -> None:
        self.session = session

    # -------------------------- users --------------------------
    def insert_user(self, user: User) -> User:
        self.session.add(user)
        try:
            self.session.flush()
        except IntegrityError as exc:
            raise ConstraintViolation(f"Cannot insert user {user.user_id}: {exc.orig}") from exc
        return user

    def _ordered(self, stmt):
        return stmt.order_by(User.created_at, User.user_id)

    def find_all(self) -> list[User]:
        return self.session.execute(self._ordered(select(User))).scalars().all()

    def find_by_id(self, user_id: str) -> Optional[User]:
        return self.session.get(User, user_id)

    def find_by_mobile(self, mob_num: str) -> list[User]:
        stmt = self._ordered(select(User).where(User.mob_num == mob_num))
        return self.session.execute(stmt).scalars().all()

    def find_by_manager(self, manager_id: str) -> list[User]:
        stmt = self._ordered(select(User).where(User.manager_id == manager_id))
        return self.session.execute(stmt).scalars().all()

    def delete_by_id(self, user_id: str) -> int:
        result = self.session.execute(
            delete(User).where(User.user_id == user_id).execution_options(synchronize_session=False)
        )
        return result.rowcount

    def delete_by_mobile(self, mob_num: str) -> int:
        result = self.session.execute(
            delete(User).where(User.mob_num == mob_num).execution_options(synchronize_session=False)
        )
        return result.rowcount

    def update_fields(self, user_id: str, patch: Mapping[str, str], updated_at: str) -> int:
        """Overwrite the editable columns of one row. Returns 0 when ``user_id`` does not exist."""
        values = {key: patch[key] for key in EDITABLE_FIELDS}
        stmt = (
            update(User)
            .where(User.user_id == user_id)
            .values(**values, updated_at=updated_at)
            .execution_options(synchronize_session=False)
        )
        try:
            result = self.session.execute(stmt)
        except IntegrityError as exc:
            raise ConstraintViolation(f"Cannot update user {user_id}: {exc.orig}") from exc
        return result.rowcount

    def count_users(self) -> int:
        return self.session.execute(select(func.count()).select_from(User)).scalar_one()

    # -------------------------- managers --------------------------
    def is_manager_active(self, manager_id: str) -> Optional[bool]:
        """Active flag of the manager, or None when no such manager exists."""
        stmt = select(Manager.is_active).where(Manager.manager_id == manager_id)
        row = self.session.execute(stmt).first()
        if row is None:
            return None
        return bool(row[0])

    def count_managers(self) -> int:
        return self.session.execute(select(func.count()).select_from(Manager)).scalar_one()


class UserStore:
    """Owns the engine and hands out one repository per transaction."""

    def __init__(self, engine: Engine | None = None) -> None:
        self.engine = engine or get_engine()
        self._sessionmaker = make_sessionmaker(self.engine)

    def initialize(self, managers: Iterable[Tuple[str, bool]] = SEED_MANAGERS) -> int:
        """Create the schema and seed managers if absent. Returns the manager count."""
        return init_db(self.engine, managers)

    @contextmanager
    def transaction(self) -> Iterator[SQLRepository]:
        """Commit when the block exits normally, roll back on any exception."""
        session: Session = self._sessionmaker()
        try:
            with session.begin():
                yield SQLRepository(session)
        finally:
            session.close()

    def counts(self) -> dict[str, int]:
        with self.transaction() as repo:
            return {"managers": repo.count_managers(), "users": repo.count_users()}
