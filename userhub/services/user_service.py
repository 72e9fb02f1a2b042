"""
User record use cases: create, read, delete and batch update.

Every operation validates its raw input first, then runs the integrity checks
and the write inside a single store transaction, so a failure never leaves a
partial change behind.
"""

from __future__ import annotations

import uuid
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Iterator, Mapping, Optional, Sequence

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError

from userhub.core.locks import KeyedLock
from userhub.db.models import User
from userhub.domain.records import UserRecord
from userhub.domain.validators import (
    ensure_present_keys,
    is_uuid_v4,
    normalize_mobile,
    validate_full_name,
    validate_pan,
)
from userhub.repositories.sql_repository import (
    EDITABLE_FIELDS,
    ConstraintViolation,
    SQLRepository,
    UserStore,
)
from userhub.services.errors import (
    AmbiguousMatchError,
    DuplicateActiveMobileError,
    InternalError,
    InvalidInputError,
    UserNotFoundError,
)
from userhub.services.integrity import assert_active_manager, has_active_user_with_mobile

REQUIRED_CREATE_KEYS = ("full_name", "mob_num", "pan_num", "manager_id")


def utc_now_iso() -> str:
    """Current UTC time as ISO-8601 text with milliseconds, e.g. 2026-10-19T05:52:00.123Z."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def new_user_id() -> str:
    return str(uuid.uuid4())


def _uuid_or_none(value: Any) -> Optional[str]:
    return value if is_uuid_v4(value) else None


# field -> (normalizer, error message)
_FIELD_RULES: dict[str, tuple[Callable[[Any], Optional[str]], str]] = {
    "full_name": (validate_full_name, "full_name must not be empty"),
    "mob_num": (normalize_mobile, "mob_num must be valid 10-digit number"),
    "pan_num": (validate_pan, "pan_num must be valid (ABCDE1234F)"),
    "manager_id": (_uuid_or_none, "manager_id must be UUID v4"),
}


@dataclass
class UserService:
    """Orchestrates validators, integrity checks and the store for user records."""

    store: UserStore
    clock: Callable[[], str] = utc_now_iso
    id_factory: Callable[[], str] = new_user_id

    def __post_init__(self):
        self._mobile_locks = KeyedLock()

    # -------------------------------------- helpers --------------------------------------
    @contextmanager
    def _transaction(self) -> Iterator[SQLRepository]:
        try:
            with self.store.transaction() as repo:
                yield repo
        except ConstraintViolation as exc:
            raise InternalError(str(exc)) from exc
        except SQLAlchemyError as exc:
            logger.opt(exception=exc).error("Store failure")
            raise InternalError("Unexpected store failure") from exc

    def _normalize_field(self, field: str, raw: Any) -> str:
        normalizer, message = _FIELD_RULES[field]
        value = normalizer(raw)
        if value is None:
            raise InvalidInputError(message, field=field)
        return value

    def _require_uuid(self, value: Any, field: str) -> str:
        if not is_uuid_v4(value):
            raise InvalidInputError(f"{field} invalid UUID", field=field)
        return value

    def _require_mobile(self, value: Any) -> str:
        normalized = normalize_mobile(value)
        if normalized is None:
            raise InvalidInputError("mob_num invalid", field="mob_num")
        return normalized

    # -------------------------------------- create --------------------------------------
    def create(self, data: Mapping[str, Any]) -> str:
        """Validate and insert a new user. Returns the generated user_id."""
        if not isinstance(data, Mapping):
            raise InvalidInputError("Request body must be an object")
        missing = ensure_present_keys(data, REQUIRED_CREATE_KEYS)
        if missing:
            raise InvalidInputError(f"Missing keys: {', '.join(missing)}", field=missing[0])

        values = {field: self._normalize_field(field, data[field]) for field in REQUIRED_CREATE_KEYS}

        with self._mobile_locks.hold(values["mob_num"]), self._transaction() as repo:
            assert_active_manager(repo, values["manager_id"])
            if has_active_user_with_mobile(repo, values["mob_num"]):
                raise DuplicateActiveMobileError("User with this mobile already exists", field="mob_num")
            now = self.clock()
            user = User(user_id=self.id_factory(), created_at=now, updated_at=now, is_active=True, **values)
            repo.insert_user(user)
            user_id = user.user_id

        logger.bind(user_id=user_id).info("User created")
        return user_id

    # -------------------------------------- read --------------------------------------
    def read(
        self,
        user_id: Any = None,
        mob_num: Any = None,
        manager_id: Any = None,
    ) -> list[UserRecord]:
        """
        Query users by at most one selector; precedence is user_id, mob_num, manager_id.
        No selector returns every user. Absence is an empty list, never an error.
        """
        given = [name for name, value in (("user_id", user_id), ("mob_num", mob_num), ("manager_id", manager_id)) if value]
        if len(given) > 1:
            logger.bind(used=given[0], ignored=given[1:]).debug("Extra selectors ignored")

        if user_id:
            user_id = self._require_uuid(user_id, "user_id")
            with self._transaction() as repo:
                row = repo.find_by_id(user_id)
                return [UserRecord.from_row(row)] if row is not None else []
        if mob_num:
            normalized = self._require_mobile(mob_num)
            with self._transaction() as repo:
                return [UserRecord.from_row(row) for row in repo.find_by_mobile(normalized)]
        if manager_id:
            manager_id = self._require_uuid(manager_id, "manager_id")
            with self._transaction() as repo:
                return [UserRecord.from_row(row) for row in repo.find_by_manager(manager_id)]
        with self._transaction() as repo:
            return [UserRecord.from_row(row) for row in repo.find_all()]

    # -------------------------------------- delete --------------------------------------
    def delete(self, user_id: Any = None, mob_num: Any = None) -> str:
        """Hard-delete one user by id (preferred) or by an unambiguous mobile number."""
        if not user_id and not mob_num:
            raise InvalidInputError("Need user_id or mob_num")

        if user_id:
            user_id = self._require_uuid(user_id, "user_id")
            with self._transaction() as repo:
                if repo.find_by_id(user_id) is None:
                    raise UserNotFoundError("User not found", user_id=user_id)
                repo.delete_by_id(user_id)
            deleted = user_id
        else:
            normalized = self._require_mobile(mob_num)
            with self._transaction() as repo:
                matches = repo.find_by_mobile(normalized)
                if not matches:
                    raise UserNotFoundError("User not found", field="mob_num")
                if len(matches) > 1:
                    raise AmbiguousMatchError("Multiple users found, use user_id", field="mob_num")
                deleted = matches[0].user_id
                repo.delete_by_id(deleted)

        logger.bind(user_id=deleted).info("User deleted")
        return deleted

    # -------------------------------------- batch update --------------------------------------
    def _coerce_ids(self, user_ids: Any) -> list[Any]:
        if isinstance(user_ids, str):
            user_ids = [user_ids]
        if not isinstance(user_ids, (list, tuple)) or not user_ids:
            raise InvalidInputError("user_ids must be non-empty array", field="user_ids")
        return list(user_ids)

    def _validated_patch(self, patch: Any) -> dict[str, str]:
        if patch is None:
            return {}
        if not isinstance(patch, Mapping):
            raise InvalidInputError("update_data must be an object", field="update_data")
        for key in patch:
            if key not in EDITABLE_FIELDS:
                raise InvalidInputError(f"Invalid key {key}", field=str(key))
        return {field: self._normalize_field(field, patch[field]) for field in EDITABLE_FIELDS if field in patch}

    def batch_update(self, user_ids: Any, patch: Any) -> int:
        """
        Apply the same patch to every listed user in one transaction.

        A single unknown id rolls back the whole batch. Fields absent from the
        patch keep their stored value; every touched row shares one updated_at.
        Returns the number of rows updated.
        """
        ids: Sequence[Any] = self._coerce_ids(user_ids)
        changes = self._validated_patch(patch)

        now = self.clock()
        with self._transaction() as repo:
            if "manager_id" in changes:
                assert_active_manager(repo, changes["manager_id"])
            for user_id in ids:
                if not is_uuid_v4(user_id):
                    raise InvalidInputError(f"Invalid UUID: {user_id}", field="user_ids")
                existing = repo.find_by_id(user_id)
                if existing is None:
                    raise UserNotFoundError(f"User not found: {user_id}", user_id=user_id)
                merged = {field: changes.get(field, getattr(existing, field)) for field in EDITABLE_FIELDS}
                repo.update_fields(user_id, merged, now)

        logger.bind(count=len(ids)).info("Users updated")
        return len(ids)
