"""Referential/uniqueness checks run inside the caller's transaction."""

from __future__ import annotations

from userhub.repositories.sql_repository import SQLRepository
from userhub.services.errors import ManagerInactiveError, ManagerNotFoundError


def assert_active_manager(repo: SQLRepository, manager_id: str) -> None:
    active = repo.is_manager_active(manager_id)
    if active is None:
        raise ManagerNotFoundError(manager_id)
    if not active:
        raise ManagerInactiveError(manager_id)


def has_active_user_with_mobile(repo: SQLRepository, mob_num: str) -> bool:
    return any(user.is_active for user in repo.find_by_mobile(mob_num))
