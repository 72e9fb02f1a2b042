"""Plain result types handed back to callers of the user service."""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True)
class UserRecord:
    """Snapshot of one stored user, detached from the database session."""

    user_id: str
    full_name: str
    mob_num: str
    pan_num: str
    manager_id: str
    created_at: str
    updated_at: str
    is_active: bool

    @classmethod
    def from_row(cls, row: Any) -> "UserRecord":
        return cls(
            user_id=row.user_id,
            full_name=row.full_name,
            mob_num=row.mob_num,
            pan_num=row.pan_num,
            manager_id=row.manager_id,
            created_at=row.created_at,
            updated_at=row.updated_at,
            is_active=bool(row.is_active),
        )

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)
