from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Keep the userhub package importable when running the tests from a checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from userhub.core import config as core_config  # noqa: E402
from userhub.db import session as db_session  # noqa: E402
from userhub.db.create_tables import SEED_MANAGERS  # noqa: E402
from userhub.db.models import Manager  # noqa: E402
from userhub.repositories.sql_repository import UserStore  # noqa: E402
from userhub.services.user_service import UserService  # noqa: E402

ACTIVE_MANAGER = SEED_MANAGERS[0][0]
OTHER_ACTIVE_MANAGER = SEED_MANAGERS[1][0]
INACTIVE_MANAGER = "9d8c7b6a-5e4f-4a3b-8c2d-1e0f9a8b7c6d"
MISSING_MANAGER = "0b5e3c9a-7f1d-4e2b-9a6c-3d8f1e2a4b5c"


@pytest.fixture()
def store(tmp_path, monkeypatch):
    """Temporary SQLite store with the seeded managers plus one inactive manager."""
    db_file = tmp_path / "test.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{db_file}")
    core_config.get_settings.cache_clear()
    db_session.get_engine.cache_clear()

    engine = db_session.get_engine()
    user_store = UserStore(engine)
    user_store.initialize()
    with user_store.transaction() as repo:
        repo.session.add(Manager(manager_id=INACTIVE_MANAGER, is_active=False))

    yield user_store

    engine.dispose()
    core_config.get_settings.cache_clear()
    db_session.get_engine.cache_clear()


@pytest.fixture()
def service(store):
    return UserService(store)


def make_payload(**overrides):
    payload = {
        "full_name": "Asha Rao",
        "mob_num": "+91 98765 43210",
        "pan_num": "abcde1234f",
        "manager_id": ACTIVE_MANAGER,
    }
    payload.update(overrides)
    return payload
