"""Record-management service for users owned by managers."""

from __future__ import annotations

from typing import Any


def create_app(*args: Any, **kwargs: Any):
    """Factory compatible with uvicorn/gunicorn (``--factory userhub:create_app``)."""

    from .app import create_app as _create_app

    return _create_app(*args, **kwargs)


__all__ = ["create_app"]
