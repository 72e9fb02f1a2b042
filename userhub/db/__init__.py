"""Database helpers (engine/session export)."""

from .session import Base, build_engine, get_engine, make_sessionmaker

__all__ = ["Base", "build_engine", "get_engine", "make_sessionmaker"]
