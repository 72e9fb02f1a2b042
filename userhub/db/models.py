"""SQLAlchemy models for managers and the users they own."""
from __future__ import annotations

from sqlalchemy import Boolean, Column, ForeignKey, String, Text, true
from sqlalchemy.orm import relationship

from .session import Base


class Manager(Base):
    __tablename__ = "managers"

    manager_id = Column(String(36), primary_key=True)
    is_active = Column(Boolean, default=True, server_default=true(), nullable=False)

    users = relationship("User", back_populates="manager")


class User(Base):
    __tablename__ = "users"

    user_id = Column(String(36), primary_key=True)
    full_name = Column(Text, nullable=False)
    mob_num = Column(String(10), nullable=False, index=True)
    pan_num = Column(String(10), nullable=False)
    manager_id = Column(String(36), ForeignKey("managers.manager_id"), nullable=False, index=True)
    # ISO-8601 text keeps the values sortable and identical to what callers see.
    created_at = Column(String(32), nullable=False)
    updated_at = Column(String(32), nullable=False)
    is_active = Column(Boolean, default=True, server_default=true(), nullable=False)

    manager = relationship("Manager", back_populates="users")
