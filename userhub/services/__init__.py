"""
High-level use cases for the userhub API.

Each service module orchestrates validators, integrity checks and the store to
implement business rules (create user, batch update, delete by mobile, etc.).

Routers (FastAPI endpoints) call these services instead of touching sessions
directly.
"""
