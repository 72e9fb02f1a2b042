"""
Core utilities shared across the userhub backend.

This package hosts:
- configuration helpers (env vars, paths, log sinks)
- cross-cutting services such as logging setup and per-key locks

Services and routers depend on these primitives instead of reading the
environment or configuring sinks themselves.
"""
