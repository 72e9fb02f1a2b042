"""
Persistence adapters.

These modules encapsulate how users/managers are stored and retrieved.
Services depend on the store/repository interface rather than on sessions.
"""
