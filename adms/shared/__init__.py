"""Shared utilities: datetime helpers and logging setup.

Used by domain and application layers. No business logic.
"""
