"""
Per-domain repository modules for database access.

Each module exposes plain functions taking a ``Session`` first; lookups of a
missing id raise ``cms.errors.NotFoundError`` instead of returning ``None``.
"""
