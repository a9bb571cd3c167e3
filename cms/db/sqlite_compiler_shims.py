"""SQLite compilation shim for the PostgreSQL JSONB type.

Content payloads, metadata and string lists are stored as JSONB on
PostgreSQL. Unit tests run against SQLite, where the column is emitted as
plain JSON so ``Base.metadata.create_all()`` succeeds and values round-trip.

Usage: imported for side-effects by cms.db.models.
"""
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.ext.compiler import compiles


@compiles(JSONB, "sqlite")
def _compile_jsonb_sqlite(element, compiler, **kw):  # pragma: no cover - trivial
    return "JSON"
