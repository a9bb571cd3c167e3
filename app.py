"""
App assembly entry point.

Re-exports the FastAPI `app` from `cms.api.main` so `uvicorn app:app` works
from the repository root.
"""

from cms.api.main import app  # noqa: F401
