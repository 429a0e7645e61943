"""
App assembly entry point.

Re-exports the FastAPI `app` from `bluemoon.api.main` so servers can run
``uvicorn app:app`` from the service directory.
"""

from bluemoon.api.main import app  # noqa: F401
