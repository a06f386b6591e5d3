"""Mini README: HTTP interface for Finance Tracker.

Exports the FastAPI application factory used by the CLI and by uvicorn's
``--factory`` mode.
"""

from .web_app import create_application

__all__ = ["create_application"]
