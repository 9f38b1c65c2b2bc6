"""Inbound adapters for the text table store.

Exports:
    REST API:
        - create_app: Create a FastAPI application
        - run_server: Run the REST API server
"""

from text_db.adapters.inbound.rest_api import create_app, run_server

__all__ = [
    "create_app",
    "run_server",
]
