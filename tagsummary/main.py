"""FastAPI app wiring for Tag Summary.

This module owns the public ASGI `app` instance and the router wiring.
"""

import logging

from fastapi import FastAPI

from tagsummary.routes.api import router as api_router
from tagsummary.routes.pages import router as pages_router

logging.basicConfig(level=logging.INFO)

app = FastAPI(title="Tag Summary")


def create_application() -> FastAPI:
    """Return the configured FastAPI app for external servers/importers."""
    return app

# Pages + API
app.include_router(pages_router)
app.include_router(api_router)
