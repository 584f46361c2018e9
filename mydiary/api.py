"""
FastAPI app entry point aggregating per-domain routers under mydiary/routes.
Keep as `uvicorn mydiary.api:app`.
"""
from __future__ import annotations


from fastapi import FastAPI

from . import __version__
from .routes import base as base_routes
from .routes import entries as entries_routes
from .routes import logs as logs_routes
from .routes import users as users_routes


app = FastAPI(title="mydiary-api", version=__version__)

app.include_router(base_routes.router)
app.include_router(users_routes.router)
app.include_router(entries_routes.router)
app.include_router(logs_routes.router)
