# src/beachmatch/api/app.py
"""
FastAPI application wiring.

Business logic lives in `beachmatch.api.routes` and `beachmatch.recommender`.
"""

from __future__ import annotations

import os

from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware

from beachmatch.core.logging import configure_logging

from .routes import router

configure_logging()

app = FastAPI(title="BeachMatch API", version="0.1.0")

# CORS for the web/mobile frontends, configured via env:
# - BEACHMATCH_CORS_ORIGINS="http://localhost:3000,http://127.0.0.1:3000"
cors_origins = [s.strip() for s in os.getenv("BEACHMATCH_CORS_ORIGINS", "").split(",") if s.strip()]
if cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

app.include_router(router)
