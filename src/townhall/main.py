# src/townhall/main.py
"""Main entry point for the Townhall application."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from townhall.api import (
    auth_router,
    comments_router,
    forum_router,
    github_stats_router,
    system_router,
    votes_router,
)
from townhall.core.exceptions import AuthenticationFailure, TownhallError
from townhall.core.settings import settings
from townhall.db.session import SessionLocal, create_tables
from townhall.services.forum import seed_categories

logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Comments, votes and forum API for the blog",
    version=settings.app_version,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

# Include API routers
app.include_router(system_router, prefix=settings.api_prefix)
app.include_router(auth_router, prefix=settings.api_prefix)
app.include_router(comments_router, prefix=settings.api_prefix)
app.include_router(votes_router, prefix=settings.api_prefix)
app.include_router(github_stats_router, prefix=settings.api_prefix)
app.include_router(forum_router, prefix=settings.api_prefix)


@app.exception_handler(TownhallError)
async def handle_domain_error(_request: Request, exc: TownhallError) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthenticationFailure) else None
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=headers,
    )


@app.exception_handler(SQLAlchemyError)
async def handle_storage_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error(
        "Database error on %s %s",
        request.method,
        request.url.path,
        exc_info=exc,
    )
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"},
    )


def init_schema() -> None:
    """Create missing tables and seed the default forum categories."""
    create_tables()
    with SessionLocal() as db:
        seed_categories(db)


@app.on_event("startup")
def on_startup() -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if settings.auto_create_schema:
        init_schema()
    logger.info("%s %s started", settings.app_name, settings.app_version)


@app.get("/")
def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("townhall.main:app", host="0.0.0.0", port=8080, reload=settings.debug)
