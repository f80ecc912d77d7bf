"""FastAPI application factory for the token check API."""

from __future__ import annotations

import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from loguru import logger
from starlette.middleware.cors import CORSMiddleware

from config.settings import settings
from src.api.middleware import SecurityHeadersMiddleware
from src.parsers.goplus.client import GoPlusClient
from src.services.checker import StaticAttributeSource, TokenChecker


def build_default_checker() -> tuple[TokenChecker, GoPlusClient | None]:
    """Checker wired from settings; GoPlus off → offline static source."""
    if not settings.enable_goplus:
        logger.warning("[API] GoPlus disabled, every check uses a clean record")
        return TokenChecker(StaticAttributeSource(), concurrency=settings.batch_concurrency), None

    client = GoPlusClient(
        base_url=settings.goplus_base_url,
        api_key=settings.goplus_api_key,
        timeout=settings.goplus_timeout_sec,
        max_rps=settings.goplus_max_rps,
    )
    return TokenChecker(client, concurrency=settings.batch_concurrency), client


def create_app(checker: TokenChecker | None = None) -> FastAPI:
    """Build and configure the FastAPI application.

    Pass ``checker`` to serve from a custom attribute source (tests, fixtures).
    """
    owned_client: GoPlusClient | None = None
    if checker is None:
        checker, owned_client = build_default_checker()

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
        yield
        if owned_client is not None:
            await owned_client.close()

    app = FastAPI(
        title="Rugcheck API",
        version="0.1.0",
        docs_url="/docs" if os.getenv("API_DEBUG") else None,
        redoc_url=None,
        openapi_url="/openapi.json" if os.getenv("API_DEBUG") else None,
        lifespan=lifespan,
    )
    app.state.checker = checker

    # Security headers
    app.add_middleware(SecurityHeadersMiddleware)

    # CORS
    origins = settings.cors_origin_list
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    from src.api.routers.check import router as check_router
    from src.api.routers.health import router as health_router

    app.include_router(health_router)
    app.include_router(check_router)

    return app
