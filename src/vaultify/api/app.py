"""FastAPI application factory.

Where: src/vaultify/api/app.py
What: Assemble middleware, exception handlers, routes and services into an app.
Why: Tests and the CLI build apps from explicit configuration and fakes.
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from vaultify import __version__
from vaultify.config import AppConfig
from vaultify.features.library.usecases.ports import ObjectStoragePort
from vaultify.features.metadata.usecases.ports import CatalogMatcherPort

from .dependencies import build_services
from .errors import setup_exception_handlers
from .routes import router


def create_app(
    config: AppConfig | None = None,
    *,
    storage: ObjectStoragePort | None = None,
    matcher: CatalogMatcherPort | None = None,
) -> FastAPI:
    """Create the Vaultify HTTP application.

    Args:
        config: Application configuration; loaded from file and environment when omitted.
        storage: Object store override (tests pass an in-memory store).
        matcher: Catalog matcher override.
    """
    config = config or AppConfig.load()
    app = FastAPI(title="Vaultify", version=__version__)
    app.state.services = build_services(config, storage=storage, matcher=matcher)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
        allow_credentials=False,
    )
    setup_exception_handlers(app)
    app.include_router(router)
    return app


__all__ = ["create_app"]
