from __future__ import annotations

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.trustedhost import TrustedHostMiddleware
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from .api.middleware.origin import OriginAllowListMiddleware
from .api.v1.router import api_router
from .config import settings
from .utils.logging import get_logger, setup_logging

logger = get_logger(__name__)


def create_app() -> FastAPI:
    setup_logging()

    app = FastAPI(
        title="Notes API",
        debug=settings.debug,
        version="0.1.0",
        root_path=settings.root_path or "",
    )

    # Inside CORSMiddleware: preflights are answered there, everything else
    # from a foreign origin stops here before any endpoint runs
    app.add_middleware(
        OriginAllowListMiddleware,
        allow_origins=settings.allowed_origins,
        allow_origin_regex=settings.cors_origin_regex,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_origin_regex=settings.cors_origin_regex,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
        max_age=600,
    )

    # Proxy headers (X-Forwarded-*) when behind a load balancer
    app.add_middleware(ProxyHeadersMiddleware, trusted_hosts=["*"])

    app.add_middleware(TrustedHostMiddleware, allowed_hosts=settings.trusted_hosts)

    app.include_router(api_router, prefix=settings.api_prefix)
    logger.info("CORS allow-list: %s", settings.allowed_origins)
    return app


app = create_app()


def run() -> None:
    """Serve the API with uvicorn on the configured host and port."""
    uvicorn.run(
        "notes_api.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        proxy_headers=True,
    )


if __name__ == "__main__":
    run()
