from __future__ import annotations
import time
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ..authservice import AuthConfig, auth_router
from ..linkservice import links_router
from ..productservice import products_router
from ..ratelimiter import Policy, RateLimiterMiddleware
from ..userservice import users_router
from .container import ServiceContainer, build_container
from .handlers import register_error_handlers
from .logging_config import configure_logging
from .observability import RequestContextMiddleware
from .routers import public
from .security import BodySizeLimitMiddleware, SecurityHeadersMiddleware
from .settings import GatewaySettings

API_PREFIX = "/api"


def create_app(
    settings: Optional[GatewaySettings] = None,
    *,
    container: Optional[ServiceContainer] = None,
    auth_config: Optional[AuthConfig] = None,
) -> FastAPI:
    settings = settings or GatewaySettings()
    configure_logging(settings)
    container = container or build_container(auth_config)

    app = FastAPI(title=settings.APP_NAME, version=settings.APP_VERSION)
    app.state.settings = settings
    app.state.services = container
    app.state.started_at = time.monotonic()
    register_error_handlers(app)

    # Middleware: last added runs first
    app.add_middleware(BodySizeLimitMiddleware, max_bytes=settings.REQUEST_BODY_MAX_BYTES)
    if settings.RATE_LIMIT_ENABLED:
        app.add_middleware(
            RateLimiterMiddleware,
            policies=[Policy(
                name="per_ip",
                limit=settings.RATE_LIMIT_MAX,
                window_seconds=settings.RATE_LIMIT_WINDOW_SECONDS,
                scope="ip",
            )],
            service=container.rate_limiter,
        )
    app.add_middleware(RequestContextMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.FRONTEND_URL],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(SecurityHeadersMiddleware)

    # Routers
    app.include_router(public.router)
    for router in (auth_router, users_router, links_router, products_router):
        app.include_router(router, prefix=API_PREFIX)

    return app


def main() -> None:
    import uvicorn

    settings = GatewaySettings()
    uvicorn.run(
        "linkbio.apigateway.app:create_app",
        factory=True,
        host=settings.HOST,
        port=settings.PORT,
    )


if __name__ == "__main__":
    main()
