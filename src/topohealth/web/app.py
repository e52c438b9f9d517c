"""FastAPI application for the topology health API.

- Rate limiting (slowapi)
- Security headers
- Latest processed topology held in app state
"""

from fastapi import FastAPI, Request
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from topohealth import __version__
from topohealth.config import TopoHealthSettings, get_settings
from topohealth.web.deps import TopologyStore, limiter
from topohealth.web.routes import health, path, topology


def create_app(
    rate_limit_enabled: bool = True,
    settings: TopoHealthSettings | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        rate_limit_enabled: Whether to enable rate limiting (disable for tests)
        settings: Settings override; loaded from the environment if omitted

    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title="Topology Health API",
        description="WAN link health correlation and shortest path queries",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.add_middleware(
        TrustedHostMiddleware,
        allowed_hosts=["*"],  # Restrict in production
    )

    # Rate limiting (fresh disabled limiter when off)
    if rate_limit_enabled:
        app_limiter = limiter
    else:
        app_limiter = Limiter(key_func=get_remote_address, enabled=False)
    app.state.limiter = app_limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    app.state.settings = settings or get_settings()
    app.state.topology_store = TopologyStore()

    app.include_router(health.router, tags=["health"])
    app.include_router(topology.router, tags=["topology"])
    app.include_router(path.router, tags=["path"])

    @app.middleware("http")
    async def add_security_headers(request: Request, call_next):
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["X-XSS-Protection"] = "1; mode=block"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        return response

    return app
