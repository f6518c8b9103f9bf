"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from fincalc_gateway.api.middleware import RequestIDMiddleware, MetricsMiddleware
from fincalc_gateway.api.v1 import calculators, rates
from fincalc_gateway.infrastructure.clients.fred import FredClient
from fincalc_gateway.infrastructure.observability.logging import setup_logging
from fincalc_gateway.infrastructure.rate_cache import RateCache
from fincalc_gateway.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app(rate_cache: RateCache | None = None) -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="FinCalc Gateway",
        description="Loan, payoff and consolidation calculators with cached market rates",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # One rate cache per application instance
    app.state.rate_cache = rate_cache or RateCache(FredClient())

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(rates.router, prefix="/api", tags=["rates"])
    app.include_router(calculators.router, prefix="/v1", tags=["calculators"])

    return app


app = create_app()
