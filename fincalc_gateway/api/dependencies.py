"""Dependency injection for FastAPI endpoints"""

from fastapi import Request
from fincalc_gateway.infrastructure.rate_cache import RateCache


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_rate_cache(request: Request) -> RateCache:
    """Provide the application's rate cache instance"""
    return request.app.state.rate_cache
