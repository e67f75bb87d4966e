"""API routes package."""

from .catalog_routes import router as catalog_router, get_cache_service, get_rate_limiter, get_orchestrator
from .health_routes import router as health_router

__all__ = ["catalog_router", "health_router", "get_cache_service", "get_rate_limiter", "get_orchestrator"]
