"""API 엔드포인트 패키지 - export only."""

from .routes import catalog_router, health_router, get_cache_service, get_rate_limiter, get_orchestrator

__all__ = ["catalog_router", "health_router", "get_cache_service", "get_rate_limiter", "get_orchestrator"]
