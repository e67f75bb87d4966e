"""헬스 체크 / 관리 엔드포인트"""
import time

from fastapi import APIRouter, Depends

from catalog_proxy import __version__
from catalog_proxy.engine import RateLimiter, VALID_LIMITS
from catalog_proxy.schemas.catalog_schema import (
    ClearCacheResponse,
    HealthResponse,
    RateLimitStatus,
    utc_timestamp,
)
from catalog_proxy.services.cache_service import CacheService
from catalog_proxy.api.routes.catalog_routes import get_cache_service, get_rate_limiter
from catalog_proxy.core.logging import logger

router = APIRouter(tags=["health"])

_STARTED_AT = time.monotonic()


@router.get("/", response_model=HealthResponse)
async def health_check(
    cache_service: CacheService = Depends(get_cache_service),
    rate_limiter: RateLimiter = Depends(get_rate_limiter),
):
    """
    헬스 체크 엔드포인트

    - 캐시 크기
    - 가동 시간
    - Rate Limiter 상태
    """
    return HealthResponse(
        status="Catalog Proxy Running",
        cache_size=cache_service.size,
        uptime=round(time.monotonic() - _STARTED_AT, 3),
        valid_limits=list(VALID_LIMITS),
        rate_limit=RateLimitStatus(**rate_limiter.snapshot()),
        timestamp=utc_timestamp(),
        version=__version__,
    )


@router.get("/clear-cache", response_model=ClearCacheResponse)
async def clear_cache(cache_service: CacheService = Depends(get_cache_service)):
    """캐시 전체 삭제 (관리용)"""
    removed = cache_service.clear()
    logger.info(f"[API] Cache cleared by request ({removed} entries)")
    return ClearCacheResponse(message="Cache cleared")
