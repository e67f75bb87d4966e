"""Catalog Routes - HTTP 요청을 CatalogOrchestrator로 위임하는 Translator"""

from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from catalog_proxy.core.config import settings
from catalog_proxy.core.exceptions import CatalogProxyException
from catalog_proxy.core.logging import logger, sanitize_for_log
from catalog_proxy.engine import CatalogOrchestrator, PaginationBudget, RateLimiter
from catalog_proxy.schemas.catalog_schema import AggregatedCatalogResponse, ErrorResponse
from catalog_proxy.services.cache_service import CacheService
from catalog_proxy.upstream import CatalogClient

router = APIRouter(tags=["catalog"])

# 싱글톤 서비스
_cache_service: Optional[CacheService] = None
_rate_limiter: Optional[RateLimiter] = None
_orchestrator: Optional[CatalogOrchestrator] = None


def get_cache_service() -> CacheService:
    """CacheService 싱글톤"""
    global _cache_service
    if _cache_service is None:
        _cache_service = CacheService()
    return _cache_service


def get_rate_limiter() -> RateLimiter:
    """RateLimiter 싱글톤 (프로세스 전역 요청 간격)"""
    global _rate_limiter
    if _rate_limiter is None:
        _rate_limiter = RateLimiter(min_interval_ms=settings.min_request_interval_ms)
    return _rate_limiter


def get_orchestrator(
    cache_service: CacheService = Depends(get_cache_service),
    rate_limiter: RateLimiter = Depends(get_rate_limiter),
) -> CatalogOrchestrator:
    """CatalogOrchestrator 싱글톤

    Engine Layer의 진입점을 제공합니다.
    """
    global _orchestrator
    if _orchestrator is None:
        _orchestrator = CatalogOrchestrator(
            cache_service=cache_service,
            client=CatalogClient(),
            rate_limiter=rate_limiter,
            budget=PaginationBudget.for_mode(settings.pagination_mode),
        )
    return _orchestrator


def error_response(message: str) -> JSONResponse:
    """HTTP 500 + {error, timestamp}"""
    return JSONResponse(status_code=500, content=ErrorResponse(error=message).model_dump())


@router.get(
    "/catalog",
    responses={
        200: {"model": AggregatedCatalogResponse, "description": "업스트림 JSON 또는 집계 응답(all=true)"},
        500: {"model": ErrorResponse},
    },
)
async def search_catalog(
    request: Request,
    orchestrator: CatalogOrchestrator = Depends(get_orchestrator),
):
    """카탈로그 검색 프록시

    Query:
        category, subcategory, sortType, limit, cursor, keyword: 업스트림 파라미터
        all: "true"면 여러 페이지를 집계해서 반환
    """
    query = dict(request.query_params)
    logger.info(f"[API] Catalog request: {sanitize_for_log(str(request.query_params))}")

    try:
        payload = await orchestrator.search(query)
        return JSONResponse(content=payload)
    except CatalogProxyException as e:
        logger.error(f"[API] Proxy error: {e}")
        return error_response(e.message)
    except Exception as e:
        logger.error(f"[API] Unexpected error: {type(e).__name__}: {e}", exc_info=True)
        return error_response(str(e) or type(e).__name__)
