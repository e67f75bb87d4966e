"""Catalog Orchestrator - 요청 단위 파이프라인

Flow:
1. 파라미터 정규화 + 캐시 키 계산 (정규화 이후 키 사용)
2. Cache 확인 (히트 시 업스트림/Rate Limiter 사용 안 함)
3. 단일 페이지 조회 또는 전체 페이지 집계
4. 결과 캐시 저장 (오류 응답은 저장하지 않음)
"""

from typing import Any, Mapping, Optional

from catalog_proxy.core.logging import logger, sanitize_for_log
from catalog_proxy.services.cache_service import make_cache_key

from .budget import PaginationBudget
from .paginator import PaginationAggregator
from .params import is_aggregate_requested, normalize_params


class CatalogOrchestrator:
    """카탈로그 검색 오케스트레이터

    Cache → (Rate Limiter → Upstream) × N → Cache 저장 파이프라인을 관리합니다.
    캐시/Rate Limiter/클라이언트는 모두 주입받습니다.
    """

    def __init__(
        self,
        cache_service,
        client,
        rate_limiter,
        budget: Optional[PaginationBudget] = None,
        aggregator: Optional[PaginationAggregator] = None,
    ):
        """
        Args:
            cache_service: 캐시 서비스 (get/put 메서드 구현)
            client: 업스트림 클라이언트 (fetch_page 메서드 구현)
            rate_limiter: Rate Limiter (acquire 메서드 구현)
            budget: 페이지네이션 예산 (기본값: conservative)
            aggregator: 페이지네이션 집계기 (없으면 client/rate_limiter로 생성)
        """
        if cache_service is None:
            raise ValueError("cache_service must not be None")
        if client is None:
            raise ValueError("client must not be None")
        if rate_limiter is None:
            raise ValueError("rate_limiter must not be None")

        self.cache = cache_service
        self.client = client
        self.rate_limiter = rate_limiter
        self.aggregator = aggregator or PaginationAggregator(client, rate_limiter, budget)

    async def search(self, query: Mapping[str, str], aggregate: Optional[bool] = None) -> Any:
        """카탈로그 검색 실행

        Args:
            query: 클라이언트 쿼리 파라미터
            aggregate: 전체 페이지 집계 여부 (None이면 query의 `all=true`로 판단)

        Returns:
            단일 페이지: 업스트림 JSON 그대로
            집계: {data, total, pages, nextPageCursor}

        Raises:
            UpstreamException: 업스트림 오류 (캐시에 저장되지 않음)
        """
        if aggregate is None:
            aggregate = is_aggregate_requested(query)

        params = normalize_params(query)
        cache_key = make_cache_key(params, aggregate)

        cached = self.cache.get(cache_key)
        if cached is not None:
            logger.info(f"Serving from cache: {sanitize_for_log(cache_key)}")
            return cached.payload

        if aggregate:
            result = await self.aggregator.fetch_all(params)
            payload = result.to_payload()
            logger.info(
                f"Aggregated {result.total} items over {result.pages} pages "
                f"(stop={result.stop_reason.value})"
            )
        else:
            await self.rate_limiter.acquire()
            payload = await self.client.fetch_page(params)

        self.cache.put(cache_key, payload)
        return payload
