"""Pagination Aggregator - cursor 기반 다중 페이지 조회

Flow (페이지마다):
1. Rate Limiter acquire
2. Upstream fetch_page (cursor 포함)
3. 429 → 지금까지 모은 결과로 종료 (soft termination)
4. 아이템 누적 → nextPageCursor 없으면 종료
5. conservative 모드면 페이지 간 추가 대기
"""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional

from catalog_proxy.core.exceptions import UpstreamHttpError
from catalog_proxy.core.logging import logger

from .budget import PaginationBudget
from .result import AggregatedResult, StopReason


def extract_items(page: Any) -> List[Any]:
    """업스트림 페이지에서 아이템 목록 추출 (`data` 배열)"""
    if isinstance(page, dict):
        items = page.get("data")
        if isinstance(items, list):
            return items
    return []


def extract_next_cursor(page: Any) -> Optional[str]:
    """업스트림 페이지에서 다음 cursor 추출 (없거나 빈 값이면 None)"""
    if isinstance(page, dict):
        cursor = page.get("nextPageCursor")
        if isinstance(cursor, str) and cursor:
            return cursor
    return None


class PaginationAggregator:
    """여러 페이지를 예산 안에서 순차 조회하여 합칩니다.

    페이지는 항상 cursor 순서대로 하나씩 조회합니다. (병렬 조회 없음)
    """

    def __init__(
        self,
        client,
        rate_limiter,
        budget: Optional[PaginationBudget] = None,
        *,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        """
        Args:
            client: 업스트림 클라이언트 (fetch_page 메서드 구현)
            rate_limiter: Rate Limiter (acquire 메서드 구현)
            budget: 페이지네이션 예산 (기본값: conservative)
            sleep: 페이지 간 대기 함수 (테스트에서 교체)
        """
        if client is None:
            raise ValueError("client must not be None")
        if rate_limiter is None:
            raise ValueError("rate_limiter must not be None")

        self.client = client
        self.rate_limiter = rate_limiter
        self.budget = budget or PaginationBudget.conservative()
        self._sleep = sleep

    async def fetch_all(self, base_params: Mapping[str, str]) -> AggregatedResult:
        """예산 안에서 모든 페이지 조회

        Args:
            base_params: 정규화된 파라미터 (cursor는 페이지마다 덮어씀)

        Returns:
            AggregatedResult

        Raises:
            UpstreamException: 429 이외의 업스트림 오류 (부분 결과 없음)
        """
        items: List[Any] = []
        cursor = ""
        pages = 0
        seen_cursors: set[str] = set()
        stop_reason: Optional[StopReason] = None

        while len(items) < self.budget.item_budget and pages < self.budget.page_budget:
            params: Dict[str, str] = {**base_params, "cursor": cursor}

            await self.rate_limiter.acquire()
            try:
                page = await self.client.fetch_page(params)
            except UpstreamHttpError as e:
                if not e.is_rate_limited:
                    raise
                logger.warning(
                    f"[PAGINATION] 429 on page {pages + 1}, stopping with {len(items)} items"
                )
                stop_reason = StopReason.RATE_LIMITED
                break

            page_items = extract_items(page)
            items.extend(page_items)
            pages += 1
            logger.info(f"[PAGINATION] page {pages}: {len(page_items)} items (total: {len(items)})")

            next_cursor = extract_next_cursor(page)
            if next_cursor is None:
                cursor = ""
                stop_reason = StopReason.EXHAUSTED
                break

            if next_cursor in seen_cursors:
                logger.warning(f"[PAGINATION] repeated cursor on page {pages}, stopping")
                cursor = ""
                stop_reason = StopReason.CURSOR_LOOP
                break

            seen_cursors.add(next_cursor)
            cursor = next_cursor

            if len(items) >= self.budget.item_budget or pages >= self.budget.page_budget:
                break

            if self.budget.inter_page_delay_s > 0:
                await self._sleep(self.budget.inter_page_delay_s)

        if stop_reason is None:
            stop_reason = (
                StopReason.ITEM_BUDGET
                if len(items) >= self.budget.item_budget
                else StopReason.PAGE_BUDGET
            )

        return AggregatedResult(
            items=items,
            pages=pages,
            next_cursor=cursor or None,
            stop_reason=stop_reason,
        )
