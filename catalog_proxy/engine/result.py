"""Aggregated Result - 페이지네이션 집계 결과 포맷"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from catalog_proxy.schemas.catalog_schema import AggregatedCatalogResponse


class StopReason(str, Enum):
    """페이지네이션 종료 사유"""

    EXHAUSTED = "exhausted"  # 마지막 페이지 (nextPageCursor 없음)
    ITEM_BUDGET = "item_budget"  # 아이템 예산 도달
    PAGE_BUDGET = "page_budget"  # 페이지 예산 도달
    RATE_LIMITED = "rate_limited"  # 업스트림 429 (soft termination)
    CURSOR_LOOP = "cursor_loop"  # 같은 cursor 반복


@dataclass
class AggregatedResult:
    """여러 페이지를 합친 결과

    Attributes:
        items: 페이지 순서대로 누적된 아이템
        pages: 성공적으로 가져온 페이지 수
        next_cursor: 이어서 조회할 cursor (끝까지 읽었으면 None)
        stop_reason: 종료 사유
    """

    items: List[Any] = field(default_factory=list)
    pages: int = 0
    next_cursor: Optional[str] = None
    stop_reason: StopReason = StopReason.EXHAUSTED

    @property
    def total(self) -> int:
        return len(self.items)

    @property
    def is_partial(self) -> bool:
        """429로 중단되었는지 여부"""
        return self.stop_reason == StopReason.RATE_LIMITED

    def to_payload(self) -> Dict[str, Any]:
        """클라이언트 응답 포맷: {data, total, pages, nextPageCursor}"""
        return AggregatedCatalogResponse(
            data=self.items,
            total=self.total,
            pages=self.pages,
            nextPageCursor=self.next_cursor,
        ).model_dump()
