"""Pagination Budget - 페이지네이션 상한 설정

모드별 예산:
- conservative: 300개 / 5페이지 / 페이지 사이 추가 6초 대기
- aggressive:   500개 / 10페이지 / 추가 대기 없음 (Rate Limiter 간격만 적용)
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class PaginationBudget:
    """페이지네이션 예산"""

    item_budget: int = 300  # 누적 아이템 상한
    page_budget: int = 5  # 페이지 수 상한
    inter_page_delay_ms: int = 6000  # Rate Limiter 위에 추가되는 페이지 간 대기

    def __post_init__(self):
        """설정 검증"""
        if self.item_budget <= 0:
            raise ValueError(f"item_budget must be positive (got {self.item_budget})")
        if self.page_budget <= 0:
            raise ValueError(f"page_budget must be positive (got {self.page_budget})")
        if self.inter_page_delay_ms < 0:
            raise ValueError(f"inter_page_delay_ms must be >= 0 (got {self.inter_page_delay_ms})")

    @property
    def inter_page_delay_s(self) -> float:
        return self.inter_page_delay_ms / 1000.0

    @classmethod
    def conservative(cls) -> "PaginationBudget":
        return cls(item_budget=300, page_budget=5, inter_page_delay_ms=6000)

    @classmethod
    def aggressive(cls) -> "PaginationBudget":
        return cls(item_budget=500, page_budget=10, inter_page_delay_ms=0)

    @classmethod
    def for_mode(cls, mode: str) -> "PaginationBudget":
        """설정값(pagination_mode)으로 예산 선택"""
        if mode == "aggressive":
            return cls.aggressive()
        if mode == "conservative":
            return cls.conservative()
        raise ValueError(f"Unknown pagination mode: {mode}")
