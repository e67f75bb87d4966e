"""Pydantic 스키마 정의"""
from typing import Any, List, Optional
from pydantic import BaseModel, Field
from datetime import datetime, timezone


def utc_timestamp() -> str:
    """ISO-8601 UTC 타임스탬프 (예: 2024-01-01T00:00:00.000Z)"""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class AggregatedCatalogResponse(BaseModel):
    """전체 페이지 집계 응답"""
    data: List[Any] = Field(default_factory=list, description="페이지 순서대로 누적된 아이템")
    total: int = Field(..., ge=0, description="아이템 수")
    pages: int = Field(..., ge=0, description="조회한 페이지 수")
    nextPageCursor: Optional[str] = Field(None, description="이어서 조회할 cursor (끝이면 null)")


class RateLimitStatus(BaseModel):
    """Rate Limiter 상태"""
    min_interval_ms: int
    last_request_age_ms: Optional[int] = None
    total_acquisitions: int = 0


class HealthResponse(BaseModel):
    """헬스 체크 응답"""
    status: str
    cache_size: int = Field(..., ge=0, description="캐시 항목 수")
    uptime: float = Field(..., ge=0, description="프로세스 가동 시간 (초)")
    valid_limits: List[int]
    rate_limit: RateLimitStatus
    timestamp: str
    version: str


class ErrorResponse(BaseModel):
    """오류 응답 (HTTP 500)"""
    error: str = Field(..., description="오류 메시지")
    timestamp: str = Field(default_factory=utc_timestamp, description="ISO-8601")


class ClearCacheResponse(BaseModel):
    """캐시 삭제 응답"""
    message: str = "Cache cleared"
