"""인메모리 응답 캐시 - 캐싱 로직만 담당

- TTL(cache_duration_s)이 지난 항목은 조회되지 않음 (조회만으로 삭제하지는 않음)
- 최대 max_entries개, 초과 시 가장 먼저 삽입된 항목 제거 (FIFO, LRU 아님)
"""
import json
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional

from catalog_proxy.core.config import settings
from catalog_proxy.core.logging import logger


@dataclass(frozen=True)
class CacheEntry:
    """캐시 항목 (작성 후 변경 불가)"""
    key: str
    payload: Any
    created_at: float


def make_cache_key(params: Mapping[str, str], aggregate: bool = False) -> str:
    """
    정규화된 파라미터로 캐시 키 생성

    키 순서는 직렬화 순서 그대로 유지합니다. 인식되는 키는 정규화에서 순서가
    고정되지만, 그 외 키의 입력 순서가 다르면 서로 다른 키가 됩니다.
    집계 모드는 항상 첫 페이지부터 조회하므로 cursor를 키에서 제외합니다.

    Args:
        params: 정규화된 파라미터
        aggregate: 전체 페이지 집계 모드 여부

    Returns:
        캐시 키 (compact JSON)
    """
    key_source: Dict[str, str] = dict(params)
    if aggregate:
        key_source.pop("cursor", None)
        key_source["all"] = "true"
    return json.dumps(key_source, separators=(",", ":"), ensure_ascii=False)


class CacheService:
    """응답 캐시 관리 서비스"""

    def __init__(
        self,
        ttl_seconds: Optional[float] = None,
        max_entries: Optional[int] = None,
        *,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl_seconds = ttl_seconds if ttl_seconds is not None else settings.cache_duration_s
        self.max_entries = max_entries if max_entries is not None else settings.cache_max_entries
        if self.ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        if self.max_entries <= 0:
            raise ValueError("max_entries must be positive")

        self._clock = clock
        # dict는 삽입 순서를 유지하므로 첫 키가 가장 오래된 항목
        self._entries: Dict[str, CacheEntry] = {}

    def get(self, key: str) -> Optional[CacheEntry]:
        """
        캐시 조회

        Args:
            key: make_cache_key 결과

        Returns:
            신선한 CacheEntry 또는 None
        """
        entry = self._entries.get(key)
        if entry is None:
            logger.debug(f"[CACHE] miss: {key}")
            return None

        age = self._clock() - entry.created_at
        if age >= self.ttl_seconds:
            logger.debug(f"[CACHE] stale ({age:.1f}s): {key}")
            return None

        logger.info(f"[CACHE] hit: {key}")
        return entry

    def put(self, key: str, payload: Any) -> CacheEntry:
        """
        응답 저장 (같은 키는 덮어씀)

        Args:
            key: make_cache_key 결과
            payload: 업스트림 응답 또는 집계 응답

        Returns:
            저장된 CacheEntry
        """
        entry = CacheEntry(key=key, payload=payload, created_at=self._clock())
        self._entries[key] = entry

        if len(self._entries) > self.max_entries:
            oldest_key = next(iter(self._entries))
            del self._entries[oldest_key]
            logger.debug(f"[CACHE] evicted oldest: {oldest_key}")

        return entry

    def clear(self) -> int:
        """
        전체 캐시 삭제

        Returns:
            삭제된 항목 수
        """
        removed = len(self._entries)
        self._entries.clear()
        logger.info(f"[CACHE] cleared ({removed} entries)")
        return removed

    @property
    def size(self) -> int:
        """저장된 항목 수 (만료 항목 포함)"""
        return len(self._entries)

    def __len__(self) -> int:
        return self.size
