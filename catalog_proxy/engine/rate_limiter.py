"""Rate Limiter - 업스트림 요청 간 최소 간격 보장

프로세스 전역 슬롯 하나(last_request_time)를 모든 요청이 공유합니다.
대기 + 시각 기록은 asyncio.Lock 안에서 한 번에 수행되므로
동시에 들어온 요청이 같은 간격을 나눠 쓰는 일이 없습니다.
"""

from __future__ import annotations

import asyncio
import time
from typing import Any, Awaitable, Callable, Dict, Optional

from catalog_proxy.core.logging import logger


class RateLimiter:
    """업스트림 호출 직렬화 (최소 간격 min_interval_ms)

    Usage:
        limiter = RateLimiter(min_interval_ms=5000)
        await limiter.acquire()   # 반환 직후 업스트림 호출 1회 허용
    """

    def __init__(
        self,
        min_interval_ms: int = 5000,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        """
        Args:
            min_interval_ms: 직전 호출 시작 시각으로부터의 최소 간격 (ms)
            clock: 단조 시계 (초 단위)
            sleep: 비동기 대기 함수 (테스트에서 교체)
        """
        if min_interval_ms < 0:
            raise ValueError("min_interval_ms must be >= 0")

        self.min_interval_ms = min_interval_ms
        self._clock = clock
        self._sleep = sleep
        self._lock = asyncio.Lock()
        self._last_request_time: Optional[float] = None
        self._acquisitions = 0

    @property
    def min_interval_s(self) -> float:
        return self.min_interval_ms / 1000.0

    @property
    def last_request_time(self) -> Optional[float]:
        return self._last_request_time

    def wait_time(self) -> float:
        """지금 acquire할 경우 대기해야 하는 시간 (초)"""
        if self._last_request_time is None:
            return 0.0
        elapsed = self._clock() - self._last_request_time
        return max(0.0, self.min_interval_s - elapsed)

    async def acquire(self) -> None:
        """다음 업스트림 호출 슬롯 확보

        직전 호출 시작 후 min_interval이 지날 때까지 대기한 뒤
        현재 시각을 기록하고 반환합니다.
        """
        async with self._lock:
            wait_s = self.wait_time()
            if wait_s > 0:
                logger.info(f"[RATE_LIMIT] waiting {wait_s * 1000:.0f}ms")
                await self._sleep(wait_s)
            self._last_request_time = self._clock()
            self._acquisitions += 1

    def snapshot(self) -> Dict[str, Any]:
        """헬스 체크용 상태"""
        age_ms: Optional[int] = None
        if self._last_request_time is not None:
            age_ms = int((self._clock() - self._last_request_time) * 1000)
        return {
            "min_interval_ms": self.min_interval_ms,
            "last_request_age_ms": age_ms,
            "total_acquisitions": self._acquisitions,
        }

    def __repr__(self) -> str:
        return f"RateLimiter(min_interval={self.min_interval_ms}ms, acquisitions={self._acquisitions})"
