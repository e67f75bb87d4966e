"""RateLimiter 단위 테스트 (Fake 시계/대기 사용, 실제 대기 없음)"""

from __future__ import annotations

import asyncio

import pytest

from catalog_proxy.engine.rate_limiter import RateLimiter
from tests.fakes import FakeClock, FakeSleep


def make_limiter(clock: FakeClock, sleep: FakeSleep, interval_ms: int = 5000) -> RateLimiter:
    return RateLimiter(min_interval_ms=interval_ms, clock=clock, sleep=sleep)


class TestRateLimiter:
    @pytest.mark.asyncio
    async def test_first_acquire_does_not_wait(self, clock: FakeClock, fake_sleep: FakeSleep) -> None:
        limiter = make_limiter(clock, fake_sleep)

        await limiter.acquire()

        assert fake_sleep.calls == []
        assert limiter.last_request_time == clock.now

    @pytest.mark.asyncio
    async def test_second_acquire_waits_remaining_interval(self, clock: FakeClock, fake_sleep: FakeSleep) -> None:
        limiter = make_limiter(clock, fake_sleep)

        await limiter.acquire()
        first = limiter.last_request_time
        clock.advance(1.5)
        await limiter.acquire()

        assert fake_sleep.calls == [pytest.approx(3.5)]
        assert limiter.last_request_time - first >= 5.0

    @pytest.mark.asyncio
    async def test_no_wait_after_interval_elapsed(self, clock: FakeClock, fake_sleep: FakeSleep) -> None:
        limiter = make_limiter(clock, fake_sleep)

        await limiter.acquire()
        clock.advance(6.0)
        await limiter.acquire()

        assert fake_sleep.calls == []

    @pytest.mark.asyncio
    async def test_concurrent_acquires_are_spaced(self, clock: FakeClock, fake_sleep: FakeSleep) -> None:
        """동시에 들어온 요청도 서로 간격을 나눠 쓰지 않음"""
        limiter = make_limiter(clock, fake_sleep)
        stamps: list[float] = []

        async def worker() -> None:
            await limiter.acquire()
            stamps.append(clock())

        await asyncio.gather(*(worker() for _ in range(4)))

        assert len(stamps) == 4
        gaps = [b - a for a, b in zip(stamps, stamps[1:])]
        assert all(gap >= 5.0 - 1e-9 for gap in gaps)

    @pytest.mark.asyncio
    async def test_zero_interval_never_waits(self, clock: FakeClock, fake_sleep: FakeSleep) -> None:
        limiter = make_limiter(clock, fake_sleep, interval_ms=0)

        for _ in range(3):
            await limiter.acquire()

        assert fake_sleep.calls == []

    @pytest.mark.asyncio
    async def test_snapshot(self, clock: FakeClock, fake_sleep: FakeSleep) -> None:
        limiter = make_limiter(clock, fake_sleep)
        assert limiter.snapshot() == {
            "min_interval_ms": 5000,
            "last_request_age_ms": None,
            "total_acquisitions": 0,
        }

        await limiter.acquire()
        clock.advance(0.25)

        snap = limiter.snapshot()
        assert snap["last_request_age_ms"] == 250
        assert snap["total_acquisitions"] == 1

    def test_negative_interval_rejected(self) -> None:
        with pytest.raises(ValueError):
            RateLimiter(min_interval_ms=-1)

    @pytest.mark.asyncio
    async def test_real_clock_waits(self) -> None:
        """실제 asyncio.sleep 경로 (짧은 간격)"""
        loop = asyncio.get_running_loop()
        limiter = RateLimiter(min_interval_ms=50)

        start = loop.time()
        await limiter.acquire()
        await limiter.acquire()
        elapsed = loop.time() - start

        assert elapsed >= 0.04
