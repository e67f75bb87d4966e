"""공유 HTTP 클라이언트 (curl_cffi)

- 요청마다 AsyncSession을 만들면 TLS/커넥션 오버헤드가 커지므로
  프로세스 단위로 세션을 재사용합니다.
- 네트워크 계층 실패는 UpstreamTransportError로 변환합니다.
- 앱 종료 시 close()로 정리합니다.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Optional, Dict

from curl_cffi.requests import AsyncSession

from catalog_proxy.core.config import settings
from catalog_proxy.core.exceptions import UpstreamTransportError
from catalog_proxy.core.logging import logger


@dataclass(frozen=True)
class HttpResponse:
    """본문까지 모두 읽은 HTTP 응답"""

    status: int
    reason: str
    body: bytes

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


class SharedHttpClient:
    def __init__(self) -> None:
        self._lock = asyncio.Lock()
        self._session: Optional[AsyncSession] = None

    async def _ensure_session(self) -> AsyncSession:
        async with self._lock:
            if self._session is not None:
                return self._session
            self._session = AsyncSession(
                impersonate=settings.upstream_impersonate or None,
                headers=self.default_headers(),
                allow_redirects=True,
                max_clients=settings.upstream_max_clients,
                trust_env=False,
            )
            return self._session

    def default_headers(self) -> Dict[str, str]:
        return {
            "User-Agent": settings.upstream_user_agent,
            "Accept": "application/json",
        }

    async def get(
        self,
        url: str,
        *,
        timeout_s: float,
        headers: Optional[Dict[str, str]] = None,
    ) -> HttpResponse:
        """GET 요청 (본문 전체 수신 후 반환)

        Raises:
            UpstreamTransportError: 연결 실패/타임아웃/DNS/TLS 오류
        """
        sess = await self._ensure_session()
        try:
            resp = await sess.get(url, headers=headers, timeout=timeout_s)
            status = getattr(resp, "status_code", 0) or 0
            reason = getattr(resp, "reason", "") or ""
            body = getattr(resp, "content", b"") or b""
        except Exception as e:
            logger.info(f"[HTTP_CLIENT] GET failed: {type(e).__name__}: {repr(e)}")
            raise UpstreamTransportError(e) from e
        return HttpResponse(status=status, reason=reason, body=body)

    async def close(self) -> None:
        async with self._lock:
            if self._session is None:
                return
            try:
                await self._session.close()
            except Exception as e:
                logger.warning(f"[HTTP_CLIENT] close failed: {type(e).__name__}: {e}")
            self._session = None


_shared_http_client = SharedHttpClient()


def get_shared_http_client() -> SharedHttpClient:
    return _shared_http_client


async def shutdown_shared_http_client() -> None:
    await _shared_http_client.close()
