"""Upstream Client - 카탈로그 검색 API 단일 페이지 조회

응답 JSON은 스키마 변환 없이 그대로 반환합니다 (pass-through).
"""

from __future__ import annotations

import json
from typing import Any, Dict, Mapping, Optional
from urllib.parse import urlencode

from catalog_proxy.core.config import settings
from catalog_proxy.core.exceptions import UpstreamHttpError, UpstreamParseError
from catalog_proxy.core.logging import logger, sanitize_for_log
from catalog_proxy.engine.params import to_upstream_params

from .http_client import get_shared_http_client


def _reject_constant(name: str) -> Any:
    """NaN / Infinity / -Infinity는 JSON이 아니므로 파싱 오류로 처리"""
    raise ValueError(f"invalid JSON constant: {name}")


class CatalogClient:
    """업스트림 검색 엔드포인트 클라이언트"""

    def __init__(
        self,
        transport=None,
        *,
        base_url: Optional[str] = None,
        timeout_s: Optional[float] = None,
        param_names: Optional[Mapping[str, str]] = None,
    ) -> None:
        """
        Args:
            transport: HTTP 전송 계층 (get 메서드 구현, 없으면 공유 클라이언트)
            base_url: 검색 엔드포인트 URL
            timeout_s: 요청 타임아웃 (초)
            param_names: 정규화 키 → 업스트림 파라미터명
        """
        self.transport = transport or get_shared_http_client()
        self.base_url = base_url or settings.upstream_base_url
        self.timeout_s = timeout_s if timeout_s is not None else settings.upstream_timeout_s
        self.param_names: Dict[str, str] = dict(
            param_names if param_names is not None else settings.upstream_param_names
        )

    def build_url(self, params: Mapping[str, str]) -> str:
        """정규화된 파라미터로 업스트림 URL 생성"""
        query = urlencode(to_upstream_params(params, self.param_names))
        return f"{self.base_url}?{query}" if query else self.base_url

    async def fetch_page(self, params: Mapping[str, str]) -> Any:
        """업스트림 한 페이지 조회

        Args:
            params: 정규화된 파라미터

        Returns:
            파싱된 JSON 값 (그대로)

        Raises:
            UpstreamHttpError: 2xx 이외 상태 코드
            UpstreamTransportError: 네트워크 계층 실패
            UpstreamParseError: JSON 파싱 실패
        """
        url = self.build_url(params)
        logger.info(f"[UPSTREAM] GET {sanitize_for_log(url)}")

        response = await self.transport.get(
            url,
            timeout_s=self.timeout_s,
            headers={"Accept": "application/json"},
        )

        if not response.ok:
            logger.warning(f"[UPSTREAM] Non-2xx status: {response.status} {response.reason}")
            raise UpstreamHttpError(response.status, response.reason)

        try:
            data = json.loads(response.body, parse_constant=_reject_constant)
        except ValueError as e:
            logger.warning(f"[UPSTREAM] Invalid JSON (len={len(response.body)}): {e}")
            raise UpstreamParseError(e) from e

        if isinstance(data, dict) and isinstance(data.get("data"), list):
            logger.info(f"[UPSTREAM] OK ({len(data['data'])} items)")
        return data
