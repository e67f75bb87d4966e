"""커스텀 예외 정의 (Structured Exception Hierarchy)"""
from typing import Any, Optional


# 기본 예외 클래스
class CatalogProxyException(Exception):
    """기본 예외 클래스 - 모든 커스텀 예외의 부모"""
    def __init__(self, message: str, error_code: str = "UNKNOWN_ERROR", details: Optional[dict[str, Any]] = None):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"


# 유효성 검증 관련 예외 (limit 보정 등으로 내부에서 처리됨)
class ValidationException(CatalogProxyException):
    """유효성 검증 예외"""
    def __init__(self, field: str, reason: str, details: Optional[dict[str, Any]] = None):
        message = f"Validation failed for '{field}': {reason}"
        super().__init__(message, "VALIDATION_ERROR",
                        details or {"field": field, "reason": reason})


# 업스트림 관련 예외
class UpstreamException(CatalogProxyException):
    """업스트림 호출 관련 예외의 기본 클래스"""
    def __init__(self, message: str, error_code: str = "UPSTREAM_ERROR", details: Optional[dict[str, Any]] = None):
        super().__init__(message, error_code or "UPSTREAM_ERROR", details)


class UpstreamHttpError(UpstreamException):
    """업스트림이 2xx 이외의 상태 코드를 반환"""
    def __init__(self, status: int, status_text: str = "", details: Optional[dict[str, Any]] = None):
        self.status = status
        self.status_text = status_text
        message = f"HTTP {status}: {status_text}" if status_text else f"HTTP {status}"
        super().__init__(message, "UPSTREAM_HTTP_ERROR",
                        details or {"status": status, "status_text": status_text})

    @property
    def is_rate_limited(self) -> bool:
        """429 Too Many Requests 여부"""
        return self.status == 429


class UpstreamTransportError(UpstreamException):
    """연결 실패 / 타임아웃 / DNS / TLS 오류"""
    def __init__(self, cause: BaseException, details: Optional[dict[str, Any]] = None):
        self.cause = cause
        message = f"Upstream request failed: {type(cause).__name__}: {cause}"
        super().__init__(message, "UPSTREAM_TRANSPORT_ERROR",
                        details or {"cause": type(cause).__name__})


class UpstreamParseError(UpstreamException):
    """업스트림 응답 JSON 파싱 실패"""
    def __init__(self, cause: BaseException, details: Optional[dict[str, Any]] = None):
        self.cause = cause
        message = f"Failed to parse upstream response: {cause}"
        super().__init__(message, "UPSTREAM_PARSE_ERROR",
                        details or {"reason": str(cause)})
