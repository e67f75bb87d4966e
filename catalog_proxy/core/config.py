"""설정 관리 - 환경 변수 로드 및 검증"""
from typing import Dict
from pydantic_settings import BaseSettings
from pydantic import Field, field_validator


class Settings(BaseSettings):
    """애플리케이션 설정"""

    # 서버 (PORT 환경 변수)
    port: int = 3000

    # 업스트림 카탈로그 API
    upstream_base_url: str = "https://catalog.roblox.com/v2/search/items/details"
    upstream_user_agent: str = "CatalogProxy/1.0"
    upstream_timeout_s: float = 15.0
    # curl_cffi 브라우저 impersonation (빈 문자열이면 사용 안 함)
    upstream_impersonate: str = ""
    upstream_max_clients: int = 10

    # 정규화된 파라미터명 → 업스트림 파라미터명
    # NOTE: 업스트림 API 버전에 따라 대소문자가 다를 수 있어 설정으로 둡니다.
    upstream_param_names: Dict[str, str] = Field(
        default_factory=lambda: {
            "category": "Category",
            "subcategory": "Subcategory",
            "sortType": "SortType",
            "limit": "Limit",
            "cursor": "Cursor",
            "keyword": "keyword",
        }
    )

    # 업스트림 요청 간 최소 간격 (ms)
    min_request_interval_ms: int = 5000

    # 응답 캐시
    cache_duration_s: float = 300.0  # 5분
    cache_max_entries: int = 100

    # 페이지네이션 모드: conservative(300개/5페이지/+6초) | aggressive(500개/10페이지)
    pagination_mode: str = "conservative"

    # API
    api_title: str = "Catalog Proxy"
    api_version: str = "1.0.0"
    api_description: str = "캐시 + 요청 간격 제한이 적용된 카탈로그 검색 프록시"

    # 로깅
    log_level: str = "INFO"

    @field_validator("min_request_interval_ms")
    @classmethod
    def validate_min_request_interval(cls, v: int) -> int:
        if v < 0:
            raise ValueError("min_request_interval_ms must be >= 0")
        return v

    @field_validator("cache_duration_s", "upstream_timeout_s")
    @classmethod
    def validate_positive_seconds(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("durations must be positive")
        return v

    @field_validator("cache_max_entries", "upstream_max_clients")
    @classmethod
    def validate_capacity(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("capacities must be positive")
        return v

    @field_validator("pagination_mode")
    @classmethod
    def validate_pagination_mode(cls, v: str) -> str:
        mode = v.strip().lower()
        if mode not in ("conservative", "aggressive"):
            raise ValueError("pagination_mode must be 'conservative' or 'aggressive'")
        return mode

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
