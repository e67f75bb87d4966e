"""업스트림 카탈로그 API 접근 (curl_cffi).

공개 API는 이 파일에서만 export합니다.
"""

from .catalog_client import CatalogClient
from .http_client import (
    HttpResponse,
    SharedHttpClient,
    get_shared_http_client,
    shutdown_shared_http_client,
)

__all__ = [
    "CatalogClient",
    "HttpResponse",
    "SharedHttpClient",
    "get_shared_http_client",
    "shutdown_shared_http_client",
]
