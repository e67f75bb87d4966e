"""`python -m catalog_proxy` 진입점 (PORT 환경 변수, 기본 3000)"""
import uvicorn

from catalog_proxy.core.config import settings
from catalog_proxy.core.logging import logger


def main() -> None:
    logger.info(f"Proxy server running on port {settings.port}")
    uvicorn.run("catalog_proxy.app:app", host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    main()
