"""카탈로그 검색 프록시 (Cache + Rate Limit + Pagination)"""

__version__ = "1.0.0"
