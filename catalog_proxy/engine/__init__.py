"""Engine Layer - Core Request Pipeline

This module provides the core engine layer for the proxy, implementing:
- CatalogOrchestrator: Main entry point per inbound query
- PaginationAggregator: Cursor-based multi-page fetch under budgets
- PaginationBudget: Item/page budgets per pagination mode
- RateLimiter: Minimum spacing between upstream calls
- Parameter normalization (defaults + limit coercion)
"""

from .budget import PaginationBudget
from .orchestrator import CatalogOrchestrator
from .paginator import PaginationAggregator
from .params import (
    DEFAULT_PARAMS,
    VALID_LIMITS,
    closest_valid_limit,
    is_aggregate_requested,
    normalize_params,
    to_upstream_params,
)
from .rate_limiter import RateLimiter
from .result import AggregatedResult, StopReason

__all__ = [
    "CatalogOrchestrator",
    "PaginationAggregator",
    "PaginationBudget",
    "RateLimiter",
    "AggregatedResult",
    "StopReason",
    "DEFAULT_PARAMS",
    "VALID_LIMITS",
    "closest_valid_limit",
    "is_aggregate_requested",
    "normalize_params",
    "to_upstream_params",
]
