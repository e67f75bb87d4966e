"""Parameter Normalizer - 인바운드 쿼리를 완전한 업스트림 파라미터 셋으로 변환

- 기본값 적용 (category/subcategory/sortType/limit/cursor)
- 인식되는 키는 대소문자 구분 없이 매칭 (Category == category)
- limit는 허용값 {10, 28, 30, 60, 120} 중 가장 가까운 값으로 보정
"""

from __future__ import annotations

import re
from typing import Dict, Mapping, Optional

from catalog_proxy.core.exceptions import ValidationException
from catalog_proxy.core.logging import logger


VALID_LIMITS: tuple[int, ...] = (10, 28, 30, 60, 120)

DEFAULT_PARAMS: Dict[str, str] = {
    "category": "11",  # Accessories
    "subcategory": "12",
    "sortType": "4",  # Recently Updated
    "limit": "30",
    "cursor": "",
}

# 프록시 전용 플래그 (업스트림으로 전달하지 않음)
AGGREGATE_FLAG = "all"

_CANONICAL_KEYS: Dict[str, str] = {key.lower(): key for key in DEFAULT_PARAMS}

_LEADING_INT = re.compile(r"\s*([+-]?)0*(\d+)")

# 6자리를 넘는 숫자는 999999로 취급 (가장 가까운 허용값은 같음)
_MAX_LIMIT_DIGITS = 6


def parse_limit(value: object) -> int:
    """limit 값을 정수로 파싱 (앞부분 정수만 사용: "60items" -> 60)

    Raises:
        ValidationException: 정수로 파싱할 수 없는 경우
    """
    match = _LEADING_INT.match(str(value))
    if match is None:
        raise ValidationException("limit", f"not an integer: {value!r}")
    sign, digits = match.groups()
    if len(digits) > _MAX_LIMIT_DIGITS:
        digits = "9" * _MAX_LIMIT_DIGITS
    return int(sign + digits)


def closest_valid_limit(requested: int) -> int:
    """허용값 중 가장 가까운 limit 반환 (동률이면 작은 값 우선)"""
    closest = VALID_LIMITS[0]
    for candidate in VALID_LIMITS[1:]:
        if abs(candidate - requested) < abs(closest - requested):
            closest = candidate
    return closest


def coerce_limit(value: object) -> str:
    """limit를 허용값 문자열로 보정

    파싱 실패 시 기본 limit를 사용합니다. (ValidationException은 외부로 나가지 않음)
    """
    try:
        requested = parse_limit(value)
    except ValidationException as e:
        logger.info(f"[PARAMS] {e.message}, using {DEFAULT_PARAMS['limit']} instead")
        return DEFAULT_PARAMS["limit"]

    if requested in VALID_LIMITS:
        return str(requested)

    closest = closest_valid_limit(requested)
    logger.info(f"[PARAMS] Invalid limit {requested}, using {closest} instead")
    return str(closest)


def is_aggregate_requested(query: Mapping[str, str]) -> bool:
    """`all=true` 플래그 확인 (키/값 대소문자 무시)"""
    for key, value in query.items():
        if key.lower() == AGGREGATE_FLAG:
            return str(value).strip().lower() == "true"
    return False


def normalize_params(query: Mapping[str, str]) -> Dict[str, str]:
    """인바운드 쿼리 + 기본값 → 정규화된 파라미터

    Args:
        query: 클라이언트 쿼리 파라미터 (변경하지 않음)

    Returns:
        dict: 인식되는 키(기본값 순서) 다음에 나머지 키(입력 순서)가 오는 새 dict
    """
    params: Dict[str, str] = dict(DEFAULT_PARAMS)
    extras: Dict[str, str] = {}

    for key, value in query.items():
        if key.lower() == AGGREGATE_FLAG:
            continue
        canonical = _CANONICAL_KEYS.get(key.lower())
        if canonical is not None:
            params[canonical] = str(value)
        else:
            extras[key] = str(value)

    params["limit"] = coerce_limit(params["limit"])
    params.update(extras)
    return params


def to_upstream_params(
    params: Mapping[str, str],
    param_names: Optional[Mapping[str, str]] = None,
) -> Dict[str, str]:
    """정규화된 파라미터를 업스트림 파라미터명으로 변환

    빈 cursor(첫 페이지)는 전송하지 않습니다.

    Args:
        params: normalize_params 결과
        param_names: 정규화 키 → 업스트림 키 매핑 (없는 키는 그대로 사용)
    """
    names = param_names or {}
    upstream: Dict[str, str] = {}
    for key, value in params.items():
        if key == "cursor" and not value:
            continue
        upstream[names.get(key, key)] = value
    return upstream
