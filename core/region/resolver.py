"""
core/region/resolver.py - 수집 대상 리전 결정

사용자 입력 리전 목록을 정규화합니다: 공백/중복 제거, 입력 순서 유지,
글로벌 서비스 리전(us-east-1) 보장. 결과는 실행 동안 변경되지 않습니다.

Usage:
    from core.region import parse_comma_list, resolve_regions

    regions = resolve_regions(parse_comma_list("ap-northeast-1, us-west-2"))
    # ['ap-northeast-1', 'us-west-2', 'us-east-1']
"""

from __future__ import annotations

from collections.abc import Iterable

from core.config import settings


def _dedupe(values: Iterable[str | None]) -> list[str]:
    seen: set[str] = set()
    out: list[str] = []
    for value in values:
        if not value or value in seen:
            continue
        seen.add(value)
        out.append(value)
    return out


def parse_comma_list(text: str | None) -> list[str]:
    """쉼표 구분 문자열을 리스트로 변환 (trim, 빈 값/중복 제거, 순서 유지)"""
    if not text:
        return []
    return _dedupe(part.strip() for part in text.split(","))


def resolve_regions(
    user_regions: Iterable[str | None] | None,
    global_region: str = settings.GLOBAL_SERVICE_REGION,
) -> list[str]:
    """수집 대상 리전 목록 생성

    Args:
        user_regions: 사용자 지정 리전 (빈 값/중복 포함 가능)
        global_region: 글로벌 서비스 리전 (없으면 마지막에 추가)

    Returns:
        중복 없는 리전 목록. 입력이 비어있으면 [global_region]
    """
    regions = _dedupe(user_regions or [])
    if global_region not in regions:
        regions.append(global_region)
    return regions
