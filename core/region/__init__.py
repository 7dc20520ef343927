# core/region - 리전 결정
"""
리전 모듈

사용자 입력 리전 목록을 정규화하고 글로벌 서비스 리전을 보장합니다.
"""

from .resolver import parse_comma_list, resolve_regions

__all__ = ["parse_comma_list", "resolve_regions"]
