"""
core/aws/values.py - 표시용 문자열 정규화

boto3 응답 값(None, bool, 숫자, datetime, 리스트 등)을
CSV/JSON 출력에 그대로 쓸 수 있는 문자열로 변환합니다.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from datetime import date, datetime, timezone
from typing import Any

NOT_AVAILABLE = "N/A"


def _format_datetime(value: datetime) -> str:
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%SZ")


def string_value(value: Any, default: str = NOT_AVAILABLE) -> str:
    """값을 표시용 문자열로 변환

    - None, "" -> default
    - bool -> "true" / "false"
    - datetime -> UTC RFC3339 (YYYY-MM-DDTHH:MM:SSZ)
    - list/tuple/set -> 비어있지 않은 항목을 정렬 후 줄바꿈으로 연결 (없으면 default)
    - 그 외 -> str(value)
    """
    if value is None:
        return default
    if isinstance(value, str):
        return value if value else default
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, datetime):
        return _format_datetime(value)
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, (list, tuple, set, frozenset)):
        items = sorted(str(v) for v in value if v is not None and v != "")
        if not items:
            return default
        return "\n".join(items)
    return str(value)


def normalize_raw_data(data: Mapping[str, Any] | None) -> dict[str, str]:
    """속성 맵의 모든 값을 string_value로 정규화한 새 dict 반환"""
    if not data:
        return {}
    return {key: string_value(value) for key, value in data.items()}


def get_map_value(data: Mapping[str, Any] | None, key: str) -> str:
    """속성 맵에서 값 조회 (없으면 빈 문자열)"""
    if not data:
        return ""
    return string_value(data.get(key), default="")


def format_json_indent(value: Any) -> str:
    """값을 2칸 들여쓰기 JSON으로 변환

    JSON 문자열은 파싱 후 다시 들여쓰기합니다. None/""는 빈 문자열.

    Raises:
        ValueError: JSON 문자열 파싱 실패
    """
    if value is None:
        return ""
    if isinstance(value, str):
        if not value:
            return ""
        value = json.loads(value)
    return json.dumps(value, indent=2, ensure_ascii=False, default=str)


def get_tag_value(tags: Iterable[Mapping[str, Any]] | None, key: str) -> str:
    """boto3 태그 리스트 [{"Key": .., "Value": ..}]에서 값 조회 (키 대소문자 무시)"""
    if not tags:
        return ""
    lower_key = key.lower()
    for tag in tags:
        if str(tag.get("Key", "")).lower() == lower_key:
            return tag.get("Value") or ""
    return ""
