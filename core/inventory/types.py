"""
core/inventory/types.py - 리소스 레코드와 출력 컬럼 정의

Resource는 모든 수집기가 생성하는 공통 레코드입니다.
모든 값은 생성 시점에 표시용 문자열로 정규화되며 이후 변경되지 않습니다.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from core.aws.values import get_map_value, normalize_raw_data, string_value


@dataclass(frozen=True)
class Resource:
    """수집된 리소스 한 건

    Attributes:
        category: 카테고리 (수집기 이름)
        sub_category1..3: 부모/자식 계층 표시용 하위 분류
        name: 리소스 이름
        region: 리전
        arn: ARN 또는 고유 식별자
        raw_data: 서비스별 속성 (값은 모두 문자열)
    """

    category: str
    sub_category1: str = ""
    sub_category2: str = ""
    sub_category3: str = ""
    name: str = ""
    region: str = ""
    arn: str = ""
    raw_data: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def create(
        cls,
        category: Any,
        name: Any = None,
        region: Any = None,
        sub_category1: Any = None,
        sub_category2: Any = None,
        sub_category3: Any = None,
        arn: Any = None,
        raw_data: Mapping[str, Any] | None = None,
    ) -> Resource:
        """boto3 원시 값으로부터 정규화된 Resource 생성

        category/name/region의 빈 값은 "N/A", 하위 분류와 ARN의 빈 값은 ""가 됩니다.
        """
        return cls(
            category=string_value(category),
            sub_category1=string_value(sub_category1, ""),
            sub_category2=string_value(sub_category2, ""),
            sub_category3=string_value(sub_category3, ""),
            name=string_value(name),
            region=string_value(region),
            arn=string_value(arn, ""),
            raw_data=normalize_raw_data(raw_data),
        )

    def get(self, key: str) -> str:
        """raw_data 값 조회 (없으면 빈 문자열)"""
        return get_map_value(self.raw_data, key)


@dataclass(frozen=True)
class Column:
    """출력 컬럼 (헤더 + 값 추출 함수)"""

    header: str
    value: Callable[[Resource], str]


def attr_column(header: str, attribute: str | None = None) -> Column:
    """Resource 속성 컬럼 (attribute 생략 시 header를 snake_case로 사용)"""
    attr = attribute or header.lower()
    return Column(header, lambda r: getattr(r, attr))


def raw_column(header: str, key: str | None = None) -> Column:
    """raw_data 키 컬럼 (key 생략 시 header와 동일)"""
    raw_key = key or header
    return Column(header, lambda r: r.get(raw_key))


def base_columns(*sub_categories: str) -> list[Column]:
    """Category, 하위 분류, Name, Region 공통 컬럼

    Args:
        sub_categories: 표시할 하위 분류 헤더 (최대 3개, 순서대로 sub_category1..3)
    """
    columns = [attr_column("Category")]
    for index, header in enumerate(sub_categories[:3], start=1):
        columns.append(attr_column(header, f"sub_category{index}"))
    columns.append(attr_column("Name"))
    columns.append(attr_column("Region"))
    return columns
