"""
core/inventory/collector.py - 수집기 인터페이스

스케줄러는 네 가지 기능만 사용합니다:
    name: 카테고리 키
    should_sort(): 병합 후 (region, 하위 분류, name) 정렬 여부
    columns(): 출력 컬럼 (렌더러가 사용)
    collect(ctx, region): 리전 하나의 리소스 수집. 실패는 예외로 전달합니다.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, ClassVar

from core.config import settings

if TYPE_CHECKING:
    from core.aws.client import ClientFactory
    from core.naming.resolver import NameResolver
    from core.parallel.context import CollectionContext

    from .types import Column, Resource

logger = logging.getLogger(__name__)


class Collector(ABC):
    """카테고리 하나의 리소스 수집기

    Subclass는 name, columns(), collect()를 구현합니다.
    정렬하지 않아야 하는 수집기(부모/자식 행 순서 유지)는 should_sort()를 재정의합니다.
    """

    name: ClassVar[str] = ""

    def should_sort(self) -> bool:
        return True

    @abstractmethod
    def columns(self) -> list[Column]:
        """출력 컬럼 목록"""

    @abstractmethod
    def collect(self, ctx: CollectionContext, region: str) -> list[Resource]:
        """리전 하나의 리소스 수집

        Raises:
            API 호출 실패, CollectionCancelledError
        """

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"


class AWSCollector(Collector):
    """boto3 client와 이름 캐시를 공유하는 수집기 베이스

    Args:
        clients: (service, region) client 캐시
        name_resolver: 실행 단위 이름 캐시
        global_region: 글로벌 서비스 리전
    """

    service: ClassVar[str] = ""
    global_only: ClassVar[bool] = False

    def __init__(
        self,
        clients: ClientFactory,
        name_resolver: NameResolver | None = None,
        global_region: str = settings.GLOBAL_SERVICE_REGION,
    ):
        self.clients = clients
        self.name_resolver = name_resolver
        self.global_region = global_region

    def client(self, region: str, service: str | None = None) -> Any:
        return self.clients.get(service or self.service, region)

    def collect(self, ctx: CollectionContext, region: str) -> list[Resource]:
        # 글로벌 서비스는 글로벌 리전 작업에서만 수집
        if self.global_only and region != self.global_region:
            return []
        return self.collect_region(ctx, region)

    @abstractmethod
    def collect_region(self, ctx: CollectionContext, region: str) -> list[Resource]:
        """리전 하나의 리소스 수집 (global_only 필터 통과 후 호출)"""

    def paginate(self, ctx: CollectionContext, client: Any, operation: str, **kwargs: Any):
        """페이지 사이마다 취소 여부를 확인하며 페이지 순회"""
        paginator = client.get_paginator(operation)
        for page in paginator.paginate(**kwargs):
            ctx.raise_if_cancelled()
            yield page
