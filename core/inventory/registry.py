"""
core/inventory/registry.py - 수집기 레지스트리

호출자가 명시적으로 생성해서 스케줄러에 전달하는 값입니다.
모듈 전역 레지스트리나 import 시점 등록은 없습니다.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING

from core.aws.client import ClientFactory
from core.config import settings

from .services import BUILTIN_COLLECTORS

if TYPE_CHECKING:
    import boto3

    from core.naming.resolver import NameResolver

    from .collector import Collector

logger = logging.getLogger(__name__)


class CollectorRegistry:
    """카테고리 이름 -> 수집기

    반복 순서는 카테고리 이름 사전순입니다.
    """

    def __init__(self, collectors: Iterable[Collector] | None = None):
        self._collectors: dict[str, Collector] = {}
        for collector in collectors or []:
            self.register(collector)

    def register(self, collector: Collector) -> None:
        """수집기 등록

        Raises:
            ValueError: 이름이 비어있거나 이미 등록된 경우
        """
        name = collector.name
        if not name:
            raise ValueError(f"collector name is empty: {collector!r}")
        if name in self._collectors:
            raise ValueError(f"collector already registered: {name}")
        self._collectors[name] = collector

    def get(self, name: str) -> Collector | None:
        return self._collectors.get(name)

    def names(self) -> list[str]:
        return sorted(self._collectors)

    def filter(self, categories: Iterable[str] | None) -> tuple[CollectorRegistry, list[str]]:
        """카테고리 부분집합 레지스트리 생성

        Args:
            categories: 선택할 카테고리 이름 (None/빈 값이면 전체)

        Returns:
            (필터링된 레지스트리, 알 수 없는 카테고리 이름 목록)
        """
        wanted = [c.strip() for c in categories or [] if c and c.strip()]
        if not wanted:
            return CollectorRegistry(self), []

        selected = CollectorRegistry()
        unknown: list[str] = []
        for name in wanted:
            collector = self._collectors.get(name)
            if collector is None:
                if name not in unknown:
                    unknown.append(name)
                continue
            if name not in selected:
                selected.register(collector)
        return selected, unknown

    def __contains__(self, name: object) -> bool:
        return name in self._collectors

    def __len__(self) -> int:
        return len(self._collectors)

    def __iter__(self) -> Iterator[Collector]:
        for name in self.names():
            yield self._collectors[name]

    def __repr__(self) -> str:
        return f"CollectorRegistry({self.names()!r})"


def build_default_registry(
    clients: ClientFactory | boto3.Session,
    name_resolver: NameResolver | None = None,
    global_region: str = settings.GLOBAL_SERVICE_REGION,
) -> CollectorRegistry:
    """내장 수집기를 모두 등록한 레지스트리 생성

    Args:
        clients: 모든 수집기가 공유할 ClientFactory (Session이면 감쌈)
        name_resolver: 실행 단위 이름 캐시 (수집기 간 공유)
        global_region: 글로벌 서비스 리전
    """
    factory = clients if isinstance(clients, ClientFactory) else ClientFactory(clients)
    registry = CollectorRegistry(
        collector_cls(factory, name_resolver=name_resolver, global_region=global_region)
        for collector_cls in BUILTIN_COLLECTORS
    )
    logger.debug(f"수집기 등록: {registry.names()}")
    return registry
