"""
core/parallel/aggregator.py - 카테고리별 결과 병합

스케줄러 결과 스트림의 단일 소비자입니다. 소비자가 하나뿐이므로 락이 없습니다.

병합 규칙:
    - 성공 결과는 카테고리별 CategoryResult에 리소스를 이어 붙입니다.
    - 실패 결과는 failures[카테고리]에 기록하며, 같은 카테고리의 이전 실패를
      덮어씁니다 (마지막 실패만 남음).
    - 한 카테고리가 성공(다른 리전)과 실패 양쪽에 동시에 존재할 수 있습니다.

결정적 순서:
    - categories()는 카테고리 이름 사전순
    - finalize()는 should_sort()가 True인 수집기의 리소스를
      (region, sub_category1, sub_category2, sub_category3, name) 순으로 정렬
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from core.inventory.registry import CollectorRegistry
    from core.inventory.types import Resource

    from .types import CollectionResult


def resource_sort_key(resource: Resource) -> tuple[Any, ...]:
    """리소스 정렬 키

    (region, sub_category1..3, name) 이후 arn과 속성 값으로 동률을 끊어
    입력 순서와 무관하게 같은 결과를 보장합니다.
    """
    return (
        resource.region,
        resource.sub_category1,
        resource.sub_category2,
        resource.sub_category3,
        resource.name,
        resource.arn,
        tuple(sorted(resource.raw_data.items())),
    )


def sort_resources(resources: Iterable[Resource]) -> list[Resource]:
    return sorted(resources, key=resource_sort_key)


@dataclass
class CategoryResult:
    """한 카테고리의 성공 결과 합집합 (여러 리전)"""

    category: str
    resources: list[Resource] = field(default_factory=list)
    regions: list[str] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.resources)

    @property
    def is_empty(self) -> bool:
        return not self.resources


class ResultAggregator:
    """CollectionResult 스트림을 카테고리별 성공/실패 맵으로 병합

    Example:
        aggregator = ResultAggregator()
        aggregator.consume(scheduler.run(ctx))
        aggregator.finalize(registry)

        for category in aggregator.categories():
            rows = aggregator.category_results[category].resources
    """

    def __init__(self) -> None:
        self.category_results: dict[str, CategoryResult] = {}
        self.failures: dict[str, BaseException] = {}
        self.failed_results: list[CollectionResult] = []
        self.task_count = 0
        self.success_count = 0
        self._finalized = False

    def add(self, result: CollectionResult) -> None:
        """결과 하나 병합"""
        self.task_count += 1
        if result.error is not None:
            self.failures[result.category] = result.error
            self.failed_results.append(result)
            return

        self.success_count += 1
        entry = self.category_results.get(result.category)
        if entry is None:
            entry = CategoryResult(category=result.category)
            self.category_results[result.category] = entry
        entry.resources.extend(result.resources)
        entry.regions.append(result.region)

    def consume(self, results: Iterable[CollectionResult]) -> ResultAggregator:
        """결과 스트림을 끝까지 병합"""
        for result in results:
            self.add(result)
        return self

    def categories(self) -> list[str]:
        """성공 결과가 있는 카테고리 (사전순)"""
        return sorted(self.category_results)

    def resources(self, category: str) -> list[Resource]:
        entry = self.category_results.get(category)
        return entry.resources if entry else []

    def finalize(self, registry: CollectorRegistry) -> ResultAggregator:
        """should_sort() 수집기의 리소스 정렬 (재호출해도 결과 동일)"""
        for category, entry in self.category_results.items():
            collector = registry.get(category)
            if collector is not None and collector.should_sort():
                entry.resources = sort_resources(entry.resources)
        self._finalized = True
        return self

    @property
    def finalized(self) -> bool:
        return self._finalized

    @property
    def has_failures(self) -> bool:
        return bool(self.failures)

    @property
    def resource_count(self) -> int:
        return sum(len(entry) for entry in self.category_results.values())

    @property
    def total_failure(self) -> bool:
        """실패가 있고 수집된 리소스가 하나도 없음"""
        return self.has_failures and self.resource_count == 0

    @property
    def partial_failure(self) -> bool:
        return self.has_failures and not self.total_failure

    def summary(self) -> dict[str, Any]:
        """실행 결과 요약"""
        return {
            "tasks": self.task_count,
            "succeeded_tasks": self.success_count,
            "failed_tasks": self.task_count - self.success_count,
            "categories": self.categories(),
            "resource_counts": {c: len(self.category_results[c]) for c in self.categories()},
            "total_resources": self.resource_count,
            "failed_categories": sorted(self.failures),
        }
