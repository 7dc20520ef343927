"""
core/parallel/types.py - 병렬 수집 타입 정의

주요 구성 요소:
- ErrorCategory: 작업 실패 원인 분류
- ParallelConfig: 동시 실행 설정
- CollectionTask: (카테고리, 수집기, 리전) 작업 단위
- CollectionResult: 작업당 정확히 하나 생성되는 결과
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from core.config import settings

if TYPE_CHECKING:
    from core.inventory.collector import Collector
    from core.inventory.types import Resource


class ErrorCategory(Enum):
    """작업 실패 원인 분류"""

    THROTTLING = "throttling"
    ACCESS_DENIED = "access_denied"
    NOT_FOUND = "not_found"
    EXPIRED_TOKEN = "expired_token"
    TIMEOUT = "timeout"
    NETWORK = "network"
    INVALID_REQUEST = "invalid_request"
    SERVICE_ERROR = "service_error"
    CANCELLED = "cancelled"
    UNKNOWN = "unknown"


@dataclass
class ParallelConfig:
    """병렬 수집 설정

    Attributes:
        max_concurrency: 동시에 collect()를 실행할 수 있는 최대 작업 수.
            None 또는 0 이하이면 기본값(5)을 사용합니다.
        max_workers: 워커 스레드 수 (None이면 max_concurrency와 동일)
    """

    max_concurrency: int | None = settings.DEFAULT_MAX_CONCURRENCY
    max_workers: int | None = None

    def __post_init__(self) -> None:
        if self.max_concurrency is None or self.max_concurrency <= 0:
            self.max_concurrency = settings.DEFAULT_MAX_CONCURRENCY
        if self.max_workers is None or self.max_workers <= 0:
            self.max_workers = self.max_concurrency

    @property
    def concurrency(self) -> int:
        """정규화된 동시 실행 수"""
        return self.max_concurrency or settings.DEFAULT_MAX_CONCURRENCY

    @property
    def workers(self) -> int:
        """정규화된 워커 스레드 수"""
        return self.max_workers or self.concurrency


@dataclass(frozen=True)
class CollectionTask:
    """수집 작업 단위 (카테고리 x 리전)"""

    category: str
    collector: Collector = field(repr=False, compare=False)
    region: str


@dataclass
class CollectionResult:
    """단일 작업 결과

    error가 None이면 성공이며, 실패한 작업의 resources는 항상 비어있습니다.
    """

    category: str
    region: str
    resources: list[Resource] = field(default_factory=list)
    error: BaseException | None = None
    duration_ms: float = 0.0

    @property
    def success(self) -> bool:
        return self.error is None
