"""
core/parallel - 병렬 수집 스케줄러와 결과 병합

주요 구성 요소:
- CollectionContext: 실행 단위 취소 토큰
- ParallelConfig: 동시 실행 수 설정
- CollectionScheduler: (카테고리 x 리전) 작업 병렬 실행
- ResultAggregator: 카테고리별 성공/실패 병합과 결정적 정렬
- collect_resources: 위 과정을 한 번에 수행하는 래퍼
- quiet_mode: 병렬 실행 중 로그 억제

Example:
    from core.parallel import CollectionContext, ParallelConfig, collect_resources

    ctx = CollectionContext()
    aggregator = collect_resources(ctx, registry, regions, ParallelConfig(max_concurrency=5))
"""

from .aggregator import CategoryResult, ResultAggregator, resource_sort_key, sort_resources
from .context import CollectionContext
from .errors import (
    FailureInfo,
    categorize_error,
    categorize_error_code,
    describe_failure,
    get_error_code,
    summarize_failures,
)
from .quiet import inherit_quiet_state, is_quiet, quiet_mode, set_quiet
from .scheduler import CollectionScheduler, collect_resources
from .types import CollectionResult, CollectionTask, ErrorCategory, ParallelConfig

__all__ = [
    # Context / config
    "CollectionContext",
    "ParallelConfig",
    # Scheduler
    "CollectionScheduler",
    "CollectionTask",
    "CollectionResult",
    "collect_resources",
    # Aggregation
    "ResultAggregator",
    "CategoryResult",
    "resource_sort_key",
    "sort_resources",
    # Errors
    "ErrorCategory",
    "FailureInfo",
    "categorize_error",
    "categorize_error_code",
    "get_error_code",
    "describe_failure",
    "summarize_failures",
    # Quiet mode
    "quiet_mode",
    "is_quiet",
    "set_quiet",
    "inherit_quiet_state",
]
