"""
core/parallel/scheduler.py - (카테고리 x 리전) 병렬 수집 스케줄러

등록된 모든 수집기와 모든 리전의 조합으로 작업을 만들고,
카운팅 세마포어로 동시에 실행되는 collect() 수를 제한합니다.

실행 모델:
    - 작업마다 세마포어 슬롯을 하나 획득한 뒤 collect()를 호출하고,
      성공/실패와 무관하게 finally에서 반납합니다.
    - 결과는 작업 수만큼의 용량을 가진 Queue로 전달되어 생산자가 막히지 않습니다.
    - 코디네이터 스레드가 모든 작업 종료를 기다린 뒤 종료 신호(sentinel)를 넣고,
      소비자(run 제너레이터)는 신호를 받을 때까지 결과를 yield합니다.
    - 재시도와 조기 중단은 없습니다. 한 작업의 실패는 다른 작업에 영향을 주지 않습니다.

Example:
    scheduler = CollectionScheduler(registry, regions, ParallelConfig(max_concurrency=5))
    for result in scheduler.run(ctx):
        aggregator.add(result)
"""

from __future__ import annotations

import logging
import queue
import threading
import time
from collections.abc import Iterator
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING

from .aggregator import ResultAggregator
from .errors import get_error_code
from .quiet import inherit_quiet_state, set_quiet
from .types import CollectionResult, CollectionTask, ParallelConfig

if TYPE_CHECKING:
    from cli.ui.progress import ParallelTracker
    from core.inventory.registry import CollectorRegistry

    from .context import CollectionContext

logger = logging.getLogger(__name__)

_DONE = object()


def _clear_exception_chain(e: BaseException) -> None:
    """traceback + chained exception 메모리 누수 방지"""
    e.__traceback__ = None
    if e.__context__ is not None:
        e.__context__.__traceback__ = None
    if e.__cause__ is not None:
        e.__cause__.__traceback__ = None


class CollectionScheduler:
    """수집기 x 리전 병렬 실행기

    Args:
        registry: 실행할 수집기 레지스트리
        regions: 정규화된 리전 목록 (resolve_regions 결과)
        config: 병렬 실행 설정 (None이면 기본값)
    """

    def __init__(
        self,
        registry: CollectorRegistry,
        regions: list[str],
        config: ParallelConfig | None = None,
    ):
        self.registry = registry
        self.regions = list(regions)
        self.config = config or ParallelConfig()

    def build_tasks(self) -> list[CollectionTask]:
        """|수집기| x |리전| 작업 목록 생성"""
        return [
            CollectionTask(category=collector.name, collector=collector, region=region)
            for collector in self.registry
            for region in self.regions
        ]

    def run(
        self,
        ctx: CollectionContext,
        progress_tracker: ParallelTracker | None = None,
    ) -> Iterator[CollectionResult]:
        """모든 작업을 실행하고 완료 순서대로 결과를 yield

        작업당 정확히 하나의 CollectionResult가 생성됩니다.

        Args:
            ctx: 모든 작업에 전달되는 취소 컨텍스트
            progress_tracker: 진행 상황 추적기 (set_total/on_complete)
        """
        tasks = self.build_tasks()
        if progress_tracker is not None:
            progress_tracker.set_total(len(tasks))

        if not tasks:
            logger.warning("실행할 수집 작업이 없습니다")
            return

        concurrency = self.config.concurrency
        workers = min(len(tasks), max(self.config.workers, concurrency))
        logger.info(
            f"병렬 수집 시작: {len(tasks)}개 작업 "
            f"({len(self.registry)}개 카테고리 x {len(self.regions)}개 리전), "
            f"max_concurrency={concurrency}"
        )

        gate = threading.BoundedSemaphore(concurrency)
        results: queue.Queue = queue.Queue(maxsize=len(tasks) + 1)
        parent_quiet = inherit_quiet_state()

        executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="invc-collect")
        futures = [executor.submit(self._execute, task, ctx, gate, results, parent_quiet) for task in tasks]

        def coordinate() -> None:
            executor.shutdown(wait=True)
            for future in futures:
                # _execute는 예외를 결과로 변환하므로 여기 도달하면 스케줄러 버그
                exc = future.exception()
                if exc is not None:
                    logger.error(f"수집 워커 내부 오류: {exc}")
            results.put(_DONE)

        coordinator = threading.Thread(target=coordinate, name="invc-coordinator", daemon=True)
        coordinator.start()

        success_count = 0
        failed_count = 0
        start_time = time.monotonic()
        while True:
            item = results.get()
            if item is _DONE:
                break
            if item.success:
                success_count += 1
            else:
                failed_count += 1
            if progress_tracker is not None:
                progress_tracker.on_complete(item.success)
            yield item

        coordinator.join()
        logger.info(
            f"병렬 수집 완료: 성공 {success_count}, 실패 {failed_count}, "
            f"{time.monotonic() - start_time:.2f}초"
        )

    def _execute(
        self,
        task: CollectionTask,
        ctx: CollectionContext,
        gate: threading.BoundedSemaphore,
        results: queue.Queue,
        quiet: bool,
    ) -> None:
        """단일 작업 실행 (워커 스레드)"""
        set_quiet(quiet)
        start_time = time.monotonic()
        result = CollectionResult(category=task.category, region=task.region)

        gate.acquire()
        try:
            logger.info(f"리소스 수집 중: {task.category} [{task.region}]")
            ctx.raise_if_cancelled()
            result.resources = list(task.collector.collect(ctx, task.region) or [])
        except Exception as e:
            logger.error(f"리소스 수집 실패: {task.category} [{task.region}] {get_error_code(e)}: {e}")
            _clear_exception_chain(e)
            result.resources = []
            result.error = e
        finally:
            gate.release()
            result.duration_ms = (time.monotonic() - start_time) * 1000

        results.put(result)


def collect_resources(
    ctx: CollectionContext,
    registry: CollectorRegistry,
    regions: list[str],
    config: ParallelConfig | None = None,
    progress_tracker: ParallelTracker | None = None,
) -> ResultAggregator:
    """스케줄링 + 병합 + 정렬을 한 번에 수행

    Example:
        with parallel_progress("리소스 수집") as tracker, quiet_mode():
            aggregator = collect_resources(ctx, registry, regions, progress_tracker=tracker)

        if aggregator.has_failures:
            print(sorted(aggregator.failures))
    """
    scheduler = CollectionScheduler(registry, regions, config)
    aggregator = ResultAggregator()
    aggregator.consume(scheduler.run(ctx, progress_tracker=progress_tracker))
    return aggregator.finalize(registry)
