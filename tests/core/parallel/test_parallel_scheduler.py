"""
tests/core/parallel/test_parallel_scheduler.py - 병렬 수집 스케줄러 테스트

동시 실행 상한, 작업당 결과 1개, 실패 격리, 취소 전파를 검증합니다.
"""

import threading
import time

import pytest

from conftest import FakeCollector, make_resource
from core.exceptions import CollectionCancelledError
from core.parallel import (
    CollectionContext,
    CollectionScheduler,
    ParallelConfig,
    collect_resources,
    is_quiet,
    quiet_mode,
)
from core.parallel.types import CollectionResult

REGIONS = ["ap-northeast-1", "us-east-1"]


class RecordingTracker:
    """set_total/on_complete 호출 기록"""

    def __init__(self):
        self.total = None
        self.completed = []
        self._lock = threading.Lock()

    def set_total(self, total):
        self.total = total

    def on_complete(self, success):
        with self._lock:
            self.completed.append(success)


class TestBuildTasks:
    def test_cartesian_product(self, make_registry):
        registry = make_registry(FakeCollector("b"), FakeCollector("a"))
        scheduler = CollectionScheduler(registry, REGIONS)
        tasks = scheduler.build_tasks()
        assert [(t.category, t.region) for t in tasks] == [
            ("a", "ap-northeast-1"),
            ("a", "us-east-1"),
            ("b", "ap-northeast-1"),
            ("b", "us-east-1"),
        ]


class TestRun:
    """CollectionScheduler.run"""

    def test_one_result_per_task(self, make_registry):
        collectors = [FakeCollector(f"c{i}") for i in range(4)]
        registry = make_registry(*collectors)
        tracker = RecordingTracker()

        results = list(CollectionScheduler(registry, REGIONS).run(CollectionContext(), tracker))

        assert len(results) == 8
        assert sorted((r.category, r.region) for r in results) == sorted(
            (c.name, region) for c in collectors for region in REGIONS
        )
        assert tracker.total == 8
        assert len(tracker.completed) == 8

    def test_empty_registry(self, make_registry):
        tracker = RecordingTracker()
        results = list(CollectionScheduler(make_registry(), REGIONS).run(CollectionContext(), tracker))
        assert results == []
        assert tracker.total == 0

    def test_concurrency_bound(self, make_registry):
        """동시에 실행되는 collect() 수가 max_concurrency를 넘지 않음"""
        lock = threading.Lock()
        state = {"active": 0, "peak": 0}

        def on_collect(_region):
            with lock:
                state["active"] += 1
                state["peak"] = max(state["peak"], state["active"])
            time.sleep(0.05)
            with lock:
                state["active"] -= 1

        collectors = [FakeCollector(f"c{i}", on_collect=on_collect) for i in range(6)]
        registry = make_registry(*collectors)
        config = ParallelConfig(max_concurrency=2, max_workers=8)

        results = list(CollectionScheduler(registry, REGIONS, config).run(CollectionContext()))

        assert len(results) == 12
        assert 1 <= state["peak"] <= 2

    def test_failure_isolated(self, make_registry):
        """한 작업 실패가 다른 작업에 영향 없음"""
        ok = FakeCollector("ok", resources={"us-east-1": [make_resource("ok", "a", "us-east-1")]})
        bad = FakeCollector("bad", errors={"us-east-1": RuntimeError("boom")})
        tracker = RecordingTracker()

        results = list(CollectionScheduler(make_registry(ok, bad), REGIONS).run(CollectionContext(), tracker))

        failed = [r for r in results if not r.success]
        assert len(failed) == 1
        assert failed[0].category == "bad"
        assert failed[0].region == "us-east-1"
        assert failed[0].resources == []
        assert str(failed[0].error) == "boom"
        assert sorted(tracker.completed) == [False, True, True, True]

    def test_cancelled_context(self, make_registry):
        """취소된 컨텍스트의 작업은 CollectionCancelledError 결과"""
        collector = FakeCollector("a")
        ctx = CollectionContext()
        ctx.cancel("test")

        results = list(CollectionScheduler(make_registry(collector), REGIONS).run(ctx))

        assert len(results) == 2
        assert all(isinstance(r.error, CollectionCancelledError) for r in results)
        assert collector.calls == []

    def test_quiet_state_propagated(self, make_registry):
        seen = []

        def on_collect(_region):
            seen.append(is_quiet())

        registry = make_registry(FakeCollector("a", on_collect=on_collect))
        with quiet_mode():
            list(CollectionScheduler(registry, REGIONS).run(CollectionContext()))

        assert seen == [True, True]


class TestCollectResources:
    def test_merged_and_sorted(self, make_registry):
        collector = FakeCollector(
            "ec2",
            resources={
                "us-east-1": [make_resource("ec2", "b", "us-east-1"), make_resource("ec2", "a", "us-east-1")],
                "ap-northeast-1": [make_resource("ec2", "z", "ap-northeast-1")],
            },
        )
        aggregator = collect_resources(CollectionContext(), make_registry(collector), REGIONS)

        assert aggregator.finalized
        assert [(r.region, r.name) for r in aggregator.resources("ec2")] == [
            ("ap-northeast-1", "z"),
            ("us-east-1", "a"),
            ("us-east-1", "b"),
        ]
        assert not aggregator.has_failures

    def test_default_config(self, make_registry):
        config = ParallelConfig(max_concurrency=0)
        assert config.concurrency == 5
        assert config.workers == 5
        aggregator = collect_resources(CollectionContext(), make_registry(FakeCollector("a")), REGIONS, config)
        assert aggregator.task_count == 2

    @pytest.mark.parametrize("concurrency", [1, 3, 16])
    def test_result_type(self, make_registry, concurrency):
        registry = make_registry(FakeCollector("a"), FakeCollector("b"))
        results = list(
            CollectionScheduler(registry, REGIONS, ParallelConfig(max_concurrency=concurrency)).run(
                CollectionContext()
            )
        )
        assert all(isinstance(r, CollectionResult) for r in results)
        assert all(r.duration_ms >= 0 for r in results)
