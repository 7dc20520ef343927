"""
cli/ui/progress.py - 병렬 수집 진행 표시

스케줄러가 결과를 하나 소비할 때마다 on_complete()를 호출하며,
성공/실패 수를 분리해서 실시간으로 표시합니다.

Example:
    from cli.ui.progress import parallel_progress

    with parallel_progress("리소스 수집") as tracker, quiet_mode():
        aggregator = collect_resources(ctx, registry, regions, progress_tracker=tracker)

    success, failed, total = tracker.stats
"""

from __future__ import annotations

import threading
from collections.abc import Generator
from contextlib import contextmanager
from typing import TYPE_CHECKING

from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    ProgressColumn,
    SpinnerColumn,
    Task,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
)
from rich.text import Text

if TYPE_CHECKING:
    from rich.console import Console

from .console import console as default_console


class SuccessFailColumn(ProgressColumn):
    """성공/실패 수 컬럼: '40✓ 10✗'"""

    def __init__(self, tracker: ParallelTracker) -> None:
        super().__init__()
        self._tracker = tracker

    def render(self, task: Task) -> Text:
        success, failed, _ = self._tracker.stats
        text = Text()
        text.append(f"{success}✓ ", style="green")
        text.append(f"{failed}✗", style="red")
        return text


class ParallelTracker:
    """스레드 안전 병렬 작업 진행 추적기

    Progress 없이 생성하면 카운트만 집계합니다 (헤드리스/테스트용).

    Display format:
        [spinner] 리소스 수집 40✓ 10✗ / 50 [progress bar] 00:15
    """

    def __init__(
        self,
        progress: Progress | None = None,
        task_id: TaskID | None = None,
        description: str = "",
    ) -> None:
        self._progress = progress
        self._task_id = task_id
        self._description = description
        self._lock = threading.Lock()
        self._success = 0
        self._failed = 0
        self._total = 0

    def set_total(self, total: int) -> None:
        """전체 작업 수 설정 (스케줄러가 작업 목록 생성 직후 호출)"""
        with self._lock:
            self._total = total
            if self._progress is not None and self._task_id is not None:
                self._progress.update(self._task_id, total=total)

    def on_complete(self, success: bool) -> None:
        """작업 하나 완료 기록"""
        with self._lock:
            if success:
                self._success += 1
            else:
                self._failed += 1
            if self._progress is not None and self._task_id is not None:
                self._progress.update(self._task_id, completed=self._success + self._failed)

    @property
    def stats(self) -> tuple[int, int, int]:
        """(성공, 실패, 전체)"""
        with self._lock:
            return (self._success, self._failed, self._total)

    @property
    def success_count(self) -> int:
        with self._lock:
            return self._success

    @property
    def failed_count(self) -> int:
        with self._lock:
            return self._failed

    @property
    def total_count(self) -> int:
        with self._lock:
            return self._total


@contextmanager
def parallel_progress(
    description: str,
    console: Console | None = None,
    enabled: bool = True,
) -> Generator[ParallelTracker, None, None]:
    """병렬 수집 진행 표시 컨텍스트

    Args:
        description: 진행 표시줄 설명
        console: 사용할 Rich Console (기본: cli.ui.console)
        enabled: False면 화면 표시 없이 카운트만 집계
    """
    if not enabled:
        yield ParallelTracker(description=description)
        return

    cons = console or default_console
    progress = Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=cons,
        expand=False,
    )

    with progress:
        task_id = progress.add_task(f"[cyan]{description}", total=None)
        tracker = ParallelTracker(progress, task_id, description)
        progress.columns = (
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            SuccessFailColumn(tracker),
            TextColumn("/"),
            MofNCompleteColumn(),
            BarColumn(bar_width=40),
            TimeElapsedColumn(),
        )

        try:
            yield tracker
        finally:
            _success, failed, total = tracker.stats
            if total > 0:
                if failed == 0:
                    final_desc = f"[green]{description} 완료"
                else:
                    final_desc = f"[yellow]{description} 완료 ({failed}개 실패)"
                progress.update(task_id, description=final_desc)
