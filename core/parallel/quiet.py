"""
core/parallel/quiet.py - 병렬 수집 중 로그 출력 억제

여러 워커 스레드의 INFO/WARNING 로그가 Progress bar와 섞이지 않도록
스레드별 quiet 상태와 root logger Filter를 제공합니다.

Example:
    from core.parallel.quiet import quiet_mode

    with parallel_progress("리소스 수집") as tracker, quiet_mode():
        aggregator = collect_resources(ctx, registry, regions, progress_tracker=tracker)
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Generator
from contextlib import contextmanager

_quiet_state = threading.local()

# filter 참조 카운팅 (중첩/동시 quiet_mode 안전성)
_filter_refcount = 0
_filter_lock = threading.Lock()


class _QuietFilter(logging.Filter):
    """quiet 스레드에서 ERROR 미만 로그 레코드 차단"""

    def filter(self, record: logging.LogRecord) -> bool:
        return not (is_quiet() and record.levelno < logging.ERROR)


_quiet_filter = _QuietFilter()


def is_quiet() -> bool:
    """현재 스레드가 quiet 모드인지 확인"""
    return getattr(_quiet_state, "quiet", False)


def set_quiet(value: bool) -> None:
    """현재 스레드의 quiet 모드 설정 (워커 스레드 전파용)"""
    _quiet_state.quiet = value


def inherit_quiet_state() -> bool:
    """워커에 전달할 부모 스레드의 quiet 상태"""
    return is_quiet()


def _attach_filter(root_logger: logging.Logger) -> None:
    # 자식 logger 레코드는 root logger filter를 거치지 않으므로 handler에도 부착
    root_logger.addFilter(_quiet_filter)
    for handler in root_logger.handlers:
        handler.addFilter(_quiet_filter)


def _detach_filter(root_logger: logging.Logger) -> None:
    root_logger.removeFilter(_quiet_filter)
    for handler in root_logger.handlers:
        handler.removeFilter(_quiet_filter)


@contextmanager
def quiet_mode() -> Generator[None, None, None]:
    """병렬 실행 시 콘솔 출력을 억제하는 컨텍스트 매니저

    컨텍스트 안에서는 is_quiet() == True이며, 이 상태는 스케줄러가
    워커 스레드로 전파합니다. 참조 카운팅으로 중첩 진입 시에도
    바깥 컨텍스트의 filter가 유지됩니다.
    """
    global _filter_refcount

    old_value = is_quiet()
    _quiet_state.quiet = True

    root_logger = logging.getLogger()
    with _filter_lock:
        _filter_refcount += 1
        if _filter_refcount == 1:
            _attach_filter(root_logger)

    try:
        yield
    finally:
        _quiet_state.quiet = old_value
        with _filter_lock:
            _filter_refcount -= 1
            if _filter_refcount == 0:
                _detach_filter(root_logger)
