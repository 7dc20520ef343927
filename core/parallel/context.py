"""
core/parallel/context.py - 수집 실행 컨텍스트 (취소 토큰)

실행당 하나의 컨텍스트가 모든 작업과 모든 API 호출 사이에 전달됩니다.
스케줄러는 취소를 직접 폴링하지 않으며, 수집기가 페이지 사이에서
raise_if_cancelled()를 호출해 빠르게 중단합니다.
"""

from __future__ import annotations

import threading
import time

from core.exceptions import CollectionCancelledError


class CollectionContext:
    """취소 토큰 + 선택적 deadline

    Example:
        ctx = CollectionContext(timeout=600)
        for page in paginator.paginate():
            ctx.raise_if_cancelled()
            ...
    """

    def __init__(self, timeout: float | None = None):
        self._event = threading.Event()
        self._deadline = time.monotonic() + timeout if timeout else None
        self._reason = ""

    def cancel(self, reason: str = "") -> None:
        """실행 취소 (스레드 세이프, 여러 번 호출 가능)"""
        if not self._event.is_set():
            self._reason = reason
            self._event.set()

    @property
    def cancelled(self) -> bool:
        if self._event.is_set():
            return True
        return self._deadline is not None and time.monotonic() >= self._deadline

    @property
    def reason(self) -> str:
        if self._event.is_set():
            return self._reason or "cancelled"
        if self.cancelled:
            return "deadline exceeded"
        return ""

    @property
    def remaining(self) -> float | None:
        """deadline까지 남은 시간 (초). deadline이 없으면 None"""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    def raise_if_cancelled(self) -> None:
        """취소되었으면 CollectionCancelledError 발생"""
        if self.cancelled:
            raise CollectionCancelledError(f"수집이 취소되었습니다 ({self.reason})")
