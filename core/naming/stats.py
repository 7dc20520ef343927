"""
core/naming/stats.py - 이름 캐시 통계
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field


@dataclass
class CacheStats:
    """캐시 통계 (스레드 안전)

    Attributes:
        hits: 캐시에서 바로 응답한 횟수
        misses: 캐시가 비어 조회가 필요했던 횟수
        loads: 조회 성공 후 캐시에 저장한 횟수
        load_failures: 조회 실패 횟수 (실패는 캐시하지 않음)
    """

    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)
    hits: int = 0
    misses: int = 0
    loads: int = 0
    load_failures: int = 0

    @property
    def hit_rate(self) -> float:
        """캐시 히트율 (0.0 ~ 1.0, 조회 없으면 0.0)"""
        total = self.hits + self.misses
        return self.hits / total if total > 0 else 0.0

    def add_hit(self) -> None:
        with self._lock:
            self.hits += 1

    def add_miss(self) -> None:
        with self._lock:
            self.misses += 1

    def add_load(self) -> None:
        with self._lock:
            self.loads += 1

    def add_load_failure(self) -> None:
        with self._lock:
            self.load_failures += 1

    def to_dict(self) -> dict[str, int]:
        with self._lock:
            return {
                "hits": self.hits,
                "misses": self.misses,
                "loads": self.loads,
                "load_failures": self.load_failures,
            }

    def summary(self) -> str:
        """로그용 한 줄 요약"""
        return (
            f"Name cache: {self.hits} hits, {self.misses} misses, "
            f"{self.loads} loads, {self.load_failures} failures ({self.hit_rate:.1%} hit rate)"
        )
