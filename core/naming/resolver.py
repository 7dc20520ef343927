"""
core/naming/resolver.py - 식별자 -> 사람이 읽을 이름 캐시

수집 실행 한 번 동안 (리전, 종류)별 {id: name} 맵을 한 번만 bulk 조회하고
이후 모든 조회는 메모리에서 응답합니다. 캐시는 실행 중 무효화되지 않습니다.

동시성:
    여러 수집기가 병렬로 같은 (리전, 종류)를 조회할 수 있으므로 키마다 락을 두고
    "캐시 확인 -> 없으면 조회 후 저장"을 하나의 임계 구역으로 실행합니다.
    동시에 캐시 미스가 나도 bulk 조회는 정확히 한 번만 일어납니다.

실패:
    bulk 조회 실패는 캐시하지 않습니다. resolve()는 식별자를 그대로 반환하고,
    다음 조회에서 다시 bulk 조회를 시도합니다.

Example:
    resolver = NameResolver(ClientFactory(session))
    vpc_name = resolver.resolve(ctx, "ap-northeast-1", NameKind.VPC, "vpc-0abc")
    oac_name = resolver.resolve_global(ctx, GlobalNameKind.ORIGIN_ACCESS_CONTROL, "E2ABC")
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from core.aws.client import ClientFactory
from core.aws.values import NOT_AVAILABLE
from core.config import settings
from core.exceptions import CollectionCancelledError

from .kinds import GlobalNameKind, NameKind
from .loaders import DEFAULT_LOADERS, Loader, fetch_global_name
from .stats import CacheStats

if TYPE_CHECKING:
    import boto3

    from core.parallel.context import CollectionContext

logger = logging.getLogger(__name__)

GLOBAL_SERVICE = "cloudfront"


def resolve_name_from_map(identifier: str | None, mapping: Mapping[str, str]) -> str:
    """맵에서 이름 조회 (없으면 식별자 그대로, None/""이면 "N/A")"""
    if not identifier:
        return NOT_AVAILABLE
    return mapping.get(identifier, identifier)


def resolve_names_from_map(identifiers: Iterable[str | None] | None, mapping: Mapping[str, str]) -> list[str]:
    """여러 식별자를 순서대로 이름으로 변환"""
    if not identifiers:
        return []
    return [resolve_name_from_map(identifier, mapping) for identifier in identifiers]


class NameResolver:
    """실행 단위 이름 해석 캐시

    Args:
        clients: ClientFactory 또는 boto3.Session (Session이면 ClientFactory로 감쌈)
        global_region: CloudFront 조회 리전
        loaders: 종류별 bulk loader (테스트 주입용, 기본 DEFAULT_LOADERS)
    """

    def __init__(
        self,
        clients: ClientFactory | boto3.Session,
        global_region: str = settings.GLOBAL_SERVICE_REGION,
        loaders: Mapping[NameKind, Loader] | None = None,
    ):
        self._clients = clients if isinstance(clients, ClientFactory) else ClientFactory(clients)
        self.global_region = global_region
        self._loaders: dict[NameKind, Loader] = dict(DEFAULT_LOADERS)
        if loaders:
            self._loaders.update(loaders)

        self._cache: dict[tuple[str, NameKind], Mapping[str, str]] = {}
        self._global_cache: dict[str, str] = {}
        self._locks: dict[Any, threading.Lock] = {}
        self._locks_guard = threading.Lock()
        self.stats = CacheStats()

    def _lock_for(self, key: Any) -> threading.Lock:
        with self._locks_guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = threading.Lock()
                self._locks[key] = lock
            return lock

    # =========================================================================
    # 리전 단위 bulk 캐시
    # =========================================================================

    def get_all(self, ctx: CollectionContext | None, region: str, kind: NameKind) -> Mapping[str, str]:
        """(region, kind)의 {id: name} 맵 반환 (첫 호출 시 bulk 조회)

        Raises:
            bulk 조회 중 발생한 예외 (캐시하지 않음)
        """
        key = (region, kind)
        with self._lock_for(key):
            cached = self._cache.get(key)
            if cached is not None:
                self.stats.add_hit()
                return cached

            self.stats.add_miss()
            if ctx is not None:
                ctx.raise_if_cancelled()

            client = self._clients.get(kind.service, region)
            try:
                names = self._loaders[kind](client, ctx)
            except Exception:
                self.stats.add_load_failure()
                raise

            mapping = MappingProxyType(dict(names))
            self._cache[key] = mapping
            self.stats.add_load()
            logger.debug(f"이름 캐시 로드: {kind.value} [{region}] {len(mapping)}건")
            return mapping

    def resolve(
        self,
        ctx: CollectionContext | None,
        region: str,
        kind: NameKind,
        identifier: str | None,
    ) -> str:
        """식별자를 이름으로 변환

        - None/"" -> "N/A" (API 호출 없음)
        - 종류의 형태와 맞지 않는 식별자 -> 그대로 (API 호출 없음)
        - bulk 조회 실패 -> 그대로 (실패는 캐시하지 않음)
        - 맵에 없는 식별자 -> 그대로
        """
        if not identifier:
            return NOT_AVAILABLE
        if not kind.matches(identifier):
            return identifier

        try:
            mapping = self.get_all(ctx, region, kind)
        except CollectionCancelledError:
            raise
        except Exception as e:
            logger.warning(f"이름 조회 실패: {kind.value} [{region}] {e}")
            return identifier

        return mapping.get(identifier, identifier)

    def resolve_many(
        self,
        ctx: CollectionContext | None,
        region: str,
        kind: NameKind,
        identifiers: Iterable[str | None] | None,
    ) -> list[str]:
        """여러 식별자를 순서대로 변환"""
        if not identifiers:
            return []
        return [self.resolve(ctx, region, kind, identifier) for identifier in identifiers]

    # =========================================================================
    # 글로벌 항목별 캐시 (CloudFront)
    # =========================================================================

    def resolve_global(
        self,
        ctx: CollectionContext | None,
        kind: GlobalNameKind,
        identifier: str | None,
    ) -> str:
        """글로벌 리전에서 항목 하나의 이름 조회

        bulk 조회 API가 없어 "<kind>:<id>" 키로 한 건씩 캐시합니다.
        성공 결과는 실행 끝까지 유지되고, 실패는 빈 문자열을 반환하며 캐시하지 않습니다.
        """
        if not identifier:
            return NOT_AVAILABLE

        cache_key = kind.cache_key(identifier)
        with self._lock_for(cache_key):
            if cache_key in self._global_cache:
                self.stats.add_hit()
                return self._global_cache[cache_key]

            self.stats.add_miss()
            if ctx is not None:
                ctx.raise_if_cancelled()

            try:
                client = self._clients.get(GLOBAL_SERVICE, self.global_region)
                name = fetch_global_name(client, kind, identifier)
            except Exception as e:
                self.stats.add_load_failure()
                logger.warning(f"이름 조회 실패: {cache_key} {e}")
                return ""

            self._global_cache[cache_key] = name
            self.stats.add_load()
            return name

    def get_origin_access_control_name(self, ctx: CollectionContext | None, identifier: str | None) -> str:
        return self.resolve_global(ctx, GlobalNameKind.ORIGIN_ACCESS_CONTROL, identifier)

    def get_cache_policy_name(self, ctx: CollectionContext | None, identifier: str | None) -> str:
        return self.resolve_global(ctx, GlobalNameKind.CACHE_POLICY, identifier)

    def get_origin_request_policy_name(self, ctx: CollectionContext | None, identifier: str | None) -> str:
        return self.resolve_global(ctx, GlobalNameKind.ORIGIN_REQUEST_POLICY, identifier)

    def get_response_headers_policy_name(self, ctx: CollectionContext | None, identifier: str | None) -> str:
        return self.resolve_global(ctx, GlobalNameKind.RESPONSE_HEADERS_POLICY, identifier)

    def cached_keys(self) -> list[tuple[str, str]]:
        """로드된 (region, kind) 목록 (디버그용)"""
        keys = list(self._cache)
        return sorted((region, kind.value) for region, kind in keys)
