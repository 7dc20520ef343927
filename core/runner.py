"""
core/runner.py - 수집 실행 흐름

한 번의 실행 순서:
    1. 리전 파싱 -> 세션 생성 (첫 리전이 기본 리전) -> 자격 증명 확인 -> 계정 ID 추출
    2. <output_dir>/<account_id>/resources 디렉토리 생성
    3. 리전 정규화, 레지스트리 생성 (실행 단위 이름 캐시 공유), 카테고리 필터
    4. 병렬 수집 -> 병합/정렬 -> 카테고리 CSV, all.csv, 선택 출력(JSON/Excel/HTML)
    5. 실패한 카테고리가 있으면 CollectionError

1~2단계와 all.csv 쓰기 실패는 치명적이며 예외를 그대로 전달합니다.
JSON/Excel/HTML 실패는 RunSummary.output_errors에 기록하고 다음 출력으로 진행합니다.
카테고리 수집 실패는 다른 카테고리 출력을 막지 않고 마지막에 한 번에 보고합니다.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

from core.aws.arn import extract_account_id
from core.aws.auth import check_aws_credentials, create_session
from core.aws.client import ClientFactory
from core.config import get_max_concurrency, settings
from core.exceptions import CollectionError, OutputError
from core.inventory.registry import CollectorRegistry, build_default_registry
from core.naming import NameResolver
from core.output import (
    generate_html,
    write_category_files,
    write_category_json_files,
    write_combined_csv,
    write_excel,
)
from core.parallel import CollectionContext, ParallelConfig, ResultAggregator, collect_resources
from core.region import parse_comma_list, resolve_regions

if TYPE_CHECKING:
    import boto3

    from cli.ui.progress import ParallelTracker

logger = logging.getLogger(__name__)


@dataclass
class CollectionOptions:
    """수집 실행 옵션

    Attributes:
        regions: 리전 목록 또는 쉼표 구분 문자열 (비어있으면 기본 리전)
        profile: AWS 프로파일 (None이면 기본 자격 증명 체인)
        output_dir: 출력 루트 디렉토리
        categories: 수집할 카테고리 (비어있으면 전체)
        html: index.html/manifest/zip 생성 여부
        excel: inventory.xlsx 생성 여부
        json: 카테고리별 JSON 생성 여부
        max_concurrency: 동시 수집 작업 수 (None/0 이하면 기본값)
    """

    regions: list[str] | str | None = None
    profile: str | None = None
    output_dir: str = settings.DEFAULT_OUTPUT_DIR
    categories: list[str] | str | None = None
    html: bool = False
    excel: bool = False
    json: bool = False
    max_concurrency: int | None = None

    def region_list(self) -> list[str]:
        if isinstance(self.regions, str):
            regions = parse_comma_list(self.regions)
        else:
            regions = [r.strip() for r in self.regions or [] if r and r.strip()]
        return regions or [settings.DEFAULT_REGION]

    def category_list(self) -> list[str]:
        if isinstance(self.categories, str):
            return parse_comma_list(self.categories)
        return [c.strip() for c in self.categories or [] if c and c.strip()]

    def concurrency(self) -> int:
        if self.max_concurrency is not None and self.max_concurrency > 0:
            return self.max_concurrency
        return get_max_concurrency()


@dataclass
class RunSummary:
    """실행 결과 요약"""

    account_id: str
    caller_arn: str
    regions: list[str]
    account_dir: Path
    aggregator: ResultAggregator
    unknown_categories: list[str] = field(default_factory=list)
    category_files: list[Path] = field(default_factory=list)
    combined_path: Path | None = None
    extra_files: list[Path] = field(default_factory=list)
    output_errors: dict[str, str] = field(default_factory=dict)
    name_cache: dict[str, Any] = field(default_factory=dict)
    duration_seconds: float = 0.0

    @property
    def resources_dir(self) -> Path:
        return self.account_dir / settings.RESOURCES_DIR_NAME

    @property
    def failures(self) -> dict[str, BaseException]:
        return self.aggregator.failures

    def to_dict(self) -> dict[str, Any]:
        return {
            "account_id": self.account_id,
            "caller_arn": self.caller_arn,
            "regions": list(self.regions),
            "output_dir": str(self.account_dir),
            "unknown_categories": list(self.unknown_categories),
            "files": [str(p) for p in self.category_files],
            "combined": str(self.combined_path) if self.combined_path else None,
            "extra_files": [str(p) for p in self.extra_files],
            "output_errors": dict(self.output_errors),
            "name_cache": dict(self.name_cache),
            "duration_seconds": round(self.duration_seconds, 2),
            **self.aggregator.summary(),
        }


def prepare_output_dir(output_dir: str | Path, account_id: str) -> Path:
    """<output_dir>/<account_id>/resources 생성 후 계정 디렉토리 반환

    Raises:
        OutputError: 디렉토리 생성 실패
    """
    account_dir = Path(output_dir) / account_id
    resources_dir = account_dir / settings.RESOURCES_DIR_NAME
    try:
        resources_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise OutputError(str(resources_dir), "출력 디렉토리 생성 실패", cause=e) from e
    return account_dir


def _write_optional(summary: RunSummary, kind: str, write: Callable[[], list[Path]]) -> None:
    """선택 출력 작성 (실패는 summary.output_errors에 기록하고 계속 진행)"""
    try:
        summary.extra_files.extend(write())
    except (OutputError, OSError) as e:
        logger.error(f"{kind} 출력 실패: {e}")
        summary.output_errors[kind] = str(e)


def run_collection(
    options: CollectionOptions,
    progress_tracker: ParallelTracker | None = None,
    session: boto3.Session | None = None,
    ctx: CollectionContext | None = None,
    registry: CollectorRegistry | None = None,
) -> RunSummary:
    """수집 실행

    Args:
        options: 실행 옵션
        progress_tracker: 진행 표시 (set_total/on_complete)
        session: 미리 만든 boto3 Session (None이면 profile/기본 리전으로 생성)
        ctx: 취소 컨텍스트 (None이면 새로 생성)
        registry: 사용할 수집기 레지스트리 (None이면 내장 수집기 전체)

    Returns:
        RunSummary (모든 카테고리 성공 시)

    Raises:
        ConfigError, CredentialError, InvalidARNError: 사전 확인 실패
        OutputError: 출력 디렉토리 생성 또는 병합 파일 작성 실패
        CollectionError: 하나 이상의 카테고리 수집 실패 (출력은 작성된 상태)
    """
    start_time = time.monotonic()
    ctx = ctx or CollectionContext()

    user_regions = options.region_list()
    primary_region = user_regions[0]
    if session is None:
        session = create_session(options.profile, primary_region)

    logger.info("AWS 자격 증명 확인 중...")
    caller_arn = check_aws_credentials(session)
    account_id = extract_account_id(caller_arn)
    logger.info(f"Account ID: {account_id}")

    account_dir = prepare_output_dir(options.output_dir, account_id)

    regions = resolve_regions(user_regions)
    logger.info(f"수집 대상 리전: {regions}")

    name_resolver = None
    if registry is None:
        clients = ClientFactory(session, max_pool_connections=max(options.concurrency() * 2, 10))
        name_resolver = NameResolver(clients)
        registry = build_default_registry(clients, name_resolver=name_resolver)

    selected, unknown = registry.filter(options.category_list())
    for name in unknown:
        logger.warning(f"알 수 없는 카테고리: {name}")

    aggregator = collect_resources(
        ctx,
        selected,
        regions,
        ParallelConfig(max_concurrency=options.concurrency()),
        progress_tracker=progress_tracker,
    )

    summary = RunSummary(
        account_id=account_id,
        caller_arn=caller_arn,
        regions=regions,
        account_dir=account_dir,
        aggregator=aggregator,
        unknown_categories=unknown,
    )

    resources_dir = summary.resources_dir
    summary.category_files = write_category_files(resources_dir, aggregator, selected)
    summary.combined_path = write_combined_csv(resources_dir / settings.COMBINED_CSV_NAME, aggregator, selected)
    logger.info(f"수집 결과 저장: {resources_dir}")

    if options.json:
        _write_optional(
            summary,
            "json",
            lambda: write_category_json_files(account_dir / settings.JSON_DIR_NAME, aggregator, selected),
        )
    if options.excel:
        _write_optional(
            summary,
            "excel",
            lambda: [write_excel(account_dir / settings.EXCEL_NAME, aggregator, selected)],
        )
    if options.html:
        logger.info("HTML 인덱스 생성 중...")
        _write_optional(
            summary,
            "html",
            lambda: [
                generate_html(options.output_dir, account_id, settings.COMBINED_CSV_NAME, aggregator.categories())
            ],
        )

    if name_resolver is not None:
        summary.name_cache = name_resolver.stats.to_dict()
        logger.debug(f"이름 캐시: {name_resolver.stats.summary()}")
    summary.duration_seconds = time.monotonic() - start_time

    if aggregator.has_failures:
        raise CollectionError(aggregator.failures, summary=summary)

    return summary
