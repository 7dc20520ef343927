"""
cli/app.py - 메인 CLI 엔트리포인트

Click 기반 단일 명령어 `invc`입니다.

명령어 구조:
    invc                                    # 기본 리전(ap-northeast-1) 전체 수집
    invc -r ap-northeast-1,us-west-2        # 여러 리전
    invc -c ec2,vpc -H                      # 카테고리 선택 + HTML 인덱스
    invc --list-categories                  # 내장 카테고리 목록
    invc --version

종료 코드:
    0    모든 카테고리 수집 성공
    1    사전 확인/출력 등 치명적 오류
    2    하나 이상의 카테고리 수집 실패 (나머지 결과는 저장됨)
    130  Ctrl-C로 취소
"""

from __future__ import annotations

import json
import logging
import sys

import click

from core.config import get_default_profile, get_default_region, get_version, settings
from core.exceptions import CollectionError, InventoryError, format_error_for_user
from core.inventory.services import BUILTIN_COLLECTORS
from core.parallel import CollectionContext, quiet_mode
from core.runner import CollectionOptions, RunSummary, run_collection

from .ui.console import (
    console,
    print_error,
    print_execution_summary,
    print_failures,
    print_success,
    print_warning,
)
from .ui.progress import parallel_progress

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"

EXIT_OK = 0
EXIT_FATAL = 1
EXIT_PARTIAL = 2
EXIT_INTERRUPTED = 130


def configure_logging(verbose: int, debug: bool) -> int:
    """-v 횟수로 로그 레벨 결정 후 basicConfig 적용"""
    if debug or verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=LOG_DATEFMT, force=True)
    if level > logging.DEBUG:
        logging.getLogger("botocore").setLevel(logging.WARNING)
        logging.getLogger("urllib3").setLevel(logging.WARNING)
    return level


def builtin_category_names() -> list[str]:
    return sorted(collector_cls.name for collector_cls in BUILTIN_COLLECTORS)


def _print_summary(summary: RunSummary) -> None:
    aggregator = summary.aggregator
    for name in summary.unknown_categories:
        print_warning(f"알 수 없는 카테고리: {name}")
    for kind, message in sorted(summary.output_errors.items()):
        print_warning(f"{kind} 출력 실패: {message}")
    for category in aggregator.categories():
        count = len(aggregator.resources(category))
        if count:
            console.print(f"  {category}: {count}")
    print_success(
        f"{aggregator.resource_count}개 리소스, {len(summary.category_files)}개 카테고리 파일 "
        f"({summary.duration_seconds:.1f}초)"
    )
    if summary.combined_path is not None:
        console.print(f"  [dim]{summary.combined_path}[/dim]")


@click.command(name="invc", context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(get_version(), prog_name="invc")
@click.option(
    "-r",
    "--region",
    "region",
    default=None,
    help=f"수집 리전 (쉼표 구분, 기본: $AWS_DEFAULT_REGION 또는 {settings.DEFAULT_REGION})",
)
@click.option("--profile", "profile", default=None, help="AWS 프로파일 (기본: $AWS_PROFILE)")
@click.option(
    "-D",
    "--output-dir",
    "output_dir",
    default=settings.DEFAULT_OUTPUT_DIR,
    show_default=True,
    type=click.Path(file_okay=False),
    help="출력 루트 디렉토리",
)
@click.option("-c", "--categories", "categories", default=None, help="수집할 카테고리 (쉼표 구분, 기본: 전체)")
@click.option("-H", "--html", "html", is_flag=True, help="index.html, files.json, resources.zip 생성")
@click.option("--excel", "excel", is_flag=True, help="inventory.xlsx 생성")
@click.option("--json", "as_json", is_flag=True, help="카테고리별 JSON 생성")
@click.option(
    "-C",
    "--concurrency",
    "concurrency",
    type=int,
    default=None,
    help=f"동시 수집 작업 수 (기본: $INVC_MAX_CONCURRENCY 또는 {settings.DEFAULT_MAX_CONCURRENCY})",
)
@click.option("-v", "--verbose", "verbose", count=True, help="로그 상세도 (-v INFO, -vv DEBUG)")
@click.option("--debug", "debug", is_flag=True, help="DEBUG 로그")
@click.option("-q", "--quiet", "quiet", is_flag=True, help="진행 표시와 요약 출력 생략")
@click.option("--list-categories", "list_categories", is_flag=True, help="내장 카테고리 목록 출력")
def cli(
    region: str | None,
    profile: str | None,
    output_dir: str,
    categories: str | None,
    html: bool,
    excel: bool,
    as_json: bool,
    concurrency: int | None,
    verbose: int,
    debug: bool,
    quiet: bool,
    list_categories: bool,
) -> None:
    """AWS 리소스 인벤토리를 수집해 CSV로 저장합니다."""
    if list_categories:
        for name in builtin_category_names():
            click.echo(name)
        return

    level = configure_logging(verbose, debug)

    options = CollectionOptions(
        regions=region or get_default_region(),
        profile=profile or get_default_profile(),
        output_dir=output_dir,
        categories=categories,
        html=html,
        excel=excel,
        json=as_json,
        max_concurrency=concurrency,
    )

    if not quiet:
        print_execution_summary(options.profile, options.region_list(), options.category_list(), output_dir)

    ctx = CollectionContext()
    # 로그가 WARNING보다 자세하면 진행 표시줄 대신 로그를 그대로 보여줌
    show_progress = not quiet and level >= logging.WARNING

    try:
        with parallel_progress("리소스 수집", enabled=show_progress) as tracker:
            if show_progress:
                with quiet_mode():
                    summary = run_collection(options, progress_tracker=tracker, ctx=ctx)
            else:
                summary = run_collection(options, progress_tracker=tracker, ctx=ctx)
    except KeyboardInterrupt:
        ctx.cancel("interrupted")
        print_warning("수집이 취소되었습니다")
        sys.exit(EXIT_INTERRUPTED)
    except CollectionError as e:
        if e.summary is not None and not quiet:
            _print_summary(e.summary)
        print_failures(e.failures)
        print_error(f"{len(e.failures)}개 카테고리 수집 실패: {', '.join(e.failed_categories)}")
        if debug and e.summary is not None:
            click.echo(json.dumps(e.summary.to_dict(), indent=2, ensure_ascii=False), err=True)
        sys.exit(EXIT_PARTIAL)
    except InventoryError as e:
        logger.debug("치명적 오류", exc_info=True)
        print_error(format_error_for_user(e))
        sys.exit(EXIT_FATAL)

    if not quiet:
        _print_summary(summary)


if __name__ == "__main__":
    cli()
