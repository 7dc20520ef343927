"""
cli/ui/console.py - Rich 콘솔 유틸리티

일관된 콘솔 출력을 위한 함수들
"""

from __future__ import annotations

import logging
import platform
from collections.abc import Mapping

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from core.parallel.errors import summarize_failures

# botocore 노이즈 로그 제한
logging.getLogger("botocore.httpchecksum").setLevel(logging.WARNING)
logging.getLogger("botocore.credentials").setLevel(logging.WARNING)
logging.getLogger("botocore.loaders").setLevel(logging.WARNING)
logging.getLogger("botocore.session").setLevel(logging.WARNING)


def get_console() -> Console:
    """Rich Console 인스턴스를 생성하고 반환합니다."""
    is_windows = platform.system().lower() == "windows"

    return Console(
        stderr=True,
        color_system="auto",
        highlight=True,
        soft_wrap=True,
        markup=True,
        emoji=not is_windows,
    )


# 전역 콘솔 인스턴스
console = get_console()


SYMBOL_SUCCESS = "✓"
SYMBOL_ERROR = "✗"
SYMBOL_WARNING = "!"
SYMBOL_INFO = "•"


def print_success(message: str) -> None:
    console.print(f"[green]{SYMBOL_SUCCESS} {message}[/green]")


def print_error(message: str) -> None:
    console.print(f"[red]{SYMBOL_ERROR} {message}[/red]")


def print_warning(message: str) -> None:
    console.print(f"[yellow]{SYMBOL_WARNING} {message}[/yellow]")


def print_info(message: str) -> None:
    console.print(f"[blue]{SYMBOL_INFO} {message}[/blue]")


def print_table(title: str, columns: list[str], rows: list[list]) -> None:
    """테이블 형식으로 데이터를 출력합니다.

    Args:
        title: 테이블 제목
        columns: 컬럼 헤더 리스트
        rows: 행 데이터 리스트
    """
    table = Table(title=title, show_header=True, header_style="bold magenta")

    for column in columns:
        table.add_column(column)

    for row in rows:
        table.add_row(*[str(cell) for cell in row])

    console.print(table)


def print_execution_summary(
    profile: str | None,
    regions: list[str],
    categories: list[str],
    output_dir: str,
) -> None:
    """실행 요약 박스 출력"""
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column(style="bold cyan", width=12)
    table.add_column()
    table.add_row("프로필", profile or "(default)")
    table.add_row("리전", ", ".join(regions) if len(regions) <= 3 else f"{len(regions)}개 리전")
    table.add_row("카테고리", ", ".join(categories) if categories else "전체")
    table.add_row("출력", output_dir)
    console.print(Panel(table, title="실행 요약", border_style="#FF9900"))


def print_failures(failures: Mapping[str, BaseException]) -> None:
    """카테고리별 실패 표 출력 (카테고리 사전순)"""
    rows = [
        [info.category, info.error_category.value, info.error_code or "-", info.message]
        for info in summarize_failures(failures)
    ]
    print_table("수집 실패 카테고리", ["Category", "Type", "Code", "Message"], rows)
