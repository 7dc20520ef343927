"""
core/output/excel_writer.py - Excel 출력 (openpyxl)

카테고리마다 시트 하나를 만들고, 헤더 스타일/틀 고정/자동 필터를 적용합니다.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from core.exceptions import OutputError

from .csv_writer import iter_category_outputs

if TYPE_CHECKING:
    from core.inventory import CollectorRegistry
    from core.parallel import ResultAggregator

logger = logging.getLogger(__name__)

COLOR_HEADER_BG = "4472C4"  # 헤더 배경 (파란색)
COLOR_HEADER_FG = "FFFFFF"  # 헤더 글자 (흰색)
FONT_NAME = "맑은 고딕"

MAX_SHEET_TITLE = 31
MIN_COLUMN_WIDTH = 10
MAX_COLUMN_WIDTH = 60

ALIGN_WRAP = Alignment(horizontal="left", vertical="top", wrap_text=True)
ALIGN_HEADER = Alignment(horizontal="center", vertical="center", wrap_text=False)


def get_thin_border() -> Border:
    thin_side = Side(style="thin", color="808080")
    return Border(left=thin_side, right=thin_side, top=thin_side, bottom=thin_side)


def get_header_font() -> Font:
    return Font(name=FONT_NAME, size=10, bold=True, color=COLOR_HEADER_FG)


def get_data_font() -> Font:
    return Font(name=FONT_NAME, size=10, bold=False)


def get_header_fill() -> PatternFill:
    return PatternFill(start_color=COLOR_HEADER_BG, end_color=COLOR_HEADER_BG, fill_type="solid")


def _column_width(values: list[str]) -> int:
    longest = 0
    for value in values:
        for line in value.splitlines() or [""]:
            longest = max(longest, len(line))
    return max(MIN_COLUMN_WIDTH, min(longest + 2, MAX_COLUMN_WIDTH))


def write_excel(path: str | Path, aggregator: ResultAggregator, registry: CollectorRegistry) -> Path:
    """카테고리별 시트로 구성된 xlsx 작성

    Raises:
        OutputError: 저장 실패
    """
    path = Path(path)
    wb = Workbook()
    wb.remove(wb.active)

    header_font = get_header_font()
    header_fill = get_header_fill()
    data_font = get_data_font()
    border = get_thin_border()

    for category, resources, columns in iter_category_outputs(aggregator, registry):
        ws = wb.create_sheet(title=category[:MAX_SHEET_TITLE])
        headers = [col.header for col in columns]
        ws.append(headers)
        for cell in ws[1]:
            cell.font = header_font
            cell.fill = header_fill
            cell.alignment = ALIGN_HEADER
            cell.border = border

        rows = [[col.value(resource) for col in columns] for resource in resources]
        for row in rows:
            ws.append(row)
        for excel_row in ws.iter_rows(min_row=2, max_row=len(rows) + 1):
            for cell in excel_row:
                cell.font = data_font
                cell.alignment = ALIGN_WRAP
                cell.border = border

        for index, header in enumerate(headers):
            values = [header] + [row[index] for row in rows]
            ws.column_dimensions[get_column_letter(index + 1)].width = _column_width(values)

        ws.freeze_panes = "A2"
        ws.auto_filter.ref = ws.dimensions

    if not wb.sheetnames:
        wb.create_sheet(title="empty")

    try:
        wb.save(path)
    except OSError as e:
        raise OutputError(str(path), "Excel 저장 실패", cause=e) from e

    logger.info(f"Excel 작성: {path} ({len(wb.sheetnames)} sheets)")
    return path
