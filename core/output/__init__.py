"""
core/output - 수집 결과 출력 (CSV, JSON, Excel, HTML)
"""

from .csv_writer import write_category_files, write_combined_csv, write_csv
from .excel_writer import write_excel
from .html import generate_html
from .json_writer import write_category_json_files, write_json

__all__ = [
    "write_csv",
    "write_category_files",
    "write_combined_csv",
    "write_json",
    "write_category_json_files",
    "write_excel",
    "generate_html",
]
