# cli/ui - 콘솔 출력 컴포넌트 (rich)
"""
콘솔 출력과 진행 표시 컴포넌트
"""

from .console import (
    SYMBOL_ERROR,
    SYMBOL_INFO,
    SYMBOL_SUCCESS,
    SYMBOL_WARNING,
    console,
    get_console,
    print_error,
    print_execution_summary,
    print_failures,
    print_info,
    print_success,
    print_table,
    print_warning,
)
from .progress import ParallelTracker, SuccessFailColumn, parallel_progress

__all__ = [
    "console",
    "get_console",
    "SYMBOL_SUCCESS",
    "SYMBOL_ERROR",
    "SYMBOL_WARNING",
    "SYMBOL_INFO",
    "print_success",
    "print_error",
    "print_warning",
    "print_info",
    "print_table",
    "print_execution_summary",
    "print_failures",
    "ParallelTracker",
    "SuccessFailColumn",
    "parallel_progress",
]
