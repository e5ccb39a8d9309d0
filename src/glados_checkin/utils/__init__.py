"""工具函数模块"""

from glados_checkin.utils.formatter import (
    format_exhausted_line,
    format_failed_line,
    format_success_line,
    truncate_decimal,
)

__all__ = [
    "truncate_decimal",
    "format_success_line",
    "format_exhausted_line",
    "format_failed_line",
]
