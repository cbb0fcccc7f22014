"""Report rendering for people and for machines."""

from clexcheck.output.serialize import report_to_dict, report_to_json
from clexcheck.output.text import (
    format_comments,
    format_flag,
    format_report,
    format_summary,
    format_token_table,
)

__all__ = [
    "format_comments",
    "format_flag",
    "format_report",
    "format_summary",
    "format_token_table",
    "report_to_dict",
    "report_to_json",
]
