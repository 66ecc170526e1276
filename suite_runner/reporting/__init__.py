"""Reporting module - host result documents and results files."""

from .depth import limit_depth, to_plain
from .json_reporter import VERSION_KEY, JsonReporter, summarize
from .results_file import reencode_file, write_json_results

__all__ = [
    "limit_depth",
    "to_plain",
    "VERSION_KEY",
    "JsonReporter",
    "summarize",
    "reencode_file",
    "write_json_results",
]
