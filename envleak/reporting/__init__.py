"""Reporting module - Build and render privacy/security reports."""

from envleak.reporting.report import ReportRow, Status, build_report, run_privacy_scan
from envleak.reporting.render import render_report_table, render_tools_table, rows_to_dicts

__all__ = [
    "ReportRow",
    "Status",
    "build_report",
    "run_privacy_scan",
    "render_report_table",
    "render_tools_table",
    "rows_to_dicts",
]
