# File: meta_scout/report/__init__.py
"""meta_scout.report: запись результатов обхода (CSV, JSON, HTML)."""

from __future__ import annotations

from meta_scout.report.csv_report import render_csv
from meta_scout.report.html_report import render_html
from meta_scout.report.json_report import render_json

__all__ = ["render_csv", "render_json", "render_html"]
