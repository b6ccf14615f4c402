"""Storage and naming utilities."""

from __future__ import annotations

import os
import re
from datetime import datetime

from .models import MeetingAnalysis
from .session_io import save_analysis


def timestamp_slug(dt: datetime | None = None) -> str:
    now = dt or datetime.now()
    return now.strftime("%Y-%m-%d")


def build_report_basename(title: str, dt: datetime | None = None) -> str:
    slug = re.sub(r"[^\w\-]+", "", title.strip().replace(" ", "-")) if title else ""
    return f"{timestamp_slug(dt)}--{slug or 'Meeting'}"


def ensure_dir(path: str) -> None:
    os.makedirs(path, exist_ok=True)


def get_output_dirs(base_dir: str) -> dict:
    root = base_dir or os.getcwd()
    paths = {
        "root": root,
        "reports": os.path.join(root, "Reports"),
        "analyses": os.path.join(root, "Analyses"),
    }
    for path in paths.values():
        ensure_dir(path)
    return paths


def save_report(
    base_dir: str, analysis: MeetingAnalysis, report: str, dt: datetime | None = None
) -> tuple[str, str]:
    """Write the Markdown report and the raw analysis side by side."""
    paths = get_output_dirs(base_dir)
    basename = build_report_basename(analysis.title, dt)
    report_path = os.path.join(paths["reports"], f"{basename}.md")
    with open(report_path, "w", encoding="utf-8") as handle:
        handle.write(report)
    analysis_path = os.path.join(paths["analyses"], f"{basename}.analysis.json")
    save_analysis(analysis_path, analysis)
    return report_path, analysis_path
