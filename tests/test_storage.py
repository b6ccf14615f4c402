import os
from datetime import datetime

from briefly.models import MeetingAnalysis
from briefly.session_io import load_analysis
from briefly.storage import build_report_basename, save_report, timestamp_slug


def test_timestamp_slug_format():
    slug = timestamp_slug()
    assert len(slug) == 10
    assert slug.count("-") == 2


def test_build_report_basename():
    name = build_report_basename("Q3 Planning: Kickoff", datetime(2026, 1, 13))
    assert name == "2026-01-13--Q3-Planning-Kickoff"


def test_build_report_basename_without_title():
    assert build_report_basename("", datetime(2026, 1, 13)).endswith("--Meeting")


def test_save_report_writes_markdown_and_json(tmp_path):
    analysis = MeetingAnalysis(title="Weekly Sync", summary="Short.")
    report_path, analysis_path = save_report(
        str(tmp_path), analysis, "# Weekly Sync\n", datetime(2026, 1, 13)
    )

    assert report_path.endswith(os.path.join("Reports", "2026-01-13--Weekly-Sync.md"))
    with open(report_path, encoding="utf-8") as handle:
        assert handle.read() == "# Weekly Sync\n"
    assert load_analysis(analysis_path) == analysis
