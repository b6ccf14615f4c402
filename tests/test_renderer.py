from briefly.models import ActionItem, MeetingAnalysis
from briefly.renderer import render_analysis


def _analysis(action_count: int) -> MeetingAnalysis:
    return MeetingAnalysis(
        title="Launch Review",
        summary="We reviewed the launch plan.",
        key_points=("Beta ships Friday",),
        action_items=tuple(
            ActionItem(task=f"Task {i}", assignee="Priya", priority="High")
            for i in range(action_count)
        ),
        decisions=("Go for launch",),
        sentiment="Productive",
        attendees=("Priya", "Tom"),
    )


def test_render_analysis_includes_frontmatter():
    note = render_analysis(_analysis(1), source_name="launch.mp3", date="2026-01-13")
    assert 'title: "Launch Review"' in note
    assert 'source: "launch.mp3"' in note
    assert 'sentiment: "Productive"' in note
    assert "attendees:" in note
    assert "## Executive Summary" in note
    assert "Attendees: Priya, Tom" in note


def test_render_analysis_lists_every_action_item():
    note = render_analysis(_analysis(4))
    entries = [line for line in note.splitlines() if line.startswith("- [High] Task")]
    assert len(entries) == 4
    assert "## Action Items (4)" in note
    assert "- [High] Task 0 (Priya)" in note


def test_render_analysis_placeholders_when_empty():
    analysis = MeetingAnalysis(title="Quiet", summary="Nothing much.")
    note = render_analysis(analysis)
    assert "## Action Items (0)" in note
    assert "No action items found." in note
    assert "No formal decisions detected." in note
    assert "No specific attendees detected." in note
