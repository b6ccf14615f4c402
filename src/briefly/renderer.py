"""Markdown report rendering."""

from __future__ import annotations

from typing import List, Optional
from .models import ActionItem, MeetingAnalysis


def _yaml_quote(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f"\"{escaped}\""


def _clean_text(value: str) -> str:
    return " ".join(value.split())


def render_action_item(item: ActionItem) -> str:
    return f"- [{_clean_text(item.priority)}] {_clean_text(item.task)} ({_clean_text(item.assignee)})"


def action_items_heading(analysis: MeetingAnalysis) -> str:
    return f"Action Items ({len(analysis.action_items)})"


def render_attendees(analysis: MeetingAnalysis) -> str:
    if analysis.attendees:
        return f"Attendees: {', '.join(_clean_text(a) for a in analysis.attendees)}"
    return "No specific attendees detected."


def render_analysis(
    analysis: MeetingAnalysis,
    source_name: Optional[str] = None,
    date: Optional[str] = None,
) -> str:
    lines: List[str] = []
    lines.append("---")
    lines.append("schema: 1")
    lines.append(f"title: {_yaml_quote(analysis.title)}")
    note_date = date or analysis.date
    if note_date:
        lines.append(f"date: {_yaml_quote(note_date)}")
    if source_name:
        lines.append(f"source: {_yaml_quote(source_name)}")
    if analysis.sentiment:
        lines.append(f"sentiment: {_yaml_quote(analysis.sentiment)}")
    if analysis.attendees:
        lines.append("attendees:")
        for name in analysis.attendees:
            lines.append(f"  - {_yaml_quote(name)}")
    lines.append("---")
    lines.append("")
    lines.append(f"# {_clean_text(analysis.title)}")
    lines.append("")
    if analysis.sentiment:
        lines.append(f"- Sentiment: {_clean_text(analysis.sentiment)}")
    lines.append(f"- {render_attendees(analysis)}")
    lines.append("")

    lines.append("## Executive Summary")
    lines.append("")
    lines.append(analysis.summary.strip())
    lines.append("")

    lines.append("## Key Highlights")
    lines.append("")
    for point in analysis.key_points:
        lines.append(f"- {_clean_text(point)}")
    lines.append("")

    lines.append("## Decisions Made")
    lines.append("")
    if analysis.decisions:
        for decision in analysis.decisions:
            lines.append(f"- {_clean_text(decision)}")
    else:
        lines.append("No formal decisions detected.")
    lines.append("")

    lines.append(f"## {action_items_heading(analysis)}")
    lines.append("")
    if analysis.action_items:
        lines.extend(render_action_item(item) for item in analysis.action_items)
    else:
        lines.append("No action items found.")
    lines.append("")
    return "\n".join(lines)
