"""Analysis persistence."""

from __future__ import annotations

import json

from .models import MeetingAnalysis


def save_analysis(path: str, analysis: MeetingAnalysis) -> None:
    with open(path, "w", encoding="utf-8") as handle:
        json.dump(analysis.to_dict(), handle, indent=2)


def load_analysis(path: str) -> MeetingAnalysis:
    with open(path, "r", encoding="utf-8") as handle:
        return MeetingAnalysis.from_dict(json.load(handle))
