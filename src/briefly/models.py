"""Data models for Briefly."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Tuple

UNASSIGNED = "Unassigned"
PRIORITIES = ("High", "Medium", "Low")


class AppStatus(str, Enum):
    IDLE = "IDLE"
    UPLOADING = "UPLOADING"
    ANALYZING = "ANALYZING"
    SUCCESS = "SUCCESS"
    ERROR = "ERROR"


@dataclass(frozen=True)
class ProcessingState:
    status: AppStatus
    message: Optional[str] = None

    @property
    def busy(self) -> bool:
        return self.status in (AppStatus.UPLOADING, AppStatus.ANALYZING)


@dataclass(frozen=True)
class ActionItem:
    task: str
    assignee: str = UNASSIGNED
    priority: str = "Medium"

    @classmethod
    def from_dict(cls, data: dict) -> "ActionItem":
        return cls(
            task=str(data.get("task") or ""),
            assignee=str(data.get("assignee") or UNASSIGNED),
            priority=str(data.get("priority") or "Medium"),
        )


def _strings(value: Any) -> Tuple[str, ...]:
    if not value:
        return ()
    return tuple(str(item) for item in value)


@dataclass(frozen=True)
class MeetingAnalysis:
    title: str
    summary: str
    key_points: Tuple[str, ...] = ()
    action_items: Tuple[ActionItem, ...] = ()
    decisions: Tuple[str, ...] = ()
    sentiment: str = ""
    attendees: Tuple[str, ...] = ()
    date: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "MeetingAnalysis":
        """Build from the camelCase payload returned by the model.

        Missing fields fall back to empty values instead of raising.
        """
        items = data.get("actionItems") or []
        return cls(
            title=str(data.get("title") or ""),
            summary=str(data.get("summary") or ""),
            key_points=_strings(data.get("keyPoints")),
            action_items=tuple(
                ActionItem.from_dict(item) for item in items if isinstance(item, dict)
            ),
            decisions=_strings(data.get("decisions")),
            sentiment=str(data.get("sentiment") or ""),
            attendees=_strings(data.get("attendees")),
            date=data.get("date") or None,
        )

    def to_dict(self) -> dict:
        payload = {
            "title": self.title,
            "summary": self.summary,
            "keyPoints": list(self.key_points),
            "actionItems": [
                {"task": i.task, "assignee": i.assignee, "priority": i.priority}
                for i in self.action_items
            ],
            "decisions": list(self.decisions),
            "sentiment": self.sentiment,
            "attendees": list(self.attendees),
        }
        if self.date:
            payload["date"] = self.date
        return payload


@dataclass(frozen=True)
class MediaFile:
    path: str
    display_name: str
    size_bytes: int
    mime_type: str


@dataclass(frozen=True)
class UploadedFile:
    name: str
    uri: str
    mime_type: str
    state: Optional[str] = None
