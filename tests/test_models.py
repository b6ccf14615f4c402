from briefly.models import UNASSIGNED, AppStatus, MeetingAnalysis, ProcessingState


def test_from_dict_reads_camel_case_payload():
    analysis = MeetingAnalysis.from_dict(
        {
            "title": "Budget",
            "summary": "Agreed on numbers.",
            "keyPoints": ["Cut travel"],
            "actionItems": [
                {"task": "Send sheet", "assignee": "Ana", "priority": "Low"},
                {"task": "Book room", "priority": "High"},
            ],
            "decisions": ["Freeze hiring"],
            "sentiment": "Tense",
        }
    )
    assert analysis.key_points == ("Cut travel",)
    assert len(analysis.action_items) == 2
    assert analysis.action_items[1].assignee == UNASSIGNED
    assert analysis.attendees == ()


def test_from_dict_tolerates_missing_fields():
    analysis = MeetingAnalysis.from_dict({"title": "Only a title"})
    assert analysis.summary == ""
    assert analysis.action_items == ()
    assert analysis.decisions == ()


def test_to_dict_roundtrip():
    payload = {
        "title": "Retro",
        "summary": "Went well.",
        "keyPoints": ["Fewer meetings"],
        "actionItems": [{"task": "Draft notes", "assignee": "Li", "priority": "Medium"}],
        "decisions": [],
        "sentiment": "Optimistic",
        "attendees": ["Li"],
    }
    assert MeetingAnalysis.from_dict(payload).to_dict() == payload


def test_processing_state_busy():
    assert ProcessingState(AppStatus.UPLOADING, "x").busy
    assert ProcessingState(AppStatus.ANALYZING).busy
    assert not ProcessingState(AppStatus.IDLE).busy
    assert not ProcessingState(AppStatus.ERROR, "boom").busy


def test_from_dict_treats_null_as_missing():
    analysis = MeetingAnalysis.from_dict(
        {
            "title": None,
            "summary": None,
            "sentiment": None,
            "actionItems": [{"task": None, "assignee": None, "priority": None}],
        }
    )
    assert analysis.title == ""
    assert analysis.summary == ""
    assert analysis.sentiment == ""
    item = analysis.action_items[0]
    assert item.task == ""
    assert item.assignee == UNASSIGNED
    assert item.priority == "Medium"
