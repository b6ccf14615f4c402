from briefly.cli import main
from briefly.models import ActionItem, MeetingAnalysis
from briefly.session_io import save_analysis


def test_show_renders_saved_analysis(tmp_path, capsys):
    path = tmp_path / "sync.analysis.json"
    save_analysis(
        str(path),
        MeetingAnalysis(
            title="Sync",
            summary="Quick sync.",
            action_items=(ActionItem(task="Ship it", assignee="Kai", priority="High"),),
        ),
    )

    assert main(["show", str(path)]) == 0
    out = capsys.readouterr().out
    assert "# Sync" in out
    assert "## Action Items (1)" in out


def test_config_init_writes_file(tmp_path, capsys):
    path = tmp_path / "briefly_config.yml"
    assert main(["config", "init", "--path", str(path)]) == 0
    assert path.exists()
    assert main(["config", "init", "--path", str(path)]) == 1


def test_analyze_rejects_non_media(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    path = tmp_path / "notes.txt"
    path.write_text("hello", encoding="utf-8")

    assert main(["analyze", str(path)]) == 2
    assert "audio or video" in capsys.readouterr().err


def test_analyze_missing_key_reports_error(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("API_KEY", raising=False)
    path = tmp_path / "call.wav"
    path.write_bytes(b"RIFF0000WAVE")

    assert main(["analyze", str(path)]) == 1
    assert "API Key missing" in capsys.readouterr().err
