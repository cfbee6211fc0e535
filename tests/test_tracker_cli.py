# ABOUTME: Verifies the tracker CLI exposes its commands and wires them to the core engines.
# ABOUTME: Runs commands through Typer's CliRunner against temporary record directories.

import json

from typer.testing import CliRunner

from scripts import tracker_cli

runner = CliRunner()


def _write(path, rows):
    path.write_text(json.dumps(rows), encoding="utf-8")


def test_tracker_cli_registers_commands():
    command_names = {cmd.name or cmd.callback.__name__ for cmd in tracker_cli.app.registered_commands}
    assert {
        "dashboard",
        "dsa",
        "system-design",
        "interviews",
        "weak-areas",
        "study",
        "review-queue",
        "next-review",
        "analyze-interview",
    } <= command_names


def test_next_review_prints_due_date_and_interval():
    result = runner.invoke(
        tracker_cli.app,
        ["next-review", "--attempt-count", "3", "--suboptimal", "--now", "2024-01-01T00:00:00+00:00"],
    )
    assert result.exit_code == 0, result.output
    assert result.output.strip() == "2024-01-04T00:00:00+00:00 (+3d)"


def test_next_review_rejects_zero_attempts():
    result = runner.invoke(tracker_cli.app, ["next-review", "--attempt-count", "0"])
    assert result.exit_code != 0


def test_dashboard_writes_json_summary(tmp_path):
    records = tmp_path / "records"
    records.mkdir()
    _write(
        records / "problems.json",
        [
            {"id": "p1", "title": "Two Sum", "category": "Array", "difficulty": "Easy", "status": "Solved"},
            {"id": "p2", "title": "3Sum", "category": "Array", "difficulty": "Medium", "status": "Attempted"},
        ],
    )
    _write(
        records / "sessions.json",
        [{"session_date": "2024-03-01T10:00:00Z", "duration_minutes": 150, "type": "DSA"}],
    )
    output = tmp_path / "out" / "dashboard.json"

    result = runner.invoke(tracker_cli.app, ["dashboard", "--records-dir", str(records), "--output", str(output)])

    assert result.exit_code == 0, result.output
    payload = json.loads(output.read_text())
    assert payload["total_dsa_problems"] == 2
    assert payload["solved_dsa_problems"] == 1
    assert payload["dsa_completion_rate"] == 50.0
    assert payload["total_study_hours"] == 2
    assert payload["system_design_progress"] == 0.0


def test_review_queue_reports_empty_queue(tmp_path):
    _write(
        tmp_path / "problems.json",
        [
            {
                "id": "p1",
                "title": "Two Sum",
                "category": "Array",
                "difficulty": "Easy",
                "next_review_date": "2030-01-01T00:00:00Z",
            }
        ],
    )
    result = runner.invoke(
        tracker_cli.app, ["review-queue", "--records-dir", str(tmp_path), "--now", "2024-01-01T00:00:00"]
    )
    assert result.exit_code == 0, result.output
    assert "Nothing due for review" in result.output


def test_invalid_records_exit_with_error(tmp_path):
    _write(tmp_path / "problems.json", [{"id": "p1", "title": "Two Sum", "difficulty": "Easy"}])
    result = runner.invoke(tracker_cli.app, ["dashboard", "--records-dir", str(tmp_path)])
    assert result.exit_code == 1


def test_analyze_interview_is_a_dry_run(tmp_path):
    _write(
        tmp_path / "interviews.json",
        [
            {
                "id": "i1",
                "type": "DSA",
                "interview_date": "2024-03-01T10:00:00Z",
                "overall_score": 5,
                "communication_score": 3,
                "problem_solving_score": 8,
                "technical_score": 8,
            }
        ],
    )
    result = runner.invoke(
        tracker_cli.app, ["analyze-interview", "--interview-id", "i1", "--records-dir", str(tmp_path)]
    )
    assert result.exit_code == 0, result.output
    assert "Communication Skills" in result.output
    assert not (tmp_path / "weak_areas.json").exists()
