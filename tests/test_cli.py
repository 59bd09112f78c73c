"""Tests for the click CLI."""

import json
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from compassq.cli import main
from compassq.config import Config


@pytest.fixture
def data_file(tmp_path):
    return tmp_path / "board.json"


@pytest.fixture
def run(data_file):
    runner = CliRunner()

    def invoke(*args, input=None):
        with patch("compassq.cli.load_config", return_value=Config(bell=False)):
            return runner.invoke(main, ["--file", str(data_file), *args], input=input)

    return invoke


def active(run):
    result = run("list", "--json")
    assert result.exit_code == 0, result.output
    return json.loads(result.output)


def add(run, title, *flags):
    result = run("add", title, *flags)
    assert result.exit_code == 0, result.output
    return active(run)[0]


class TestAdd:
    def test_defaults_to_important_not_urgent(self, run):
        result = run("add", "Plan quarter")
        assert result.exit_code == 0
        assert "-> Q2 (Not Urgent + Important)" in result.output

    def test_urgent_important(self, run):
        task = add(run, "Fix prod", "--urgent", "--hours", "2")
        assert task["quadrant"] == "Q1"
        assert task["important"] is True

    def test_blank_title_fails(self, run, data_file):
        result = run("add", "  ")
        assert result.exit_code == 1
        assert "Error: Title is required" in result.output
        assert not data_file.exists()

    def test_full_quadrant_fails(self, run):
        for i in range(10):
            add(run, f"Task {i}", "--urgent", "--hours", "1")

        result = run("add", "One more", "--urgent", "--hours", "1")

        assert result.exit_code == 1
        assert "Quadrant limit reached (10)" in result.output
        assert len(active(run)) == 10


class TestList:
    def test_shows_every_quadrant(self, run):
        task = add(run, "Fix prod", "--urgent", "--hours", "2")

        result = run("list")

        assert result.exit_code == 0
        assert "### Q1 Urgent + Important (1/10)" in result.output
        assert "### Q4 Not Urgent + Not Important (0/10)" in result.output
        assert f"[{task['id']}] Fix prod (Important, " in result.output
        assert "(empty)" in result.output


class TestEdit:
    def test_toggle_urgent_picks_short_deadline(self, run):
        task = add(run, "Essay", "--hours", "48")

        result = run("edit", task["id"], "--urgent")

        assert result.exit_code == 0, result.output
        assert "-> Q1" in result.output
        edited = active(run)[0]
        assert edited["dueAt"] - edited["createdAt"] <= 6 * 3_600_000 + 60_000

    def test_toggle_not_urgent_picks_long_deadline(self, run):
        task = add(run, "Essay", "--urgent", "--hours", "3")

        result = run("edit", task["id"], "--not-urgent", "--title", "Long essay")

        assert result.exit_code == 0, result.output
        edited = active(run)[0]
        assert edited["quadrant"] == "Q2"
        assert edited["title"] == "Long essay"

    def test_invalid_hours(self, run):
        task = add(run, "Essay")
        result = run("edit", task["id"], "--hours", "-4")
        assert result.exit_code == 1
        assert "non-negative number of hours" in result.output

    def test_unknown_task(self, run):
        result = run("edit", "nope", "--title", "x")
        assert result.exit_code == 1
        assert "Task nope not found." in result.output


class TestMove:
    def test_cross_urgency_with_hours(self, run):
        task = add(run, "Someday", "--not-important", "--hours", "72")

        result = run("move", task["id"], "q1", "--hours", "2")

        assert result.exit_code == 0, result.output
        moved = active(run)[0]
        assert moved["quadrant"] == "Q1"
        assert moved["important"] is True

    def test_prompts_for_hours(self, run):
        task = add(run, "Someday", "--hours", "72")

        result = run("move", task["id"], "Q3", input="5\n")

        assert result.exit_code == 0, result.output
        assert "Set new 'Due in' hours [72]" in result.output
        assert active(run)[0]["quadrant"] == "Q3"

    def test_same_axis_reorder(self, run):
        first = add(run, "First", "--hours", "48")
        add(run, "Second", "--hours", "48")

        result = run("move", first["id"], "Q2", "--index", "0")

        assert result.exit_code == 0, result.output
        assert [t["title"] for t in active(run)] == ["First", "Second"]

    def test_invalid_quadrant(self, run):
        result = run("move", "abc", "Q7")
        assert result.exit_code == 2


class TestArchive:
    def test_done_restore_purge(self, run):
        task = add(run, "Laundry", "--urgent", "--hours", "3")

        assert run("done", task["id"]).exit_code == 0
        assert active(run) == []
        result = run("archive")
        assert f"[{task['id']}] Laundry (completed " in result.output

        assert run("restore", task["id"]).exit_code == 0
        assert active(run)[0]["id"] == task["id"]

        run("done", task["id"])
        result = run("purge", task["id"])
        assert result.exit_code == 0
        assert "No completed tasks yet." in run("archive").output

    def test_archive_json(self, run):
        task = add(run, "Laundry")
        run("done", task["id"])

        archived = json.loads(run("archive", "--json").output)

        assert archived[0]["id"] == task["id"]
        assert "completedAt" in archived[0]

    def test_rm(self, run):
        task = add(run, "Junk")
        result = run("rm", task["id"])
        assert result.exit_code == 0
        assert active(run) == []

    @pytest.mark.parametrize("command", ["done", "rm", "restore", "purge"])
    def test_not_found(self, run, command):
        result = run(command, "ghost")
        assert result.exit_code == 1
        assert "Task ghost not found." in result.output
