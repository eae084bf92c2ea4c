"""End-to-end tests for the click CLI."""

import json

import pytest
from click.testing import CliRunner

from horizon import cli
from horizon.adapters.json_store import JsonStore
from horizon.config import Config


@pytest.fixture
def data_file(tmp_path):
    return tmp_path / "store" / "data.json"


@pytest.fixture
def run(data_file, monkeypatch):
    monkeypatch.setattr(cli, "load_config", lambda: Config(data_file=data_file))
    runner = CliRunner()

    def invoke(*args):
        return runner.invoke(cli.main, list(args))

    return invoke


def add(run, description, *options) -> str:
    """Add a task and return its full id."""
    result = run("add", description, *options)
    assert result.exit_code == 0, result.output
    listed = json.loads(run("list", "--all", "--json").output)
    return next(t["id"] for t in listed if t["description"] == description)


class TestTaskCommands:
    def test_add_and_list(self, run, data_file):
        result = run("add", "Write docs", "-t", "mid", "-p", "high")
        assert result.exit_code == 0
        assert "Task added with ID:" in result.output
        assert data_file.exists()

        result = run("list")
        assert result.exit_code == 0
        assert "MID-TERM TASKS" in result.output
        assert "[HIGH] Write docs" in result.output
        assert "Context: default" in result.output

    def test_list_empty(self, run, data_file):
        result = run("list")
        assert result.exit_code == 0
        assert "No tasks to display." in result.output
        assert not data_file.exists()

    def test_complete_hides_from_default_list(self, run):
        task_id = add(run, "Pay bills")

        result = run("complete", task_id[:8])
        assert result.exit_code == 0
        assert "Task completed: Pay bills" in result.output

        assert "Pay bills" not in run("list").output
        assert "[✓]" in run("list", "--all").output

    def test_edit(self, run):
        task_id = add(run, "Draft", "-p", "low")

        result = run("edit", task_id[:8], "-d", "Final", "-t", "long")
        assert result.exit_code == 0

        listed = json.loads(run("list", "--json").output)
        assert listed[0]["description"] == "Final"
        assert listed[0]["time_horizon"] == "LongTerm"
        assert listed[0]["priority"] == "Low"

    def test_show(self, run):
        task_id = add(run, "Inspect me")
        result = run("show", task_id)
        assert result.exit_code == 0
        assert f"ID: {task_id}" in result.output

    def test_delete(self, run):
        task_id = add(run, "Temporary")
        result = run("delete", task_id)
        assert result.exit_code == 0
        assert json.loads(run("list", "--all", "--json").output) == []

    def test_unknown_id(self, run):
        result = run("complete", "zzzz")
        assert result.exit_code == 1
        assert "Error: Task not found: zzzz" in result.output

    def test_invalid_priority(self, run, data_file):
        result = run("add", "x", "-p", "urgent")
        assert result.exit_code == 1
        assert "Invalid priority: urgent" in result.output
        assert not data_file.exists()

    def test_empty_horizon_option(self, run, data_file):
        result = run("add", "x", "-t", "")
        assert result.exit_code == 1
        assert "Invalid time horizon" in result.output
        assert not data_file.exists()

    def test_unencodable_description(self, run, data_file):
        result = run("add", "caf\udce9")
        assert result.exit_code == 1
        assert "Error: Storage error" in result.output
        assert not data_file.exists()
        assert not data_file.with_name("data.json.tmp").exists()


class TestContextCommands:
    def test_context_lifecycle(self, run):
        assert run("context", "new", "work").exit_code == 0

        result = run("context", "switch", "work")
        assert result.exit_code == 0
        assert "Switched to context: work (0 tasks)" in result.output

        add(run, "Work item")
        result = run("context", "list")
        assert "● work" in result.output
        assert "○ default" in result.output

        assert run("context", "switch", "default").exit_code == 0
        assert "Work item" not in run("list").output

        result = run("context", "delete", "work")
        assert result.exit_code == 0
        assert "○ work" not in run("context", "list").output

    def test_delete_active_context_fails(self, run):
        run("context", "new", "work")
        result = run("context", "delete", "default")
        assert result.exit_code == 1
        assert "Switch to another context first" in result.output

    def test_delete_last_context_fails(self, run):
        result = run("context", "delete", "default")
        assert result.exit_code == 1
        assert "last context" in result.output

    def test_duplicate_context(self, run):
        run("context", "new", "work")
        result = run("context", "new", "work")
        assert result.exit_code == 1
        assert "Context already exists: work" in result.output


class TestImportExport:
    def test_export_and_merge_import(self, run, tmp_path):
        run("context", "new", "work")
        run("context", "switch", "work")
        add(run, "Shared task")

        export_path = tmp_path / "backup.json"
        result = run("export", str(export_path))
        assert result.exit_code == 0
        assert export_path.exists()

        result = run("import", str(export_path), "--merge")
        assert result.exit_code == 0
        assert "renamed to 'work-imported'" in result.output
        assert "Imported 2 contexts and 1 tasks" in result.output

        names = JsonStore(tmp_path / "store" / "data.json").load().list_contexts()
        assert sorted(names) == ["default", "default-imported", "work", "work-imported"]

    def test_replace_import(self, run, tmp_path):
        other = tmp_path / "other.json"
        other.write_text(
            json.dumps(
                {
                    "version": "1.0.0",
                    "active_context": "archive",
                    "contexts": {"archive": {"name": "archive", "tasks": []}},
                }
            )
        )
        add(run, "Will be replaced")

        result = run("import", str(other))
        assert result.exit_code == 0
        assert "(replaced existing data)" in result.output
        assert "Context: archive" in run("list").output

    def test_import_invalid_file_keeps_data(self, run, tmp_path, data_file):
        add(run, "Keep me")
        before = data_file.read_text()
        bad = tmp_path / "bad.json"
        bad.write_text('{"version": "1.0.0", "active_context": "x", "contexts": {}}')

        result = run("import", str(bad), "--merge")

        assert result.exit_code == 1
        assert "Invalid data format" in result.output
        assert data_file.read_text() == before

    def test_corrupt_store_reports_error(self, run, data_file):
        data_file.parent.mkdir(parents=True)
        data_file.write_text("{oops")
        result = run("list")
        assert result.exit_code == 1
        assert "Error: Could not parse" in result.output


class TestGlobalOptions:
    def test_data_file_option(self, run, tmp_path):
        alt = tmp_path / "alt.json"
        result = run("--data-file", str(alt), "add", "Elsewhere")
        assert result.exit_code == 0
        assert alt.exists()
