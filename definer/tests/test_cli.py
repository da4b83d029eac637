"""Tests for the click command line front end."""

import json
import logging

import pytest
import yaml
from click.testing import CliRunner

from definer.cli import terminal
from definer.cli.cli_interface import TerminalSession, cli
from definer.utils import config_manager


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def fresh_config_manager(monkeypatch):
    monkeypatch.setattr(config_manager, "_config_manager", None)


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    logger = logging.getLogger("definer")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump({
        "storage": {
            "data_path": str(tmp_path / "data" / "definitions.json"),
            "export_dir": str(tmp_path / "exports"),
        },
        "logging": {"log_dir": str(tmp_path / "logs"), "use_colors": False},
    }), encoding="utf-8")
    return path


def invoke(runner, config_file, *args, input=None):
    return runner.invoke(cli, ["--config", str(config_file), *args], input=input)


def test_version(runner):
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "1.0.0" in result.output


def test_run_help(runner, config_file):
    result = invoke(runner, config_file, "run", "help")
    assert result.exit_code == 0
    assert "find [term]" in result.output
    assert "Clears the terminal screen" in result.output


def test_run_find_default_definition(runner, config_file):
    result = invoke(runner, config_file, "run", "find", "vec")
    assert result.exit_code == 0
    assert "Term: vector" in result.output


def test_run_not_found_exits_nonzero(runner, config_file):
    result = invoke(runner, config_file, "run", "find", "quaternion")
    assert result.exit_code == 1
    assert "Definition for 'quaternion' not found." in result.output


def test_run_writes_log_file(runner, config_file, tmp_path):
    invoke(runner, config_file, "run", "list")
    assert (tmp_path / "logs" / "definer.log").exists()


def test_run_add_prompts_and_saves(runner, config_file, tmp_path):
    result = invoke(
        runner, config_file, "run", "add",
        input="ring\nrings\nalgebra\nA set with two operations.\n"
    )
    assert result.exit_code == 0
    assert "Definition for 'ring' saved." in result.output

    stored = json.loads((tmp_path / "data" / "definitions.json").read_text(encoding="utf-8"))
    assert stored[-1] == {
        "term": "ring",
        "aliases": ["rings"],
        "tags": ["algebra"],
        "definition": "A set with two operations.",
    }


def test_run_add_rejected_then_cancelled(runner, config_file, tmp_path):
    result = invoke(runner, config_file, "run", "add", input="help\n\n\nbody\nn\n")
    assert result.exit_code == 0
    assert "'help' is a reserved command." in result.output
    assert "Edit cancelled." in result.output
    assert not (tmp_path / "data" / "definitions.json").exists()


def test_run_export(runner, config_file, tmp_path):
    result = invoke(runner, config_file, "run", "export")
    assert result.exit_code == 0

    exported = json.loads((tmp_path / "exports" / "definitions.json").read_text(encoding="utf-8"))
    assert "vector" in [item["term"] for item in exported]


def test_run_import_stages_file(runner, config_file, tmp_path):
    payload = tmp_path / "incoming.json"
    payload.write_text(json.dumps([{"term": "ring", "definition": "Two operations."}]), encoding="utf-8")

    result = invoke(runner, config_file, "run", "import", input=f"{payload}\n")
    assert result.exit_code == 0
    assert "Opening file dialog..." in result.output
    assert "Found 1 definitions." in result.output


def test_run_import_rejects_non_json_file(runner, config_file, tmp_path):
    payload = tmp_path / "incoming.txt"
    payload.write_text("[]", encoding="utf-8")

    result = invoke(runner, config_file, "run", "import", input=f"{payload}\n")
    assert "Error reading file:" in result.output


def test_shell_session(runner, config_file, tmp_path):
    result = invoke(
        runner, config_file, "shell",
        input="find vec\ndelete vector --confirm\nfind vector\nquit\n"
    )
    assert result.exit_code == 0
    assert "Definer v1.0.0" in result.output
    assert "Term: vector" in result.output
    assert "Definition for 'vector' has been deleted." in result.output

    stored = json.loads((tmp_path / "data" / "definitions.json").read_text(encoding="utf-8"))
    assert "vector" not in [item["term"] for item in stored]


def test_no_subcommand_starts_shell(runner, config_file):
    result = invoke(runner, config_file, input="help\n")
    assert result.exit_code == 0
    assert "Shows this help message." in result.output


def test_config_table(runner, config_file):
    result = invoke(runner, config_file, "config")
    assert result.exit_code == 0
    assert "matching.suggestion_threshold" in result.output


def test_config_template(runner, config_file, tmp_path):
    template = tmp_path / "template.yaml"
    result = invoke(runner, config_file, "config", "--template", str(template))
    assert result.exit_code == 0
    assert yaml.safe_load(template.read_text(encoding="utf-8"))["matching"]["suggestion_threshold"] == 3


def test_bad_config_exits(runner, tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("matching:\n  fuzziness: 2\n", encoding="utf-8")
    result = runner.invoke(cli, ["--config", str(path), "run", "help"])
    assert result.exit_code == 1
    assert "Error loading configuration" in result.output


def test_shell_survives_malformed_import(runner, config_file, tmp_path):
    payload = tmp_path / "bad.json"
    payload.write_text(json.dumps([{"term": "x", "definition": "y", "aliases": 5}]), encoding="utf-8")

    result = invoke(runner, config_file, "shell", input=f"import\n{payload}\nhelp\nquit\n")

    assert result.exit_code == 0
    assert "Error reading file: Invalid format: 'aliases' of entry 1" in result.output
    assert "Shows this help message." in result.output


def test_end_of_input_in_editor_cancels_edit(runner, config_file, tmp_path):
    result = invoke(runner, config_file, "shell", input="add\n")

    assert result.exit_code == 0
    assert "Edit cancelled." in result.output
    assert "Aborted!" not in result.output
    assert not (tmp_path / "data" / "definitions.json").exists()


def test_end_of_input_at_file_prompt_selects_nothing(runner, config_file):
    result = invoke(runner, config_file, "shell", input="import\n")

    assert result.exit_code == 0
    assert "No file selected." in result.output


class FakeReadline:
    def __init__(self):
        self.entries = ["stale"]

    def clear_history(self):
        self.entries = []

    def add_history(self, line):
        self.entries.append(line)


def test_readline_recall_follows_command_history(monkeypatch, config_file):
    fake = FakeReadline()
    monkeypatch.setattr(terminal, "readline", fake)
    config = config_manager.ConfigManager(config_file).config
    session = TerminalSession(config)

    session.run_line("find vec")
    session.run_line("find vec")
    session.run_line("list")
    assert fake.entries == ["find vec", "list"]

    session.run_line("clear")
    assert fake.entries == []
