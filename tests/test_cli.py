import json

from typer.testing import CliRunner

from taskplanner import cli
from taskplanner.cli import app
from tests.fixtures import StaticStrategy

runner = CliRunner()


def record_strategy_names(monkeypatch):
    names = []
    strategy = StaticStrategy()

    def fake_create_strategy(name, *, config_path=None):
        names.append(name)
        return strategy

    monkeypatch.setattr(cli, "create_strategy", fake_create_strategy)
    return names, strategy


def test_cli_prints_template_breakdown():
    result = runner.invoke(app, ["Add", "authentication", "to", "the", "app"])

    assert result.exit_code == 0
    assert result.output.startswith("Task: Add authentication to the app")
    assert "Step 1: Create User model with password field" in result.output
    assert "Step 7:" in result.output
    assert "    - src/models/user.ts" in result.output


def test_cli_json_output():
    result = runner.invoke(app, ["--json", "Create CRUD endpoints for products"])

    assert result.exit_code == 0
    payload = json.loads(result.output)
    assert payload["taskDescription"] == "Create CRUD endpoints for products"
    assert [step["id"] for step in payload["steps"]] == [1, 2, 3, 4, 5, 6]
    assert "src/models/products.ts" in payload["steps"][0]["files"]


def test_cli_requires_description():
    result = runner.invoke(app, [])

    assert result.exit_code == 1
    assert "Usage: taskplanner <task description>" in result.output


def test_cli_rejects_blank_description():
    result = runner.invoke(app, ["   "])

    assert result.exit_code == 1
    assert "Example:" in result.output


def test_cli_llm_without_key_reports_error():
    result = runner.invoke(app, ["--llm", "Fix login crash"])

    assert result.exit_code == 1
    assert "Error: Groq API key is required" in result.output


def test_cli_llm_flag_selects_remote_strategy(monkeypatch):
    names, strategy = record_strategy_names(monkeypatch)

    result = runner.invoke(app, ["--llm", "Fix login crash"])

    assert result.exit_code == 0
    assert names == ["llm"]
    assert strategy.closed
    assert "Step 1: Only step" in result.output


def test_cli_default_strategy_from_environment(monkeypatch):
    names, _ = record_strategy_names(monkeypatch)
    monkeypatch.setenv("TASKPLANNER_DEFAULT_STRATEGY", "llm")

    assert runner.invoke(app, ["Fix login crash"]).exit_code == 0
    assert runner.invoke(app, ["--template", "Fix login crash"]).exit_code == 0
    assert names == ["llm", "template"]


def test_cli_config_option_is_passed_through(monkeypatch, tmp_path):
    seen = []
    monkeypatch.setattr(
        cli,
        "create_strategy",
        lambda name, *, config_path=None: seen.append(config_path) or StaticStrategy(),
    )
    path = tmp_path / "custom.json"

    result = runner.invoke(app, ["--config", str(path), "Fix login crash"])

    assert result.exit_code == 0
    assert seen == [path]


def test_cli_invalid_setting_reports_error(monkeypatch):
    monkeypatch.setenv("TASKPLANNER_LOG_LEVEL", "loud")

    result = runner.invoke(app, ["Fix login crash"])

    assert result.exit_code == 1
    assert "Error: Invalid TASKPLANNER_* setting" in result.output


def test_cli_accepts_lowercase_settings(monkeypatch):
    names, _ = record_strategy_names(monkeypatch)
    monkeypatch.setenv("TASKPLANNER_LOG_LEVEL", "info")
    monkeypatch.setenv("TASKPLANNER_DEFAULT_STRATEGY", "LLM")

    result = runner.invoke(app, ["Fix login crash"])

    assert result.exit_code == 0
    assert names == ["llm"]
