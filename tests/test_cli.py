"""Test CLI functionality."""

import json

import pytest
from click.testing import CliRunner

from jsonform.cli import cli

MODELS = '''
from typing import Annotated

from pydantic import BaseModel, Field

from jsonform import form


class Person(BaseModel):
    name: str = Field(min_length=3)
    bio: Annotated[str, form(formType="textarea")] = ""


class Broken(BaseModel):
    note: Annotated[str, form(noTitle="nope")] = ""
'''


@pytest.fixture
def models(tmp_path, monkeypatch):
    (tmp_path / "cli_models.py").write_text(MODELS, encoding="utf-8")
    monkeypatch.syspath_prepend(str(tmp_path))
    return "cli_models"


@pytest.fixture
def runner():
    return CliRunner()


def test_schema_command(runner, models):
    result = runner.invoke(cli, ["schema", f"{models}:Person"])

    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert data["form"] == [
        {"key": "name"},
        {"key": "bio", "type": "textarea"},
        {"type": "submit", "title": "Submit"},
    ]
    assert data["schema"]["properties"]["name"]["required"] is True


def test_schema_command_without_submit(runner, models):
    result = runner.invoke(cli, ["schema", f"{models}.Person", "--no-submit", "--name", "people"])

    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert [item.get("type") for item in data["form"]] == [None, "textarea"]


def test_schema_command_reports_build_errors(runner, models):
    result = runner.invoke(cli, ["schema", f"{models}:Broken"])

    assert result.exit_code == 1
    assert "noTitle" in result.output


def test_schema_command_rejects_unknown_target(runner, models):
    result = runner.invoke(cli, ["schema", f"{models}:Missing"])

    assert result.exit_code == 2
    assert "Missing" in result.output


def test_render_command(runner, models, tmp_path):
    output = tmp_path / "form.html"

    result = runner.invoke(
        cli,
        [
            "render",
            f"{models}:Person",
            "--title",
            "Create person",
            "--submit-url",
            "/people",
            "--output",
            str(output),
        ],
    )

    assert result.exit_code == 0, result.output
    html = output.read_text(encoding="utf-8")
    assert "<title>Create person</title>" in html
    assert '"submitUrl": "/people"' in html
    assert '"schemaName": "person"' in html


def test_missing_config_file(runner, models):
    result = runner.invoke(cli, ["--config", "/nonexistent.toml", "schema", f"{models}:Person"])

    assert result.exit_code == 1
    assert "Configuration file not found" in result.output
