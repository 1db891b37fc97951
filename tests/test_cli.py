"""Tests for the sword command line."""

from __future__ import annotations

from typer.testing import CliRunner

from sword_cli.cli.app import app

runner = CliRunner()


def test_new_non_interactive(tmp_path):
    result = runner.invoke(
        app,
        ["new", "demo", "--out-dir", str(tmp_path), "--no-interactive", "--port", "4000"],
    )

    assert result.exit_code == 0, result.output
    assert "Creating project 'demo'..." in result.output
    assert "Project 'demo' created successfully!" in result.output
    assert f"cd {tmp_path / 'demo'}" in result.output
    assert "APP_PORT=4000" in (tmp_path / "demo" / ".env").read_text()


def test_new_non_interactive_default_port(tmp_path):
    result = runner.invoke(app, ["new", "demo", "-o", str(tmp_path), "--no-interactive"])

    assert result.exit_code == 0, result.output
    assert "APP_PORT=3000" in (tmp_path / "demo" / ".env").read_text()


def test_new_prompts_for_missing_values(tmp_path):
    result = runner.invoke(app, ["new", "-o", str(tmp_path)], input="demo\n4000\n")

    assert result.exit_code == 0, result.output
    assert "Project name" in result.output
    assert "Application port" in result.output
    assert "APP_PORT=4000" in (tmp_path / "demo" / ".env").read_text()


def test_new_prompt_accepts_default_port(tmp_path):
    result = runner.invoke(app, ["new", "-o", str(tmp_path)], input="demo\n\n")

    assert result.exit_code == 0, result.output
    assert "APP_PORT=3000" in (tmp_path / "demo" / ".env").read_text()


def test_new_empty_prompted_name_fails(tmp_path):
    result = runner.invoke(app, ["new", "-o", str(tmp_path)], input="\n")

    assert result.exit_code == 1
    assert "Project name cannot be empty" in result.output
    assert "Application port" not in result.output
    assert "Creating project" not in result.output


def test_new_requires_name_when_non_interactive(tmp_path):
    result = runner.invoke(app, ["new", "-o", str(tmp_path), "--no-interactive"])

    assert result.exit_code == 2
    assert list(tmp_path.iterdir()) == []


def test_new_rejects_out_of_range_port(tmp_path):
    result = runner.invoke(
        app, ["new", "demo", "-o", str(tmp_path), "--no-interactive", "--port", "70000"]
    )

    assert result.exit_code == 2
    assert not (tmp_path / "demo").exists()


def test_new_rejects_out_of_range_prompted_port(tmp_path):
    result = runner.invoke(app, ["new", "demo", "-o", str(tmp_path)], input="70000\n")

    assert result.exit_code == 2
    assert not (tmp_path / "demo").exists()


def test_new_existing_target(tmp_path):
    (tmp_path / "demo").mkdir()

    result = runner.invoke(app, ["new", "demo", "-o", str(tmp_path), "--no-interactive"])

    assert result.exit_code == 1
    assert "already exists" in result.output
    assert "Creating project" not in result.output


def test_new_init_in_place(tmp_path):
    result = runner.invoke(
        app, ["new", "demo", "-o", str(tmp_path), "--init", "--no-interactive"]
    )

    assert result.exit_code == 0, result.output
    assert (tmp_path / ".env").exists()
    assert (tmp_path / "app" / "main.py").exists()
    assert not (tmp_path / "demo").exists()


def test_verbose_flag(tmp_path):
    result = runner.invoke(
        app, ["-v", "new", "demo", "-o", str(tmp_path), "--no-interactive"]
    )

    assert result.exit_code == 0, result.output
