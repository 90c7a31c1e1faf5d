"""Tests for CLI commands."""

import pytest
import yaml
from click.testing import CliRunner

from beautiful_md.cli import cli
from beautiful_md.config.defaults import CONFIG_ENV_VAR


@pytest.fixture
def runner(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    monkeypatch.chdir(tmp_path)
    return CliRunner()


class TestCLIGroup:
    def test_help(self, runner):
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "format" in result.output
        assert "check" in result.output
        assert "config" in result.output

    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0

    def test_invalid_override(self, runner, md_file):
        result = runner.invoke(cli, ["--set", "nonsense", "format", str(md_file)])
        assert result.exit_code == 1
        assert "Invalid override" in result.output

    def test_invalid_config_file(self, runner, tmp_path, md_file):
        bad = tmp_path / "bad.yaml"
        bad.write_text("lists:\n  indent_size: 0\n")
        result = runner.invoke(cli, ["--config", str(bad), "format", str(md_file)])
        assert result.exit_code == 1
        assert "Error" in result.output


class TestFormatCommand:
    def test_help(self, runner):
        result = runner.invoke(cli, ["format", "--help"])
        assert result.exit_code == 0
        assert "--in-place" in result.output
        assert "--output" in result.output
        assert "--glob" in result.output
        assert "--dry-run" in result.output

    def test_missing_input(self, runner):
        result = runner.invoke(cli, ["format"])
        assert result.exit_code != 0

    def test_stdout(self, runner, md_file):
        result = runner.invoke(cli, ["format", str(md_file)])
        assert result.exit_code == 0
        assert "# Title\n\n- Item\n" in result.output
        # Not modified without --in-place
        assert md_file.read_text() == "#Title\n-Item\n"

    def test_in_place(self, runner, md_file):
        result = runner.invoke(cli, ["format", "--in-place", str(md_file)])
        assert result.exit_code == 0
        assert md_file.read_text() == "# Title\n\n- Item\n"
        assert "1 of 1 file(s) formatted" in result.output

    def test_output_file(self, runner, md_file, tmp_path):
        out = tmp_path / "out.md"
        result = runner.invoke(cli, ["format", str(md_file), "--output", str(out)])
        assert result.exit_code == 0
        assert out.read_text() == "# Title\n\n- Item\n"

    def test_output_with_many_inputs(self, runner, md_file, tmp_path):
        other = tmp_path / "other.md"
        other.write_text("text\n")
        result = runner.invoke(
            cli, ["format", str(md_file), str(other), "--output", str(tmp_path / "o.md")]
        )
        assert result.exit_code != 0
        assert "single input" in result.output

    def test_dry_run(self, runner, md_file):
        result = runner.invoke(cli, ["format", "--dry-run", str(md_file)])
        assert result.exit_code == 0
        assert "Would format" in result.output
        assert md_file.read_text() == "#Title\n-Item\n"

    def test_glob(self, runner, tmp_path):
        (tmp_path / "docs").mkdir()
        first = tmp_path / "docs" / "a.md"
        second = tmp_path / "docs" / "b.md"
        first.write_text("#A\n")
        second.write_text("#B\n")

        result = runner.invoke(
            cli, ["format", "--glob", "--in-place", str(tmp_path / "docs" / "*.md")]
        )
        assert result.exit_code == 0
        assert first.read_text() == "# A\n"
        assert second.read_text() == "# B\n"

    def test_glob_no_match(self, runner, tmp_path):
        result = runner.invoke(cli, ["format", "--glob", str(tmp_path / "*.nothing")])
        assert result.exit_code == 1
        assert "No files match" in result.output

    def test_missing_file(self, runner, tmp_path):
        result = runner.invoke(cli, ["format", str(tmp_path / "missing.md")])
        assert result.exit_code == 1
        assert "File not found" in result.output

    def test_diagnostics_printed(self, runner, tmp_path):
        path = tmp_path / "broken.md"
        path.write_text("```python\nprint(1)\n")
        result = runner.invoke(cli, ["--no-color", "format", str(path)])
        assert result.exit_code == 0
        assert "1 issues found" in result.output
        assert "Line 1:" in result.output
        assert "missing its closing fence" in result.output

    def test_set_override(self, runner, md_file):
        result = runner.invoke(cli, ["-s", "lists.marker=*", "format", str(md_file)])
        assert result.exit_code == 0
        assert "* Item" in result.output

    def test_config_file(self, runner, md_file, config_yaml):
        result = runner.invoke(cli, ["--config", str(config_yaml), "format", str(md_file)])
        assert result.exit_code == 0
        assert "* Item" in result.output


class TestCheckCommand:
    def test_needs_formatting(self, runner, md_file):
        result = runner.invoke(cli, ["check", str(md_file)])
        assert result.exit_code == 1
        assert "Needs formatting" in result.output
        assert md_file.read_text() == "#Title\n-Item\n"

    def test_formatted(self, runner, tmp_path):
        path = tmp_path / "clean.md"
        path.write_text("# Title\n\n- Item\n")
        result = runner.invoke(cli, ["check", str(path)])
        assert result.exit_code == 0
        assert "All 1 file(s) are formatted" in result.output

    def test_missing_file(self, runner, tmp_path):
        result = runner.invoke(cli, ["check", str(tmp_path / "missing.md")])
        assert result.exit_code == 1


class TestConfigCommand:
    def test_writes_defaults(self, runner, tmp_path):
        result = runner.invoke(cli, ["config"])
        assert result.exit_code == 0
        raw = yaml.safe_load((tmp_path / ".beautiful-md.yaml").read_text())
        assert raw["tables"]["min_column_width"] == 3
        assert raw["lists"]["marker"] == "-"

    def test_custom_output(self, runner, tmp_path):
        out = tmp_path / "style.yaml"
        result = runner.invoke(cli, ["-s", "tables.padding=2", "config", str(out)])
        assert result.exit_code == 0
        assert yaml.safe_load(out.read_text())["tables"]["padding"] == 2

    def test_refuses_overwrite(self, runner, tmp_path):
        out = tmp_path / "style.yaml"
        out.write_text("keep: me\n")
        result = runner.invoke(cli, ["config", str(out)])
        assert result.exit_code == 1
        assert out.read_text() == "keep: me\n"

    def test_force_overwrite(self, runner, tmp_path):
        out = tmp_path / "style.yaml"
        out.write_text("keep: me\n")
        result = runner.invoke(cli, ["config", "--force", str(out)])
        assert result.exit_code == 0
        assert "tables" in yaml.safe_load(out.read_text())
