"""Tests for config hierarchy."""

import pytest

from beautiful_md.config.defaults import CONFIG_ENV_VAR, CONFIG_FILE_NAME
from beautiful_md.config.hierarchy import (
    _apply_overrides,
    config_candidates,
    find_config_file,
    load_config_hierarchy,
    parse_override,
)
from beautiful_md.config.schema import Config
from beautiful_md.errors.exceptions import ConfigError


@pytest.fixture(autouse=True)
def isolated(tmp_path, monkeypatch):
    """No real project, home or env config leaks into these tests."""
    home = tmp_path / "home"
    home.mkdir()
    project = tmp_path / "project"
    project.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    monkeypatch.chdir(project)
    return project, home


class TestLoadConfigHierarchy:
    def test_returns_defaults(self):
        assert load_config_hierarchy() == Config()

    def test_explicit_path(self, config_yaml):
        config = load_config_hierarchy(config_yaml)
        assert config.tables.padding == 2
        assert config.lists.marker == "*"
        assert config.code.fence_style == "~~~"
        # Unset keys keep their defaults
        assert config.tables.min_column_width == 3

    def test_explicit_path_missing(self, tmp_path):
        with pytest.raises(ConfigError):
            load_config_hierarchy(tmp_path / "nope.yaml")

    def test_project_config(self, isolated):
        project, _ = isolated
        (project / CONFIG_FILE_NAME).write_text("headings:\n  blank_lines_before: 1\n")
        assert load_config_hierarchy().headings.blank_lines_before == 1

    def test_global_config(self, isolated):
        _, home = isolated
        (home / CONFIG_FILE_NAME).write_text("lists:\n  indent_size: 4\n")
        assert load_config_hierarchy().lists.indent_size == 4

    def test_project_beats_global(self, isolated):
        project, home = isolated
        (project / CONFIG_FILE_NAME).write_text("lists:\n  indent_size: 3\n")
        (home / CONFIG_FILE_NAME).write_text("lists:\n  indent_size: 4\n")
        assert load_config_hierarchy().lists.indent_size == 3

    def test_env_var_beats_project(self, isolated, tmp_path, monkeypatch):
        project, _ = isolated
        (project / CONFIG_FILE_NAME).write_text("lists:\n  indent_size: 3\n")
        env_file = tmp_path / "env.yaml"
        env_file.write_text("lists:\n  indent_size: 8\n")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(env_file))
        assert load_config_hierarchy().lists.indent_size == 8

    def test_broken_discovered_file_skipped(self, isolated):
        project, _ = isolated
        (project / CONFIG_FILE_NAME).write_text("- not\n- a mapping\n")
        assert load_config_hierarchy() == Config()

    def test_broken_project_file_falls_back_to_global(self, isolated):
        project, home = isolated
        (project / CONFIG_FILE_NAME).write_text("lists: [unclosed\n")
        (home / CONFIG_FILE_NAME).write_text("lists:\n  indent_size: 4\n")
        assert load_config_hierarchy().lists.indent_size == 4

    def test_invalid_values_rejected(self, isolated):
        project, _ = isolated
        (project / CONFIG_FILE_NAME).write_text("lists:\n  marker: '#'\n")
        with pytest.raises(ConfigError):
            load_config_hierarchy()

    def test_overrides(self):
        config = load_config_hierarchy(overrides={"tables.padding": 3, "code.fence_style": "~~~"})
        assert config.tables.padding == 3
        assert config.code.fence_style == "~~~"

    def test_overrides_beat_file(self, config_yaml):
        config = load_config_hierarchy(config_yaml, overrides={"tables.padding": 0})
        assert config.tables.padding == 0
        assert config.lists.marker == "*"

    def test_none_overrides_ignored(self):
        config = load_config_hierarchy(overrides={"tables.padding": None})
        assert config.tables.padding == 1


class TestFindConfigFile:
    def test_nothing_found(self):
        assert find_config_file() is None

    def test_candidates_in_lookup_order(self, isolated):
        project, home = isolated
        (project / CONFIG_FILE_NAME).write_text("{}\n")
        (home / CONFIG_FILE_NAME).write_text("{}\n")
        assert config_candidates() == [project / CONFIG_FILE_NAME, home / CONFIG_FILE_NAME]

    def test_env_var_missing_file_falls_through(self, isolated, tmp_path, monkeypatch):
        project, _ = isolated
        monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "missing.yaml"))
        (project / CONFIG_FILE_NAME).write_text("{}\n")
        assert find_config_file() == project / CONFIG_FILE_NAME


class TestParseOverride:
    def test_int(self):
        assert parse_override("tables.padding=2") == ("tables.padding", 2)

    def test_bool(self):
        assert parse_override("tables.align=false") == ("tables.align", False)

    def test_marker(self):
        assert parse_override("lists.marker=*") == ("lists.marker", "*")

    def test_fence(self):
        assert parse_override("code.fence_style=~~~") == ("code.fence_style", "~~~")

    def test_missing_equals(self):
        with pytest.raises(ConfigError):
            parse_override("tables.padding")

    def test_missing_section(self):
        with pytest.raises(ConfigError):
            parse_override("padding=2")


class TestApplyOverrides:
    def test_does_not_mutate_input(self):
        raw = {"tables": {"padding": 1}}
        merged = _apply_overrides(raw, {"tables.padding": 4})
        assert merged["tables"]["padding"] == 4
        assert raw["tables"]["padding"] == 1

    def test_creates_section(self):
        assert _apply_overrides({}, {"lists.indent_size": 4}) == {"lists": {"indent_size": 4}}
