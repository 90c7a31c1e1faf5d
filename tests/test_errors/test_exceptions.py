"""Tests for custom exception hierarchy."""

from pathlib import Path

import pytest

from beautiful_md.errors import (
    BeautifulMdError,
    ConfigError,
    FormattingError,
    InvalidPathError,
    MarkdownIOError,
    ParseError,
    PatternError,
)


class TestExceptionHierarchy:
    def test_all_inherit_from_base(self):
        for cls in (
            MarkdownIOError,
            InvalidPathError,
            PatternError,
            ConfigError,
            FormattingError,
            ParseError,
        ):
            assert issubclass(cls, BeautifulMdError)

    def test_all_inherit_from_exception(self):
        assert issubclass(BeautifulMdError, Exception)

    def test_parse_error_is_formatting_error(self):
        assert issubclass(ParseError, FormattingError)


class TestBeautifulMdError:
    def test_message(self):
        err = BeautifulMdError("something broke")
        assert err.message == "something broke"
        assert str(err) == "something broke"

    def test_catchable_as_base(self):
        with pytest.raises(BeautifulMdError):
            raise PatternError("no match", pattern="*.md")


class TestMarkdownIOError:
    def test_attributes(self):
        original = OSError("disk full")
        err = MarkdownIOError("write failed", path="a.md", original=original)
        assert err.path == Path("a.md")
        assert err.original is original

    def test_defaults(self):
        err = MarkdownIOError("x")
        assert err.path is None
        assert err.original is None


class TestInvalidPathError:
    def test_path(self):
        assert InvalidPathError("missing", path="docs").path == Path("docs")


class TestPatternError:
    def test_pattern(self):
        assert PatternError("no match", pattern="**/*.md").pattern == "**/*.md"


class TestConfigError:
    def test_path(self):
        assert ConfigError("bad", path="c.yaml").path == Path("c.yaml")

    def test_no_path(self):
        assert ConfigError("bad").path is None


class TestFormattingError:
    def test_default_stage(self):
        assert FormattingError("x").stage == "serialize"

    def test_custom_stage(self):
        assert FormattingError("x", stage="setup").stage == "setup"

    def test_parse_stage(self):
        err = ParseError("cannot parse")
        assert err.stage == "parse"
        assert err.message == "cannot parse"
