# tests/test_config.py
"""
Tests for process-wide settings and the environment overrides.
"""

import logging

import pytest

from rterror import (
    DEFAULT_FORMAT,
    DEFAULT_INDENT,
    PLAIN_FORMAT,
    RTError,
    Settings,
    configure,
    get_default_format,
    reset_default_format,
    set_default_format,
    settings,
)


class TestFromEnv:

    def test_defaults(self):
        s = Settings.from_env({})
        assert s.format == DEFAULT_FORMAT
        assert s.indent == DEFAULT_INDENT
        assert s.capture_call_site is True

    def test_overrides(self):
        s = Settings.from_env({
            "RTERROR_FORMAT": "{.message}",
            "RTERROR_INDENT": "-> ",
            "RTERROR_NO_CALLSITE": "1",
        })
        assert s.format == "{.message}"
        assert s.indent == "-> "
        assert s.capture_call_site is False

    def test_plain(self):
        assert Settings.from_env({"RTERROR_PLAIN": "1"}).format == PLAIN_FORMAT

    def test_explicit_format_beats_plain(self):
        s = Settings.from_env({"RTERROR_PLAIN": "1", "RTERROR_FORMAT": "X"})
        assert s.format == "X"

    def test_empty_values_are_ignored(self):
        s = Settings.from_env({"RTERROR_FORMAT": "", "RTERROR_NO_CALLSITE": ""})
        assert s.format == DEFAULT_FORMAT
        assert s.capture_call_site is True


class TestValidate:

    def test_valid(self):
        assert Settings().validate() == []

    def test_empty_fields(self):
        warnings = Settings(format="", indent="").validate()
        assert len(warnings) == 2

    def test_newline_in_indent(self):
        assert Settings(indent="\n").validate() == ["indent contains a newline"]


class TestConfigure:

    def test_updates_in_place(self):
        before = settings
        result = configure(indent="* ")
        assert result is before
        assert settings.indent == "* "

    def test_unknown_key(self):
        with pytest.raises(TypeError):
            configure(colour=False)

    def test_warnings_are_logged(self, caplog):
        caplog.set_level(logging.WARNING, logger="rterror")
        configure(format="")
        assert "format is empty" in caplog.text

    def test_existing_errors_keep_their_format(self):
        err = RTError("kept")
        configure(format="{.message}")
        assert err.get_format() == DEFAULT_FORMAT
        assert RTError("new").get_format() == "{.message}"


class TestDefaultFormat:

    def test_get_set_reset(self):
        assert get_default_format() == DEFAULT_FORMAT
        set_default_format("{.line}")
        assert get_default_format() == "{.line}"
        reset_default_format()
        assert get_default_format() == DEFAULT_FORMAT
