"""Tests for faultline.core.settings module."""

import pytest
from pydantic import ValidationError

from faultline.core.settings import (
    FaultlineSettings,
    get_settings,
    reset_settings,
    settings_to_text,
)


class TestDefaults:

    def test_defaults(self):
        settings = FaultlineSettings()
        assert settings.log_level == "INFO"
        assert settings.json_logs is None
        assert settings.service == "faultline"
        assert settings.strict_specify is False
        assert settings.max_stack_depth == 32
        assert settings.stack_limit == 32

    def test_zero_depth_is_unbounded(self):
        assert FaultlineSettings(max_stack_depth=0).stack_limit is None

    def test_negative_depth_rejected(self):
        with pytest.raises(ValidationError):
            FaultlineSettings(max_stack_depth=-1)


class TestEnvironment:

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("FAULTLINE_STRICT_SPECIFY", "true")
        monkeypatch.setenv("FAULTLINE_SERVICE", "billing")
        settings = FaultlineSettings()
        assert settings.strict_specify is True
        assert settings.service == "billing"

    def test_unprefixed_vars_ignored(self, monkeypatch):
        monkeypatch.setenv("STRICT_SPECIFY", "true")
        assert FaultlineSettings().strict_specify is False


class TestCache:

    def test_cached(self):
        assert get_settings() is get_settings()

    def test_reset_rereads_environment(self, monkeypatch):
        assert get_settings().log_level == "INFO"
        monkeypatch.setenv("FAULTLINE_LOG_LEVEL", "DEBUG")
        assert get_settings().log_level == "INFO"
        reset_settings()
        assert get_settings().log_level == "DEBUG"


class TestSettingsToText:

    def test_key_value_lines(self):
        text = settings_to_text(FaultlineSettings(service="billing"))
        lines = text.splitlines()
        assert "service = billing" in lines
        assert "max_stack_depth = 32" in lines
        assert text.endswith("\n")

    def test_unset_values_are_bare_keys(self):
        lines = settings_to_text(FaultlineSettings()).splitlines()
        assert "json_logs" in lines

    def test_title_first(self):
        text = settings_to_text(FaultlineSettings(), title="[faultline]")
        assert text.splitlines()[0] == "[faultline]"
