"""
Unit tests for utils/strings.py, utils/config.py and utils/logging.py.

No database, network, or file I/O required.
"""
import json
import logging

import pytest

from utils.config import AppConfig, ConfigurationError
from utils.logging import JsonFormatter, configure_logging
from utils.strings import contains_casefold, normalize_whitespace, safe_int


# ── safe_int ──────────────────────────────────────────────────────────────────

@pytest.mark.parametrize("val, expected", [
    (None,    None),
    ("",      None),
    (" ",     None),
    ("5",     5),
    (" 7 ",   7),
    ("+3",    3),
    ("-2",    -2),
    (12,      12),
    ("abc",   None),
    ("4.5",   None),
    ("5 yrs", None),
    (True,    None),   # bool is not a year count
])
def test_safe_int(val, expected):
    assert safe_int(val) == expected


def test_safe_int_custom_default():
    assert safe_int("x", default=0) == 0


# ── normalize_whitespace / contains_casefold ──────────────────────────────────

def test_normalize_whitespace():
    assert normalize_whitespace("  New   York\n") == "New York"


@pytest.mark.parametrize("haystack, needle, expected", [
    ("Smith",    "SMI",  True),
    ("smith",    "Smith", True),
    ("New York", "york", True),
    ("Boston",   "york", False),
    ("",         "",     True),
    (None,       "a",    False),
])
def test_contains_casefold(haystack, needle, expected):
    assert contains_casefold(haystack, needle) is expected


# ── AppConfig ─────────────────────────────────────────────────────────────────

_ENV_VARS = (
    "DATABASE_URL", "APP_PORT", "APP_HOST", "APP_LOG_FORMAT", "APP_LOG_LEVEL",
    "APP_CORS_ORIGINS", "ADVOCATES_URL", "ADVOCATES_TIMEOUT",
)


@pytest.fixture()
def clean_env(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestAppConfig:
    def test_defaults(self, clean_env):
        cfg = AppConfig.from_env()
        assert cfg.database_url is None
        assert cfg.api_port == 8000
        assert cfg.api_host == "127.0.0.1"
        assert cfg.log_format == "text"
        assert cfg.log_level == "INFO"
        assert cfg.cors_origins == ["*"]
        assert cfg.advocates_url == "http://127.0.0.1:8000/api/advocates"
        assert cfg.request_timeout == 30.0

    def test_overrides(self, clean_env):
        clean_env.setenv("APP_PORT", "9001")
        clean_env.setenv("APP_LOG_LEVEL", "debug")
        clean_env.setenv("APP_CORS_ORIGINS", "http://a.test, http://b.test")
        clean_env.setenv("ADVOCATES_URL", "http://records.test/api/advocates")
        clean_env.setenv("ADVOCATES_TIMEOUT", "2.5")
        cfg = AppConfig.from_env()
        assert cfg.api_port == 9001
        assert cfg.log_level == "DEBUG"
        assert cfg.cors_origins == ["http://a.test", "http://b.test"]
        assert cfg.advocates_url == "http://records.test/api/advocates"
        assert cfg.request_timeout == 2.5

    def test_require_database_url_missing(self, clean_env):
        with pytest.raises(ConfigurationError, match="DATABASE_URL is not set"):
            AppConfig.from_env().require_database_url()

    def test_require_database_url_present(self, clean_env):
        clean_env.setenv("DATABASE_URL", "sqlite:///advocates.sqlite")
        assert AppConfig.from_env().require_database_url() == "sqlite:///advocates.sqlite"


# ── Logging ───────────────────────────────────────────────────────────────────

class TestJsonFormatter:
    def _record(self, **extra):
        record = logging.LogRecord("advocates", logging.INFO, __file__, 1,
                                   "loaded %d advocates", (3,), None)
        for key, value in extra.items():
            setattr(record, key, value)
        return record

    def test_basic_fields(self):
        data = json.loads(JsonFormatter().format(self._record()))
        assert data["level"] == "INFO"
        assert data["logger"] == "advocates"
        assert data["message"] == "loaded 3 advocates"

    def test_known_extras_included(self):
        data = json.loads(JsonFormatter().format(self._record(count=3, path="/x")))
        assert data["count"] == 3
        assert data["path"] == "/x"

    def test_unknown_extras_ignored(self):
        data = json.loads(JsonFormatter().format(self._record(secret="x")))
        assert "secret" not in data


class TestConfigureLogging:
    def test_json_format(self):
        handler = configure_logging("json", "DEBUG")
        assert isinstance(handler.formatter, JsonFormatter)
        assert logging.getLogger().level == logging.DEBUG

    def test_text_format_replaces_handlers(self):
        configure_logging("text")
        handler = configure_logging("text")
        assert logging.getLogger().handlers == [handler]
        assert not isinstance(handler.formatter, JsonFormatter)
