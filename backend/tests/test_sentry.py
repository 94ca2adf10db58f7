import logging

import pytest

from golfbets.utils import sentry


@pytest.mark.parametrize(
    "raw, expected",
    [("0.25", 0.25), ("1", 1.0), ("abc", 0.0), ("1.5", 0.0), ("-0.1", 0.0)],
    ids=["valid", "upper-bound", "not-a-float", "too-high", "negative"],
)
def test_parse_sample_rate(monkeypatch, raw, expected):
    monkeypatch.setenv("SENTRY_TRACES_SAMPLE_RATE", raw)
    assert sentry._parse_sample_rate("SENTRY_TRACES_SAMPLE_RATE") == expected


def test_parse_sample_rate_unset_uses_default(monkeypatch):
    monkeypatch.delenv("SENTRY_TRACES_SAMPLE_RATE", raising=False)
    assert sentry._parse_sample_rate("SENTRY_TRACES_SAMPLE_RATE", 0.5) == 0.5


def test_init_sentry_without_dsn(monkeypatch, caplog):
    monkeypatch.delenv("SENTRY_DSN", raising=False)
    with caplog.at_level(logging.INFO):
        assert sentry.init_sentry() is False
    assert "SENTRY_DSN not provided" in caplog.text


def test_init_sentry_with_dsn(monkeypatch):
    calls = {}

    def fake_init(**kwargs):
        calls.update(kwargs)

    monkeypatch.setenv("SENTRY_DSN", "https://key@sentry.example/1")
    monkeypatch.setenv("SENTRY_ENVIRONMENT", " staging ")
    monkeypatch.setenv("SENTRY_TRACES_SAMPLE_RATE", "0.2")
    monkeypatch.delenv("SENTRY_PROFILES_SAMPLE_RATE", raising=False)
    monkeypatch.setattr(sentry.sentry_sdk, "init", fake_init)

    assert sentry.init_sentry() is True
    assert calls["dsn"] == "https://key@sentry.example/1"
    assert calls["environment"] == "staging"
    assert calls["traces_sample_rate"] == 0.2
    assert calls["profiles_sample_rate"] == 0.0
