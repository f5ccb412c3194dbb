"""
Tests for environment-driven configuration.
"""
import logging

from zuspec.be.opt.config import TIMEOUT_ENV, default_timeout_ms


def test_no_timeout_by_default():
    assert default_timeout_ms() is None


def test_timeout_from_env(monkeypatch):
    monkeypatch.setenv(TIMEOUT_ENV, " 500 ")
    assert default_timeout_ms() == 500


def test_blank_timeout_is_ignored(monkeypatch):
    monkeypatch.setenv(TIMEOUT_ENV, "  ")
    assert default_timeout_ms() is None


def test_invalid_timeout_is_ignored_with_warning(monkeypatch, caplog):
    monkeypatch.setenv(TIMEOUT_ENV, "soon")
    with caplog.at_level(logging.WARNING, logger="zuspec.be.opt.config"):
        assert default_timeout_ms() is None
    assert TIMEOUT_ENV in caplog.text


def test_out_of_range_timeout_is_ignored(monkeypatch, caplog):
    monkeypatch.setenv(TIMEOUT_ENV, "-5")
    with caplog.at_level(logging.WARNING, logger="zuspec.be.opt.config"):
        assert default_timeout_ms() is None
    assert "out of range" in caplog.text
