"""Tests for the shared logging setup."""

import logging

import pytest

from jobportal import log


@pytest.fixture
def restore_levels():
    names = ("",) + log.NOISY_LOGGERS
    saved = {n: logging.getLogger(n).level for n in names}
    yield
    for n, level in saved.items():
        logging.getLogger(n).setLevel(level)


def test_third_party_loggers_quieted(monkeypatch, restore_levels):
    monkeypatch.setenv("LOG_LEVEL", "INFO")
    log._configure()

    for name in log.NOISY_LOGGERS:
        assert logging.getLogger(name).level == logging.WARNING


def test_debug_level_unmutes_third_party(monkeypatch, restore_levels):
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    log._configure()

    assert logging.getLogger("pymongo").level == logging.DEBUG
    assert logging.getLogger().level == logging.DEBUG


def test_get_logger_returns_named_logger():
    assert log.get_logger("jobportal.test").name == "jobportal.test"
