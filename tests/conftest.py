"""Pytest configuration and fixtures for the test suite."""

import pytest

from check_report.aggregate import ResultAggregate
from tests.fixtures import FakeEmojiable


@pytest.fixture
def fake_marker():
    """Provide a marker collaborator that always returns ':test:'."""
    return FakeEmojiable()


@pytest.fixture
def aggregate(fake_marker):
    """Provide an empty aggregate using the fake marker."""
    return ResultAggregate("message", 1, 2, fake_marker)


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Run in an empty directory without CHECK_REPORT_* variables."""
    import os

    for key in list(os.environ):
        if key.startswith("CHECK_REPORT_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
    return tmp_path
