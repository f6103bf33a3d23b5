"""Pytest configuration and shared fixtures."""

import pytest

SCENARIOS = {
    "valid": '{"a":1,"b":2}',
    "missing_close": '{"name": "John"',
    "unterminated": '{"a": "unterminated',
    "trailing_comma": '{"a":1,}',
    "empty": "",
}


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Run inside an empty temporary directory."""
    monkeypatch.chdir(tmp_path)
    return tmp_path
