"""Shared fixtures for the todo tests."""

import os
import sys

import pytest

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch, tmp_path):
    """Keep local .env files and ELASTICSEARCH_* variables out of the tests."""
    for name in list(os.environ):
        if name.startswith('ELASTICSEARCH_') or name in ('LOG_LEVEL', 'LIST_SIZE',
                                                         'REQUEST_TIMEOUT', 'MAX_RETRIES'):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
