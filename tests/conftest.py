"""Pytest conftest — path setup so tests can import drova_stats and helpers."""

import sys
from pathlib import Path

import pytest

# Repo root, so `import drova_stats` works without installing
ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

# Add tests/ to sys.path so `from helpers import ...` works
TESTS_DIR = Path(__file__).resolve().parent
if str(TESTS_DIR) not in sys.path:
    sys.path.insert(0, str(TESTS_DIR))


@pytest.fixture
def logger():
    import logging
    return logging.getLogger("drova_stats.tests")


@pytest.fixture
def no_sleep(monkeypatch):
    """Skip the post-refresh pause in drova_stats.catalog."""
    calls = []
    monkeypatch.setattr("drova_stats.catalog.time.sleep", lambda s: calls.append(s))
    return calls


@pytest.fixture
def restore_logging():
    """Drop the handlers setup_logger installs on the root logger."""
    import logging
    root = logging.getLogger()
    level = root.level
    yield
    for h in root.handlers[:]:
        if type(h) in (logging.StreamHandler, logging.FileHandler):
            root.removeHandler(h)
            h.close()
    root.setLevel(level)
