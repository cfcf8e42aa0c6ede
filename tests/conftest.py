"""Pytest configuration.

Ensures src/ and tests/ are on sys.path so tests can import `areawatch.*`
and the shared fakes in `helpers`.
"""

import logging
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
SRC_DIR = PROJECT_ROOT / "src"
TESTS_DIR = PROJECT_ROOT / "tests"
for p in (str(SRC_DIR), str(TESTS_DIR)):
    if p not in sys.path:
        sys.path.insert(0, p)


@pytest.fixture
def restore_root_logger(monkeypatch):
    """Undo setup_logging's changes to the root logger and environment."""
    monkeypatch.setenv("AW_LOG_SESSION_DIR", "")
    root = logging.getLogger()
    level = root.level
    yield root
    # pytest's own capture handlers are subclasses; only ours are plain
    for h in root.handlers[:]:
        if type(h) in (logging.FileHandler, logging.StreamHandler):
            root.removeHandler(h)
            h.close()
    root.setLevel(level)
