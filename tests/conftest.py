"""Shared fixtures for the mailforge unit and CLI suites.

Every test runs against ``tests/data/config.yaml``, which sets the
``X-Mailer`` value to ``mailforge-tests`` and the log level to ``INFO``. The
rendered ``.eml`` assertions in the CLI suite and the message document tests
depend on that value, so it is pinned through ``MAILFORGE_CONFIG_PATH`` rather
than whatever ``mailforge.yaml`` the developer has locally.

:func:`mailforge.config.loader.get_runtime_config` caches the first load, and a
test that calls ``load_runtime_config`` with another file would otherwise leak
that file into the next test. :func:`runtime_config` clears the cache before
and after each test.

``mailforge/src`` is put on ``sys.path`` so the suites import the working tree
without an editable install. :data:`DATA_DIR` points at the YAML fixtures
(``config.yaml`` and the ``message.yaml`` document).
"""

import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = PROJECT_ROOT / "mailforge" / "src"
if SRC_DIR.exists():
    sys.path.insert(0, str(SRC_DIR))

import pytest

from mailforge.config.loader import reset_runtime_config

DATA_DIR = Path(__file__).resolve().parent / "data"
CONFIG_PATH = DATA_DIR / "config.yaml"


@pytest.fixture(autouse=True)
def runtime_config(monkeypatch: pytest.MonkeyPatch):
    """Pin ``MAILFORGE_CONFIG_PATH`` to the test config with a cold cache."""

    monkeypatch.setenv("MAILFORGE_CONFIG_PATH", str(CONFIG_PATH))
    reset_runtime_config()
    try:
        yield
    finally:
        reset_runtime_config()
