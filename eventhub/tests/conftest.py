from __future__ import annotations

import os
import tempfile
from collections.abc import Iterator

import pytest

# Settings are read once at import time, so the environment goes first.
_TMP_DIR = tempfile.mkdtemp(prefix="eventhub-tests-")
os.environ["APP_ENV"] = "test"
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TMP_DIR, 'eventhub.db')}"
os.environ["JWT_SECRET"] = "test-secret-key-that-is-long-enough-for-hs256"
os.environ["ENABLE_RATE_LIMIT"] = "0"
os.environ["REALTIME_ASYNC_DELIVERY"] = "0"
os.environ["LOG_FILE"] = os.path.join(_TMP_DIR, "eventhub.log")

from eventhub.infrastructure.db import ENGINE, Base  # noqa: E402


@pytest.fixture()
def reset_database() -> Iterator[None]:
    Base.metadata.drop_all(bind=ENGINE)
    Base.metadata.create_all(bind=ENGINE)
    yield
    Base.metadata.drop_all(bind=ENGINE)
