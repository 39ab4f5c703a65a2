# backend/tests/conftest.py
"""
Pytest configuration for Notice Tracker backend tests.

- Ensures that the project root (backend/) is added to sys.path
  so that `import app.*` works correctly in tests.
- Ensures required environment variables for tests are set
  with safe dummy values (e.g., NOTICES_MAIL_TO).
- Provides in-memory adapters and a fixed clock for service tests.
"""

import os
import sys
from datetime import datetime
from pathlib import Path

import pytest


def _ensure_project_root_in_sys_path() -> None:
    # This file is located at: backend/tests/conftest.py
    # parents[1] -> backend/
    project_root = Path(__file__).resolve().parents[1]
    project_root_str = str(project_root)

    if project_root_str not in sys.path:
        # Insert at the beginning so it has priority over site-packages, etc.
        sys.path.insert(0, project_root_str)


def _ensure_test_env_vars() -> None:
    """
    Set dummy environment variables required for tests.

    These values are only for local testing and do NOT contain real secrets.
    """
    os.environ.setdefault("NOTICES_MAIL_TO", "team@example.com")
    os.environ.setdefault("NOTICES_STORAGE_BACKEND", "memory")


_ensure_project_root_in_sys_path()
_ensure_test_env_vars()

from app.notices.repository import InMemoryNoticeRepository  # noqa: E402
from app.notices.service import NoticeService  # noqa: E402
from app.notifications.service import InMemoryEmailSender  # noqa: E402
from app.utils.clock import FixedClock  # noqa: E402

NOW = datetime(2026, 10, 19, 9, 30)


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(NOW)


@pytest.fixture
def repository() -> InMemoryNoticeRepository:
    return InMemoryNoticeRepository()


@pytest.fixture
def email_sender() -> InMemoryEmailSender:
    return InMemoryEmailSender()


@pytest.fixture
def notice_service(repository, email_sender, clock) -> NoticeService:
    return NoticeService(repository=repository, email_sender=email_sender, clock=clock)
