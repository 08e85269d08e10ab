"""Pytest configuration and fixtures."""

from dataclasses import dataclass
from datetime import datetime

import pytest

from zohar import EventEmitter, Settings


@dataclass
class UserSession:
    """Payload carried by the login/logout events used across tests."""

    user_id: str
    timestamp: datetime


@pytest.fixture
def test_settings():
    """Settings isolated from the environment and any .env file."""
    return Settings(_env_file=None, debug=False, max_listeners=0)


@pytest.fixture
def emitter(test_settings):
    """Create a fresh emitter for each test."""
    return EventEmitter(test_settings)


@pytest.fixture
def emitter_functions(emitter):
    """The bound (subscribe, emit, unsubscribe_all) triple of ``emitter``."""
    return emitter.functions()


@pytest.fixture
def make_session():
    """Factory for UserSession payloads."""

    def _make(user_id: str = "user1") -> UserSession:
        return UserSession(user_id=user_id, timestamp=datetime.now())

    return _make
