"""Pytest fixtures for the garden diary tests."""

import pytest

from config import Settings
from tests.factories import FakeAuthSource, FakeClock, container, plant


@pytest.fixture
def fern_container():
    return container([
        plant("p1", "Fern", 3),
        plant("p2", "Fern", 0),
    ])


@pytest.fixture
def auth_source():
    return FakeAuthSource()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def settings(tmp_path):
    return Settings(AUTH_STORE_PATH=str(tmp_path / "auth.json"), _env_file=None)
