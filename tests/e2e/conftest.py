"""Fixtures for end-to-end API tests."""

import pytest
from fastapi.testclient import TestClient

from agora.interface.api.app import create_app
from tests.di import build_test_container
from tests.harness import auth_cookies, make_identity


@pytest.fixture
def app():
    """App backed by a fresh in-memory container."""
    return create_app(build_test_container())


@pytest.fixture
def client(app):
    """Anonymous client."""
    return TestClient(app)


@pytest.fixture
def authed_client(app):
    """Client carrying alice's identity cookie."""
    return TestClient(app, cookies=auth_cookies(make_identity()))


@pytest.fixture
def other_client(app):
    """Client carrying bob's identity cookie."""
    identity = make_identity(user_id="user-2", username="bob")
    return TestClient(app, cookies=auth_cookies(identity))
