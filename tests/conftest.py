"""Shared pytest fixtures: every test gets its own store in a temporary folder."""

import logging

import pytest
from fastapi.testclient import TestClient

from notekeep.config import Settings
from notekeep.core.repositories import UserRepository
from notekeep.core.services import UserService
from notekeep.main import create_app

logging.getLogger("passlib").setLevel(logging.ERROR)

TRUSTCHAIN_SECRET = "test-trustchain-secret"


@pytest.fixture
def test_settings(tmp_path):
    """Settings pointing at a fresh data folder."""
    return Settings(
        data_path=str(tmp_path / "data"),
        trustchain_id="test/trustchain",
        trustchain_private_key=TRUSTCHAIN_SECRET,
        log_to_file=False,
        debug=True,
    )


@pytest.fixture
def user_repo(test_settings):
    return UserRepository(test_settings.storage_dir)


@pytest.fixture
def user_service(user_repo, test_settings):
    return UserService(user_repo, test_settings)


@pytest.fixture
def app(test_settings):
    return create_app(test_settings)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client
