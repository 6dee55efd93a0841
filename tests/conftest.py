# tests/conftest.py

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from controller.controller_dependencies import get_progress_service, rate_limiter
from main import app
from repository.progress_repository import ProgressRepository
from service.progress_service import ProgressService

from .fakes import FakeRedis

TTL = 60 * 60 * 4


@pytest.fixture()
def fake_redis() -> FakeRedis:
    return FakeRedis()


@pytest.fixture()
def repo(fake_redis: FakeRedis) -> ProgressRepository:
    return ProgressRepository(redis=fake_redis, ttl_seconds=TTL)


@pytest.fixture()
def service(repo: ProgressRepository) -> ProgressService:
    return ProgressService(repo)


@pytest.fixture()
def client(service: ProgressService):
    """
    App wired to the fake store. The lifespan (real Redis, rate limiter
    init) is not started; the limiter dependency is overridden instead.
    """
    app.dependency_overrides[get_progress_service] = lambda: service
    app.dependency_overrides[rate_limiter] = lambda: None
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
