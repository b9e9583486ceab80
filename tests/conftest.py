"""Pytest configuration and shared fixtures."""

import pytest
from fastapi.testclient import TestClient

from fakes import FakePool, MemoryEventRepo
from main import create_app
from repo_events import EventRepo
from service_events import EventService


@pytest.fixture
def memory_repo() -> MemoryEventRepo:
    return MemoryEventRepo()


@pytest.fixture
def service(memory_repo) -> EventService:
    return EventService(memory_repo)


@pytest.fixture
def client(service) -> TestClient:
    return TestClient(create_app(service))


@pytest.fixture
def fake_pool() -> FakePool:
    return FakePool()


@pytest.fixture
def sql_repo(fake_pool) -> EventRepo:
    return EventRepo(fake_pool)
