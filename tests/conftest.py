"""Pytest configuration and shared fixtures."""

import pytest
from rest_framework.test import APIClient

from events.domain.clock import FixedClock
from tests.builders import NOW
from tests.fakes import InMemoryEventStore, InMemoryRefundStore, RecordingDispatcher


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture(autouse=True)
def clear_cache():
    from django.core.cache import cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture(autouse=True)
def dispatcher(monkeypatch) -> RecordingDispatcher:
    """Replace the RQ dispatcher so no test talks to Redis."""
    recorder = RecordingDispatcher()
    monkeypatch.setattr("refunds.handlers.deps._dispatcher", recorder)
    return recorder


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(NOW)


@pytest.fixture
def event_store() -> InMemoryEventStore:
    return InMemoryEventStore()


@pytest.fixture
def refund_store() -> InMemoryRefundStore:
    return InMemoryRefundStore()


@pytest.fixture
def user(django_user_model):
    return django_user_model.objects.create_user(
        username="ada", email="ada@example.com", password="pw"
    )


@pytest.fixture
def other_user(django_user_model):
    return django_user_model.objects.create_user(username="tunde", password="pw")


@pytest.fixture
def staff_user(django_user_model):
    return django_user_model.objects.create_user(username="staff", password="pw", is_staff=True)


@pytest.fixture
def user_client(api_client: APIClient, user) -> APIClient:
    api_client.force_authenticate(user)
    return api_client


@pytest.fixture
def staff_client(staff_user) -> APIClient:
    client = APIClient()
    client.force_authenticate(staff_user)
    return client
