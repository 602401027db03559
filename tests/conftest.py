"""
Pytest fixtures: a recording httpx transport and a dashboard test client.
"""

from typing import Any, Callable, Dict, List

import httpx
import pytest
from fastapi.testclient import TestClient

from front.app import create_app
from jsd_dashboard.config.settings import Settings
from jsd_dashboard.sd.client import SDClient
from jsd_dashboard.sd.data_source import RemoteSource

BASE_URL = "https://jira.example.test/jira"


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it served."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.calls: List[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            self.calls.append(request)
            return handler(request)

        super().__init__(_record)


def make_settings(**overrides: Any) -> Settings:
    values: Dict[str, Any] = {
        "jira_base_url": BASE_URL,
        "http_timeout_seconds": 10.0,
        "use_mock_data": False,
        "app_env": "test",
        "log_level": "DEBUG",
        "session_secret": "test-secret-key-for-testing-purposes-only",
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def make_client() -> Callable[[Callable[[httpx.Request], httpx.Response]], SDClient]:
    def _make(handler: Callable[[httpx.Request], httpx.Response]) -> SDClient:
        return SDClient(base_url=BASE_URL, timeout_seconds=10.0, transport=RecordingTransport(handler))

    return _make


@pytest.fixture
def remote_app(settings: Settings) -> Callable[[Callable[[httpx.Request], httpx.Response]], TestClient]:
    """Dashboard wired to a RemoteSource whose HTTP calls go to `handler`."""

    def _make(handler: Callable[[httpx.Request], httpx.Response]) -> TestClient:
        client = SDClient(base_url=BASE_URL, timeout_seconds=10.0, transport=RecordingTransport(handler))
        app = create_app(settings=settings, source=RemoteSource(client))
        return TestClient(app)

    return _make
