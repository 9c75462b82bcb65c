from __future__ import annotations

from collections.abc import Callable

import httpx
import pytest

from salesguard.apps.api import deps

_SALESGUARD_ENV = (
    "SALESGUARD_PROVIDER_URL",
    "SALESGUARD_COMBAT_API_KEY",
    "SALESGUARD_REVIEW_API_KEY",
    "SALESGUARD_COMBAT_TIMEOUT_S",
    "SALESGUARD_REVIEW_TIMEOUT_S",
    "SALESGUARD_REVIEW_DEMO_DELAY_S",
    "SALESGUARD_CATALOG_PATH",
    "SALESGUARD_HTTP_RETRIES",
)


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch: pytest.MonkeyPatch):
    for name in _SALESGUARD_ENV:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("SALESGUARD_LOG_TO_FILE", "off")
    deps.reset_dependencies()
    yield
    deps.reset_dependencies()


@pytest.fixture
def provider_transport(monkeypatch: pytest.MonkeyPatch) -> Callable[[Callable[[httpx.Request], httpx.Response]], list[httpx.Request]]:
    """Route the shared HTTP client through a handler and record every request."""

    def install(handler: Callable[[httpx.Request], httpx.Response]) -> list[httpx.Request]:
        seen: list[httpx.Request] = []

        def recording(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return handler(request)

        client = httpx.Client(transport=httpx.MockTransport(recording))
        monkeypatch.setattr("salesguard.core.http.client.get_http_client", lambda: client)
        monkeypatch.setattr("salesguard.core.http.client.time.sleep", lambda _: None)
        return seen

    return install
