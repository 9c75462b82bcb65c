from __future__ import annotations

import httpx
import pytest

from salesguard.core.http.client import request_with_retry
from salesguard.core.errors import SalesGuardHTTPNetworkError, SalesGuardHTTPStatusError


def _patch_client(monkeypatch, handler) -> None:
    client = httpx.Client(transport=httpx.MockTransport(handler))
    monkeypatch.setattr("salesguard.core.http.client.get_http_client", lambda: client)
    monkeypatch.setattr("salesguard.core.http.client.time.sleep", lambda _: None)
    monkeypatch.setattr("salesguard.core.http.client.random.random", lambda: 0.5)


def test_request_with_retry_retries_transient_http_status(monkeypatch) -> None:
    calls = {"count": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        calls["count"] += 1
        if calls["count"] < 3:
            return httpx.Response(503, request=request)
        return httpx.Response(200, request=request, json={"ok": True})

    _patch_client(monkeypatch, handler)

    response = request_with_retry("GET", "http://service.local/test", retries=2)

    assert response.status_code == 200
    assert calls["count"] == 3


def test_no_retry_by_default(monkeypatch) -> None:
    calls = {"count": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        calls["count"] += 1
        return httpx.Response(503, request=request)

    _patch_client(monkeypatch, handler)

    with pytest.raises(SalesGuardHTTPStatusError) as excinfo:
        request_with_retry("POST", "http://service.local/test", json={})

    assert excinfo.value.status_code == 503
    assert calls["count"] == 1


def test_retries_from_environment(monkeypatch) -> None:
    calls = {"count": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        calls["count"] += 1
        raise httpx.ConnectError("down", request=request)

    monkeypatch.setenv("SALESGUARD_HTTP_RETRIES", "1")
    _patch_client(monkeypatch, handler)

    with pytest.raises(SalesGuardHTTPNetworkError):
        request_with_retry("GET", "http://service.local/test")

    assert calls["count"] == 2


def test_non_ascii_header_is_a_network_error(monkeypatch) -> None:
    calls = {"count": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        calls["count"] += 1
        return httpx.Response(200, request=request)

    _patch_client(monkeypatch, handler)

    with pytest.raises(SalesGuardHTTPNetworkError):
        request_with_retry("POST", "http://service.local/test", headers={"Authorization": "Bearer 密钥"}, json={})

    assert calls["count"] == 0
