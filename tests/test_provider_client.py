from __future__ import annotations

import json

import httpx
import pytest

from salesguard.core.errors import ProviderTransportError
from salesguard.core.provider.client import ProviderClient
from salesguard.core.provider.schemas import ChatTurn, WorkflowRun


def _turn(conversation_id: str | None = None) -> ChatTurn:
    return ChatTurn(query="q", inputs={"stage": "S1"}, user="u", conversation_id=conversation_id)


def test_chat_message_posts_bearer_and_blocking_body(provider_transport) -> None:
    seen = provider_transport(lambda request: httpx.Response(200, json={"answer": "{}", "conversation_id": "conv-1"}))
    client = ProviderClient(base_url="http://provider.local/v1/", api_key="secret-key")

    reply = client.run_chat_message(_turn("conv-0"))

    assert reply.answer == "{}"
    assert reply.conversation_id == "conv-1"
    request = seen[0]
    assert str(request.url) == "http://provider.local/v1/chat-messages"
    assert request.headers["Authorization"] == "Bearer secret-key"
    body = json.loads(request.content)
    assert body == {
        "query": "q",
        "inputs": {"stage": "S1"},
        "response_mode": "blocking",
        "user": "u",
        "conversation_id": "conv-0",
    }


def test_missing_key_sends_no_authorization_header(provider_transport) -> None:
    seen = provider_transport(lambda request: httpx.Response(200, json={"answer": ""}))
    client = ProviderClient(base_url="http://provider.local/v1", api_key=None)

    reply = client.run_chat_message(_turn())

    assert client.has_credentials is False
    assert "Authorization" not in seen[0].headers
    assert "conversation_id" not in json.loads(seen[0].content)
    assert reply.conversation_id is None


def test_error_status_becomes_transport_error(provider_transport) -> None:
    provider_transport(lambda request: httpx.Response(401, json={"message": "bad key"}))
    client = ProviderClient(base_url="http://provider.local/v1", api_key="k")

    with pytest.raises(ProviderTransportError) as excinfo:
        client.run_chat_message(_turn())

    assert excinfo.value.status_code == 401


def test_connection_failure_becomes_transport_error(provider_transport) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    provider_transport(handler)
    client = ProviderClient(base_url="http://provider.local/v1", api_key="k")

    with pytest.raises(ProviderTransportError) as excinfo:
        client.run_chat_message(_turn())

    assert excinfo.value.status_code is None


def test_non_json_body_becomes_transport_error(provider_transport) -> None:
    provider_transport(lambda request: httpx.Response(200, text="<html>gateway</html>"))
    client = ProviderClient(base_url="http://provider.local/v1", api_key="k")

    with pytest.raises(ProviderTransportError):
        client.run_chat_message(_turn())


def test_workflow_run_reads_outputs(provider_transport) -> None:
    seen = provider_transport(
        lambda request: httpx.Response(200, json={"data": {"outputs": {"result": '{"overallScore": 80}'}}})
    )
    client = ProviderClient(base_url="http://provider.local/v1", api_key="k")

    reply = client.run_workflow(WorkflowRun(inputs={"image": "abc"}, user="u"))

    assert reply.outputs == {"result": '{"overallScore": 80}'}
    assert str(seen[0].url) == "http://provider.local/v1/workflows/run"
    assert json.loads(seen[0].content) == {"inputs": {"image": "abc"}, "response_mode": "blocking", "user": "u"}


def test_workflow_run_without_outputs_yields_empty_mapping(provider_transport) -> None:
    provider_transport(lambda request: httpx.Response(200, json={"data": {}}))
    client = ProviderClient(base_url="http://provider.local/v1", api_key="k")

    reply = client.run_workflow(WorkflowRun(inputs={}, user="u"))

    assert reply.outputs == {}


def test_non_ascii_key_becomes_transport_error(provider_transport) -> None:
    seen = provider_transport(lambda request: httpx.Response(200, json={"answer": "{}"}))
    client = ProviderClient(base_url="http://provider.local/v1", api_key="密钥")

    with pytest.raises(ProviderTransportError):
        client.run_chat_message(_turn())

    assert seen == []
