from __future__ import annotations

import logging
import time
from typing import Any

from salesguard.core.errors import ProviderTransportError
from salesguard.core.http.client import request_with_retry
from salesguard.core.errors import SalesGuardHTTPError, SalesGuardHTTPStatusError

from .schemas import ChatTurn, ProviderReply, WorkflowRun

CHAT_ENDPOINT = "/chat-messages"
WORKFLOW_ENDPOINT = "/workflows/run"


class ProviderClient:
    def __init__(self, base_url: str, api_key: str | None, timeout_s: float = 30.0) -> None:
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key or None
        self.timeout_s = timeout_s
        self.logger = logging.getLogger("salesguard.provider")

    @property
    def has_credentials(self) -> bool:
        return self.api_key is not None

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    def _post(self, endpoint: str, payload: dict[str, Any], timeout_s: float | None) -> dict[str, Any]:
        start = time.perf_counter()
        ok = False
        status_code: int | None = None
        try:
            response = request_with_retry(
                "POST",
                f"{self.base_url}{endpoint}",
                headers=self._headers(),
                json=payload,
                timeout_override=timeout_s if timeout_s is not None else self.timeout_s,
            )
            status_code = response.status_code
            try:
                body = response.json()
            except ValueError as exc:
                raise ProviderTransportError(f"Provider returned a non-JSON body for {endpoint}", status_code=status_code) from exc
            if not isinstance(body, dict):
                raise ProviderTransportError(f"Provider returned a non-object body for {endpoint}", status_code=status_code)
            ok = True
            return body
        except SalesGuardHTTPStatusError as exc:
            status_code = exc.status_code
            raise ProviderTransportError(f"Provider API error: {exc.status_code} on {endpoint}", status_code=exc.status_code) from exc
        except SalesGuardHTTPError as exc:
            raise ProviderTransportError(f"Provider request failed on {endpoint}: {exc}") from exc
        finally:
            self.logger.info(
                "provider_call",
                extra={
                    "extra_fields": {
                        "endpoint": endpoint,
                        "duration_ms": int((time.perf_counter() - start) * 1000),
                        "ok": ok,
                        "status_code": status_code,
                        "authenticated": self.has_credentials,
                    }
                },
            )

    def run_chat_message(self, turn: ChatTurn, timeout_s: float | None = None) -> ProviderReply:
        body = self._post(CHAT_ENDPOINT, turn.to_payload(), timeout_s)
        answer = body.get("answer")
        conversation_id = body.get("conversation_id")
        return ProviderReply(
            answer=answer if isinstance(answer, str) else "",
            conversation_id=str(conversation_id) if conversation_id else None,
        )

    def run_workflow(self, run: WorkflowRun, timeout_s: float | None = None) -> ProviderReply:
        body = self._post(WORKFLOW_ENDPOINT, run.to_payload(), timeout_s)
        data = body.get("data")
        outputs = data.get("outputs") if isinstance(data, dict) else None
        return ProviderReply(outputs=outputs if isinstance(outputs, dict) else {})
