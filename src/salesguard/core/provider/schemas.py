from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

RESPONSE_MODE_BLOCKING = "blocking"


class SetupProfile(BaseModel):
    industry: str = ""
    product_name: str = ""
    role: str = ""


class ChatTurn(BaseModel):
    query: str
    inputs: dict[str, str] = Field(default_factory=dict)
    user: str
    conversation_id: str | None = None

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "query": self.query,
            "inputs": dict(self.inputs),
            "response_mode": RESPONSE_MODE_BLOCKING,
            "user": self.user,
        }
        if self.conversation_id:
            payload["conversation_id"] = self.conversation_id
        return payload


class WorkflowRun(BaseModel):
    inputs: dict[str, str] = Field(default_factory=dict)
    user: str

    def to_payload(self) -> dict[str, Any]:
        return {
            "inputs": dict(self.inputs),
            "response_mode": RESPONSE_MODE_BLOCKING,
            "user": self.user,
        }


class ProviderReply(BaseModel):
    answer: str = ""
    conversation_id: str | None = None
    outputs: dict[str, Any] = Field(default_factory=dict)
