from __future__ import annotations

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, Field


class Script(BaseModel):
    type: Literal["soft", "challenger", "direct"]
    content: str


class Attachment(BaseModel):
    name: str
    url: str


class TacticalCard(BaseModel):
    diagnosis: str
    tags: list[str] = Field(default_factory=list)
    scripts: list[Script] = Field(default_factory=list)
    warning: str = ""
    files: list[Attachment] = Field(default_factory=list)


class CombatRequest(BaseModel):
    industry: str
    product_name: str
    role: str
    stage: str
    trigger_value: str
    problem_type: str
    query: str | None = None
    conversation_id: str | None = None
    user_id: str | None = None


class CombatState(str, Enum):
    IDLE = "idle"
    REQUEST_BUILT = "request_built"
    PROVIDER_CALLED = "provider_called"
    PARSED_SUCCESS = "parsed_success"
    PARSED_FAILURE_FALLBACK = "parsed_failure_fallback"
    NETWORK_FAILURE_FALLBACK = "network_failure_fallback"
    DONE = "done"


class CombatOutcome(BaseModel):
    card: dict[str, Any]
    conversation_id: str | None = None
    conversation_changed: bool = False
    state: CombatState

    @property
    def degraded(self) -> bool:
        return self.state is not CombatState.PARSED_SUCCESS
