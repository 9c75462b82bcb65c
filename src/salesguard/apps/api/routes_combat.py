from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from salesguard.core.combat.orchestrator import CombatOrchestrator
from salesguard.core.combat.schemas import CombatRequest
from salesguard.core.logging.context import log_context

from .deps import get_combat_orchestrator

router = APIRouter()
logger = logging.getLogger("salesguard.api.combat")


class CombatBody(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    industry: str
    product_name: str = Field(alias="productName")
    role: str
    stage: str
    trigger_value: str = Field(alias="triggerValue")
    problem_type: str = Field(alias="problemType")
    query: str | None = None
    conversation_id: str | None = Field(default=None, alias="conversationId")
    user_id: str | None = Field(default=None, alias="userId")


@router.post("")
def combat(body: CombatBody, orchestrator: CombatOrchestrator = Depends(get_combat_orchestrator)):
    with log_context(conversation_id=body.conversation_id or None, flow="combat"):
        try:
            outcome = orchestrator.run(CombatRequest(**body.model_dump()))
        except Exception:
            logger.exception("combat_failed")
            return JSONResponse(status_code=500, content={"error": "Internal Server Error"})

    return {"data": outcome.card, "conversation_id": outcome.conversation_id}
