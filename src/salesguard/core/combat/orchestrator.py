from __future__ import annotations

import logging

from salesguard.core.catalog import StageCatalog
from salesguard.core.errors import ProviderTransportError
from salesguard.core.logging.redact import preview
from salesguard.core.provider.adapter import build_chat_turn
from salesguard.core.provider.client import ProviderClient
from salesguard.core.provider.extractor import Extracted, extract
from salesguard.core.provider.schemas import SetupProfile

from .fallbacks import offline_card, unparseable_card
from .schemas import CombatOutcome, CombatRequest, CombatState
from .session import reconcile


class CombatOrchestrator:
    """Serve one "what do I say next" turn.

    Every call ends in exactly one of three branches: a parsed card, a
    synthesized card for an unreadable answer, or an offline card when the
    provider is unreachable. Provider and parse failures never raise past
    ``run`` and no retry happens here. The instance holds no per-request
    state, so one orchestrator can serve concurrent requests.
    """

    def __init__(self, client: ProviderClient, catalog: StageCatalog | None = None, timeout_s: float | None = None) -> None:
        self.client = client
        self.catalog = catalog or StageCatalog()
        self.timeout_s = timeout_s
        self.logger = logging.getLogger("salesguard.combat")

    def _step(self, current: CombatState, nxt: CombatState) -> CombatState:
        self.logger.debug("combat_state", extra={"extra_fields": {"from": current.value, "to": nxt.value}})
        return nxt

    def run(self, request: CombatRequest) -> CombatOutcome:
        state = CombatState.IDLE
        current_id = request.conversation_id or None
        turn = build_chat_turn(
            SetupProfile(industry=request.industry, product_name=request.product_name, role=request.role),
            stage=request.stage,
            problem_type=request.problem_type,
            query=request.query,
            trigger_value=request.trigger_value,
            conversation_id=current_id,
            user_id=request.user_id,
        )
        state = self._step(state, CombatState.REQUEST_BUILT)

        try:
            reply = self.client.run_chat_message(turn, timeout_s=self.timeout_s)
        except ProviderTransportError as exc:
            self.logger.warning(
                "combat_provider_unavailable",
                extra={"extra_fields": {"reason": str(exc), "status_code": exc.status_code, "stage": request.stage}},
            )
            trigger = self.catalog.find_trigger(request.stage, request.trigger_value)
            card = offline_card(request.problem_type, request.query, trigger)
            return self._finish(state, CombatState.NETWORK_FAILURE_FALLBACK, card.model_dump(), current_id, False)

        state = self._step(state, CombatState.PROVIDER_CALLED)
        session = reconcile(current_id, reply.conversation_id)

        result = extract(reply.answer)
        if isinstance(result, Extracted) and isinstance(result.value, dict):
            self.logger.info(
                "combat_answer_parsed",
                extra={"extra_fields": {"strategy": result.strategy, "has_scripts": bool(result.value.get("scripts"))}},
            )
            return self._finish(state, CombatState.PARSED_SUCCESS, result.value, session.effective, session.changed)

        self.logger.warning(
            "combat_answer_unparseable",
            extra={"extra_fields": {"answer_len": len(reply.answer), "answer_preview": preview(reply.answer)}},
        )
        card = unparseable_card(reply.answer)
        return self._finish(state, CombatState.PARSED_FAILURE_FALLBACK, card.model_dump(), session.effective, session.changed)

    def _finish(
        self,
        current: CombatState,
        branch: CombatState,
        card: dict,
        conversation_id: str | None,
        changed: bool,
    ) -> CombatOutcome:
        self._step(self._step(current, branch), CombatState.DONE)
        return CombatOutcome(card=card, conversation_id=conversation_id, conversation_changed=changed, state=branch)
