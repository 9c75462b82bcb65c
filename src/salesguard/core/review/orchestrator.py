from __future__ import annotations

import logging
import time
from typing import Any

from pydantic import ValidationError

from salesguard.core.errors import MalformedInputError, ProviderTransportError, ReviewFailedError
from salesguard.core.logging.redact import preview
from salesguard.core.provider.adapter import build_workflow_run
from salesguard.core.provider.client import ProviderClient
from salesguard.core.provider.extractor import ParseFailure, extract
from salesguard.core.provider.schemas import SetupProfile

from .demo import demo_review_result
from .schemas import ReviewRequest, ReviewResult

OUTPUT_KEYS = ("result", "text")


def pick_output(outputs: dict[str, Any]) -> Any:
    for key in OUTPUT_KEYS:
        value = outputs.get(key)
        if value:
            return value
    return "{}"


class ReviewOrchestrator:
    def __init__(self, client: ProviderClient, timeout_s: float | None = None, demo_delay_s: float = 0.0) -> None:
        self.client = client
        self.timeout_s = timeout_s
        self.demo_delay_s = demo_delay_s
        self.logger = logging.getLogger("salesguard.review")

    def run(self, request: ReviewRequest) -> dict[str, Any]:
        if not request.image:
            raise MalformedInputError("Image is required")

        if not self.client.has_credentials:
            self.logger.info("review_demo_mode")
            if self.demo_delay_s > 0:
                time.sleep(self.demo_delay_s)
            return demo_review_result()

        run = build_workflow_run(
            SetupProfile(
                industry=request.industry or "",
                product_name=request.product or "",
                role=request.role or "",
            ),
            image_payload=request.image,
            user_id=request.user_id,
        )
        try:
            reply = self.client.run_workflow(run, timeout_s=self.timeout_s)
        except ProviderTransportError as exc:
            raise ReviewFailedError(f"Review workflow failed: {exc}") from exc

        output = pick_output(reply.outputs)
        if isinstance(output, dict):
            value: Any = output
        elif isinstance(output, str):
            result = extract(output)
            if isinstance(result, ParseFailure):
                self.logger.warning(
                    "review_output_unparseable",
                    extra={"extra_fields": {"output_len": len(output), "output_preview": preview(output)}},
                )
                raise ReviewFailedError(result.reason)
            self.logger.info("review_output_parsed", extra={"extra_fields": {"strategy": result.strategy}})
            value = result.value
        else:
            raise ReviewFailedError(f"Review workflow returned an unsupported output type: {type(output).__name__}")

        try:
            return ReviewResult.model_validate(value).model_dump()
        except ValidationError as exc:
            self.logger.warning(
                "review_output_invalid",
                extra={"extra_fields": {"errors": exc.error_count(), "output_preview": preview(str(value))}},
            )
            raise ReviewFailedError(f"Review workflow output is not a valid review result: {exc.error_count()} error(s)") from exc
