from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from salesguard.core.errors import MalformedInputError, ReviewFailedError
from salesguard.core.logging.context import log_context
from salesguard.core.review.orchestrator import ReviewOrchestrator
from salesguard.core.review.schemas import ReviewRequest

from .deps import get_review_orchestrator

router = APIRouter()
logger = logging.getLogger("salesguard.api.review")


@router.post("")
def review(body: ReviewRequest, orchestrator: ReviewOrchestrator = Depends(get_review_orchestrator)):
    with log_context(flow="review"):
        try:
            return orchestrator.run(body)
        except MalformedInputError as exc:
            return JSONResponse(status_code=400, content={"error": str(exc)})
        except ReviewFailedError:
            logger.exception("review_failed")
            return JSONResponse(status_code=500, content={"error": "Internal Server Error"})
        except Exception:
            logger.exception("review_unexpected_error")
            return JSONResponse(status_code=500, content={"error": "Internal Server Error"})
