from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class StageScore(BaseModel):
    id: str
    name: str
    score: int = Field(ge=0, le=100)
    status: Literal["success", "warning", "error"]


class Mistake(BaseModel):
    id: str
    stage: str
    original: str
    reason: str
    better_script: str


class ReviewResult(BaseModel):
    overallScore: int = Field(ge=0, le=100)
    stageScores: list[StageScore] = Field(default_factory=list)
    mistakes: list[Mistake] = Field(default_factory=list)


class ReviewRequest(BaseModel):
    image: str | None = None
    industry: str | None = None
    product: str | None = None
    role: str | None = None
    user_id: str | None = None
