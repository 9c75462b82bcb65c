"""Stage/trigger script library loaded from YAML."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field

_DEF_PATH = Path(__file__).resolve().parent / "stages.yaml"


class Trigger(BaseModel):
    label: str
    value: str
    problem_type: str
    default_script: str = ""


class Stage(BaseModel):
    id: str
    name: str
    goal: str = ""
    triggers: list[Trigger] = Field(default_factory=list)


MANUAL_TRIGGER = Trigger(label="手动输入", value="manual_input", problem_type="Manual", default_script="")


class StageCatalog(BaseModel):
    stages: list[Stage] = Field(default_factory=list)

    def get_stage(self, stage_id: str) -> Optional[Stage]:
        return next((stage for stage in self.stages if stage.id == stage_id), None)

    def find_trigger(self, stage_id: str, value: str) -> Optional[Trigger]:
        if value == MANUAL_TRIGGER.value:
            return MANUAL_TRIGGER
        stage = self.get_stage(stage_id)
        if stage is None:
            return None
        return next((trigger for trigger in stage.triggers if trigger.value == value), None)


def load_catalog(path: Optional[str] = None) -> StageCatalog:
    """Load and validate the stage catalog from a YAML file."""
    configured = path or os.getenv("SALESGUARD_CATALOG_PATH")
    cfg_path = Path(configured).expanduser() if configured else _DEF_PATH
    with cfg_path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    return StageCatalog.model_validate(data)
