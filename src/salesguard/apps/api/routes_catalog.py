from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from salesguard.core.catalog import Stage, StageCatalog

from .deps import get_catalog

router = APIRouter()


@router.get("", response_model=StageCatalog)
def list_stages(catalog: StageCatalog = Depends(get_catalog)) -> StageCatalog:
    return catalog


@router.get("/{stage_id}", response_model=Stage)
def get_stage(stage_id: str, catalog: StageCatalog = Depends(get_catalog)) -> Stage:
    stage = catalog.get_stage(stage_id)
    if stage is None:
        raise HTTPException(status_code=404, detail=f"stage not found: {stage_id}")
    return stage
