from __future__ import annotations

from functools import lru_cache

from salesguard.core.catalog import StageCatalog, load_catalog
from salesguard.core.combat.orchestrator import CombatOrchestrator
from salesguard.core.config import Settings, load_settings
from salesguard.core.provider.client import ProviderClient
from salesguard.core.review.orchestrator import ReviewOrchestrator


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()


@lru_cache(maxsize=1)
def get_catalog() -> StageCatalog:
    return load_catalog(get_settings().catalog_path)


@lru_cache(maxsize=1)
def get_combat_orchestrator() -> CombatOrchestrator:
    settings = get_settings()
    client = ProviderClient(
        base_url=settings.provider_url,
        api_key=settings.combat_api_key,
        timeout_s=settings.combat_timeout_s,
    )
    return CombatOrchestrator(client=client, catalog=get_catalog(), timeout_s=settings.combat_timeout_s)


@lru_cache(maxsize=1)
def get_review_orchestrator() -> ReviewOrchestrator:
    settings = get_settings()
    client = ProviderClient(
        base_url=settings.provider_url,
        api_key=settings.review_api_key,
        timeout_s=settings.review_timeout_s,
    )
    return ReviewOrchestrator(
        client=client,
        timeout_s=settings.review_timeout_s,
        demo_delay_s=settings.review_demo_delay_s,
    )


def reset_dependencies() -> None:
    get_settings.cache_clear()
    get_catalog.cache_clear()
    get_combat_orchestrator.cache_clear()
    get_review_orchestrator.cache_clear()
