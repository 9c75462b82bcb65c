from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_PROVIDER_URL = "https://api.dify.ai/v1"
DEFAULT_COMBAT_TIMEOUT_S = 25.0
DEFAULT_REVIEW_TIMEOUT_S = 60.0


def get_float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def get_int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def get_optional_env(name: str) -> str | None:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    return raw.strip()


def is_on(name: str, default: str = "off") -> bool:
    return os.getenv(name, default).strip().casefold() == "on"


def state_dir() -> Path:
    configured = os.getenv("SALESGUARD_STATE_DIR")
    if configured:
        return Path(configured).expanduser()
    return Path.home() / ".salesguard"


@dataclass(frozen=True)
class Settings:
    provider_url: str
    combat_api_key: str | None
    review_api_key: str | None
    combat_timeout_s: float
    review_timeout_s: float
    review_demo_delay_s: float
    catalog_path: str | None

    @property
    def review_configured(self) -> bool:
        return self.review_api_key is not None

    @property
    def combat_configured(self) -> bool:
        return self.combat_api_key is not None


def load_settings() -> Settings:
    return Settings(
        provider_url=(os.getenv("SALESGUARD_PROVIDER_URL") or DEFAULT_PROVIDER_URL).rstrip("/"),
        combat_api_key=get_optional_env("SALESGUARD_COMBAT_API_KEY"),
        review_api_key=get_optional_env("SALESGUARD_REVIEW_API_KEY"),
        combat_timeout_s=max(0.1, get_float_env("SALESGUARD_COMBAT_TIMEOUT_S", DEFAULT_COMBAT_TIMEOUT_S)),
        review_timeout_s=max(0.1, get_float_env("SALESGUARD_REVIEW_TIMEOUT_S", DEFAULT_REVIEW_TIMEOUT_S)),
        review_demo_delay_s=max(0.0, get_float_env("SALESGUARD_REVIEW_DEMO_DELAY_S", 0.0)),
        catalog_path=get_optional_env("SALESGUARD_CATALOG_PATH"),
    )
