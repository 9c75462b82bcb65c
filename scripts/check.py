#!/usr/bin/env python3
"""Pre-flight check for a SalesGuard deployment."""

from __future__ import annotations

import importlib
import os
import sys
from pathlib import Path

REQUIRED_PYTHON = (3, 11)


def main() -> int:
    errors: list[str] = []

    if sys.version_info >= REQUIRED_PYTHON:
        print(f"OK: Python {sys.version.split()[0]} (>= 3.11)")
    else:
        errors.append("Python 3.11+ is required. Fix: install Python 3.11+ and recreate your virtual environment.")

    try:
        importlib.import_module("salesguard")
        print("OK: import salesguard")
    except Exception as exc:
        errors.append(f"Could not import salesguard ({exc}). Fix: run `python -m pip install -e .[dev]` from repo root.")
        for message in errors:
            print(f"ERROR: {message}")
        return 1

    from salesguard.core.catalog import load_catalog
    from salesguard.core.config import is_on, load_settings, state_dir

    settings = load_settings()
    print(f"OK: provider base URL is {settings.provider_url}")

    if settings.combat_configured:
        print("OK: SALESGUARD_COMBAT_API_KEY is set")
    else:
        print("WARN: SALESGUARD_COMBAT_API_KEY is missing; combat turns will serve offline fallback cards")

    if settings.review_configured:
        print("OK: SALESGUARD_REVIEW_API_KEY is set")
    else:
        print("WARN: SALESGUARD_REVIEW_API_KEY is missing; review serves the fixed demo result")

    try:
        catalog = load_catalog(settings.catalog_path)
        print(f"OK: stage catalog loaded ({len(catalog.stages)} stages)")
    except Exception as exc:
        errors.append(f"Stage catalog failed to load: {exc}. Fix: verify SALESGUARD_CATALOG_PATH points at a valid YAML file.")

    if is_on("SALESGUARD_LOG_TO_FILE", "off"):
        log_dir = Path(os.getenv("SALESGUARD_LOG_DIR") or (state_dir() / "logs"))
        try:
            log_dir.mkdir(parents=True, exist_ok=True)
            marker = log_dir / ".write-check"
            marker.write_text("ok", encoding="utf-8")
            marker.unlink(missing_ok=True)
            print(f"OK: log directory writable at {log_dir}")
        except OSError as exc:
            errors.append(f"Log directory is not writable ({log_dir}): {exc}. Fix: set SALESGUARD_LOG_DIR or SALESGUARD_STATE_DIR.")

    if errors:
        for message in errors:
            print(f"ERROR: {message}")
        return 1

    print("OK: environment check passed")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
