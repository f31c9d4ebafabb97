import json
import logging
import os
from typing import Any, Dict

from pydantic import ValidationError

from tagsummary.schemas import FormatOptions, SummarySettings, SummarySettingsUpdate

logger = logging.getLogger(__name__)

SETTINGS_PATH = os.getenv("SETTINGS_PATH", "./settings.json")


def _ensure_parent_dir(path: str) -> None:
    parent = os.path.dirname(os.path.abspath(path))
    if parent and not os.path.exists(parent):
        os.makedirs(parent, exist_ok=True)


def _load_raw() -> Dict[str, Any]:
    if not os.path.exists(SETTINGS_PATH):
        return {}
    try:
        with open(SETTINGS_PATH, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError):
        # Minimal resilience: fall back to defaults if corrupted/unreadable
        logger.warning("Settings store: %s unreadable; using defaults", SETTINGS_PATH)
        return {}
    return data if isinstance(data, dict) else {}


def load_settings() -> SummarySettings:
    """Defaults overlaid with whatever known keys are stored on disk."""
    stored = _load_raw()
    known = {k: v for k, v in stored.items() if k in SummarySettings.model_fields}
    try:
        return SummarySettings.model_validate({**SummarySettings().model_dump(), **known})
    except ValidationError:
        logger.warning("Settings store: invalid values in %s; using defaults", SETTINGS_PATH)
        return SummarySettings()


def save_settings(settings: SummarySettings) -> None:
    _ensure_parent_dir(SETTINGS_PATH)
    with open(SETTINGS_PATH, "w", encoding="utf-8") as f:
        json.dump(settings.model_dump(mode="json"), f, ensure_ascii=False, indent=2)


def update_settings(patch: SummarySettingsUpdate) -> SummarySettings:
    current = load_settings()
    updated = current.model_copy(update=patch.model_dump(exclude_none=True))
    save_settings(updated)
    return updated


def format_options(settings: SummarySettings | None = None) -> FormatOptions:
    """The two toggles the formatter reads."""
    settings = settings or load_settings()
    return FormatOptions(include_link=settings.include_link, include_callout=settings.include_callout)
