"""Helpers shared by CLI commands."""

import logging
from dataclasses import asdict
from datetime import datetime
from typing import Any

from prolingo.application.config import AppConfig, resolve_config
from prolingo.domain.review.models import ReviewItem, ReviewStats


def _resolve_with_overrides(**overrides: Any) -> AppConfig:
    """Resolve config with CLI overrides and apply the requested verbosity."""
    config = resolve_config(overrides)
    if config.verbose >= 2:
        logging.getLogger("prolingo").setLevel(logging.DEBUG)
    return config


def item_to_json(item: ReviewItem) -> dict[str, Any]:
    data = asdict(item)
    for key, value in data.items():
        if isinstance(value, datetime):
            data[key] = value.isoformat()
    return data


def stats_to_json(stats: ReviewStats) -> dict[str, Any]:
    data = asdict(stats)
    data["average_ease_factor"] = round(data["average_ease_factor"], 4)
    data["mastery_percentage"] = round(data["mastery_percentage"], 2)
    return data
