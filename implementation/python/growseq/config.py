"""Environment-driven settings for growseq containers."""

from __future__ import annotations

from functools import lru_cache
from typing import Any
import os

from pydantic import BaseModel, ConfigDict, Field

MAX_CAPACITY_ENV = "GROWSEQ_MAX_CAPACITY"
DEBUG_CHECKS_ENV = "GROWSEQ_DEBUG_CHECKS"

DEFAULT_MAX_CAPACITY = 2**32


class GrowSeqSettings(BaseModel):
    """Runtime limits and checks shared by every buffer and sequence."""

    model_config = ConfigDict(frozen=True)

    max_capacity: int = Field(default=DEFAULT_MAX_CAPACITY, ge=1)
    debug_checks: bool = True


def _settings_from_environ() -> dict[str, Any]:
    values: dict[str, Any] = {}
    max_capacity = os.environ.get(MAX_CAPACITY_ENV, "").strip()
    if max_capacity:
        values["max_capacity"] = max_capacity
    debug_checks = os.environ.get(DEBUG_CHECKS_ENV, "").strip()
    if debug_checks:
        values["debug_checks"] = debug_checks
    return values


@lru_cache(maxsize=1)
def get_settings() -> GrowSeqSettings:
    """Parse settings from the environment once and cache the result."""
    return GrowSeqSettings(**_settings_from_environ())


def reset_settings() -> None:
    """Drop cached settings so the next lookup re-reads the environment."""
    get_settings.cache_clear()
