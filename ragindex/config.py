# ragindex/config.py
"""
Runtime settings, read from the environment.

A .env file in the working directory (or the one passed in) is loaded
first; variables already set in the environment win over it.
"""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import find_dotenv, load_dotenv

from .corpus import SEED_SCRIPT
from .errors import ConfigError
from .indexer import DEFAULT_RELEVANCE_FLOOR, DEFAULT_TOP_K
from .tokenizer import get_script

PROVIDERS = ("mock",)

_TRUE = {"1", "true", "t", "yes", "y", "on"}
_FALSE = {"0", "false", "f", "no", "n", "off"}


@dataclass(frozen=True)
class Settings:
    relevance_floor: float = DEFAULT_RELEVANCE_FLOOR
    top_k: int = DEFAULT_TOP_K
    script: str = SEED_SCRIPT
    ai_provider: str = "mock"
    debug: bool = True

    @property
    def log_level(self) -> str:
        return "DEBUG" if self.debug else "INFO"


def _get_float(key: str, default: float) -> float:
    value = os.getenv(key)
    if not value:
        return default
    try:
        return float(value)
    except ValueError:
        raise ConfigError(f"{key} must be a number, got {value!r}") from None


def _get_int(key: str, default: int) -> int:
    value = os.getenv(key)
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        raise ConfigError(f"{key} must be an integer, got {value!r}") from None


def _get_bool(key: str, default: bool) -> bool:
    value = os.getenv(key)
    if not value:
        return default
    value = value.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ConfigError(f"{key} must be a boolean, got {value!r}")


def load_settings(env_file: Optional[str] = None) -> Settings:
    load_dotenv(env_file or find_dotenv(usecwd=True))

    relevance_floor = _get_float("RAG_RELEVANCE_FLOOR", DEFAULT_RELEVANCE_FLOOR)
    if not 0.0 <= relevance_floor < 1.0:
        raise ConfigError(f"RAG_RELEVANCE_FLOOR must be in [0, 1), got {relevance_floor}")

    top_k = _get_int("RAG_TOP_K", DEFAULT_TOP_K)
    if top_k < 1:
        raise ConfigError(f"RAG_TOP_K must be at least 1, got {top_k}")

    script = get_script(os.getenv("RAG_SCRIPT") or SEED_SCRIPT).name

    ai_provider = (os.getenv("AI_PROVIDER") or "mock").strip().lower()
    if ai_provider not in PROVIDERS:
        raise ConfigError(f"AI_PROVIDER {ai_provider!r} is not served in-process, expected one of: {', '.join(PROVIDERS)}")

    return Settings(
        relevance_floor=relevance_floor,
        top_k=top_k,
        script=script,
        ai_provider=ai_provider,
        debug=_get_bool("DEBUG_MODE", True),
    )
