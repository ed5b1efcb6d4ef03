"""Runtime settings resolved from environment variables."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path


logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = Path("ffcompanion.sqlite")
DEFAULT_OPENAI_BASE_URL = "https://api.openai.com/v1"
DEFAULT_SLEEPER_BASE_URL = "https://api.sleeper.app/v1"


def _env_str(name: str, default: str | None = None) -> str | None:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip()


def _env_float(name: str, default: float, *, clamp_min: float | None = None, clamp_max: float | None = None) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Invalid float for %s: %s; using default %.2f", name, raw, default)
        return default
    if clamp_min is not None:
        value = max(clamp_min, value)
    if clamp_max is not None:
        value = min(clamp_max, value)
    return value


def _env_int(name: str, default: int, *, min_value: int | None = None) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Invalid int for %s: %s; using default %d", name, raw, default)
        return default
    if min_value is not None:
        value = max(min_value, value)
    return value


@dataclass(frozen=True)
class Settings:
    openai_api_key: str | None = None
    openai_base_url: str = DEFAULT_OPENAI_BASE_URL
    model_standard: str = "gpt-3.5-turbo"
    model_advanced: str = "gpt-4"
    max_output_tokens: int = 500
    temperature: float = 0.7
    request_timeout: float = 60.0
    max_prompt_chars: int = 60_000
    environment: str = "production"
    db_path: Path = DEFAULT_DB_PATH
    supabase_url: str | None = None
    supabase_key: str | None = None
    sleeper_base_url: str = DEFAULT_SLEEPER_BASE_URL
    sleeper_token: str | None = None
    cache_ttl: float = 300.0

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"

    @property
    def uses_supabase(self) -> bool:
        return bool(self.supabase_url and self.supabase_key)

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            openai_api_key=_env_str("OPENAI_API_KEY"),
            openai_base_url=_env_str("FFC_OPENAI_BASE_URL", DEFAULT_OPENAI_BASE_URL) or DEFAULT_OPENAI_BASE_URL,
            model_standard=_env_str("FFC_MODEL_STANDARD", cls.model_standard) or cls.model_standard,
            model_advanced=_env_str("FFC_MODEL_ADVANCED", cls.model_advanced) or cls.model_advanced,
            max_output_tokens=_env_int("FFC_MAX_OUTPUT_TOKENS", cls.max_output_tokens, min_value=1),
            temperature=_env_float("FFC_TEMPERATURE", cls.temperature, clamp_min=0.0, clamp_max=2.0),
            request_timeout=_env_float("FFC_REQUEST_TIMEOUT", cls.request_timeout, clamp_min=1.0),
            max_prompt_chars=_env_int("FFC_MAX_PROMPT_CHARS", cls.max_prompt_chars, min_value=1_000),
            environment=_env_str("FFC_ENV", cls.environment) or cls.environment,
            db_path=Path(_env_str("FFC_DB_PATH", str(DEFAULT_DB_PATH)) or DEFAULT_DB_PATH),
            supabase_url=_env_str("SUPABASE_URL"),
            supabase_key=_env_str("SUPABASE_KEY"),
            sleeper_base_url=_env_str("SLEEPER_BASE_URL", DEFAULT_SLEEPER_BASE_URL) or DEFAULT_SLEEPER_BASE_URL,
            sleeper_token=_env_str("SLEEPER_TOKEN"),
            cache_ttl=_env_float("FFC_CACHE_TTL", cls.cache_ttl, clamp_min=0.0),
        )
