"""
Runtime configuration for the guidance engine.

Values come from the environment (a local .env file is loaded first).
"""

import os
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


class Settings(BaseModel):
    # Generative provider
    use_real_ai: bool = True
    openai_api_key: Optional[str] = None
    openai_model: str = "gpt-4o-mini"
    ai_temperature: float = Field(default=0.3, ge=0.0, le=2.0)
    ai_max_tokens: int = Field(default=1500, ge=100)
    ai_timeout_seconds: float = Field(default=30.0, gt=0)
    ai_max_retries: int = Field(default=1, ge=0, le=1)
    ai_inter_call_delay_seconds: float = Field(default=1.0, ge=0)

    # Matching
    top_recommendations: int = Field(default=3, ge=1, le=10)
    default_match_count: int = Field(default=10, ge=1)

    # Sessions
    session_ttl_hours: int = Field(default=24, ge=1)

    log_level: str = "INFO"


def load_settings() -> Settings:
    """Build settings from the current environment."""
    return Settings(
        use_real_ai=_env_bool("USE_REAL_AI", True),
        openai_api_key=os.getenv("OPENAI_API_KEY") or None,
        openai_model=os.getenv("OPENAI_MODEL", "gpt-4o-mini"),
        ai_temperature=float(os.getenv("AI_TEMPERATURE", "0.3")),
        ai_max_tokens=int(os.getenv("AI_MAX_TOKENS", "1500")),
        ai_timeout_seconds=float(os.getenv("AI_TIMEOUT_SECONDS", "30")),
        ai_max_retries=int(os.getenv("AI_MAX_RETRIES", "1")),
        ai_inter_call_delay_seconds=float(os.getenv("AI_INTER_CALL_DELAY_SECONDS", "1.0")),
        top_recommendations=int(os.getenv("TOP_RECOMMENDATIONS", "3")),
        default_match_count=int(os.getenv("DEFAULT_MATCH_COUNT", "10")),
        session_ttl_hours=int(os.getenv("SESSION_TTL_HOURS", "24")),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
    )


@lru_cache()
def get_settings() -> Settings:
    return load_settings()
