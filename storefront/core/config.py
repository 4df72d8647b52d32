from functools import lru_cache
from typing import Literal, Optional
import os
from pydantic_settings import BaseSettings, SettingsConfigDict

EnvName = Literal["development", "production"]

# Gemini exposes an OpenAI-compatible endpoint, so one client covers both vendors
GEMINI_OPENAI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai/"

def _env_file_for(app_env: EnvName) -> str:
    return ".env.development" if app_env == "development" else ".env.production"

class Settings(BaseSettings):

    # Core
    APP_ENV: EnvName = "development"
    APP_NAME: str = "DiscvrAI Storefront"
    DEBUG: bool = False
    GIT_SHA: str = "unknown"

    # Redis (optional, falls back to in-process storage)
    REDIS_URL: str = ""
    session_ttl: Optional[int] = None          # seconds; None keeps slots forever

    # LLM
    OPENAI_API_KEY: str = ""
    OPENAI_BASE_URL: str = GEMINI_OPENAI_BASE_URL
    LLM_MODEL: str = "gemini-2.5-flash"
    openai_timeout_s: Optional[float] = None   # None = SDK default

    # Catalog
    CATALOG_PATH: str = ""                     # empty = bundled products.json

    # Storefront knobs
    tax_rate: float = 0.08
    search_history_limit: int = 5
    related_limit: int = 3

    # API
    api_prefix: str = "/api"

    # pydantic-settings config will be set dynamically in the factory below
    model_config = SettingsConfigDict(env_file=None, case_sensitive=True, extra="ignore")

@lru_cache
def get_settings() -> Settings:
    """
    Factory that chooses the right .env file based on APP_ENV.
    Cache makes it cheap to inject via FastAPI dependencies.
    """
    app_env: EnvName = os.getenv("APP_ENV", "development")  # earliest switch
    env_file = _env_file_for(app_env)
    return Settings(
                _env_file=env_file,  # load .env.development or .env.production
                _env_file_encoding="utf-8"
    )
