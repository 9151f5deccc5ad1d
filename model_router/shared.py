# model_router/shared.py
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

# --- Logging Setup ---
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
log = logging.getLogger(__name__)

# --- Determine Project Root ---
# shared.py lives in model_router/, so ../ is the project root
try:
    BASE_DIR = Path(__file__).resolve().parent.parent
except NameError:
    BASE_DIR = Path(".").resolve()


# --- Settings Model ---
class Settings(BaseSettings):
    """Application settings loaded from environment variables."""
    VERSION: str = "0.3.0"
    APP_NAME: str = "model-router-backend"

    # Catalog
    CATALOG_PATH: Optional[str] = None

    # Dispatch
    HISTORY_WINDOW: int = Field(default=10, ge=0)
    MAX_OUTPUT_TOKENS: int = Field(default=4000, gt=0)
    DISPATCH_TIMEOUT_SECONDS: float = Field(default=30.0, gt=0)
    DEFAULT_TEMPERATURE: float = Field(default=0.7, ge=0.0, le=2.0)

    # OpenAI
    OPENAI_API_KEY: Optional[SecretStr] = None
    OPENAI_API_BASE_URL: str = "https://api.openai.com/v1"

    # Anthropic (OpenAI-compatible endpoint)
    ANTHROPIC_API_KEY: Optional[SecretStr] = None
    ANTHROPIC_API_BASE_URL: str = "https://api.anthropic.com/v1/"

    # Google (OpenAI-compatible endpoint)
    GOOGLE_API_KEY: Optional[SecretStr] = None
    GOOGLE_API_BASE_URL: str = "https://generativelanguage.googleapis.com/v1beta/openai/"

    # OpenRouter serves every provider without a dedicated endpoint
    OPENROUTER_API_KEY: Optional[SecretStr] = None
    OPENROUTER_API_BASE_URL: str = "https://openrouter.ai/api/v1"

    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:5173"]

    # Tell Pydantic to load from .env file IN THE PROJECT ROOT
    model_config = SettingsConfigDict(
        env_file=os.path.join(BASE_DIR, '.env'),
        env_file_encoding='utf-8',
        extra='ignore'
    )


# --- Instantiate Settings (Single Source of Truth) ---
try:
    log.info("Loading configuration settings...")
    settings = Settings()
    log.info("Configuration loaded successfully.")
    if settings.CATALOG_PATH:
        log.info(f"Using model catalog file: {settings.CATALOG_PATH}")
    else:
        log.info("No CATALOG_PATH set, using the built-in model catalog.")
    log.info(f"Using OpenRouter Base URL: {settings.OPENROUTER_API_BASE_URL}")
    log.info(f"History window: {settings.HISTORY_WINDOW} messages")
except Exception as e:
    log.critical(f"CRITICAL: Failed to load configuration settings: {e}")
    sys.exit(f"Configuration Error: {e}")


__all__ = [
    "settings",
    "Settings",
    "BASE_DIR",
]
