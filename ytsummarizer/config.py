"""
Configuration settings for the YouTube transcript summarizer.
"""

import os
from typing import List, Optional
from pathlib import Path
from dotenv import load_dotenv


# Ensure environment variables are loaded
load_dotenv()


def _env_number(name: str, default, cast):
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    try:
        return cast(value)
    except ValueError:
        print(f"WARNING: {name}={value!r} is not a valid number, using {default}.")
        return default


def _env_int(name: str, default: Optional[int]) -> Optional[int]:
    return _env_number(name, default, int)


def _env_float(name: str, default: float) -> float:
    return _env_number(name, default, float)


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_list(name: str, default: List[str]) -> List[str]:
    value = os.getenv(name)
    if not value:
        return default
    return [item.strip() for item in value.split(",") if item.strip()]


class Config:
    """Base configuration class."""

    # Application info
    APP_NAME = "YouTube Transcript Summarizer"
    APP_VERSION = "0.2.0"

    # Directories
    BASE_DIR = Path(__file__).resolve().parent.parent.absolute()
    MODELS_DIR = Path(os.getenv("MODELS_DIR", str(BASE_DIR / "models")))
    LOG_DIR = Path(os.getenv("LOG_DIR", str(BASE_DIR / "logs")))

    # Local model settings
    MODEL_CONTEXT_SIZE = _env_int("MODEL_CONTEXT_SIZE", 2048)
    MODEL_GPU_LAYERS = _env_int("MODEL_GPU_LAYERS", 0)
    MODEL_THREADS = _env_int("MODEL_THREADS", None)
    MODEL_MAX_TOKENS = _env_int("MODEL_MAX_TOKENS", 150)

    # Summarization
    MAX_TRANSCRIPT_CHARS = _env_int("MAX_TRANSCRIPT_CHARS", 1500)
    REQUEST_TIMEOUT_SECONDS = _env_float("REQUEST_TIMEOUT_SECONDS", 120.0)
    CAPTION_LANGUAGES = _env_list("CAPTION_LANGUAGES", ["en", "a.en"])

    # HTTP
    CORS_ORIGINS = _env_list("CORS_ORIGINS", ["*"])
    ENABLE_SECURITY_HEADERS = _env_bool("ENABLE_SECURITY_HEADERS", False)
    # Summarize requests per client per minute, 0 disables the limit
    RATE_LIMIT_PER_MINUTE = _env_int("RATE_LIMIT_PER_MINUTE", 10)

    @classmethod
    def initialize(cls):
        """Initialize the application configuration."""
        cls.LOG_DIR.mkdir(parents=True, exist_ok=True)

        if not cls.MODELS_DIR.is_dir():
            print(f"WARNING: models directory {cls.MODELS_DIR} does not exist.")
            print("Summaries will use extractive fallback until a .gguf model is added.")


class DevelopmentConfig(Config):
    """Development configuration."""

    DEBUG = True
    LOG_LEVEL = "DEBUG"


class ProductionConfig(Config):
    """Production configuration."""

    DEBUG = False
    LOG_LEVEL = "INFO"


# Determine which configuration to use based on environment
def get_config():
    """Get the appropriate configuration based on environment."""
    env = os.getenv("ENVIRONMENT", "development").lower()
    if env == "production":
        return ProductionConfig
    else:
        return DevelopmentConfig


# Create a config instance
config = get_config()
config.initialize()
