"""Configuration settings for the Character Concept Generator."""

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

# =============================================================================
# Path Configuration (always relative to project structure)
# =============================================================================

PROJECT_ROOT = Path(__file__).parent.parent.parent.parent
CONFIG_FILE = PROJECT_ROOT / "configs" / "config.yaml"

# Directory paths
DEFAULT_OUTPUT_DIR = PROJECT_ROOT / "output"
SESSIONS_DIR = Path(os.getenv("CONCEPTSHEET_SESSIONS_DIR", PROJECT_ROOT / "sessions"))

# Environment variables checked for the API credential, in order
API_KEY_ENV_VARS = ("GEMINI_API_KEY", "API_KEY")


# =============================================================================
# Config Loading
# =============================================================================


def load_config() -> dict[str, Any]:
    """Load configuration from config.yaml."""
    if CONFIG_FILE.exists():
        with open(CONFIG_FILE) as f:
            return yaml.safe_load(f) or {}
    return {}


def get_config(key: str, default: Any = None) -> Any:
    """Get a config value by dot-notation key (e.g., 'api.port')."""
    config = load_config()
    keys = key.split(".")
    value = config
    for k in keys:
        if isinstance(value, dict):
            value = value.get(k)
        else:
            return default
    return value if value is not None else default


# =============================================================================
# Convenience accessors
# =============================================================================


def get_api_host() -> str:
    return get_config("api.host", "0.0.0.0")


def get_api_port() -> int:
    return get_config("api.port", 8000)


def get_api_base_url() -> str:
    return f"http://localhost:{get_api_port()}"


def get_description_model_id() -> str:
    return get_config("models.description", "gemini-2.5-flash")


def get_image_model_id() -> str:
    return get_config("models.image", "imagen-3.0-generate-002")


def get_max_generation_attempts() -> int:
    return get_config("generation.max_attempts", 3)


def get_retry_delay_seconds() -> float:
    return float(get_config("generation.retry_delay_seconds", 2))


def get_max_image_size_mb() -> int:
    return get_config("uploads.max_image_size_mb", 4)


def get_max_image_size_bytes() -> int:
    return get_max_image_size_mb() * 1024 * 1024


def get_log_level() -> str:
    return str(get_config("logging.level", "INFO")).upper()


@lru_cache(maxsize=1)
def get_api_key() -> str | None:
    """Read the service credential once from the environment (or .env)."""
    load_dotenv()
    for name in API_KEY_ENV_VARS:
        value = os.getenv(name)
        if value:
            return value
    return None


def configure_logging(level: str | None = None) -> None:
    """Configure root logging for the process."""
    level_name = (level or get_log_level()).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
    )
