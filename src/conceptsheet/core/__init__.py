"""Core module for the Character Concept Generator business logic."""

from conceptsheet.core.config import (
    DEFAULT_OUTPUT_DIR,
    PROJECT_ROOT,
    SESSIONS_DIR,
    configure_logging,
    get_api_base_url,
    get_api_host,
    get_api_port,
    get_description_model_id,
    get_image_model_id,
    get_max_image_size_bytes,
)

__all__ = [
    "DEFAULT_OUTPUT_DIR",
    "PROJECT_ROOT",
    "SESSIONS_DIR",
    "configure_logging",
    "get_api_base_url",
    "get_api_host",
    "get_api_port",
    "get_description_model_id",
    "get_image_model_id",
    "get_max_image_size_bytes",
]
