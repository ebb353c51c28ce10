"""Configuration management and environment variable utilities."""

import os

from dotenv import load_dotenv


# Load environment variables from .env file
load_dotenv()

DEFAULT_BLOCK_LOG_PATH = "eth_log.json"
DEFAULT_LOG_LEVEL = "INFO"

_TRUTHY = {"1", "true", "yes", "on"}


def get_required_env(key: str) -> str:
    """Get a required environment variable.

    Args:
        key: Environment variable name

    Returns:
        Environment variable value

    Raises:
        ValueError: If the environment variable is not set

    Example:
        ```python
        from src.helpers.config import get_required_env

        path = get_required_env("BLOCK_LOG_PATH")
        ```
    """
    value = os.getenv(key)
    if not value:
        msg = f"{key} environment variable is not set"
        raise ValueError(msg)
    return value


def get_optional_env(key: str, default: str | None = None) -> str | None:
    """Get an optional environment variable with a default value.

    Args:
        key: Environment variable name
        default: Default value if not set

    Returns:
        Environment variable value or default
    """
    return os.getenv(key, default)


def get_block_log_path(path: str | None = None) -> str:
    """Get the block batch file path from parameter or environment.

    Args:
        path: Optional path to use directly

    Returns:
        Path of the JSON block log to ingest

    Example:
        ```python
        from src.helpers.config import get_block_log_path

        # Get from environment, falling back to ./eth_log.json
        path = get_block_log_path()

        # Or provide explicitly
        path = get_block_log_path("data/etc_blocks.json")
        ```
    """
    if path:
        return path

    return os.getenv("BLOCK_LOG_PATH") or DEFAULT_BLOCK_LOG_PATH


def get_log_level() -> str:
    """Get the log level name from the LOG_LEVEL environment variable."""
    return (os.getenv("LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper()


def get_log_color() -> bool:
    """Whether colored log output is enabled through LOG_COLOR."""
    return (os.getenv("LOG_COLOR") or "").strip().lower() in _TRUTHY


__all__ = [
    "DEFAULT_BLOCK_LOG_PATH",
    "DEFAULT_LOG_LEVEL",
    "get_block_log_path",
    "get_log_color",
    "get_log_level",
    "get_optional_env",
    "get_required_env",
]
