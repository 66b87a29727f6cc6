"""Configuration getter functions."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

from veracode_mcp.core.errors import ConfigurationError

from .env_loader import load_global_config, load_project_config

DEFAULT_API_BASE_URL = "https://api.veracode.com/"
DEFAULT_PLATFORM_URL = "https://analysiscenter.veracode.com"
DEFAULT_TIMEOUT = 30.0
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

# API host -> analysis center host, per region
PLATFORM_HOSTS = {
    "api.veracode.com": "https://analysiscenter.veracode.com",
    "api.veracode.eu": "https://analysiscenter.veracode.eu",
    "api.veracode.us": "https://analysiscenter.veracode.us",
}

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Credentials:
    """API credentials for request signing."""

    api_id: str
    api_key: str


def get_config(key: str, project_dir: Path | None = None, default: Any = None) -> Any:
    """
    Get configuration value with priority:
    1. Environment variable
    2. Project .env file
    3. Global config file
    4. Default value

    Args:
        key: Configuration key
        project_dir: Optional project directory
        default: Default value if not found

    Returns:
        Configuration value or default
    """
    # 1. Check environment variable
    env_value = os.environ.get(key)
    if env_value:
        return env_value

    # 2. Check project .env file
    project_config = load_project_config(project_dir)
    if project_config.get(key):
        return project_config[key]

    # 3. Check global config
    global_config = load_global_config()
    if global_config.get(key) not in (None, ""):
        return global_config[key]

    # 4. Return default
    return default


def get_credentials(project_dir: Path | None = None) -> Credentials:
    """
    Get the API id/key pair.

    Raises:
        ConfigurationError: if either value is missing
    """
    api_id = get_config("VERACODE_API_ID", project_dir)
    api_key = get_config("VERACODE_API_KEY", project_dir)
    missing = [
        name
        for name, value in (("VERACODE_API_ID", api_id), ("VERACODE_API_KEY", api_key))
        if not value
    ]
    if missing:
        raise ConfigurationError(
            f"Missing required credentials: {', '.join(missing)}. "
            "Set them in the environment, a .env file, or ~/.veracode-mcp/config.yml."
        )
    return Credentials(api_id=str(api_id), api_key=str(api_key))


def get_api_base_url(project_dir: Path | None = None) -> str:
    """Get the REST API base URL (always ends with a slash)."""
    url = str(get_config("VERACODE_API_BASE_URL", project_dir, default=DEFAULT_API_BASE_URL))
    return url if url.endswith("/") else url + "/"


def get_platform_url(project_dir: Path | None = None) -> str:
    """Get the web platform URL, derived from the API host when not set explicitly."""
    explicit = get_config("VERACODE_PLATFORM_URL", project_dir)
    if explicit:
        return str(explicit).rstrip("/")
    host = urlparse(get_api_base_url(project_dir)).hostname or ""
    return PLATFORM_HOSTS.get(host, DEFAULT_PLATFORM_URL)


def get_log_level(project_dir: Path | None = None) -> str:
    """Get log level name (default: INFO)."""
    level = str(get_config("LOG_LEVEL", project_dir, default="INFO")).upper()
    return level if level in LOG_LEVELS else "INFO"


def get_request_timeout(project_dir: Path | None = None) -> float:
    """Get HTTP timeout in seconds."""
    raw = get_config("VERACODE_TIMEOUT", project_dir, default=DEFAULT_TIMEOUT)
    try:
        timeout = float(raw)
    except (TypeError, ValueError):
        logger.warning("Ignoring invalid VERACODE_TIMEOUT value: %r", raw)
        return DEFAULT_TIMEOUT
    return timeout if timeout > 0 else DEFAULT_TIMEOUT


def mask_secret(value: str | None) -> str:
    """Mask a secret for display."""
    if not value:
        return ""
    return value[:8] + "..." + value[-4:] if len(value) > 12 else "***"
