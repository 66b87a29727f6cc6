"""
Configuration management for veracode-mcp.

Supports multiple configuration sources in order of priority:
1. Environment variables (highest priority)
2. Project .env file (./.env)
3. Global config file (~/.veracode-mcp/config.yml)
4. Default values (lowest priority)
"""

from .env_loader import (
    get_global_config_path,
    load_env_file,
    load_global_config,
    load_project_config,
)
from .getters import (
    DEFAULT_API_BASE_URL,
    DEFAULT_PLATFORM_URL,
    Credentials,
    get_api_base_url,
    get_config,
    get_credentials,
    get_log_level,
    get_platform_url,
    get_request_timeout,
    mask_secret,
)

__all__ = [
    # env_loader
    "get_global_config_path",
    "load_env_file",
    "load_global_config",
    "load_project_config",
    # getters
    "DEFAULT_API_BASE_URL",
    "DEFAULT_PLATFORM_URL",
    "Credentials",
    "get_api_base_url",
    "get_config",
    "get_credentials",
    "get_log_level",
    "get_platform_url",
    "get_request_timeout",
    "mask_secret",
]
