"""Environment variable and configuration file loading."""

from pathlib import Path
from typing import Any

import yaml

GLOBAL_CONFIG_DIRNAME = ".veracode-mcp"


def get_global_config_path() -> Path:
    """Return the path of the global ~/.veracode-mcp/config.yml file."""
    return Path.home() / GLOBAL_CONFIG_DIRNAME / "config.yml"


def load_env_file(env_path: Path) -> dict[str, str]:
    """Load environment variables from .env file."""
    env_vars = {}
    if env_path.exists():
        with open(env_path) as f:
            for line in f:
                line = line.strip()
                if line and not line.startswith("#") and "=" in line:
                    key, value = line.split("=", 1)
                    # Remove quotes if present
                    value = value.strip().strip("\"'")
                    env_vars[key.strip()] = value
    return env_vars


def load_global_config() -> dict[str, Any]:
    """Load global configuration from ~/.veracode-mcp/config.yml."""
    config_path = get_global_config_path()
    if config_path.exists():
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
        return data if isinstance(data, dict) else {}
    return {}


def load_project_config(project_dir: Path | None = None) -> dict[str, str]:
    """Load project-specific configuration from the .env file in project_dir (cwd by default)."""
    if project_dir is None:
        project_dir = Path.cwd()
    return load_env_file(project_dir / ".env")
