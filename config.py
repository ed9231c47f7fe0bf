"""Configuration for Configured Sinks."""
import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Default values - override via environment variables or a .env file
_DEFAULTS = {
    "config_path": str(Path(__file__).parent / "config.json"),
    "scan_timeout": "3",
    "scan_workers": "8",
}

# Map setting keys to env var names
_ENV_MAP = {
    "config_path": "SINKS_CONFIG_PATH",
    "scan_timeout": "SINKS_SCAN_TIMEOUT",
    "scan_workers": "SINKS_SCAN_WORKERS",
}


def get_setting(key: str, default: str = None) -> str:
    """
    Get a setting value with priority:
    1. Environment variable
    2. Explicit default
    3. Built-in default
    """
    env_name = _ENV_MAP.get(key)
    if env_name:
        env_val = os.getenv(env_name)
        if env_val:
            return env_val

    return default or _DEFAULTS.get(key, "")


# Web Server Settings
WEB_HOST = os.getenv("WEB_HOST", "0.0.0.0")
WEB_PORT = int(os.getenv("WEB_PORT", "8000"))


def get_sinks_settings() -> dict:
    """Get current settings for the document store and the scanner."""
    return {
        "config_path": get_setting("config_path"),
        "scan_timeout": float(get_setting("scan_timeout")),
        "scan_workers": max(1, int(get_setting("scan_workers"))),
    }
