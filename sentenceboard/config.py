"""Configuration loading."""

import copy
import os
from typing import Optional

import yaml
from dotenv import load_dotenv

DEFAULTS = {
    "server": {
        "base_url": "http://localhost:3000",
        "timeout": 10,
        "headers": {},
    },
    "auth": {
        "login_path": "/auth/login",
    },
    "user": {
        "name": "",
    },
    "ui": {
        "search_debounce": 0.3,
        "open_browser": True,
    },
    "logging": {
        "file": "sentenceboard.log",
        "level": "INFO",
    },
}


def _merge(base: dict, override: dict) -> dict:
    """Recursively merge ``override`` into a copy of ``base``."""
    result = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = _merge(result[key], value)
        else:
            result[key] = value
    return result


def load_config(config_path: Optional[str] = None) -> dict:
    """Load configuration from file, then apply environment overrides."""
    load_dotenv()

    paths_to_try = [
        config_path,
        "config.yaml",
        os.path.expanduser("~/.config/sentenceboard/config.yaml"),
    ]

    config = copy.deepcopy(DEFAULTS)
    for path in paths_to_try:
        if path and os.path.exists(path):
            with open(path, "r") as f:
                config = _merge(DEFAULTS, yaml.safe_load(f) or {})
            break

    # Environment overrides
    if os.environ.get("SENTENCEBOARD_URL"):
        config["server"]["base_url"] = os.environ["SENTENCEBOARD_URL"]
    if os.environ.get("SENTENCEBOARD_USER"):
        config["user"]["name"] = os.environ["SENTENCEBOARD_USER"]
    if os.environ.get("SENTENCEBOARD_COOKIE"):
        config["server"]["headers"] = dict(config["server"].get("headers") or {})
        config["server"]["headers"]["Cookie"] = os.environ["SENTENCEBOARD_COOKIE"]

    return config
