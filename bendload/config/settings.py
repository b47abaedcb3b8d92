"""
bendload settings

Values are read from the environment (and a local .env file when present)
each time a config dict is requested, so a bad value surfaces as a
ConfigError inside the load instead of at import.
"""

import os
from pathlib import Path
from typing import Any, Dict, Tuple

import requests
from dotenv import load_dotenv

from bendload.utils.errors import ConfigError

load_dotenv()

PROJECT_ROOT = Path(__file__).parent.parent.parent

DEFAULT_BATCH_SIZE = 100_000  # Records per batch

LOG_DIR = Path(os.getenv("BENDLOAD_LOG_DIR", str(Path.cwd() / "logs")))
LOG_LEVEL = os.getenv("BENDLOAD_LOG_LEVEL", "INFO")

SUPPORTED_PROFILES = ("local",)
SUPPORTED_FORMATS = ("csv",)

STATEMENT_PATH = "/v1/statement"


def _env_int(name: str, default: int, minimum: int = 0) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}")
    if value < minimum:
        raise ConfigError(f"{name} must be at least {minimum}, got {value}")
    return value


def get_query_config() -> Dict[str, Any]:
    """Databend HTTP handler settings"""
    return {
        "scheme": os.getenv("BENDLOAD_SCHEME", "http"),
        "host": os.getenv("BENDLOAD_HOST", "127.0.0.1"),
        "http_port": _env_int("BENDLOAD_HTTP_PORT", 8000, minimum=1),
        "user": os.getenv("BENDLOAD_USER", "root"),
        "password": os.getenv("BENDLOAD_PASSWORD", ""),
        "timeout": _env_int("BENDLOAD_QUERY_TIMEOUT", 1800, minimum=1),  # 30 minutes
    }


def get_load_config() -> Dict[str, Any]:
    """Batching and source settings"""
    return {
        "batch_size": _env_int("BENDLOAD_BATCH_SIZE", DEFAULT_BATCH_SIZE, minimum=1),
        "skip_head_lines": _env_int("BENDLOAD_SKIP_HEAD_LINES", 0),
        "workers": _env_int("BENDLOAD_TRANSFORM_WORKERS", os.cpu_count() or 1, minimum=1),
        "fetch_timeout": _env_int("BENDLOAD_FETCH_TIMEOUT", 300, minimum=1),
    }


def check_profile(profile: str) -> str:
    if profile not in SUPPORTED_PROFILES:
        raise ConfigError(f"Currently profile only support {', '.join(SUPPORTED_PROFILES)}")
    return profile


def check_format(file_format: str) -> str:
    if file_format.lower() not in SUPPORTED_FORMATS:
        raise ConfigError(f"Unsupported format {file_format}, supported: {', '.join(SUPPORTED_FORMATS)}")
    return file_format.lower()


def build_query_endpoint(profile: str = "local") -> Tuple[requests.Session, str]:
    """
    Build the HTTP session and statement URL for a profile

    Args:
        profile: Profile name, only "local" is supported

    Returns:
        Tuple of (session with basic auth, statement endpoint URL)
    """
    check_profile(profile)
    config = get_query_config()

    if not config["host"]:
        raise ConfigError("BENDLOAD_HOST is empty, cannot build query endpoint")

    url = f"{config['scheme']}://{config['host']}:{config['http_port']}{STATEMENT_PATH}"

    session = requests.Session()
    session.auth = (config["user"], config["password"])
    return session, url
