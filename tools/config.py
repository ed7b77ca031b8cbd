"""Todoist MCP configuration loaded from the environment."""
import logging
import os
from typing import Optional

TOKEN_ENV = "TODOIST_API_TOKEN"
TIMEOUT_ENV = "TODOIST_TIMEOUT"
LOG_LEVEL_ENV = "TODOIST_MCP_LOG_LEVEL"

DEFAULT_LOG_LEVEL = "INFO"

logger = logging.getLogger("todoist-mcp")


class ConfigError(Exception):
    """Raised when required configuration is missing."""
    pass


def get_api_token() -> str:
    """Read the Todoist API token from TODOIST_API_TOKEN."""
    token = os.environ.get(TOKEN_ENV, "").strip()
    if not token:
        raise ConfigError(
            f"{TOKEN_ENV} environment variable is required. "
            "Get your token at https://app.todoist.com/app/settings/integrations/developer"
        )
    return token


def get_timeout() -> Optional[float]:
    """Per-request timeout in seconds, or None when unset.

    An unparseable or non-positive value is ignored with a warning.
    """
    raw = os.environ.get(TIMEOUT_ENV, "").strip()
    if not raw:
        return None
    try:
        timeout = float(raw)
    except ValueError:
        logger.warning(f"Ignoring invalid {TIMEOUT_ENV}={raw!r}")
        return None
    if timeout <= 0:
        logger.warning(f"Ignoring non-positive {TIMEOUT_ENV}={raw!r}")
        return None
    return timeout


def get_log_level() -> str:
    level = os.environ.get(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL).strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        return DEFAULT_LOG_LEVEL
    return level


def get_debug_info() -> dict:
    """Return diagnostic info for troubleshooting config issues.

    The token value itself is never included.
    """
    return {
        "token_configured": bool(os.environ.get(TOKEN_ENV, "").strip()),
        "timeout": get_timeout(),
        "log_level": get_log_level(),
        "cwd": os.getcwd(),
    }
