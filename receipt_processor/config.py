""" Server configuration via environment variables """
import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 5000
TRUTHY_VALUES = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class ServerConfig:
    """ HTTP server configuration """

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    debug: bool = False
    log_level: int = logging.INFO


def _get_port() -> int:
    port_str = os.environ.get("RECEIPTS_PORT", str(DEFAULT_PORT))
    try:
        port = int(port_str)
    except ValueError:
        raise ValueError(f"RECEIPTS_PORT must be an integer, got {port_str!r}")
    if not 1 <= port <= 65535:
        raise ValueError(f"RECEIPTS_PORT must be between 1 and 65535, got {port}")
    return port


def _get_log_level() -> int:
    name = os.environ.get("RECEIPTS_LOG_LEVEL", "INFO").upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        raise ValueError(f"RECEIPTS_LOG_LEVEL is not a logging level: {name!r}")
    return level


def get_server_config() -> ServerConfig:
    """
    Build server configuration from environment variables.

    Optional: RECEIPTS_HOST (default 0.0.0.0), RECEIPTS_PORT (default 5000),
    RECEIPTS_DEBUG (default off), RECEIPTS_LOG_LEVEL (default INFO)
    """
    return ServerConfig(
        host=os.environ.get("RECEIPTS_HOST", DEFAULT_HOST),
        port=_get_port(),
        debug=os.environ.get("RECEIPTS_DEBUG", "").strip().lower() in TRUTHY_VALUES,
        log_level=_get_log_level(),
    )
