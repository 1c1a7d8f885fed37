from __future__ import annotations
import logging
import os
from dataclasses import dataclass
from typing import Optional

log = logging.getLogger(__name__)

_TRUTHY = {"1", "true", "yes", "on"}


def env(key: str, default: str | None = None) -> str | None:
    v = os.getenv(key)
    if v is None or v.strip() == "":
        return default
    return v.strip()


def env_bool(key: str, default: bool = False) -> bool:
    v = env(key)
    if v is None:
        return default
    return v.lower() in _TRUTHY


def env_int(key: str, default: int) -> int:
    v = env(key)
    if v is None:
        return default
    try:
        return int(v)
    except ValueError:
        log.warning("%s=%r is not an integer, using %d", key, v, default)
        return default


@dataclass(frozen=True)
class Settings:
    # --- Consul ---
    consul_host: str = "127.0.0.1"
    consul_port: int = 8500
    consul_secure: bool = False
    consul_token: Optional[str] = None
    consul_timeout: int = 60

    # --- MCP surface ---
    expose_writes: bool = False

    # --- Runtime ---
    log_level: str = "INFO"
    service_name: str = "consul-mcp-gateway"
    version: str = "0.1.0"


def load_settings() -> Settings:
    """Read settings from the process environment.

    Called at the entry points after ``load_dotenv()`` so a ``.env`` file in
    the working directory is honoured.
    """
    return Settings(
        consul_host=env("CONSUL_HOST", "127.0.0.1"),
        consul_port=env_int("CONSUL_PORT", 8500),
        consul_secure=env_bool("CONSUL_SECURE"),
        consul_token=env("CONSUL_TOKEN"),
        consul_timeout=env_int("CONSUL_TIMEOUT", 60),
        expose_writes=env_bool("CONSUL_MCP_EXPOSE_WRITES"),
        log_level=(env("LOG_LEVEL", "INFO") or "INFO").upper(),
        service_name=env("SERVICE_NAME", "consul-mcp-gateway"),
        version=env("VERSION", "0.1.0"),
    )
