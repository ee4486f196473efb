"""
Bridge Configuration

Everything the bridge needs from the environment, resolved once at startup
into an immutable BridgeConfig that is passed to the tools explicitly.
"""

import dataclasses
import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional
from urllib.parse import urlparse

DEFAULT_SERVER_URL = "https://api.co-ai.run/api/mcp/analyze"
DEFAULT_TOKEN = "codenose-mcp-secret-key"
DEFAULT_USER_ID = "1"
DEFAULT_TIMEOUT = 120.0
DEFAULT_LOG_LEVEL = "INFO"

# Hosts for which certificate validation is switched off (self-signed dev servers)
LOCAL_HOSTS = frozenset({"localhost", "127.0.0.1"})

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class ConfigError(ValueError):
    """Raised when an environment value cannot be used."""
    pass


def is_local_endpoint(url: str) -> bool:
    """True if the URL points at a loopback host by literal name."""
    return urlparse(url).hostname in LOCAL_HOSTS


def _parse_timeout(raw: str) -> float:
    try:
        timeout = float(raw)
    except (TypeError, ValueError):
        raise ConfigError(f"COAI_TIMEOUT must be a number of seconds, got {raw!r}")
    if timeout <= 0:
        raise ConfigError(f"COAI_TIMEOUT must be positive, got {raw!r}")
    return timeout


def _parse_log_level(raw: str) -> str:
    level = raw.strip().upper()
    if level not in _LOG_LEVELS:
        raise ConfigError(f"COAI_LOG_LEVEL must be one of {', '.join(_LOG_LEVELS)}, got {raw!r}")
    return level


@dataclass(frozen=True)
class BridgeConfig:
    """Read-only settings shared by every tool invocation."""
    server_url: str = DEFAULT_SERVER_URL
    token: str = DEFAULT_TOKEN
    user_id: str = DEFAULT_USER_ID
    timeout: float = DEFAULT_TIMEOUT
    log_level: str = DEFAULT_LOG_LEVEL

    @property
    def verify_tls(self) -> bool:
        return not is_local_endpoint(self.server_url)

    @property
    def log_level_value(self) -> int:
        return getattr(logging, self.log_level)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "BridgeConfig":
        """
        Build the configuration from environment variables.
        Unset or empty variables fall back to the defaults.
        """
        env = os.environ if environ is None else environ

        return cls(
            server_url=env.get("COAI_SERVER_URL") or DEFAULT_SERVER_URL,
            token=env.get("COAI_MCP_TOKEN") or DEFAULT_TOKEN,
            user_id=env.get("COAI_USER_ID") or DEFAULT_USER_ID,
            timeout=_parse_timeout(env.get("COAI_TIMEOUT") or str(DEFAULT_TIMEOUT)),
            log_level=_parse_log_level(env.get("COAI_LOG_LEVEL") or DEFAULT_LOG_LEVEL),
        )

    def with_overrides(
        self,
        server_url: Optional[str] = None,
        user_id: Optional[str] = None,
        timeout: Optional[float] = None,
        log_level: Optional[str] = None,
    ) -> "BridgeConfig":
        """Return a copy with the given (non-None) values replaced."""
        changes = {}
        if server_url:
            changes["server_url"] = server_url
        if user_id:
            changes["user_id"] = user_id
        if timeout is not None:
            changes["timeout"] = _parse_timeout(str(timeout))
        if log_level:
            changes["log_level"] = _parse_log_level(log_level)
        return dataclasses.replace(self, **changes)
