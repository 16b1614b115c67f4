"""Service configuration loaded from the environment."""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv


DEFAULT_MAX_PAYLOAD_BYTES = 100 * 1024 * 1024  # 100MB


def _int_setting(env: Mapping[str, str], key: str, default: int) -> int:
    raw = env.get(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{key} must be an integer, got {raw!r}") from None


@dataclass(frozen=True)
class ServiceConfig:
    """Settings shared by the REST and MCP front-ends."""
    service_name: str = "JSON Query Transformation Service"
    engine: str = "jq"
    max_payload_bytes: int = DEFAULT_MAX_PAYLOAD_BYTES
    host: str = "127.0.0.1"
    port: int = 8080
    log_level: str = "INFO"
    mcp_server_name: str = "jq-transformer"

    def __post_init__(self):
        if self.max_payload_bytes <= 0:
            raise ValueError("max_payload_bytes must be positive")

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> 'ServiceConfig':
        """
        Build a configuration from ``JQT_*`` environment variables.

        A ``.env`` file in the working directory is loaded first when reading
        the process environment.

        Args:
            env: Mapping to read instead of ``os.environ``

        Returns:
            ServiceConfig with defaults for unset variables
        """
        if env is None:
            load_dotenv()
            env = os.environ

        defaults = cls()
        return cls(
            service_name=env.get("JQT_SERVICE_NAME", defaults.service_name),
            engine=env.get("JQT_ENGINE", defaults.engine),
            max_payload_bytes=_int_setting(env, "JQT_MAX_PAYLOAD_BYTES", defaults.max_payload_bytes),
            host=env.get("JQT_HOST", defaults.host),
            port=_int_setting(env, "JQT_PORT", defaults.port),
            log_level=env.get("JQT_LOG_LEVEL", defaults.log_level).upper(),
            mcp_server_name=env.get("JQT_MCP_SERVER_NAME", defaults.mcp_server_name),
        )
