"""
Runtime configuration for the Clarify server, read from environment variables.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional


@dataclass
class ServerConfig:
    """Server configuration"""
    host: str = "127.0.0.1"
    port: int = 8000
    log_level: str = "INFO"
    log_format: str = "simple"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ServerConfig":
        """
        Load configuration from environment variables.

        Args:
            environ: Mapping to read from (default: os.environ)

        Returns:
            ServerConfig

        Raises:
            ValueError: If CLARIFY_PORT is not a valid port number
        """
        env = os.environ if environ is None else environ

        port_str = env.get("CLARIFY_PORT", str(cls.port))
        try:
            port = int(port_str)
        except ValueError:
            raise ValueError(f"CLARIFY_PORT must be an integer, got '{port_str}'")

        if not 0 < port < 65536:
            raise ValueError(f"CLARIFY_PORT out of range: {port}")

        return cls(
            host=env.get("CLARIFY_HOST", cls.host),
            port=port,
            log_level=env.get("LOG_LEVEL", cls.log_level).upper(),
            log_format=env.get("LOG_FORMAT", cls.log_format).lower()
        )
