"""Bridge configuration loaded from the environment (and an optional .env file)."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "MCP_BRIDGE_"

_TRUE_VALUES = ("true", "1", "t", "yes", "y")


@dataclass(frozen=True)
class BridgeSettings:
    """
    Configuration for the bridge runner.

    Attributes:
        port: Port supergateway listens on
        name: Bridge tag attached to every log record
        node_path: Explicit node binary, or None to search PATH
        supergateway_script: Explicit supergateway entry point, or None for node_modules
        server_package: stdio MCP server package started through npx
        output_transport: supergateway --outputTransport value
        initial_delay: Seconds to wait before the first relaunch
        max_delay: Upper bound on the relaunch wait, in seconds
        log_level: Name of the root log level
        log_json: Emit one JSON object per log record
    """
    port: int = 8010
    name: str = "apple-events"
    node_path: str | None = None
    supergateway_script: str | None = None
    server_package: str = "mcp-server-apple-events"
    output_transport: str = "streamableHttp"
    initial_delay: float = 1.0
    max_delay: float = 30.0
    log_level: str = "INFO"
    log_json: bool = False

    def __post_init__(self):
        if not 0 < self.port < 65536:
            raise ValueError(f"{ENV_PREFIX}PORT out of range: {self.port}")
        if self.initial_delay <= 0 or self.max_delay < self.initial_delay:
            raise ValueError(
                f"Invalid backoff: initial_delay={self.initial_delay}, max_delay={self.max_delay}"
            )
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ValueError(f"Unknown log level: {self.log_level}")

    @property
    def log_level_number(self) -> int:
        return logging.getLevelName(self.log_level.upper())

    @classmethod
    def from_env(cls, dotenv_path: str | Path | None = None) -> "BridgeSettings":
        """
        Build settings from ``MCP_BRIDGE_*`` variables.

        Values from ``dotenv_path`` (or a ``.env`` found from the current
        directory) are loaded first but never override real environment
        variables.
        """
        load_dotenv(dotenv_path=dotenv_path, override=False)
        defaults = cls()

        def get(key: str, default):
            return os.getenv(ENV_PREFIX + key, default)

        try:
            return cls(
                port=int(get("PORT", defaults.port)),
                name=get("NAME", defaults.name),
                node_path=get("NODE_PATH", defaults.node_path) or None,
                supergateway_script=get("SUPERGATEWAY_SCRIPT", defaults.supergateway_script) or None,
                server_package=get("SERVER_PACKAGE", defaults.server_package),
                output_transport=get("OUTPUT_TRANSPORT", defaults.output_transport),
                initial_delay=float(get("INITIAL_DELAY", defaults.initial_delay)),
                max_delay=float(get("MAX_DELAY", defaults.max_delay)),
                log_level=get("LOG_LEVEL", defaults.log_level),
                log_json=str(get("LOG_JSON", defaults.log_json)).lower() in _TRUE_VALUES,
            )
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid bridge configuration: {e}") from e
