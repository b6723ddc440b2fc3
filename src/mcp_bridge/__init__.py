"""Keeps an MCP bridge process alive with exponential-backoff restarts."""

from .supervisor.launch_spec import LaunchSpec, StreamMode
from .supervisor.base import Supervisor
from .launcher import AnyioProcessLauncher, ProcessHandle, ProcessLauncher
from .settings import BridgeSettings
from .target import build_bridge_target
from .log import setup_logging

__all__ = [
    # Supervision
    "Supervisor",
    "LaunchSpec",
    "StreamMode",
    # Launching
    "ProcessLauncher",
    "ProcessHandle",
    "AnyioProcessLauncher",
    # Plumbing
    "BridgeSettings",
    "build_bridge_target",
    "setup_logging",
]
