"""Process launchers used by the supervisor."""

from .base import AnyioProcessLauncher, ProcessHandle, ProcessLauncher

__all__ = [
    "AnyioProcessLauncher",
    "ProcessHandle",
    "ProcessLauncher",
]
