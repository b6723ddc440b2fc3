"""Supervisor components for keeping the bridge process alive."""

from .launch_spec import LaunchSpec, StreamMode
from .base import Supervisor

__all__ = [
    "LaunchSpec",
    "StreamMode",
    "Supervisor",
]
