"""
Process launchers - the seam between the supervisor and the OS.

The supervisor never spawns processes itself. It asks a ``ProcessLauncher``
for a ``ProcessHandle``, which lets tests swap in a scripted fake instead of
a real child process.
"""

from __future__ import annotations

import subprocess
from typing import TYPE_CHECKING, Protocol

import anyio
from anyio.abc import ByteReceiveStream

if TYPE_CHECKING:
    from ..supervisor.launch_spec import LaunchSpec


class ProcessHandle(Protocol):
    """The subset of ``anyio.abc.Process`` the supervisor relies on."""

    @property
    def pid(self) -> int: ...

    @property
    def stdout(self) -> ByteReceiveStream | None: ...

    @property
    def stderr(self) -> ByteReceiveStream | None: ...

    async def wait(self) -> int: ...

    def terminate(self) -> None: ...


class ProcessLauncher(Protocol):
    """Anything that can turn a LaunchSpec into a running process."""

    async def launch(self, spec: LaunchSpec) -> ProcessHandle:
        """
        Start a process for ``spec``.

        Raises OSError (usually FileNotFoundError or PermissionError) when
        the executable cannot be started.
        """
        ...


class AnyioProcessLauncher:
    """Spawns real child processes with ``anyio.open_process``."""

    async def launch(self, spec: LaunchSpec) -> ProcessHandle:
        return await anyio.open_process(
            spec.command,
            stdin=subprocess.DEVNULL,
            stdout=spec.stdout.value,
            stderr=spec.stderr.value,
            cwd=spec.cwd,
            env=spec.environment(),
        )
