"""
Supervisor - keeps one external bridge process alive.

States:
  - RUNNING: a child is live and its output is being forwarded
  - BACKOFF-WAIT: the child exited on its own and a relaunch is pending
  - STOPPED: stop() was called; only start() leaves this state

Every unexpected exit (including a failure to spawn at all) waits and
retries. The wait doubles after each relaunch up to ``max_delay`` and is never
reset for the lifetime of the supervisor.
"""

from __future__ import annotations

import contextlib
import logging

import anyio
from anyio.abc import ByteReceiveStream, TaskGroup

from ..launcher import AnyioProcessLauncher, ProcessHandle, ProcessLauncher
from .launch_spec import LaunchSpec
from .output import iter_lines

log = logging.getLogger(__name__)
output_log = logging.getLogger("mcp_bridge.output")


class Supervisor:
    """
    Supervises a single child process described by a LaunchSpec.

    All work runs in the caller's TaskGroup; the supervisor never blocks the
    caller while waiting to relaunch.
    """
    initial_delay: float = 1.0
    max_delay: float = 30.0

    def __init__(
        self,
        target: LaunchSpec,
        *,
        task_group: TaskGroup,
        launcher: ProcessLauncher | None = None,
        name: str = "bridge",
        initial_delay: float | None = None,
        max_delay: float | None = None,
    ) -> None:
        self.name = name
        if initial_delay is not None:
            self.initial_delay = initial_delay
        if max_delay is not None:
            self.max_delay = max_delay
        if self.initial_delay <= 0 or self.max_delay < self.initial_delay:
            raise ValueError(
                f"Invalid backoff: initial_delay={self.initial_delay}, max_delay={self.max_delay}"
            )

        self._target = target
        self._task_group = task_group
        self._launcher: ProcessLauncher = launcher or AnyioProcessLauncher()

        self._handle: ProcessHandle | None = None
        self._delay = self.initial_delay
        self._stopping = False
        self._relaunch_scope: anyio.CancelScope | None = None
        # Bumped by start()/stop(); work scheduled under an older value is stale.
        self._generation = 0

    @property
    def target(self) -> LaunchSpec:
        return self._target

    @property
    def restart_delay(self) -> float:
        """Seconds the next unexpected exit will wait before relaunching."""
        return self._delay

    def is_running(self) -> bool:
        """True while a child is live, as last observed by the exit watcher."""
        return self._handle is not None

    async def start(self) -> None:
        """Arm the supervisor and launch the child now."""
        self._stopping = False
        if self._handle is not None:
            log.debug("Bridge already running", extra={"bridge": self.name, "pid": self._handle.pid})
            return

        self._generation += 1
        self._cancel_relaunch()
        await self._launch(self._generation)

    def stop(self) -> None:
        """Disarm the supervisor and terminate the child, if any."""
        self._stopping = True
        self._generation += 1
        self._cancel_relaunch()

        handle, self._handle = self._handle, None
        if handle is not None:
            _terminate(handle)

        log.info("Bridge stopped", extra={"bridge": self.name})

    def _cancel_relaunch(self) -> None:
        if self._relaunch_scope is not None:
            self._relaunch_scope.cancel()
            self._relaunch_scope = None

    async def _launch(self, generation: int) -> None:
        """Spawn the child, wire its output, and watch for its exit."""
        handle: ProcessHandle | None = None
        # Shielded so a stop() mid-spawn cannot orphan the new process.
        with anyio.CancelScope(shield=True):
            try:
                handle = await self._launcher.launch(self._target)
            except OSError as exc:
                # Only OS-level spawn failures are retried; anything else propagates.
                log.debug(
                    "Bridge failed to spawn: %s", exc,
                    extra={"bridge": self.name},
                )

        if generation != self._generation:
            if handle is not None:
                _terminate(handle)
                self._task_group.start_soon(handle.wait)
            return

        if handle is None:
            self._on_exit(None)
            return

        self._handle = handle
        for stream in (handle.stdout, handle.stderr):
            if stream is not None:
                self._task_group.start_soon(self._forward_output, stream)
        self._task_group.start_soon(self._watch, handle)

        log.info(
            "Bridge started",
            extra={"bridge": self.name, "port": self._target.port, "pid": handle.pid},
        )

    async def _forward_output(self, stream: ByteReceiveStream) -> None:
        async for line in iter_lines(stream):
            output_log.debug(line, extra={"bridge": self.name})

    async def _watch(self, handle: ProcessHandle) -> None:
        code = await handle.wait()
        # Ignore exits from a handle we already let go of (stopped or replaced).
        if handle is not self._handle:
            return
        self._handle = None
        self._on_exit(code)

    def _on_exit(self, code: int | None) -> None:
        """Exit handler: schedule a relaunch unless we are stopping."""
        if self._stopping:
            return

        log.warning(
            "Bridge exited unexpectedly, restarting",
            extra={"bridge": self.name, "code": code, "retry_in": self._delay},
        )
        scope = anyio.CancelScope()
        self._relaunch_scope = scope
        self._task_group.start_soon(self._relaunch_after, scope, self._generation)

    async def _relaunch_after(self, scope: anyio.CancelScope, generation: int) -> None:
        with scope:
            await anyio.sleep(self._delay)
            if self._stopping or generation != self._generation:
                return
            self._relaunch_scope = None
            self._delay = min(self._delay * 2, self.max_delay)
            await self._launch(generation)


def _terminate(handle: ProcessHandle) -> None:
    # The child may already be gone; that is fine.
    with contextlib.suppress(ProcessLookupError):
        handle.terminate()
