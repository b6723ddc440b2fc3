"""
Apple Events bridge runner

Keeps supergateway + mcp-server-apple-events alive on a local port and
restarts it with backoff whenever it dies.

Run:
  uv run python examples/01_apple_events_bridge.py

Configure with MCP_BRIDGE_* variables (or a .env file), e.g.:
  MCP_BRIDGE_PORT=8010 MCP_BRIDGE_LOG_LEVEL=DEBUG uv run python examples/01_apple_events_bridge.py

Then point an MCP client at http://127.0.0.1:8010/mcp. Press Ctrl-C to stop.
"""

from __future__ import annotations

import signal

import anyio

from mcp_bridge import BridgeSettings, Supervisor, build_bridge_target, setup_logging


async def main() -> None:
    settings = BridgeSettings.from_env()
    setup_logging(settings.log_level_number, as_json=settings.log_json)
    target = build_bridge_target(settings)

    async with anyio.create_task_group() as tg:
        supervisor = Supervisor(
            target,
            task_group=tg,
            name=settings.name,
            initial_delay=settings.initial_delay,
            max_delay=settings.max_delay,
        )
        await supervisor.start()

        with anyio.open_signal_receiver(signal.SIGINT, signal.SIGTERM) as signals:
            async for _signum in signals:
                break

        supervisor.stop()
        # Don't hang on a child that ignores SIGTERM.
        tg.cancel_scope.cancel()


if __name__ == "__main__":
    anyio.run(main)
