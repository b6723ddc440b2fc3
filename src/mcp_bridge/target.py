"""
Launch target for the apple-events MCP bridge.

supergateway wraps the stdio MCP server and exposes it over HTTP on a port.
Paths are resolved from the node binary so the bridge still starts under
launchers that provide a minimal PATH.
"""

import os
import shutil
from pathlib import Path

from .settings import BridgeSettings
from .supervisor.launch_spec import LaunchSpec

DEFAULT_PATH = "/usr/bin:/bin"


def resolve_node(settings: BridgeSettings) -> Path:
    """Locate the node executable (explicit setting first, then PATH)."""
    candidate = settings.node_path or shutil.which("node")
    if not candidate:
        raise FileNotFoundError("Could not find a node executable; set MCP_BRIDGE_NODE_PATH")
    return Path(candidate)


def supergateway_script(settings: BridgeSettings, cwd: Path | None = None) -> Path:
    if settings.supergateway_script:
        return Path(settings.supergateway_script)
    base = cwd if cwd is not None else Path.cwd()
    return base / "node_modules" / "supergateway" / "dist" / "index.js"


def build_bridge_target(settings: BridgeSettings, cwd: Path | None = None) -> LaunchSpec:
    """Build the LaunchSpec that runs supergateway in front of the MCP server."""
    node = resolve_node(settings)
    node_dir = node.parent
    npx = node_dir / "npx"

    args = (
        str(supergateway_script(settings, cwd)),
        "--stdio", f"{npx} -y {settings.server_package}",
        "--port", str(settings.port),
        "--outputTransport", settings.output_transport,
    )
    env = {"PATH": f"{node_dir}{os.pathsep}{os.environ.get('PATH') or DEFAULT_PATH}"}

    return LaunchSpec(
        executable=str(node),
        args=args,
        env=env,
        cwd=str(cwd) if cwd is not None else None,
        port=settings.port,
    )
