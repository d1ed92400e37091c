"""Read-only server information resource."""

import json
import time
from datetime import datetime, timezone
from typing import Any, Dict

from mcp.types import Resource

from .registry import ToolRegistry

SERVER_NAME = "my-mcp-server"
SERVER_VERSION = "1.0.0"
SERVER_DESCRIPTION = "MCP server providing greeting, calculator, time, geocoding, weather and image generation tools"

SERVER_INFO_URI = f"mcp://{SERVER_NAME}/info"
SERVER_INFO_MIME_TYPE = "application/json"

_STARTED_AT = time.monotonic()


def server_info_resource() -> Resource:
    return Resource(
        uri=SERVER_INFO_URI,
        name="server-info",
        description="Current status, version and tool list of this MCP server.",
        mimeType=SERVER_INFO_MIME_TYPE,
    )


def build_server_info(registry: ToolRegistry) -> Dict[str, Any]:
    """
    Collect server metadata and the registered tool list.

    Args:
        registry: Registry whose tools are listed

    Returns:
        Dict with server, tools, timestamp and uptime (seconds)
    """
    return {
        "server": {
            "name": SERVER_NAME,
            "version": SERVER_VERSION,
            "description": SERVER_DESCRIPTION,
        },
        "tools": [
            {"name": descriptor.name, "description": descriptor.description}
            for descriptor in registry
        ],
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "uptime": time.monotonic() - _STARTED_AT,
    }


def read_server_info(registry: ToolRegistry) -> str:
    return json.dumps(build_server_info(registry), indent=2, ensure_ascii=False)
