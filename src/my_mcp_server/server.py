"""MCP server setup and tool registration for my-mcp-server."""

from typing import Any, Dict, List, Optional, Tuple

from mcp.server import Server
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.types import GetPromptResult, ImageContent, Prompt, Resource, TextContent, Tool

from .config import Settings
from .dispatcher import Dispatcher
from .prompts import CODE_REVIEW, code_review_prompt, get_code_review
from .registry import ToolRegistry
from .resources import (
    SERVER_INFO_MIME_TYPE,
    SERVER_INFO_URI,
    SERVER_NAME,
    read_server_info,
    server_info_resource,
)

# Import all tool handlers
from .tools.basic import CalculatorTool, CurrentTimeTool, GreetTool
from .tools.geo import GeocodeTool, WeatherTool
from .tools.image import GenerateImageTool


def build_registry(settings: Optional[Settings] = None) -> ToolRegistry:
    """
    Register all tool handlers and seal the registry.

    Args:
        settings: Process settings shared by the handlers

    Returns:
        Sealed ToolRegistry
    """
    settings = settings or Settings.from_environment()
    registry = ToolRegistry()
    for handler in (
        GreetTool(settings),
        CalculatorTool(settings),
        CurrentTimeTool(settings),
        GeocodeTool(settings),
        WeatherTool(settings),
        GenerateImageTool(settings),
    ):
        registry.register_handler(handler)
    return registry.seal()


# Create MCP server
app = Server(SERVER_NAME)

registry = build_registry()
dispatcher = Dispatcher(registry)


@app.list_tools()
async def list_tools() -> List[Tool]:
    """
    List all available tools.

    Returns:
        List of Tool descriptions for MCP
    """
    return [descriptor.to_mcp() for descriptor in registry]


# The dispatcher validates arguments itself and reports failures as content
@app.call_tool(validate_input=False)
async def call_tool(
    name: str, arguments: Optional[Dict[str, Any]]
) -> Tuple[List[TextContent | ImageContent], Optional[Dict[str, Any]]]:
    """
    Execute a tool with given arguments.

    Args:
        name: Tool name to execute
        arguments: Tool arguments from MCP

    Returns:
        Content list and its structured mirror
    """
    envelope = await dispatcher.invoke(name, arguments)
    return envelope.to_mcp(), envelope.structured_content()


@app.list_resources()
async def list_resources() -> List[Resource]:
    return [server_info_resource()]


@app.read_resource()
async def read_resource(uri) -> List[ReadResourceContents]:
    if str(uri) != SERVER_INFO_URI:
        raise ValueError(f"Unknown resource: {uri}")
    return [ReadResourceContents(content=read_server_info(registry), mime_type=SERVER_INFO_MIME_TYPE)]


@app.list_prompts()
async def list_prompts() -> List[Prompt]:
    return [code_review_prompt()]


@app.get_prompt()
async def get_prompt(name: str, arguments: Optional[Dict[str, str]]) -> GetPromptResult:
    if name != CODE_REVIEW:
        raise ValueError(f"Unknown prompt: {name}")
    return get_code_review(arguments)
