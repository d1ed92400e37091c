"""
MCP wiring tests: tool listing, call_tool, resource and prompt
"""

import json

import pytest
from mcp.types import ImageContent, TextContent

from my_mcp_server import server
from my_mcp_server.errors import ValidationFailure
from my_mcp_server.prompts import render_code_review
from my_mcp_server.resources import SERVER_INFO_URI, build_server_info
from my_mcp_server.content import ContentEnvelope, ImageItem, TextItem


@pytest.mark.asyncio
async def test_list_tools_publishes_schemas():
    tools = {tool.name: tool for tool in await server.list_tools()}

    assert set(tools) == {
        "greet",
        "calculator",
        "getCurrentTime",
        "geocode",
        "getWeather",
        "generateImage",
    }
    weather = tools["getWeather"].inputSchema
    assert weather["properties"]["forecastDays"]["minimum"] == 1
    assert weather["properties"]["forecastDays"]["maximum"] == 16
    assert weather["properties"]["forecastDays"]["default"] == 7
    assert weather["required"] == ["latitude", "longitude"]
    assert tools["greet"].outputSchema["type"] == "object"


@pytest.mark.asyncio
async def test_call_tool_returns_content_and_mirror():
    content, structured = await server.call_tool("greet", {"name": "Mina"})

    assert isinstance(content[0], TextContent)
    assert content[0].text == "Hey there, Mina! 👋 Nice to meet you!"
    assert structured == {"content": [{"type": "text", "text": content[0].text}]}


@pytest.mark.asyncio
async def test_call_tool_unknown_tool():
    content, _ = await server.call_tool("nope", {})
    assert "Unknown tool: nope" in content[0].text


def test_image_item_to_mcp():
    content = ContentEnvelope.of(ImageItem(b"abc", audience=("user",), priority=0.9)).to_mcp()
    assert isinstance(content[0], ImageContent)
    assert content[0].data == "YWJj"
    assert content[0].annotations.priority == 0.9


def test_envelope_rejects_empty():
    with pytest.raises(ValueError):
        ContentEnvelope(items=())


def test_image_priority_range():
    with pytest.raises(ValueError):
        ImageItem(b"abc", priority=1.5)


def test_envelope_without_mirror():
    envelope = ContentEnvelope(items=(TextItem("x"),), structured=False)
    assert envelope.structured_content() is None


@pytest.mark.asyncio
async def test_read_server_info_resource():
    resources = await server.list_resources()
    assert str(resources[0].uri) == SERVER_INFO_URI

    contents = await server.read_resource(SERVER_INFO_URI)
    document = json.loads(contents[0].content)

    assert contents[0].mime_type == "application/json"
    assert document["server"] == {
        "name": "my-mcp-server",
        "version": "1.0.0",
        "description": document["server"]["description"],
    }
    assert [t["name"] for t in document["tools"]] == server.registry.names()
    assert document["uptime"] >= 0
    assert "timestamp" in document


@pytest.mark.asyncio
async def test_read_unknown_resource():
    with pytest.raises(ValueError):
        await server.read_resource("mcp://my-mcp-server/other")


def test_server_info_lists_registry(registry):
    info = build_server_info(registry)
    assert len(info["tools"]) == len(registry)
    assert all(t["description"] for t in info["tools"])


@pytest.mark.asyncio
async def test_code_review_prompt():
    prompts = await server.list_prompts()
    assert prompts[0].name == "code-review"
    assert [(a.name, a.required) for a in prompts[0].arguments] == [
        ("code", True),
        ("language", False),
    ]

    result = await server.get_prompt("code-review", {"code": "print(1)", "language": "Python"})

    message = result.messages[0]
    assert message.role == "user"
    assert "**Language**: Python" in message.content.text
    assert "```Python\nprint(1)\n```" in message.content.text


def test_code_review_without_language():
    text = render_code_review("x = 1")
    assert "**Language**: unknown" in text
    assert "```\nx = 1\n```" in text


@pytest.mark.asyncio
async def test_code_review_requires_code():
    with pytest.raises(ValidationFailure):
        await server.get_prompt("code-review", {"language": "Python"})
