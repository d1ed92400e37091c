"""Base class and shared output contracts for MCP tools."""

import logging
from typing import Optional

from ..config import Settings
from ..content import ContentEnvelope
from ..errors import ToolError
from ..schema import (
    ArraySchema,
    EnumSchema,
    Field,
    NumberSchema,
    ObjectSchema,
    StringSchema,
    ValidatedInput,
)

logger = logging.getLogger(__name__)


def _content_output(item: ObjectSchema) -> ObjectSchema:
    return ObjectSchema((Field("content", ArraySchema(item, min_length=1)),))


TEXT_OUTPUT = _content_output(
    ObjectSchema((
        Field("type", EnumSchema(("text",))),
        Field("text", StringSchema()),
    ))
)

# Image tools answer with a text item when they fail.
IMAGE_OUTPUT = _content_output(
    ObjectSchema((
        Field("type", EnumSchema(("image", "text"))),
        Field("data", StringSchema(), required=False, description="Base64 encoded image data"),
        Field("mimeType", StringSchema(), required=False),
        Field("text", StringSchema(), required=False),
        Field(
            "annotations",
            ObjectSchema((
                Field("audience", ArraySchema(StringSchema()), required=False),
                Field("priority", NumberSchema(minimum=0, maximum=1), required=False),
            )),
            required=False,
        ),
    ))
)


class ToolHandler:
    """
    Base class for MCP tool handlers.

    Subclasses set ``description`` and ``input_schema`` and implement
    ``run_tool``. Domain, upstream and configuration failures raised inside
    ``run_tool`` are turned into an error envelope here, so they never reach
    the dispatcher.
    """

    description: str = ""
    input_schema: ObjectSchema = ObjectSchema()
    output_schema: Optional[ObjectSchema] = TEXT_OUTPUT

    def __init__(self, name: str, settings: Optional[Settings] = None):
        """Initialize tool handler with name and process settings."""
        self.name = name
        self.settings = settings or Settings()

    async def __call__(self, arguments: ValidatedInput) -> ContentEnvelope:
        try:
            return await self.run_tool(arguments)
        except ToolError as e:
            logger.info("%s failed: %s", self.name, e)
            return ContentEnvelope.error(str(e))

    async def run_tool(self, arguments: ValidatedInput) -> ContentEnvelope:
        """
        Execute the tool with validated arguments.

        Must be implemented by subclasses.

        Args:
            arguments: Validated, defaulted tool arguments

        Returns:
            ContentEnvelope with the tool result
        """
        raise NotImplementedError
