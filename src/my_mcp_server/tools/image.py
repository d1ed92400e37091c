"""
Image generation tool backed by the Hugging Face inference API.

Provider libraries hand image data back in a few different shapes. The only
shapes accepted are the ones listed in ``ImagePayload``; ``to_binary`` turns
each of them into ``bytes`` before the image goes into the envelope.
"""

import asyncio
from typing import Protocol, Union, runtime_checkable

import requests

from ..content import ContentEnvelope, ImageItem
from ..errors import ConfigurationFailure, UnrecognizedPayloadShape, UpstreamFailure
from ..providers import HuggingFaceClient
from ..schema import Field, ObjectSchema, StringSchema
from . import IMAGE_OUTPUT, ToolHandler


@runtime_checkable
class AsyncReadable(Protocol):
    """Any response object that can read its whole body asynchronously (e.g. ``httpx.Response``)."""

    async def aread(self) -> bytes:
        ...


ImagePayload = Union[bytes, bytearray, memoryview, requests.Response, AsyncReadable, str]


async def to_binary(payload: ImagePayload) -> bytes:
    """
    Normalize a provider payload to raw bytes.

    Args:
        payload: In-memory buffer, streamed ``requests.Response``, async-readable
            response object, or a binary string

    Returns:
        The complete payload as bytes

    Raises:
        UnrecognizedPayloadShape for any other type
    """
    if isinstance(payload, (bytes, bytearray, memoryview)):
        return bytes(payload)

    if isinstance(payload, requests.Response):
        try:
            # Reading .content drains the stream
            return await asyncio.to_thread(lambda: payload.content)
        finally:
            payload.close()

    if isinstance(payload, str):
        try:
            return payload.encode("latin-1")
        except UnicodeEncodeError:
            raise UnrecognizedPayloadShape("Image payload string is not a binary string")

    if isinstance(payload, AsyncReadable):
        return bytes(await payload.aread())

    raise UnrecognizedPayloadShape(
        f"Unrecognized image payload type: {type(payload).__name__}"
    )


class GenerateImageTool(ToolHandler):
    """Tool generating a PNG image from a text prompt."""

    description = (
        "Generate an image from a text prompt and return it as base64 encoded PNG data. "
        "Uses the Hugging Face FLUX.1-schnell model."
    )
    input_schema = ObjectSchema((
        Field("prompt", StringSchema(), description="Text prompt describing the image"),
    ))
    output_schema = IMAGE_OUTPUT

    MIME_TYPE = "image/png"
    AUDIENCE = ("user",)
    PRIORITY = 0.9

    def __init__(self, settings=None):
        super().__init__("generateImage", settings)

    def _client(self) -> HuggingFaceClient:
        token = self.settings.hf_token
        if not token:
            raise ConfigurationFailure("HF_TOKEN environment variable is not set.")
        return HuggingFaceClient(
            token,
            self.settings.hf_model,
            self.settings.hf_inference_url,
            timeout=self.settings.http_timeout,
        )

    async def run_tool(self, arguments) -> ContentEnvelope:
        client = self._client()
        response = await asyncio.to_thread(client.text_to_image, arguments["prompt"])
        if not response.success:
            raise UpstreamFailure(response.error, response.http_code)

        data = await to_binary(response.data)
        if not data:
            raise UpstreamFailure("Image provider returned an empty payload.")

        return ContentEnvelope.of(
            ImageItem(
                data=data,
                mime_type=self.MIME_TYPE,
                audience=self.AUDIENCE,
                priority=self.PRIORITY,
            )
        )
