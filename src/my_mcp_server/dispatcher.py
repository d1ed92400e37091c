"""Dispatcher: the single entry point from the transport into the tools."""

import enum
import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .content import ContentEnvelope, ImageItem, TextItem
from .errors import ValidationFailure
from .registry import ToolRegistry
from .schema import validate

logger = logging.getLogger(__name__)


class DispatchReason(enum.Enum):
    UNKNOWN_TOOL = "unknown_tool"
    VALIDATION_FAILURE = "validation_failure"
    HANDLER_FAILURE = "handler_failure"


@dataclass(frozen=True)
class DispatchError:
    """A failure detected by the dispatcher itself, rendered as text."""

    tool_name: str
    reason: DispatchReason
    detail: str = ""
    available: tuple = ()

    def message(self) -> str:
        if self.reason is DispatchReason.UNKNOWN_TOOL:
            return "❌ Unknown tool: {}\n\nAvailable tools: {}".format(
                self.tool_name, ", ".join(self.available)
            )
        if self.reason is DispatchReason.VALIDATION_FAILURE:
            return f"❌ Invalid arguments for {self.tool_name}: {self.detail}"
        return f"❌ Error executing {self.tool_name}: {self.detail}"

    def to_envelope(self) -> ContentEnvelope:
        return ContentEnvelope.text(self.message())


class Dispatcher:
    """
    Resolves a tool, validates its arguments, runs its handler, and always
    answers with a ContentEnvelope.

    The registry is injected so tests can dispatch against a fabricated one.
    """

    def __init__(self, registry: ToolRegistry):
        self.registry = registry

    async def invoke(self, name: str, raw_args: Optional[Mapping[str, Any]]) -> ContentEnvelope:
        """
        Execute a tool call.

        Args:
            name: Tool name from the caller
            raw_args: Undecoded argument payload; None is treated as no arguments

        Returns:
            ContentEnvelope for success and for every failure path
        """
        descriptor = self.registry.lookup(name)
        if descriptor is None:
            logger.warning("Unknown tool requested: %s", name)
            return DispatchError(
                name, DispatchReason.UNKNOWN_TOOL, available=tuple(self.registry.names())
            ).to_envelope()

        try:
            arguments = validate(descriptor.input_schema, raw_args if raw_args is not None else {})
        except ValidationFailure as e:
            logger.warning("Rejected %s arguments: %s", name, e)
            return DispatchError(name, DispatchReason.VALIDATION_FAILURE, str(e)).to_envelope()

        logger.info("Calling %s", name)
        try:
            result = await descriptor.handler(arguments)
        except Exception as e:
            logger.exception("Unhandled error in tool %s", name)
            return DispatchError(
                name, DispatchReason.HANDLER_FAILURE, f"{type(e).__name__}: {e}"
            ).to_envelope()

        envelope = self._wrap(result)
        if envelope is None:
            logger.error("Tool %s returned unsupported result %r", name, type(result).__name__)
            return DispatchError(
                name,
                DispatchReason.HANDLER_FAILURE,
                f"unsupported result type {type(result).__name__}",
            ).to_envelope()

        logger.info("Finished %s (%d item(s))", name, len(envelope.items))
        return envelope

    @staticmethod
    def _wrap(result: Any) -> Optional[ContentEnvelope]:
        if isinstance(result, ContentEnvelope):
            return result
        if isinstance(result, (TextItem, ImageItem)):
            return ContentEnvelope.of(result)
        if isinstance(result, str):
            return ContentEnvelope.text(result)
        if isinstance(result, (list, tuple)) and result and all(
            isinstance(item, (TextItem, ImageItem)) for item in result
        ):
            return ContentEnvelope.of(*result)
        return None
