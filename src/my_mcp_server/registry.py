"""Tool registry: binds each tool name to its contract and handler."""

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Iterator, List, Optional

from mcp.types import Tool

from .errors import DuplicateToolName, RegistryError
from .schema import ObjectSchema, ValidatedInput

logger = logging.getLogger(__name__)

Handler = Callable[[ValidatedInput], Awaitable[Any]]


@dataclass(frozen=True)
class ToolDescriptor:
    """Everything the dispatcher needs to know about one tool."""

    name: str
    description: str
    input_schema: ObjectSchema
    output_schema: Optional[ObjectSchema]
    handler: Handler

    def to_mcp(self) -> Tool:
        """Build the MCP tool listing entry from the declared schemas."""
        return Tool(
            name=self.name,
            description=self.description,
            inputSchema=self.input_schema.to_json_schema(),
            outputSchema=(
                self.output_schema.to_json_schema() if self.output_schema else None
            ),
        )


class ToolRegistry:
    """
    Name → ToolDescriptor mapping.

    Tools are registered during startup; ``seal()`` then freezes the registry so
    lookups at call time need no locking.
    """

    def __init__(self):
        self._tools: Dict[str, ToolDescriptor] = {}
        self._sealed = False

    def register(self, descriptor: ToolDescriptor) -> ToolDescriptor:
        """
        Add a tool.

        Raises:
            DuplicateToolName if the name is already bound
            RegistryError if the registry has been sealed
        """
        if self._sealed:
            raise RegistryError(f"Registry is sealed; cannot register {descriptor.name}")
        if descriptor.name in self._tools:
            raise DuplicateToolName(descriptor.name)
        self._tools[descriptor.name] = descriptor
        logger.debug("Registered tool %s", descriptor.name)
        return descriptor

    def register_handler(self, handler) -> ToolDescriptor:
        """Register a ``ToolHandler`` instance under its own name and schemas."""
        return self.register(
            ToolDescriptor(
                name=handler.name,
                description=handler.description,
                input_schema=handler.input_schema,
                output_schema=handler.output_schema,
                handler=handler,
            )
        )

    def seal(self) -> "ToolRegistry":
        self._sealed = True
        return self

    @property
    def sealed(self) -> bool:
        return self._sealed

    def lookup(self, name: str) -> Optional[ToolDescriptor]:
        return self._tools.get(name)

    def names(self) -> List[str]:
        return list(self._tools)

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __iter__(self) -> Iterator[ToolDescriptor]:
        return iter(self._tools.values())

    def __len__(self) -> int:
        return len(self._tools)
