"""Error taxonomy for tool dispatch and tool handlers."""

from typing import Optional


class ToolError(Exception):
    """Base class for failures raised inside the dispatch core."""

    pass


class ValidationFailure(ToolError):
    """Raised when an argument does not match its schema."""

    def __init__(self, path: str, expected: str):
        self.path = path
        self.expected = expected
        super().__init__(f"{path or '<root>'}: expected {expected}")


class DomainFailure(ToolError):
    """Raised by a handler when a tool-specific rule is violated."""

    pass


class UpstreamFailure(ToolError):
    """Raised when a remote provider fails or answers with something unusable."""

    def __init__(self, message: str, http_code: Optional[int] = None):
        self.http_code = http_code
        super().__init__(message)


class ConfigurationFailure(ToolError):
    """Raised when required process configuration is missing."""

    pass


class UnrecognizedPayloadShape(ToolError):
    """Raised when a provider payload cannot be turned into bytes."""

    pass


class RegistryError(Exception):
    """Raised on invalid registry operations."""

    pass


class DuplicateToolName(RegistryError):
    """Raised when a tool name is registered twice."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Tool already registered: {name}")
