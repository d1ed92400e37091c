"""Content envelope returned by every tool invocation."""

import base64
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union

from mcp.types import Annotations, ImageContent, TextContent


@dataclass(frozen=True)
class TextItem:
    """Plain text content."""

    text: str

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "text", "text": self.text}

    def to_mcp(self) -> TextContent:
        return TextContent(type="text", text=self.text)


@dataclass(frozen=True)
class ImageItem:
    """Binary image content; base64 encoding happens only on the way out."""

    data: bytes
    mime_type: str = "image/png"
    audience: Optional[Tuple[str, ...]] = None
    priority: Optional[float] = None

    def __post_init__(self):
        if self.priority is not None and not 0.0 <= self.priority <= 1.0:
            raise ValueError(f"priority must be within [0, 1], got {self.priority}")

    @property
    def base64_data(self) -> str:
        return base64.b64encode(self.data).decode("ascii")

    def _annotations(self) -> Optional[Dict[str, Any]]:
        annotations = {}
        if self.audience is not None:
            annotations["audience"] = list(self.audience)
        if self.priority is not None:
            annotations["priority"] = self.priority
        return annotations or None

    def to_dict(self) -> Dict[str, Any]:
        result = {"type": "image", "data": self.base64_data, "mimeType": self.mime_type}
        annotations = self._annotations()
        if annotations:
            result["annotations"] = annotations
        return result

    def to_mcp(self) -> ImageContent:
        annotations = self._annotations()
        return ImageContent(
            type="image",
            data=self.base64_data,
            mimeType=self.mime_type,
            annotations=Annotations(**annotations) if annotations else None,
        )


ContentItem = Union[TextItem, ImageItem]


@dataclass(frozen=True)
class ContentEnvelope:
    """
    Ordered, non-empty sequence of content items.

    The structured mirror carries the same items as plain dicts for machine
    consumers; it is emitted unless ``structured`` is False.
    """

    items: Tuple[ContentItem, ...]
    structured: bool = field(default=True)

    def __post_init__(self):
        if not self.items:
            raise ValueError("content envelope cannot be empty")

    @classmethod
    def of(cls, *items: ContentItem) -> "ContentEnvelope":
        return cls(items=tuple(items))

    @classmethod
    def text(cls, text: str) -> "ContentEnvelope":
        return cls.of(TextItem(text))

    @classmethod
    def error(cls, message: str) -> "ContentEnvelope":
        return cls.text(f"❌ Error: {message}")

    @property
    def first_text(self) -> Optional[str]:
        for item in self.items:
            if isinstance(item, TextItem):
                return item.text
        return None

    def structured_content(self) -> Optional[Dict[str, Any]]:
        if not self.structured:
            return None
        return {"content": [item.to_dict() for item in self.items]}

    def to_mcp(self) -> List[Union[TextContent, ImageContent]]:
        return [item.to_mcp() for item in self.items]
