"""
Declarative value schemas and the argument validator.

A schema is a small tree of frozen nodes. Tool input contracts are built from
these nodes once at startup, published to MCP clients as JSON Schema, and used
by ``validate`` to turn raw call arguments into read-only validated input.

Example:
    schema = ObjectSchema((
        Field("name", StringSchema()),
        Field("language", EnumSchema(("ko", "en")), required=False, default="en"),
    ))
    args = validate(schema, {"name": "Mina"})
    # → {"name": "Mina", "language": "en"}

Validation stops at the first failing field, in declaration order. Unknown
object keys are dropped rather than rejected.
"""

import math
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from .errors import ValidationFailure


class _Missing:
    """Sentinel type for "no default declared"."""

    def __repr__(self):
        return "MISSING"


MISSING = _Missing()

ValidatedInput = Mapping[str, Any]


def _join(path: str, name: str) -> str:
    return f"{path}.{name}" if path else name


@dataclass(frozen=True)
class StringSchema:
    """Any ``str`` value."""

    def expected(self) -> str:
        return "string"

    def to_json_schema(self) -> Dict[str, Any]:
        return {"type": "string"}

    def check(self, raw: Any, path: str) -> Any:
        if not isinstance(raw, str):
            raise ValidationFailure(path, self.expected())
        return raw


@dataclass(frozen=True)
class BooleanSchema:
    """Any ``bool`` value."""

    def expected(self) -> str:
        return "boolean"

    def to_json_schema(self) -> Dict[str, Any]:
        return {"type": "boolean"}

    def check(self, raw: Any, path: str) -> Any:
        if not isinstance(raw, bool):
            raise ValidationFailure(path, self.expected())
        return raw


@dataclass(frozen=True)
class NumberSchema:
    """
    A finite number with optional inclusive bounds.

    ``bool`` is never accepted as a number. With ``integer=True`` an integral
    float such as ``7.0`` is accepted and normalized to ``7``.
    """

    minimum: Optional[float] = None
    maximum: Optional[float] = None
    integer: bool = False

    def __post_init__(self):
        if (
            self.minimum is not None
            and self.maximum is not None
            and self.minimum > self.maximum
        ):
            raise ValueError(f"minimum {self.minimum} exceeds maximum {self.maximum}")

    def expected(self) -> str:
        kind = "integer" if self.integer else "number"
        if self.minimum is not None and self.maximum is not None:
            return f"{kind} between {self.minimum} and {self.maximum}"
        if self.minimum is not None:
            return f"{kind} >= {self.minimum}"
        if self.maximum is not None:
            return f"{kind} <= {self.maximum}"
        return kind

    def to_json_schema(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"type": "integer" if self.integer else "number"}
        if self.minimum is not None:
            result["minimum"] = self.minimum
        if self.maximum is not None:
            result["maximum"] = self.maximum
        return result

    def check(self, raw: Any, path: str) -> Any:
        if isinstance(raw, bool) or not isinstance(raw, (int, float)):
            raise ValidationFailure(path, self.expected())
        if isinstance(raw, float) and not math.isfinite(raw):
            raise ValidationFailure(path, self.expected())
        if self.integer:
            if isinstance(raw, float):
                if not raw.is_integer():
                    raise ValidationFailure(path, self.expected())
                raw = int(raw)
        if self.minimum is not None and raw < self.minimum:
            raise ValidationFailure(path, self.expected())
        if self.maximum is not None and raw > self.maximum:
            raise ValidationFailure(path, self.expected())
        return raw


@dataclass(frozen=True)
class EnumSchema:
    """One of a fixed set of literals, matched exactly (type included)."""

    choices: Tuple[Any, ...]

    def __post_init__(self):
        if not self.choices:
            raise ValueError("enum needs at least one choice")
        for i, choice in enumerate(self.choices):
            for other in self.choices[i + 1:]:
                if type(choice) is type(other) and choice == other:
                    raise ValueError(f"duplicate enum choice: {choice!r}")

    def expected(self) -> str:
        return "one of " + ", ".join(repr(c) for c in self.choices)

    def to_json_schema(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"enum": list(self.choices)}
        kinds = {type(c) for c in self.choices}
        if kinds == {str}:
            result["type"] = "string"
        return result

    def check(self, raw: Any, path: str) -> Any:
        for choice in self.choices:
            if type(raw) is type(choice) and raw == choice:
                return raw
        raise ValidationFailure(path, self.expected())


@dataclass(frozen=True)
class Field:
    """A named member of an ``ObjectSchema``."""

    name: str
    schema: "Schema"
    required: bool = True
    default: Any = MISSING
    description: Optional[str] = None

    def __post_init__(self):
        if self.required and self.default is not MISSING:
            raise ValueError(f"required field '{self.name}' cannot declare a default")


@dataclass(frozen=True)
class ObjectSchema:
    """A mapping with declared fields."""

    fields: Tuple[Field, ...] = ()

    def __post_init__(self):
        seen = set()
        for field in self.fields:
            if field.name in seen:
                raise ValueError(f"duplicate field name: {field.name}")
            seen.add(field.name)

    def expected(self) -> str:
        return "object"

    def to_json_schema(self) -> Dict[str, Any]:
        properties = {}
        for field in self.fields:
            prop = field.schema.to_json_schema()
            if field.description:
                prop["description"] = field.description
            if field.default is not MISSING:
                prop["default"] = field.default
            properties[field.name] = prop
        return {
            "type": "object",
            "properties": properties,
            "required": [f.name for f in self.fields if f.required],
        }

    def check(self, raw: Any, path: str) -> Any:
        if not isinstance(raw, Mapping):
            raise ValidationFailure(path, self.expected())

        result = {}
        for field in self.fields:
            field_path = _join(path, field.name)
            if field.name in raw:
                result[field.name] = field.schema.check(raw[field.name], field_path)
            elif field.required:
                raise ValidationFailure(field_path, f"required {field.schema.expected()}")
            elif field.default is not MISSING:
                result[field.name] = field.default

        return MappingProxyType(result)


@dataclass(frozen=True)
class ArraySchema:
    """A list whose elements all match ``items``."""

    items: "Schema"
    min_length: int = 0

    def expected(self) -> str:
        noun = f"array of {self.items.expected()}"
        if self.min_length:
            return f"{noun} with at least {self.min_length} item(s)"
        return noun

    def to_json_schema(self) -> Dict[str, Any]:
        result = {"type": "array", "items": self.items.to_json_schema()}
        if self.min_length:
            result["minItems"] = self.min_length
        return result

    def check(self, raw: Any, path: str) -> Any:
        if not isinstance(raw, (list, tuple)):
            raise ValidationFailure(path, self.expected())
        if len(raw) < self.min_length:
            raise ValidationFailure(path, self.expected())
        return tuple(
            self.items.check(item, f"{path}[{i}]") for i, item in enumerate(raw)
        )


Schema = Union[StringSchema, NumberSchema, BooleanSchema, EnumSchema, ObjectSchema, ArraySchema]


def validate(schema: Schema, raw: Any) -> Any:
    """
    Validate a raw value against a schema.

    Args:
        schema: Schema node to check against
        raw: Value decoded from the wire

    Returns:
        Normalized value; objects come back as read-only mappings with
        defaults applied, arrays as tuples

    Raises:
        ValidationFailure for the first field that does not match
    """
    return schema.check(raw, "")
