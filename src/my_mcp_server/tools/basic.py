"""Local tools with no network access: greet, calculator, getCurrentTime."""

import math
from datetime import datetime
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..content import ContentEnvelope
from ..errors import DomainFailure
from ..schema import EnumSchema, Field, NumberSchema, ObjectSchema, StringSchema
from . import ToolHandler

OPERATIONS = {
    "+": "addition",
    "-": "subtraction",
    "*": "multiplication",
    "/": "division",
}


def format_number(value) -> str:
    """Render integral floats without a trailing ``.0`` (``42.0`` → ``42``)."""
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    return repr(value)


class GreetTool(ToolHandler):
    """Tool returning a greeting in Korean or English."""

    description = "Return a greeting for the given name in Korean (ko) or English (en)."
    input_schema = ObjectSchema((
        Field("name", StringSchema(), description="Name of the person to greet"),
        Field(
            "language",
            EnumSchema(("ko", "en")),
            required=False,
            default="en",
            description="Greeting language (default: en)",
        ),
    ))

    def __init__(self, settings=None):
        super().__init__("greet", settings)

    async def run_tool(self, arguments) -> ContentEnvelope:
        name = arguments["name"]
        if arguments["language"] == "ko":
            greeting = f"안녕하세요, {name}님!"
        else:
            greeting = f"Hey there, {name}! 👋 Nice to meet you!"
        return ContentEnvelope.text(greeting)


class CalculatorTool(ToolHandler):
    """Tool for the four basic arithmetic operations."""

    description = "Apply an arithmetic operator (+, -, *, /) to two numbers and return the result."
    input_schema = ObjectSchema((
        Field("number1", NumberSchema(), description="First operand"),
        Field("number2", NumberSchema(), description="Second operand"),
        Field(
            "operator",
            EnumSchema(tuple(OPERATIONS)),
            description="Operator: one of +, -, *, /",
        ),
    ))

    def __init__(self, settings=None):
        super().__init__("calculator", settings)

    async def run_tool(self, arguments) -> ContentEnvelope:
        a = arguments["number1"]
        b = arguments["number2"]
        operator = arguments["operator"]

        # Reported as an error, never as inf or nan
        if operator == "/" and b == 0:
            raise DomainFailure("Cannot divide by zero.")

        try:
            if operator == "+":
                result = a + b
            elif operator == "-":
                result = a - b
            elif operator == "*":
                result = a * b
            else:
                result = a / b
        except OverflowError:
            raise DomainFailure("Result is out of range.")
        if isinstance(result, float) and not math.isfinite(result):
            raise DomainFailure("Result is out of range.")

        return ContentEnvelope.text(
            f"{format_number(a)} {operator} {format_number(b)} = "
            f"{format_number(result)} ({OPERATIONS[operator]})"
        )


class CurrentTimeTool(ToolHandler):
    """Tool reporting the current wall-clock time in an IANA timezone."""

    description = (
        "Return the current time in the given timezone. Uses IANA timezone names "
        "(e.g. Asia/Seoul, America/New_York, Europe/London)."
    )

    def __init__(self, settings=None):
        super().__init__("getCurrentTime", settings)
        default = self.settings.default_timezone
        self.input_schema = ObjectSchema((
            Field(
                "timezone",
                StringSchema(),
                required=False,
                default=default,
                description=f"IANA timezone name (default: {default})",
            ),
        ))

    async def run_tool(self, arguments) -> ContentEnvelope:
        timezone = arguments["timezone"]
        try:
            tz = ZoneInfo(timezone)
        except (ZoneInfoNotFoundError, ValueError, OSError):
            raise DomainFailure(f"Invalid timezone ({timezone})")

        formatted = datetime.now(tz).strftime("%Y-%m-%d %H:%M:%S")
        return ContentEnvelope.text(f"Current time in {timezone}: {formatted}")
