"""Prompt templates exposed over MCP."""

from typing import Mapping, Optional

from mcp.types import GetPromptResult, Prompt, PromptArgument, PromptMessage, TextContent

from .schema import Field, ObjectSchema, StringSchema, validate

CODE_REVIEW = "code-review"

CODE_REVIEW_ARGS = ObjectSchema((
    Field("code", StringSchema(), description="Code to review"),
    Field(
        "language",
        StringSchema(),
        required=False,
        description="Programming language (e.g. TypeScript, JavaScript, Python)",
    ),
))

CODE_REVIEW_TEMPLATE = """# Code Review Request

**Language**: {language_label}

Please review the following code:

```{language_tag}
{code}
```

## Review Guidelines

Focus the review on the following areas:

1. **Readability and maintainability**
   - Is the code easy to read and understand?
   - Are variable and function names clear?
   - Are comments used where they help?

2. **Bugs and problems**
   - Are there potential bugs or runtime errors?
   - Is error handling adequate?
   - Are edge cases covered?

3. **Performance**
   - Is there anything that should be made faster?
   - Is there unnecessary work or duplicated code?
   - Is the algorithmic complexity reasonable?

4. **Security**
   - Are there security vulnerabilities?
   - Is input validated properly?
   - Is any sensitive information exposed?

5. **Best practices**
   - Does the code follow the idioms of its language?
   - Is the style consistent?
   - Are design patterns applied appropriately?

6. **Suggestions**
   - Give concrete suggestions for improving the code.
   - Point out anything that should be refactored.

Thank you."""


def code_review_prompt() -> Prompt:
    return Prompt(
        name=CODE_REVIEW,
        description="Build a code review prompt for the code supplied by the user.",
        arguments=[
            PromptArgument(name=f.name, description=f.description, required=f.required)
            for f in CODE_REVIEW_ARGS.fields
        ],
    )


def render_code_review(code: str, language: Optional[str] = None) -> str:
    return CODE_REVIEW_TEMPLATE.format(
        language_label=language or "unknown",
        language_tag=language or "",
        code=code,
    )


def get_code_review(arguments: Optional[Mapping[str, str]]) -> GetPromptResult:
    """
    Render the code review prompt.

    Raises:
        ValidationFailure if ``code`` is missing
    """
    args = validate(CODE_REVIEW_ARGS, arguments or {})
    text = render_code_review(args["code"], args.get("language"))
    return GetPromptResult(
        description="Code review request",
        messages=[
            PromptMessage(role="user", content=TextContent(type="text", text=text)),
        ],
    )
