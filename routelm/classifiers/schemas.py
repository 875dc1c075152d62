"""
Pydantic schemas for the local inference endpoint.

The request body sent to `/generate`, the response envelope it answers
with, and the input of the `analyzePrompt` tool invocation the model is
asked to produce.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictStr, ValidationError, field_validator

from ..errors import MalformedToolInputError

# =============================================================================
# Tool schema
# =============================================================================

ANALYZE_PROMPT_TOOL_NAME = "analyzePrompt"

ANALYZE_PROMPT_TOOL: dict[str, Any] = {
    "name": ANALYZE_PROMPT_TOOL_NAME,
    "description": "Analyze the user input and provide structured output",
    "input_schema": {
        "type": "object",
        "properties": {
            "userinput": {
                "type": "string",
                "description": "The original user input",
            },
            "selected_agent": {
                "type": "string",
                "description": "The name of the selected agent",
            },
            "confidence": {
                "type": "number",
                "description": "Confidence level between 0 and 1",
            },
        },
        "required": ["userinput", "selected_agent", "confidence"],
    },
}


# =============================================================================
# Request Schemas
# =============================================================================


class GenerateRequest(BaseModel):
    """Body of a POST to the `/generate` endpoint."""

    model: str = Field(..., min_length=1)
    prompt: str
    max_tokens: int = Field(..., ge=1)
    temperature: float | None = None
    top_p: float | None = None
    stop: list[str] | None = None
    tools: list[dict[str, Any]] = Field(default_factory=lambda: [ANALYZE_PROMPT_TOOL])

    def to_payload(self) -> dict[str, Any]:
        """Convert to JSON payload, leaving unset sampling options to the server."""
        return self.model_dump(exclude_none=True)


# =============================================================================
# Response Schemas
# =============================================================================


class ToolInput(BaseModel):
    """Arguments of an `analyzePrompt` invocation."""

    model_config = ConfigDict(extra="ignore")

    userinput: StrictStr
    selected_agent: StrictStr
    # Not range-checked: out-of-[0, 1] values are passed through as sent
    confidence: float

    @field_validator("confidence", mode="before")
    @classmethod
    def _confidence_is_numeric(cls, value: Any) -> Any:
        if isinstance(value, bool):
            raise ValueError("confidence must be a number or numeric string")
        if isinstance(value, str):
            return value.strip()
        return value


class ChoiceMessage(BaseModel):
    model_config = ConfigDict(extra="allow")

    content: Any = None
    # Kept raw: a non-object invocation is malformed, not missing
    tool_use: Any = None


class Choice(BaseModel):
    model_config = ConfigDict(extra="allow")

    message: ChoiceMessage | None = None


class GenerateResponse(BaseModel):
    """
    Envelope returned by the `/generate` endpoint.

    Only the first choice is read; later choices are never validated.
    """

    model_config = ConfigDict(extra="allow")

    choices: list[Any] = Field(default_factory=list)

    @property
    def tool_use(self) -> Any:
        """Raw tool invocation of the first choice, or None if absent."""
        if not self.choices:
            return None
        try:
            choice = Choice.model_validate(self.choices[0])
        except ValidationError:
            return None
        if choice.message is None:
            return None
        tool_use = choice.message.tool_use
        # Empty scalars ("", 0, false) count as no invocation
        if isinstance(tool_use, (str, int, float)) and not tool_use:
            return None
        return tool_use

    @property
    def tool_input(self) -> Any:
        """Input of the first choice's tool invocation; None unless it is an object."""
        tool_use = self.tool_use
        if isinstance(tool_use, dict):
            return tool_use.get("input")
        return None


def parse_tool_input(raw: Any, classifier: str = "classifier") -> ToolInput:
    """
    Validate a tool invocation input against the `analyzePrompt` schema.

    Raises:
        MalformedToolInputError: If a field is missing or has the wrong type
    """
    try:
        return ToolInput.model_validate(raw)
    except ValidationError as e:
        raise MalformedToolInputError(
            "Tool input does not match expected structure",
            classifier,
            validation_errors=e.errors(include_url=False),
        ) from e


__all__ = [
    "ANALYZE_PROMPT_TOOL",
    "ANALYZE_PROMPT_TOOL_NAME",
    "Choice",
    "ChoiceMessage",
    "GenerateRequest",
    "GenerateResponse",
    "ToolInput",
    "parse_tool_input",
]
