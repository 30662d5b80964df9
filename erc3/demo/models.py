"""Pydantic models for demo API requests and responses."""

from __future__ import annotations

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from erc3.tools import tool_definitions


class DemoTool(str, Enum):
    """Tool paths served by the demo API."""
    SECRET = "/secret"
    ANSWER = "/answer"


class GetSecret(BaseModel):
    """Get the secret value for the demo task."""
    tool: Literal["/secret"] = "/secret"


class SubmitAnswer(BaseModel):
    """Submit the answer for the demo task."""
    tool: Literal["/answer"] = "/answer"
    answer: Any = Field(..., description="Answer text; sent as its string form",
                        json_schema_extra={"type": "string"})


DEMO_REQUEST_MODELS: dict[DemoTool, type[BaseModel]] = {
    DemoTool.SECRET: GetSecret,
    DemoTool.ANSWER: SubmitAnswer,
}

DEMO_TOOL_DEFINITIONS = tool_definitions(DEMO_REQUEST_MODELS)


class Secret(BaseModel):
    model_config = ConfigDict(extra="allow")

    value: str
