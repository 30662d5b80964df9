"""Tool dispatch plumbing and function-calling definitions.

Store and demo endpoints are addressed by a tool path such as
``/basket/add``. Agents that work with tool-use APIs can hand a request
dict (or a request model) carrying that path to a client's ``dispatch``
method. The definitions built here describe the same requests in OpenAI
function-calling schema so they can be offered to an LLM directly.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, TypeVar

from pydantic import BaseModel

from erc3.errors import UnknownToolError

ToolT = TypeVar("ToolT", bound=Enum)
ModelT = TypeVar("ModelT", bound=BaseModel)


@dataclass
class ToolCall:
    """A parsed tool call from the LLM."""
    id: str
    name: str
    arguments: dict[str, Any]

    @classmethod
    def from_json(cls, id: str, name: str, arguments: str) -> "ToolCall":
        """Build a ToolCall from a JSON-encoded arguments string."""
        return cls(id=id, name=name, arguments=json.loads(arguments or "{}"))


def tool_function_name(path: str) -> str:
    """``/basket/add`` -> ``basket_add``."""
    return path.strip("/").replace("/", "_")


def request_fields(request) -> dict:
    """Return the fields of a dispatch request as a plain dict."""
    if isinstance(request, BaseModel):
        data = request.model_dump()
    elif isinstance(request, Mapping):
        data = dict(request)
    else:
        raise TypeError(
            f"Dispatch request must be a mapping or a request model, got {type(request).__name__}"
        )
    return data


def resolve_tool(request, tools: type[ToolT]) -> tuple[ToolT, dict]:
    """Look up the tool named by ``request`` in the ``tools`` enumeration.

    Raises:
        UnknownToolError: the tool is missing or not a member of ``tools``.
    """
    fields = request_fields(request)
    name = fields.get("tool")
    try:
        tool = tools(name)
    except ValueError:
        raise UnknownToolError(name, [t.value for t in tools]) from None
    fields["tool"] = tool.value
    return tool, fields


def validate_request(model: type[ModelT], fields: dict) -> ModelT:
    """Parse dispatch fields into ``model``.

    None values of fields that have a default are dropped so the default
    applies. None passed for a required field is kept and reaches the handler.

    Raises:
        pydantic.ValidationError: a required field is missing or invalid.
    """
    data = {
        name: value for name, value in fields.items()
        if value is not None
        or name not in model.model_fields
        or model.model_fields[name].is_required()
    }
    return model.model_validate(data)


def tool_name_to_path(name: str, tools: type[ToolT]) -> str:
    """Map a function name (``basket_add``) back to its tool path."""
    for tool in tools:
        if tool_function_name(tool.value) == name:
            return tool.value
    raise UnknownToolError(name, [tool_function_name(t.value) for t in tools])


def call_to_request(call: ToolCall, tools: type[ToolT]) -> dict:
    """Turn an LLM tool call into a request dict accepted by ``dispatch``."""
    request = dict(call.arguments)
    request["tool"] = tool_name_to_path(call.name, tools)
    return request


def _parameters(model: type[BaseModel]) -> dict:
    schema = model.model_json_schema()
    properties = {
        name: {k: v for k, v in prop.items() if k != "title"}
        for name, prop in schema.get("properties", {}).items()
        if name != "tool"
    }
    params = {"type": "object", "properties": properties}
    required = [name for name in schema.get("required", []) if name != "tool"]
    if required:
        params["required"] = required
    return params


def tool_definitions(models: Mapping[Enum, type[BaseModel]]) -> list[dict]:
    """Render request models as OpenAI function-calling tool definitions."""
    definitions = []
    for tool, model in models.items():
        definitions.append({
            "type": "function",
            "function": {
                "name": tool_function_name(tool.value),
                "description": (model.__doc__ or tool.value).strip(),
                "parameters": _parameters(model),
            },
        })
    return definitions


def tools_to_anthropic_format(definitions: list[dict]) -> list[dict]:
    """Convert tool definitions to Anthropic tool-use format."""
    anthropic_tools = []
    for tool in definitions:
        func = tool["function"]
        anthropic_tools.append({
            "name": func["name"],
            "description": func["description"],
            "input_schema": func["parameters"],
        })
    return anthropic_tools
