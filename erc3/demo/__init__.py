"""Demo benchmark API: secret retrieval and answer submission."""

from erc3.demo.client import DemoClient
from erc3.demo.models import (
    DEMO_REQUEST_MODELS,
    DEMO_TOOL_DEFINITIONS,
    DemoTool,
    GetSecret,
    Secret,
    SubmitAnswer,
)

__all__ = [
    "DemoClient",
    "DemoTool",
    "DEMO_REQUEST_MODELS",
    "DEMO_TOOL_DEFINITIONS",
    "GetSecret",
    "SubmitAnswer",
    "Secret",
]
