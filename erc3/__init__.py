"""ERC3: Python client for the ERC3 benchmark API.

Core lifecycle calls live on ``ERC3``; the store and demo benchmarks have
their own clients, created per task with ``ERC3.get_store_client`` and
``ERC3.get_demo_client``.
"""

from erc3.client import ERC3, get_api_key
from erc3.config import DEFAULT_BASE_URL, ClientConfig, load_config
from erc3.demo import DemoClient, DemoTool
from erc3.errors import ApiError, UnknownToolError
from erc3.models import SessionInfo, SessionStatus, TaskId, TaskInfo, to_task_id
from erc3.store import StoreClient, StoreTool
from erc3.tools import ToolCall, call_to_request, tools_to_anthropic_format
from erc3.transport import RequestExecutor
from erc3.usage import TokenUsage, normalize_usage

__version__ = "0.1.0"

__all__ = [
    "ERC3",
    "get_api_key",
    "ClientConfig",
    "load_config",
    "DEFAULT_BASE_URL",
    "ApiError",
    "UnknownToolError",
    "RequestExecutor",
    "StoreClient",
    "StoreTool",
    "DemoClient",
    "DemoTool",
    "TaskId",
    "TaskInfo",
    "SessionInfo",
    "SessionStatus",
    "to_task_id",
    "TokenUsage",
    "normalize_usage",
    "ToolCall",
    "call_to_request",
    "tools_to_anthropic_format",
]
