"""Demo API client: fetch a secret and submit it back as the answer."""

from __future__ import annotations

from typing import Optional

from erc3.demo.models import DEMO_REQUEST_MODELS, DemoTool
from erc3.models import to_task_id
from erc3.tools import resolve_tool, validate_request
from erc3.transport import RequestExecutor


class DemoClient:
    """Client for the demo benchmark API of one task."""

    def __init__(self, base_url: str, task, *, session=None,
                 timeout: Optional[float] = None):
        self.base_url = base_url.rstrip("/")
        self.task_id = to_task_id(task)
        self._executor = RequestExecutor(
            f"{self.base_url}/demo/{self.task_id}",
            session=session,
            timeout=timeout,
        )
        self._handlers = {
            DemoTool.SECRET: lambda r: self.get_secret(),
            DemoTool.ANSWER: lambda r: self.submit_answer(r.answer),
        }

    def get_secret(self) -> dict:
        """Returns ``{"value": ...}``."""
        return self._executor.execute(DemoTool.SECRET.value, {
            "tool": DemoTool.SECRET.value,
        })

    def submit_answer(self, answer) -> dict:
        """Submit an answer; non-string answers are sent as ``str(answer)``."""
        return self._executor.execute(DemoTool.ANSWER.value, {
            "tool": DemoTool.ANSWER.value,
            "answer": str(answer),
        })

    def dispatch(self, request) -> dict:
        """Route a ``{"tool": "/secret"}`` or ``{"tool": "/answer", ...}`` request."""
        tool, fields = resolve_tool(request, DemoTool)
        parsed = validate_request(DEMO_REQUEST_MODELS[tool], fields)
        return self._handlers[tool](parsed)

    def __repr__(self) -> str:
        return f"DemoClient(base_url={self.base_url!r}, task_id={self.task_id!r})"
