"""ERC3 core client: benchmarks, sessions and tasks.

Usage:
    client = ERC3(api_key="...")
    session = client.start_session(benchmark="demo", workspace="my-ws", name="run 1")
    status = client.session_status(session["session_id"])
    for task in status["tasks"]:
        client.start_task(task)
        demo = client.get_demo_client(task)
        demo.submit_answer(demo.get_secret()["value"])
        result = client.complete_task(task)
    client.submit_session(session["session_id"])
"""

from __future__ import annotations

import logging
from typing import Optional

from erc3.config import DEFAULT_BASE_URL, ClientConfig
from erc3.demo.client import DemoClient
from erc3.models import to_task_id
from erc3.store.client import StoreClient
from erc3.transport import RequestExecutor
from erc3.usage import normalize_usage

logger = logging.getLogger("erc3.client")


class ERC3:
    """Client for the ERC3 benchmark platform.

    Lists benchmarks, runs sessions and tasks, logs LLM usage, and creates
    the benchmark-specific clients (store, demo) for a task. The API key is
    sent in the request body of the calls that need it, never as a header.
    """

    def __init__(self, api_key: str, base_url: str = DEFAULT_BASE_URL, *,
                 timeout: Optional[float] = None, session=None):
        if not api_key:
            raise ValueError("API key is required")
        self.api_key = api_key
        self.base_url = (base_url or DEFAULT_BASE_URL).rstrip("/")
        self.timeout = timeout
        self._executor = RequestExecutor(self.base_url, session=session,
                                         timeout=timeout)

    @classmethod
    def from_config(cls, config: ClientConfig, session=None) -> "ERC3":
        return cls(config.api_key, config.base_url, timeout=config.timeout,
                   session=session)

    def _request(self, path: str, body: Optional[dict] = None) -> dict:
        return self._executor.execute(path, body or {})

    # ------------------------------------------------------------------
    # Benchmarks
    # ------------------------------------------------------------------

    def list_benchmarks(self) -> dict:
        """List available benchmarks."""
        return self._request("/benchmarks/list", {})

    def view_benchmark(self, benchmark: str) -> dict:
        """Get details of one benchmark."""
        return self._request("/benchmarks/view", {"benchmark": benchmark})

    # ------------------------------------------------------------------
    # Sessions
    # ------------------------------------------------------------------

    def start_session(self, benchmark: str, workspace: str, name: str,
                      architecture: str = "x86_64") -> dict:
        """Start an evaluation session.

        Returns ``{"session_id": ..., "task_count": ...}``.
        """
        logger.info(f"Starting session '{name}' on benchmark '{benchmark}'")
        return self._request("/sessions/start", {
            "account_key": self.api_key,
            "benchmark": benchmark,
            "workspace": workspace,
            "name": name,
            "architecture": architecture,
        })

    def session_status(self, session_id: str) -> dict:
        """Get session status, including its ``tasks``."""
        return self._request("/sessions/status", {"session_id": session_id})

    def search_sessions(self, criteria: Optional[dict] = None, **filters) -> dict:
        """Search sessions of this account.

        Filters (e.g. ``workspace``, ``benchmark``) may be passed as a dict,
        as keyword arguments, or both.
        """
        body = {"account_key": self.api_key}
        body.update(criteria or {})
        body.update(filters)
        return self._request("/sessions/search", body)

    def submit_session(self, session_id: str) -> dict:
        """Submit a finished session for evaluation."""
        logger.info(f"Submitting session {session_id}")
        return self._request("/sessions/submit", {"session_id": session_id})

    # ------------------------------------------------------------------
    # Tasks
    # ------------------------------------------------------------------

    def start_task(self, task) -> dict:
        """Start a task. ``task`` is a task id or an object carrying ``task_id``."""
        return self._request("/tasks/start", {"task_id": to_task_id(task)})

    def complete_task(self, task) -> dict:
        """Complete a task; the reply carries its ``eval``."""
        return self._request("/tasks/complete", {"task_id": to_task_id(task)})

    def view_task(self, task, since: Optional[int] = None) -> dict:
        """View task details, optionally only logs after ``since``."""
        body = {"task_id": to_task_id(task)}
        if since is not None:
            body["since"] = since
        return self._request("/tasks/view", body)

    def log_llm(self, task, model: str, usage, duration_sec: float) -> dict:
        """Log one LLM call made while solving a task.

        ``usage`` may use OpenAI (``prompt_tokens``/``completion_tokens``) or
        Anthropic (``input_tokens``/``output_tokens``) naming, as a dict or an
        SDK usage object.
        """
        return self._request("/tasks/log", {
            "task_id": to_task_id(task),
            "model": model,
            "usage": normalize_usage(usage).to_dict(),
            "duration_sec": duration_sec,
        })

    # ------------------------------------------------------------------
    # Benchmark-specific clients
    # ------------------------------------------------------------------

    def get_store_client(self, task) -> StoreClient:
        """Store API client bound to ``task``. No request is made."""
        return StoreClient(self.base_url, task, session=self._executor.session,
                           timeout=self.timeout)

    def get_demo_client(self, task) -> DemoClient:
        """Demo API client bound to ``task``. No request is made."""
        return DemoClient(self.base_url, task, session=self._executor.session,
                          timeout=self.timeout)

    def __repr__(self) -> str:
        return f"ERC3(base_url={self.base_url!r})"


def get_api_key(email: str, base_url: str = DEFAULT_BASE_URL, *,
                session=None) -> dict:
    """Request an API key for ``email``. Needs no authentication."""
    executor = RequestExecutor(base_url or DEFAULT_BASE_URL, session=session)
    return executor.execute("/get_key", {"email": email})
