"""JSON-over-POST request execution shared by all ERC3 clients."""

from __future__ import annotations

import json
import logging
from typing import Optional

import requests

from erc3.errors import ApiError

logger = logging.getLogger("erc3.transport")

JSON_HEADERS = {"Content-Type": "application/json"}


def _declared_status(body) -> Optional[int]:
    """Return the numeric ``status`` field of a response body, if any."""
    if not isinstance(body, dict):
        return None
    status = body.get("status")
    if isinstance(status, bool):
        return None
    if isinstance(status, (int, float)):
        return int(status)
    if isinstance(status, str):
        try:
            return int(float(status))
        except ValueError:
            return None
    return None


class RequestExecutor:
    """Posts JSON bodies under a fixed URL prefix and checks the replies.

    Every call issues exactly one request. Nothing is retried.
    """

    def __init__(self, prefix: str, session=None,
                 timeout: Optional[float] = None):
        self.prefix = prefix.rstrip("/")
        self.timeout = timeout
        self._session = session if session is not None else requests.Session()

    @property
    def session(self):
        return self._session

    def url(self, path: str) -> str:
        return f"{self.prefix}{path}"

    def execute(self, path: str, body: Optional[dict] = None):
        """POST ``body`` to ``prefix + path`` and return the parsed JSON reply.

        Raises:
            ApiError: the reply declares ``status >= 400``, or the request
                could not be completed or parsed.
        """
        url = self.url(path)
        logger.debug(f"POST {url}")

        try:
            resp = self._session.post(
                url,
                json=body if body is not None else {},
                headers=JSON_HEADERS,
                timeout=self.timeout,
            )
            result = resp.json()
        except (requests.RequestException, ValueError) as e:
            logger.warning(f"Request to {url} failed: {e}")
            raise ApiError(
                f"Request failed: {e}", 500, "REQUEST_FAILED", str(e)
            ) from e

        status = _declared_status(result)
        if status is not None and status >= 400:
            message = result.get("error") or "API Error"
            logger.warning(f"API error from {url}: {status} {result.get('code')} {message}")
            raise ApiError(message, status, result.get("code"), json.dumps(result))

        return result
