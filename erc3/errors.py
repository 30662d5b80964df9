"""Exceptions raised by the ERC3 client."""

from __future__ import annotations


class ApiError(Exception):
    """Error from the ERC3 API, or a failure to reach it.

    Server-declared failures carry the server's status and code. Transport
    and parse failures are reported with status 500 and code
    ``REQUEST_FAILED``.
    """

    def __init__(self, message: str, status: int, code, detail=None):
        self.message = message
        self.status = status
        self.code = code
        self.detail = detail
        super().__init__(message)

    def __repr__(self) -> str:
        return (f"ApiError(message={self.message!r}, status={self.status!r}, "
                f"code={self.code!r})")


class UnknownToolError(ValueError):
    """Raised when a dispatch request names a tool the client does not serve."""

    def __init__(self, tool, known):
        self.tool = tool
        self.known = list(known)
        super().__init__(
            f"Unknown tool: {tool}. Expected one of: {', '.join(self.known)}"
        )
