"""
Exception taxonomy for the Authorize.Net client.
"""

from __future__ import annotations

from typing import Any, List, Mapping, Optional, Sequence, Tuple

__all__ = [
    "AuthNetError",
    "DecodeError",
    "GatewayConnectionError",
    "OperationError",
    "RequestError",
    "ValidationError",
]


class AuthNetError(Exception):
    """Base exception for every error raised by this package."""


class ValidationError(AuthNetError, ValueError):
    """Raised when a caller supplies a value outside the supported set."""

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.field = field


class DecodeError(AuthNetError):
    """Raised when a response does not match the documented API contract."""


class OperationError(AuthNetError):
    """
    The gateway processed the request and rejected it.

    ``messages`` holds the ``(code, text)`` pairs exactly as returned.
    """

    def __init__(self, messages: Sequence[Tuple[str, str]]) -> None:
        self.messages = list(messages)
        summary = "; ".join(f"{code}: {text}" for code, text in self.messages)
        super().__init__(summary or "Operation failed without messages")

    @property
    def codes(self) -> List[str]:
        return [code for code, _ in self.messages]


class RequestError(AuthNetError):
    """The endpoint answered with something other than an API envelope."""

    def __init__(self, status: int, headers: Mapping[str, str], body: bytes) -> None:
        super().__init__(f"Gateway responded with HTTP {status}")
        self.status = status
        self.headers = dict(headers)
        self.body = body


class GatewayConnectionError(AuthNetError):
    """No response could be obtained from the endpoint."""

    def __init__(self, cause: Any) -> None:
        super().__init__(f"Could not reach the gateway: {cause}")
        self.cause = cause
