"""Failure types raised by the backend and Shopee clients.

Every failure surfaces to the caller as an ``ApiError`` subclass tagged with
a ``FailureKind``. Nothing here is retried; the caller decides.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Optional


class FailureKind(str, Enum):
    INVALID_METHOD = "invalid_method"
    TRANSPORT = "transport"
    HTTP_STATUS = "http_status"
    DECODE = "decode"
    UPSTREAM = "upstream"
    MISSING_DATA = "missing_data"


class ApiError(Exception):
    """Base class for all client failures."""

    kind: FailureKind = FailureKind.UPSTREAM

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind.value, "message": self.message}


class InvalidMethodError(ApiError):
    """HTTP method outside GET/POST/PUT/DELETE; raised before any I/O."""

    kind = FailureKind.INVALID_METHOD

    def __init__(self, method: str) -> None:
        super().__init__(f"Invalid HTTP method: {method}")
        self.method = method


class TransportError(ApiError):
    """DNS, connect, timeout or read failure. The cause is chained."""

    kind = FailureKind.TRANSPORT

    def __init__(self, cause: BaseException) -> None:
        super().__init__(f"Request failed: {cause}")
        self.cause = cause


class HttpStatusError(ApiError):
    """Non-2xx response. Carries the status and the raw body text."""

    kind = FailureKind.HTTP_STATUS

    def __init__(self, status: int, body: str) -> None:
        super().__init__(f"HTTP {status}: {body}")
        self.status = status
        self.body = body

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["status"] = self.status
        return data


class DecodeError(ApiError):
    """Body was received but does not match the expected shape."""

    kind = FailureKind.DECODE

    def __init__(self, detail: str, body: Optional[str] = None) -> None:
        if body is None:
            message = f"Failed to parse response: {detail}"
        else:
            message = f"Failed to parse response: {detail} - {body}"
        super().__init__(message)
        self.detail = detail
        self.body = body


class UpstreamError(ApiError):
    """Success flag false, or a nonzero Shopee error code."""

    kind = FailureKind.UPSTREAM

    def __init__(self, message: str, code: Optional[int] = None) -> None:
        super().__init__(message)
        self.code = code

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        if self.code is not None:
            data["code"] = self.code
        return data


class MissingDataError(ApiError):
    """Logical success but the expected payload is absent."""

    kind = FailureKind.MISSING_DATA
