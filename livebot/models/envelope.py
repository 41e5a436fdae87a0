"""Response envelopes for the backend and for Shopee."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from ..errors import MissingDataError, UpstreamError


@dataclass
class Envelope:
    """Backend ``{success, message, ...}`` wrapper.

    Attributes:
        ok: the ``success`` flag
        value: extracted payload; always None when ``ok`` is false
        message: server message, may be absent even on failure
    """
    ok: bool
    value: Optional[Any] = None
    message: Optional[str] = None

    def raise_for_failure(self, fallback: str) -> None:
        """Raise UpstreamError when the backend reported failure."""
        if not self.ok:
            raise UpstreamError(self.message or fallback)

    def require_value(self, fallback: str, missing: str = "No data in response") -> Any:
        """Return the payload, raising if the call failed or it is absent."""
        self.raise_for_failure(fallback)
        if self.value is None:
            raise MissingDataError(missing)
        return self.value


@dataclass
class UpstreamEnvelope:
    """Shopee ``{error, error_msg, data}`` wrapper; ``error == 0`` is success."""
    error: int
    error_msg: Optional[str] = None
    data: Optional[Any] = None

    @property
    def ok(self) -> bool:
        return self.error == 0

    def raise_for_error(self) -> None:
        if not self.ok:
            raise UpstreamError(
                f"Shopee API error: {self.error} - {self.error_msg or 'Unknown error'}",
                code=self.error,
            )

    def require_data(self, missing: str = "No data in response") -> Any:
        self.raise_for_error()
        if self.data is None:
            raise MissingDataError(missing)
        return self.data
