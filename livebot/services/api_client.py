"""HTTP request executor for the first-party backend.

One call, one round trip: no retries and no backoff. Failures are
classified into the ``livebot.errors`` taxonomy and raised to the caller.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Callable, Optional, TypeVar

import httpx

from ..codec import Extraction, decode_envelope
from ..config import Settings, get_settings
from ..errors import DecodeError, HttpStatusError, InvalidMethodError, TransportError
from ..models.envelope import Envelope

logger = logging.getLogger(__name__)

T = TypeVar("T")

ALLOWED_METHODS = ("GET", "POST", "PUT", "DELETE")

_SECRET_KEYS = {"password", "current_password", "new_password", "cookie", "license_key"}


def normalize_method(method: str) -> str:
    """Upper-case ``method`` or raise InvalidMethodError."""
    upper = method.upper() if isinstance(method, str) else ""
    if upper not in ALLOWED_METHODS:
        raise InvalidMethodError(str(method))
    return upper


def _mask(body: Any) -> Any:
    if isinstance(body, dict):
        return {
            k: "***" if k in _SECRET_KEYS and v is not None else _mask(v)
            for k, v in body.items()
        }
    if isinstance(body, list):
        return [_mask(v) for v in body]
    return body


def _mask_query(query: str) -> str:
    parts = []
    for pair in query.split("&"):
        name, sep, _ = pair.partition("=")
        parts.append(f"{name}=***" if sep and name in _SECRET_KEYS else pair)
    return "&".join(parts)


def format_body_for_log(text: str, limit: int) -> str:
    """Full body when shorter than ``limit``, otherwise a noted prefix."""
    if len(text) < limit:
        return text
    return f"(truncated, {len(text)} chars)\n{text[:limit]}"


def log_request(method: str, url: str, body: Any = None, query: Optional[str] = None) -> None:
    """Log an outbound request with secrets masked."""
    logger.info(f"[API REQUEST] {method} {_mask_query(url)}")
    if body is not None:
        try:
            pretty = json.dumps(_mask(body), indent=2, ensure_ascii=False)
        except (TypeError, ValueError):
            pretty = "Failed to serialize"
        logger.debug(f"[API REQUEST BODY]\n{pretty}")
    if query:
        logger.debug(f"[API REQUEST QUERY] {_mask_query(query)}")


def log_response(status: int, target: str, text: str, limit: int) -> None:
    logger.info(f"[API RESPONSE] HTTP {status} {target}")
    logger.debug(f"[API RESPONSE BODY] {format_body_for_log(text, limit)}")


class BackendClient:
    """Executes requests against the livekenceng backend.

    A fresh ``httpx.AsyncClient`` is opened per call so that concurrent
    calls share nothing. ``transport`` exists for tests.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings or get_settings()
        self._transport = transport

    def build_url(self, path: str, query: Optional[str] = None) -> str:
        url = f"{self.settings.backend_url}{path}"
        if query:
            # already percent-encoded by the caller
            url = f"{url}?{query}"
        return url

    async def execute(
        self,
        method: str,
        path: str,
        body: Any = None,
        query: Optional[str] = None,
        decode: Callable[[str], T] = json.loads,
    ) -> T:
        """Perform one request and decode the body.

        Args:
            method: GET, POST, PUT or DELETE
            path: endpoint path appended to the backend URL
            body: JSON body, sent for any method when given
            query: already-encoded query string
            decode: converts the response text into the result

        Returns:
            whatever ``decode`` returns

        Raises:
            InvalidMethodError: before any network activity
            TransportError: connection, DNS, timeout or protocol failure
            HttpStatusError: non-2xx status, whatever the body is
            DecodeError: the body cannot be decompressed, or a 2xx body does not decode
        """
        method = normalize_method(method)
        url = self.build_url(path, query)

        headers = {}
        if body is not None or method != "GET":
            headers["Content-Type"] = "application/json"

        log_request(method, url, body, query)

        try:
            async with httpx.AsyncClient(
                transport=self._transport,
                timeout=self.settings.request_timeout,
            ) as client:
                response = await client.request(
                    method,
                    url,
                    headers=headers,
                    content=json.dumps(body).encode("utf-8") if body is not None else None,
                )
        except httpx.DecodingError as e:
            logger.warning(f"[API PARSE ERROR] {path}: {e}")
            raise DecodeError(str(e)) from e
        except httpx.RequestError as e:
            logger.error(f"[API ERROR] {method} {path}: {e}")
            raise TransportError(e) from e

        text = response.text
        log_response(response.status_code, path, text, self.settings.log_body_limit)

        if not response.is_success:
            logger.warning(f"[API ERROR] HTTP {response.status_code} {path}")
            raise HttpStatusError(response.status_code, text)

        try:
            result = decode(text)
        except DecodeError as e:
            logger.warning(f"[API PARSE ERROR] {path}: {e.detail}")
            raise
        except ValueError as e:
            logger.warning(f"[API PARSE ERROR] {path}: {e}")
            raise DecodeError(str(e), text) from e

        logger.debug(f"[API SUCCESS] {path}")
        return result

    async def request_envelope(
        self,
        method: str,
        path: str,
        extraction: Extraction,
        body: Any = None,
        query: Optional[str] = None,
        parse: Optional[Callable[[Any], Any]] = None,
    ) -> Envelope:
        """``execute`` decoding the backend envelope with ``extraction``."""
        return await self.execute(
            method,
            path,
            body=body,
            query=query,
            decode=lambda text: decode_envelope(text, extraction, parse),
        )
