"""HTTP client for Shopee's web API.

Shopee rejects requests that do not look like they come from a browser, so
every call carries the user agent and origin/referer headers from
``ShopeeSettings``. Responses use ``{error, error_msg, data}`` where
``error == 0`` means success.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Callable, Optional, TypeVar

import httpx

from ..codec import decode_upstream_envelope
from ..config import Settings, ShopeeSettings, get_settings
from ..errors import DecodeError, HttpStatusError, TransportError
from .api_client import log_request, log_response, normalize_method

logger = logging.getLogger(__name__)

T = TypeVar("T")

GEN_QRCODE_PATH = "/api/v2/authentication/gen_qrcode"
QRCODE_STATUS_PATH = "/api/v2/authentication/qrcode_status"
QRCODE_LOGIN_PATH = "/api/v2/authentication/qrcode_login"
ACCOUNT_INFO_PATH = "/api/v4/account/basic/get_account_info"


class ShopeeClient:
    """Sends browser-emulating requests to Shopee.

    Like ``BackendClient``, each call opens its own ``httpx.AsyncClient``
    and keeps nothing between calls.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings or get_settings()
        self._transport = transport

    @property
    def shopee(self) -> ShopeeSettings:
        return self.settings.shopee

    async def send(
        self,
        method: str,
        path: str,
        query: Optional[str] = None,
        body: Any = None,
        headers: Optional[dict[str, str]] = None,
    ) -> httpx.Response:
        """Send one request and return the raw response, whatever its status.

        Raises:
            InvalidMethodError: before any network activity
            TransportError: connection, DNS, timeout or protocol failure
            DecodeError: the body cannot be decompressed
        """
        method = normalize_method(method)
        url = f"{self.shopee.origin}{path}"
        if query:
            url = f"{url}?{query}"

        request_headers = self.shopee.browser_headers()
        if body is not None or method != "GET":
            request_headers["Content-Type"] = "application/json"
        if headers:
            request_headers.update(headers)

        log_request(method, url, body, query)

        try:
            async with httpx.AsyncClient(
                transport=self._transport,
                timeout=self.settings.request_timeout,
            ) as client:
                response = await client.request(
                    method,
                    url,
                    headers=request_headers,
                    content=json.dumps(body).encode("utf-8") if body is not None else None,
                )
        except httpx.DecodingError as e:
            logger.warning(f"[SHOPEE PARSE ERROR] {path}: {e}")
            raise DecodeError(str(e)) from e
        except httpx.RequestError as e:
            logger.error(f"[SHOPEE ERROR] {method} {path}: {e}")
            raise TransportError(e) from e

        log_response(response.status_code, path, response.text, self.settings.log_body_limit)
        return response

    async def call(
        self,
        method: str,
        path: str,
        parse: Callable[[Any], T],
        query: Optional[str] = None,
        body: Any = None,
        headers: Optional[dict[str, str]] = None,
        missing: str = "No data in response",
    ) -> T:
        """Send a request and return ``parse(data)`` from a successful envelope.

        Raises:
            HttpStatusError: non-2xx status
            DecodeError: body or ``data`` does not match the expected shape
            UpstreamError: nonzero ``error`` code
            MissingDataError: ``error == 0`` but ``data`` absent
        """
        response = await self.send(method, path, query=query, body=body, headers=headers)
        text = response.text

        if not response.is_success:
            raise HttpStatusError(response.status_code, text)

        envelope = decode_upstream_envelope(text)
        if not envelope.ok:
            logger.warning(
                f"[SHOPEE ERROR] {path}: error={envelope.error} {envelope.error_msg or ''}"
            )
        data = envelope.require_data(missing)
        return parse_upstream_data(data, parse, text)


def parse_upstream_data(data: Any, parse: Callable[[Any], T], text: str) -> T:
    """Apply ``parse`` to an upstream ``data`` payload as a decode step."""
    try:
        return parse(data)
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise DecodeError(f"{type(e).__name__}: {e}", text) from e
