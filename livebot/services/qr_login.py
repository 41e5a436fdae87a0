"""Shopee QR code login handshake.

Three phases, each independently callable:

1. ``generate()``  -> QRChallenge (show the image to the user)
2. ``poll(qr_id)`` -> QRStatus, repeated by the caller on its own timer
3. ``exchange(token)`` -> LoginOutcome with the session cookie blob

``QRLogin`` holds no state between calls. The caller owns the current
phase, the token, the polling interval and the decision of which status
strings are terminal.
"""
from __future__ import annotations

import logging
from urllib.parse import quote

from ..codec import decode_upstream_envelope
from ..models.shopee import LoginOutcome, QRChallenge, QRStatus
from .shopee_client import (
    GEN_QRCODE_PATH,
    QRCODE_LOGIN_PATH,
    QRCODE_STATUS_PATH,
    ShopeeClient,
)

logger = logging.getLogger(__name__)


class QRLogin:
    """Drives the generate / poll / exchange sequence against Shopee."""

    def __init__(self, client: ShopeeClient):
        self.client = client

    async def generate(self) -> QRChallenge:
        """Request a new QR code.

        Raises:
            UpstreamError: Shopee returned a nonzero error code
            MissingDataError: success without ``data``
        """
        challenge = await self.client.call(
            "GET",
            GEN_QRCODE_PATH,
            QRChallenge.from_dict,
            missing="Invalid response from Shopee API",
        )
        logger.info(f"QR code generated: {challenge.qr_id}")
        return challenge

    async def poll(self, qr_id: str) -> QRStatus:
        """Check the scan status of ``qr_id`` once.

        ``token`` is None until the scan is confirmed; an empty
        ``qrcode_token`` is treated the same as a missing one.
        """
        status = await self.client.call(
            "GET",
            QRCODE_STATUS_PATH,
            QRStatus.from_dict,
            query=f"qrcode_id={quote(qr_id, safe='')}",
        )
        logger.debug(f"QR status {qr_id}: {status.status}")
        return status

    def build_login_payload(self, token: str) -> dict:
        shopee = self.client.shopee
        return {
            "qrcode_token": token,
            "device_sz_fingerprint": shopee.device_sz_fingerprint,
            "client_identifier": {
                "security_device_fingerprint": shopee.security_device_fingerprint,
            },
        }

    async def exchange(self, token: str) -> LoginOutcome:
        """Trade a confirmed QR token for session cookies.

        A rejected login is returned as ``LoginOutcome(succeeded=False)``.
        Transport failures and undecodable 2xx bodies still raise.
        """
        response = await self.client.send(
            "POST",
            QRCODE_LOGIN_PATH,
            body=self.build_login_payload(token),
            headers=self.client.shopee.login_headers(),
        )

        # Read before the body is inspected; cookies can come with a failure
        set_cookies = response.headers.get_list("set-cookie")
        text = response.text

        if not response.is_success:
            logger.warning(f"QR login rejected: HTTP {response.status_code}")
            return LoginOutcome(
                succeeded=False,
                error_message=f"HTTP {response.status_code}: {text}",
            )

        envelope = decode_upstream_envelope(text)
        if not envelope.ok:
            logger.warning(f"QR login failed: error={envelope.error} {envelope.error_msg}")
            return LoginOutcome(succeeded=False, error_message=envelope.error_msg)

        if not set_cookies:
            logger.warning("QR login succeeded without Set-Cookie headers")
        logger.info(f"QR login succeeded ({len(set_cookies)} cookies)")
        return LoginOutcome(succeeded=True, cookies="; ".join(set_cookies))
