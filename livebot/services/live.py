"""Shopee Live session operations relayed through the backend."""
from __future__ import annotations

import logging

from ..codec import FLATTEN, NONE, decode_flexible_id
from .api_client import BackendClient

logger = logging.getLogger(__name__)


class LiveService:
    """Find the active live session and swap its product list."""

    def __init__(self, client: BackendClient, email: str, password: str):
        self.client = client
        self.email = email
        self.password = password

    def _body(self, shopee_account_id: int, **extra) -> dict:
        return {
            "email": self.email,
            "password": self.password,
            "shopee_account_id": shopee_account_id,
            **extra,
        }

    async def get_session_ids(self, shopee_account_id: int) -> list[str]:
        """Return ``[session_id]`` for the active session, or ``[]``.

        ``session_id`` arrives as a string, a number or null.
        """
        envelope = await self.client.request_envelope(
            "POST",
            "/shopee-live/active-session",
            FLATTEN,
            body=self._body(shopee_account_id),
            parse=lambda value: decode_flexible_id(value.get("session_id"), "session_id"),
        )
        envelope.raise_for_failure("Failed to get active session")

        session_id = envelope.value
        if session_id is None:
            logger.info(f"No active session for account {shopee_account_id}")
            return []
        return [session_id]

    async def replace_products(
        self, shopee_account_id: int, session_id: str, product_set_id: int
    ) -> dict:
        envelope = await self.client.request_envelope(
            "POST",
            "/shopee-live/replace-products",
            FLATTEN,
            body=self._body(
                shopee_account_id,
                session_id=session_id,
                product_set_id=product_set_id,
            ),
        )
        envelope.raise_for_failure("Failed to replace products")
        return envelope.value or {}

    async def clear_products(self, shopee_account_id: int, session_id: str) -> None:
        envelope = await self.client.request_envelope(
            "POST",
            "/shopee-live/clear-products",
            NONE,
            body=self._body(shopee_account_id, session_id=session_id),
        )
        envelope.raise_for_failure("Failed to clear products")
