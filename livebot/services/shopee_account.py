"""Shopee account lookup using a cookie blob from the QR login."""
from __future__ import annotations

from ..models.shopee import AccountIdentity
from .shopee_client import ACCOUNT_INFO_PATH, ShopeeClient


async def fetch_account_info(client: ShopeeClient, cookies: str) -> AccountIdentity:
    """Return the account the cookies belong to.

    Raises:
        HttpStatusError, UpstreamError, MissingDataError, DecodeError
    """
    return await client.call(
        "GET",
        ACCOUNT_INFO_PATH,
        AccountIdentity.from_dict,
        headers={"Cookie": cookies, "Accept": "application/json"},
        missing="No account info in response",
    )
