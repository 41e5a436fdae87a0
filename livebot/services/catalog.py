"""Shopee account, niche and product set CRUD on the backend.

Every call carries the member's email and password. The backend wraps
created/updated objects under endpoint specific keys, so each call names
its extraction explicitly.
"""
from __future__ import annotations

from typing import Any, Optional
from urllib.parse import urlencode

from ..codec import FLATTEN, NONE, nested, parse_list
from ..models.member import Niche, ProductSet, ShopeeAccount
from .api_client import BackendClient


class CatalogService:
    """CRUD for shopee accounts, niches, product sets and their items."""

    def __init__(self, client: BackendClient, email: str, password: str):
        self.client = client
        self.email = email
        self.password = password

    def _credentials(self, **extra: Any) -> dict:
        body = {"email": self.email, "password": self.password}
        body.update({k: v for k, v in extra.items() if v is not None})
        return body

    # ============================================
    # Shopee accounts
    # ============================================

    async def get_shopee_accounts(self) -> list[ShopeeAccount]:
        envelope = await self.client.request_envelope(
            "GET",
            "/members/shopee-accounts",
            nested("data"),
            query=urlencode({"email": self.email, "password": self.password}),
            parse=parse_list(ShopeeAccount.from_dict),
        )
        return envelope.require_value("Failed to get accounts")

    async def add_shopee_account(self, name: str, cookie: str, is_active: bool = True) -> ShopeeAccount:
        envelope = await self.client.request_envelope(
            "POST",
            "/members/shopee-accounts",
            nested("data"),
            body=self._credentials(name=name, cookie=cookie, is_active=is_active),
            parse=ShopeeAccount.from_dict,
        )
        return envelope.require_value("Failed to add account")

    async def update_shopee_account(
        self, account_id: int, name: str, cookie: str, is_active: bool
    ) -> ShopeeAccount:
        envelope = await self.client.request_envelope(
            "PUT",
            f"/members/shopee-accounts/{account_id}",
            nested("shopee_account"),
            body=self._credentials(name=name, cookie=cookie, is_active=is_active),
            parse=ShopeeAccount.from_dict,
        )
        return envelope.require_value("Failed to update account")

    async def delete_shopee_account(self, account_id: int) -> None:
        envelope = await self.client.request_envelope(
            "DELETE",
            f"/members/shopee-accounts/{account_id}",
            NONE,
            body=self._credentials(),
        )
        envelope.raise_for_failure("Failed to delete account")

    # ============================================
    # Niches
    # ============================================

    async def get_niches(self) -> list[Niche]:
        # GET with a JSON body; the backend reads credentials from it
        envelope = await self.client.request_envelope(
            "GET",
            "/members/niches",
            nested("niches"),
            body=self._credentials(),
            parse=parse_list(Niche.from_dict),
        )
        return envelope.require_value("Failed to get niches")

    async def create_niche(self, name: str, description: Optional[str] = None) -> Niche:
        envelope = await self.client.request_envelope(
            "POST",
            "/members/niches",
            nested("niche"),
            body=self._credentials(name=name, description=description),
            parse=Niche.from_dict,
        )
        return envelope.require_value("Failed to create niche")

    async def update_niche(self, niche_id: int, name: str, description: Optional[str] = None) -> None:
        envelope = await self.client.request_envelope(
            "PUT",
            f"/members/niches/{niche_id}",
            NONE,
            body=self._credentials(name=name, description=description),
        )
        envelope.raise_for_failure("Failed to update niche")

    async def delete_niche(self, niche_id: int) -> None:
        envelope = await self.client.request_envelope(
            "DELETE", f"/members/niches/{niche_id}", NONE, body=self._credentials()
        )
        envelope.raise_for_failure("Failed to delete niche")

    # ============================================
    # Product sets
    # ============================================

    async def get_product_sets(self) -> list[ProductSet]:
        envelope = await self.client.request_envelope(
            "GET",
            "/members/product-sets",
            nested("product_sets"),
            body=self._credentials(),
            parse=parse_list(ProductSet.from_dict),
        )
        return envelope.require_value("Failed to get product sets")

    async def create_product_set(
        self,
        name: str,
        description: Optional[str] = None,
        niche_id: Optional[int] = None,
    ) -> ProductSet:
        envelope = await self.client.request_envelope(
            "POST",
            "/members/product-sets",
            nested("product_set"),
            body=self._credentials(name=name, description=description, niche_id=niche_id),
            parse=ProductSet.from_dict,
        )
        return envelope.require_value("Failed to create product set")

    async def update_product_set(
        self,
        product_set_id: int,
        name: str,
        description: Optional[str] = None,
        niche_id: Optional[int] = None,
    ) -> None:
        envelope = await self.client.request_envelope(
            "PUT",
            f"/members/product-sets/{product_set_id}",
            NONE,
            body=self._credentials(name=name, description=description, niche_id=niche_id),
        )
        envelope.raise_for_failure("Failed to update product set")

    async def delete_product_set(self, product_set_id: int) -> None:
        envelope = await self.client.request_envelope(
            "DELETE",
            f"/members/product-sets/{product_set_id}",
            NONE,
            body=self._credentials(),
        )
        envelope.raise_for_failure("Failed to delete product set")

    async def add_product_set_items(self, product_set_id: int, items: list[dict]) -> dict:
        """Append items (``{"url": ...}`` dicts); returns the server payload."""
        envelope = await self.client.request_envelope(
            "POST",
            f"/members/product-sets/{product_set_id}/items",
            FLATTEN,
            body=self._credentials(items=items),
        )
        envelope.raise_for_failure("Failed to add items")
        return envelope.value or {}

    async def delete_product_set_item(self, product_set_id: int, item_id: int) -> None:
        envelope = await self.client.request_envelope(
            "DELETE",
            f"/members/product-sets/{product_set_id}/items/{item_id}",
            NONE,
            body=self._credentials(),
        )
        envelope.raise_for_failure("Failed to delete item")

    async def clear_product_set_items(self, product_set_id: int) -> None:
        envelope = await self.client.request_envelope(
            "DELETE",
            f"/members/product-sets/{product_set_id}/items",
            NONE,
            body=self._credentials(),
        )
        envelope.raise_for_failure("Failed to clear items")
