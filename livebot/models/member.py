"""First-party backend models (account, license, catalog)."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class User:
    """Member returned by ``/members/login``."""
    id: int
    email: str
    machine_id: str
    telegram_username: Optional[str] = None
    expiry_date: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> User:
        return cls(
            id=int(data["id"]),
            email=data["email"],
            machine_id=data["machine_id"],
            telegram_username=data.get("telegram_username"),
            expiry_date=data.get("expiry_date"),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "email": self.email,
            "machine_id": self.machine_id,
            "telegram_username": self.telegram_username,
            "expiry_date": self.expiry_date,
        }


@dataclass
class MachineIdInfo:
    """Machine binding registered for an email."""
    email: str
    machine_id: str
    app_identifier: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> MachineIdInfo:
        return cls(
            email=data["email"],
            machine_id=data["machine_id"],
            app_identifier=data.get("app_identifier"),
        )


@dataclass
class RedeemLicenseResult:
    """Outcome of redeeming a license key."""
    is_new_member: bool
    expiry_date: Optional[str] = None
    days_added: Optional[int] = None

    @classmethod
    def from_dict(cls, data: dict) -> RedeemLicenseResult:
        is_new_member = data["is_new_member"]
        if not isinstance(is_new_member, bool):
            raise TypeError("is_new_member must be a boolean")
        days_added = data.get("days_added")
        return cls(
            is_new_member=is_new_member,
            expiry_date=data.get("expiry_date"),
            days_added=int(days_added) if days_added is not None else None,
        )


@dataclass
class ShopeeAccount:
    """Shopee account stored on the backend (cookie blob kept server side)."""
    id: int
    name: str
    is_active: bool
    created_at: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> ShopeeAccount:
        return cls(
            id=int(data["id"]),
            name=data["name"],
            is_active=bool(data["is_active"]),
            created_at=data.get("created_at"),
        )


@dataclass
class ProductSetItem:
    id: int
    url: str
    shop_id: Optional[int] = None
    item_id: Optional[int] = None

    @classmethod
    def from_dict(cls, data: dict) -> ProductSetItem:
        return cls(
            id=int(data["id"]),
            url=data["url"],
            shop_id=data.get("shop_id"),
            item_id=data.get("item_id"),
        )


@dataclass
class ProductSet:
    id: int
    name: str
    description: Optional[str] = None
    niche_id: Optional[int] = None
    items: list[ProductSetItem] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> ProductSet:
        return cls(
            id=int(data["id"]),
            name=data["name"],
            description=data.get("description"),
            niche_id=data.get("niche_id"),
            items=[ProductSetItem.from_dict(i) for i in data.get("items") or []],
        )


@dataclass
class Niche:
    """A named group of product sets."""
    id: int
    name: str
    description: Optional[str] = None
    product_sets: list[ProductSet] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> Niche:
        return cls(
            id=int(data["id"]),
            name=data["name"],
            description=data.get("description"),
            product_sets=[ProductSet.from_dict(p) for p in data.get("product_sets") or []],
        )
