from .envelope import Envelope, UpstreamEnvelope
from .member import (
    MachineIdInfo,
    Niche,
    ProductSet,
    ProductSetItem,
    RedeemLicenseResult,
    ShopeeAccount,
    User,
)
from .shopee import AccountIdentity, LoginOutcome, QRChallenge, QRStatus

__all__ = [
    "Envelope",
    "UpstreamEnvelope",
    "MachineIdInfo",
    "Niche",
    "ProductSet",
    "ProductSetItem",
    "RedeemLicenseResult",
    "ShopeeAccount",
    "User",
    "AccountIdentity",
    "LoginOutcome",
    "QRChallenge",
    "QRStatus",
]
