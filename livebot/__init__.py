"""Client core for the livekenceng backend and Shopee QR login."""
from .config import Settings, ShopeeSettings, get_settings
from .errors import (
    ApiError,
    DecodeError,
    FailureKind,
    HttpStatusError,
    InvalidMethodError,
    MissingDataError,
    TransportError,
    UpstreamError,
)

__version__ = "0.1.0"

__all__ = [
    "Settings",
    "ShopeeSettings",
    "get_settings",
    "ApiError",
    "DecodeError",
    "FailureKind",
    "HttpStatusError",
    "InvalidMethodError",
    "MissingDataError",
    "TransportError",
    "UpstreamError",
]
