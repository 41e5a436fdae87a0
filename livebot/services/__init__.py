from .api_client import BackendClient
from .catalog import CatalogService
from .live import LiveService
from .members import MemberService
from .qr_login import QRLogin
from .shopee_account import fetch_account_info
from .shopee_client import ShopeeClient

__all__ = [
    "BackendClient",
    "CatalogService",
    "LiveService",
    "MemberService",
    "QRLogin",
    "ShopeeClient",
    "fetch_account_info",
]
