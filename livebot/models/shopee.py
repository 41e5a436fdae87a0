"""Shopee QR login and account models."""
from __future__ import annotations

import base64
from dataclasses import dataclass
from typing import Optional


@dataclass
class QRChallenge:
    """QR code issued by ``gen_qrcode``.

    Attributes:
        qr_id: id to poll with
        qr_image_base64: PNG image, base64 encoded
    """
    qr_id: str
    qr_image_base64: str

    @classmethod
    def from_dict(cls, data: dict) -> QRChallenge:
        return cls(
            qr_id=_require_str(data, "qrcode_id"),
            qr_image_base64=_require_str(data, "qrcode_base64"),
        )

    def image_bytes(self) -> bytes:
        """Decode the image, tolerating a ``data:`` URL prefix."""
        raw = self.qr_image_base64
        if raw.startswith("data:") and "," in raw:
            raw = raw.split(",", 1)[1]
        return base64.b64decode(raw)


@dataclass
class QRStatus:
    """One poll result. ``token`` stays None until the scan is confirmed."""
    status: str
    token: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> QRStatus:
        token = data.get("qrcode_token")
        if token is not None and not isinstance(token, str):
            raise TypeError("qrcode_token must be a string")
        return cls(
            status=_require_str(data, "status"),
            # "" and absent both mean "not yet available"
            token=token or None,
        )

    def to_dict(self) -> dict:
        return {"status": self.status, "qrcode_token": self.token}


@dataclass
class LoginOutcome:
    """Result of the token exchange.

    Failed or expired tokens are expected during login, so failure is a
    value here rather than an exception.
    """
    succeeded: bool
    cookies: Optional[str] = None
    error_message: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "success": self.succeeded,
            "cookies": self.cookies,
            "error_msg": self.error_message,
        }


@dataclass
class AccountIdentity:
    """Shopee account metadata fetched with a cookie blob."""
    userid: int
    username: str
    nickname: str
    email: Optional[str] = None
    phone: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> AccountIdentity:
        userid = data["userid"]
        if isinstance(userid, bool) or not isinstance(userid, int):
            raise TypeError("userid must be an integer")
        return cls(
            userid=userid,
            username=_require_str(data, "username"),
            nickname=_require_str(data, "nickname"),
            email=data.get("email"),
            phone=data.get("phone"),
        )

    def to_dict(self) -> dict:
        return {
            "userid": self.userid,
            "username": self.username,
            "nickname": self.nickname,
            "email": self.email,
            "phone": self.phone,
        }


def _require_str(data: dict, key: str) -> str:
    value = data[key]
    if not isinstance(value, str):
        raise TypeError(f"{key} must be a string")
    return value
