"""Member account, license and machine binding operations."""
from __future__ import annotations

import logging
from typing import Optional
from urllib.parse import quote, urlencode

from ..codec import FLATTEN, NONE, nested
from ..models.member import MachineIdInfo, RedeemLicenseResult, User
from .api_client import BackendClient

logger = logging.getLogger(__name__)


class MemberService:
    """Login, license redemption and machine-id management."""

    def __init__(self, client: BackendClient):
        self.client = client

    @property
    def app_identifier(self) -> str:
        return self.client.settings.app_identifier

    async def get_user_machine_id(self, email: str) -> MachineIdInfo:
        """Return the machine id the backend has on record for ``email``.

        This endpoint answers with a flat body, not a wrapped payload.
        """
        envelope = await self.client.request_envelope(
            "GET",
            f"/members/machine-id/{quote(email, safe='')}",
            FLATTEN,
            query=urlencode({"app_identifier": self.app_identifier}),
            parse=MachineIdInfo.from_dict,
        )
        return envelope.require_value("Failed to get machine ID from server")

    async def login(self, email: str, password: str, machine_id: str) -> User:
        envelope = await self.client.request_envelope(
            "POST",
            "/members/login",
            nested("user"),
            body={
                "email": email,
                "password": password,
                "machine_id": machine_id,
                "app_identifier": self.app_identifier,
            },
            parse=User.from_dict,
        )
        user = envelope.require_value("Login failed", missing="No user data in response")
        logger.info(f"Logged in as {user.email}")
        return user

    async def redeem_license(self, email: str, license_key: str) -> RedeemLicenseResult:
        envelope = await self.client.request_envelope(
            "POST",
            "/members/redeem-license",
            FLATTEN,
            body={"email": email, "license_key": license_key},
            parse=RedeemLicenseResult.from_dict,
        )
        return envelope.require_value("Redeem failed")

    async def update_machine_id(
        self,
        email: str,
        machine_id: str,
        password: Optional[str] = None,
    ) -> None:
        """Bind ``email`` to ``machine_id``.

        ``password`` forces the update after a machine-id mismatch.
        """
        body = {
            "email": email,
            "machine_id": machine_id,
            "app_identifier": self.app_identifier,
        }
        if password is not None:
            body["password"] = password
        envelope = await self.client.request_envelope(
            "POST", "/members/machine-id", NONE, body=body
        )
        envelope.raise_for_failure("Failed to update machine ID")

    async def change_password(
        self,
        email: str,
        new_password: str,
        machine_id: str,
        current_password: Optional[str] = None,
    ) -> None:
        envelope = await self.client.request_envelope(
            "POST",
            "/members/change-password",
            NONE,
            body={
                "email": email,
                "current_password": current_password,
                "new_password": new_password,
                "machine_id": machine_id,
            },
        )
        envelope.raise_for_failure("Change password failed")
