"""Command-line caller for the QR login handshake.

Usage:
    livebot machine-id
    livebot qr-login --qr-out qr.png --interval 2 --timeout 180

This plays the part of the desktop UI: it owns the polling timer and
decides which Shopee status strings end the wait.
"""
from __future__ import annotations

import argparse
import asyncio
import logging
import sys
import time
from pathlib import Path
from typing import Awaitable, Callable, Optional

from .config import get_settings
from .errors import ApiError
from .logger import setup_logger
from .machine import generate_machine_id
from .models.shopee import LoginOutcome
from .services.qr_login import QRLogin
from .services.shopee_account import fetch_account_info
from .services.shopee_client import ShopeeClient

logger = logging.getLogger(__name__)

# Statuses observed from Shopee that end polling
CONFIRMED = "CONFIRMED"
FAILED_STATUSES = ("EXPIRED", "CANCELLED")


async def wait_for_token(
    qr_login: QRLogin,
    qr_id: str,
    interval: float = 2.0,
    timeout: float = 180.0,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> Optional[str]:
    """Poll until the scan is confirmed.

    Returns:
        the login token, or None on expiry, cancellation or timeout
    """
    deadline = time.monotonic() + timeout
    last_status = None
    while True:
        status = await qr_login.poll(qr_id)
        if status.status != last_status:
            print(f"QR status: {status.status}")
            last_status = status.status
        if status.status == CONFIRMED and status.token:
            return status.token
        if status.status in FAILED_STATUSES:
            return None
        if time.monotonic() >= deadline:
            print("Timed out waiting for the QR code to be scanned")
            return None
        await sleep(interval)


async def run_qr_login(
    client: ShopeeClient,
    qr_out: Path,
    interval: float = 2.0,
    timeout: float = 180.0,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> LoginOutcome:
    """Run the whole handshake and print the account it logged into."""
    qr_login = QRLogin(client)

    challenge = await qr_login.generate()
    qr_out.write_bytes(challenge.image_bytes())
    print(f"Scan the QR code saved to {qr_out} with the Shopee app")

    token = await wait_for_token(qr_login, challenge.qr_id, interval, timeout, sleep)
    if token is None:
        return LoginOutcome(succeeded=False, error_message="QR code was not confirmed")

    outcome = await qr_login.exchange(token)
    if not outcome.succeeded:
        return outcome

    try:
        info = await fetch_account_info(client, outcome.cookies or "")
    except ApiError as e:
        # the cookies are still valid output
        logger.warning(f"Account info lookup failed: {e}")
    else:
        print(f"Logged in as {info.username} ({info.nickname}, id {info.userid})")
    return outcome


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="livebot",
        description="livekenceng client tools",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="log request and response bodies")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("machine-id", help="print this machine's id")

    qr = sub.add_parser("qr-login", help="log in to Shopee by scanning a QR code")
    qr.add_argument("--qr-out", type=Path, default=Path("shopee_qr.png"), help="where to write the QR image")
    qr.add_argument("--interval", type=float, default=2.0, metavar="SEC", help="poll interval")
    qr.add_argument("--timeout", type=float, default=180.0, metavar="SEC", help="give up after this long")
    qr.add_argument("--cookies-out", type=Path, default=None, help="write the cookie blob to this file")

    args = parser.parse_args(argv)

    if args.command == "machine-id":
        print(generate_machine_id())
        return 0

    setup_logger(log_level="DEBUG" if args.verbose else None)
    client = ShopeeClient(get_settings())
    try:
        outcome = asyncio.run(run_qr_login(client, args.qr_out, args.interval, args.timeout))
    except ApiError as e:
        logger.error(f"QR login failed: {e}")
        print(f"Error: {e.message}", file=sys.stderr)
        return 1

    if not outcome.succeeded:
        print(f"Login failed: {outcome.error_message}", file=sys.stderr)
        return 1

    if args.cookies_out:
        args.cookies_out.write_text(outcome.cookies or "", encoding="utf-8")
        print(f"Cookies written to {args.cookies_out}")
    else:
        print(outcome.cookies)
    return 0


if __name__ == "__main__":
    sys.exit(main())
