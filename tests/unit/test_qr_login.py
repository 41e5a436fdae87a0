"""QRLogin phase tests"""
import base64

import httpx
import pytest

from livebot.errors import DecodeError, MissingDataError, TransportError, UpstreamError
from livebot.models.shopee import LoginOutcome, QRChallenge, QRStatus
from livebot.services.qr_login import QRLogin
from livebot.services.shopee_client import (
    GEN_QRCODE_PATH,
    QRCODE_LOGIN_PATH,
    QRCODE_STATUS_PATH,
)


@pytest.fixture
def qr(shopee):
    """Factory: responder -> (QRLogin, handler)"""

    def _make(responder):
        client, handler = shopee(responder)
        return QRLogin(client), handler

    return _make


class TestGenerate:

    @pytest.mark.asyncio
    async def test_generate(self, qr, reply):
        data = {"qrcode_id": "abc", "qrcode_base64": "iVBORw0KGgo="}
        login, handler = qr(reply(200, json={"error": 0, "data": data}))
        challenge = await login.generate()
        assert challenge == QRChallenge(qr_id="abc", qr_image_base64="iVBORw0KGgo=")
        assert handler.last.method == "GET"
        assert handler.last.url.path == GEN_QRCODE_PATH
        assert handler.last.content == b""

    @pytest.mark.asyncio
    async def test_generate_upstream_error(self, qr, reply):
        login, _ = qr(reply(200, json={"error": 1, "error_msg": "rate limited"}))
        with pytest.raises(UpstreamError, match="rate limited"):
            await login.generate()

    @pytest.mark.asyncio
    async def test_generate_without_data(self, qr, reply):
        login, _ = qr(reply(200, json={"error": 0}))
        with pytest.raises(MissingDataError):
            await login.generate()

    def test_image_bytes(self):
        png = b"\x89PNG\r\n"
        encoded = base64.b64encode(png).decode()
        assert QRChallenge("a", encoded).image_bytes() == png
        assert QRChallenge("a", f"data:image/png;base64,{encoded}").image_bytes() == png


class TestPoll:

    @pytest.mark.asyncio
    async def test_poll_waiting(self, qr, reply):
        login, handler = qr(reply(200, json={"error": 0, "data": {"qrcode_token": "", "status": "NEW"}}))
        status = await login.poll("abc")
        assert status == QRStatus(status="NEW", token=None)
        assert handler.last.url.path == QRCODE_STATUS_PATH
        assert handler.last.url.params["qrcode_id"] == "abc"

    @pytest.mark.asyncio
    async def test_poll_absent_token(self, qr, reply):
        login, _ = qr(reply(200, json={"error": 0, "data": {"status": "SCANNED"}}))
        assert (await login.poll("abc")).token is None

    @pytest.mark.asyncio
    async def test_poll_confirmed(self, qr, reply):
        data = {"qrcode_token": "tok123", "status": "CONFIRMED"}
        login, _ = qr(reply(200, json={"error": 0, "data": data}))
        assert await login.poll("abc") == QRStatus(status="CONFIRMED", token="tok123")

    @pytest.mark.asyncio
    async def test_poll_encodes_id(self, qr, reply):
        login, handler = qr(reply(200, json={"error": 0, "data": {"status": "NEW"}}))
        await login.poll("a+b/c=")
        assert b"qrcode_id=a%2Bb%2Fc%3D" in handler.last.url.raw_path
        assert handler.last.url.params["qrcode_id"] == "a+b/c="

    @pytest.mark.asyncio
    async def test_poll_repeated_before_confirmation_is_unchanged(self, qr, reply):
        login, handler = qr(reply(200, json={"error": 0, "data": {"qrcode_token": "", "status": "NEW"}}))
        first = await login.poll("abc")
        second = await login.poll("abc")
        assert first == second == QRStatus(status="NEW", token=None)
        assert len(handler.requests) == 2

    @pytest.mark.asyncio
    async def test_poll_missing_status_is_decode(self, qr, reply):
        login, _ = qr(reply(200, json={"error": 0, "data": {"qrcode_token": "t"}}))
        with pytest.raises(DecodeError):
            await login.poll("abc")


class TestExchange:

    @pytest.mark.asyncio
    async def test_payload_and_headers(self, qr, reply, settings):
        login, handler = qr(reply(200, json={"error": 0}, headers=[("Set-Cookie", "a=1")]))
        await login.exchange("tok123")
        request = handler.last
        assert request.method == "POST"
        assert request.url.path == QRCODE_LOGIN_PATH
        assert handler.last_json() == {
            "qrcode_token": "tok123",
            "device_sz_fingerprint": settings.shopee.device_sz_fingerprint,
            "client_identifier": {
                "security_device_fingerprint": settings.shopee.security_device_fingerprint,
            },
        }
        assert request.headers["af-ac-enc-sz-token"] == settings.shopee.anti_abuse_token
        assert request.headers["x-api-source"] == "pc"
        assert request.headers["x-requested-with"] == "XMLHttpRequest"
        assert request.headers["content-type"] == "application/json"
        assert request.headers["user-agent"] == settings.shopee.login_user_agent
        assert request.headers["referer"] == settings.shopee.login_referer

    @pytest.mark.asyncio
    async def test_success_joins_cookies(self, qr, reply):
        headers = [("Set-Cookie", "a=1"), ("Set-Cookie", "b=2")]
        login, _ = qr(reply(200, json={"error": 0}, headers=headers))
        outcome = await login.exchange("tok123")
        assert outcome == LoginOutcome(succeeded=True, cookies="a=1; b=2")

    @pytest.mark.asyncio
    async def test_http_failure_is_outcome_not_exception(self, qr, reply):
        login, _ = qr(reply(403, text="forbidden", headers=[("Set-Cookie", "a=1")]))
        outcome = await login.exchange("tok123")
        assert outcome.succeeded is False
        assert outcome.cookies is None
        assert outcome.error_message == "HTTP 403: forbidden"

    @pytest.mark.asyncio
    async def test_error_code_is_outcome(self, qr, reply):
        login, _ = qr(reply(200, json={"error": 2, "error_msg": "token expired"}, headers=[("Set-Cookie", "a=1")]))
        outcome = await login.exchange("tok123")
        assert outcome == LoginOutcome(succeeded=False, error_message="token expired")

    @pytest.mark.asyncio
    async def test_success_without_cookies(self, qr, reply):
        login, _ = qr(reply(200, json={"error": 0, "data": {}}))
        outcome = await login.exchange("tok123")
        assert outcome.succeeded is True
        assert outcome.cookies == ""

    @pytest.mark.asyncio
    async def test_undecodable_body_raises(self, qr, reply):
        login, _ = qr(reply(200, text="<html>"))
        with pytest.raises(DecodeError):
            await login.exchange("tok123")

    @pytest.mark.asyncio
    async def test_transport_failure_raises(self, qr):
        def responder(request):
            raise httpx.ConnectError("dns", request=request)

        login, _ = qr(responder)
        with pytest.raises(TransportError):
            await login.exchange("tok123")

    def test_outcome_to_dict(self):
        assert LoginOutcome(True, "a=1").to_dict() == {"success": True, "cookies": "a=1", "error_msg": None}
