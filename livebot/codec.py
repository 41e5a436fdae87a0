"""Response body decoding for the backend and Shopee envelopes.

The backend is inconsistent about where it puts payloads: some endpoints
return fields at top level next to ``success``, others nest them under a
named key (``niche``, ``product_set``, ``shopee_account``, ``data`` ...).
Callers pick the strategy per endpoint with an ``Extraction``; nothing is
inferred from the body.
"""
from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Callable, Optional

from .errors import DecodeError
from .models.envelope import Envelope, UpstreamEnvelope

_ENVELOPE_KEYS = ("success", "message")


@dataclass(frozen=True)
class Extraction:
    """Where the payload of a backend envelope lives.

    Attributes:
        mode: "flatten", "nested" or "none"
        key: field name for "nested"
    """
    mode: str
    key: Optional[str] = None

    def extract(self, obj: dict) -> Any:
        if self.mode == "none":
            return None
        if self.mode == "nested":
            return obj.get(self.key)
        rest = {k: v for k, v in obj.items() if k not in _ENVELOPE_KEYS}
        return rest or None


FLATTEN = Extraction("flatten")
NONE = Extraction("none")


def nested(key: str) -> Extraction:
    """Payload read from ``obj[key]``; absent or null means no value."""
    return Extraction("nested", key)


def decode_flexible_id(raw: Any, field: str) -> Optional[str]:
    """Normalize an identifier that may arrive as string, number or null.

    Integral numbers become their base-10 string (``987654321.0`` included);
    anything else is a DecodeError naming ``field``.
    """
    if raw is None:
        return None
    if isinstance(raw, str):
        return raw
    # bool is an int subclass
    if isinstance(raw, bool):
        raise DecodeError(f"{field}: expected string, number, or null, got boolean")
    if isinstance(raw, int):
        return str(raw)
    if isinstance(raw, float):
        # NaN and infinities are not integers either
        if not raw.is_integer():
            raise DecodeError(f"{field}: expected a whole-number identifier, got {raw!r}")
        return str(int(raw))
    raise DecodeError(
        f"{field}: expected string, number, or null, got {type(raw).__name__}"
    )


def _load_object(text: str) -> dict:
    try:
        obj = json.loads(text)
    except ValueError as e:
        raise DecodeError(str(e), text) from e
    if not isinstance(obj, dict):
        raise DecodeError(f"expected a JSON object, got {type(obj).__name__}", text)
    return obj


def decode_envelope(
    text: str,
    extraction: Extraction = FLATTEN,
    parse: Optional[Callable[[Any], Any]] = None,
) -> Envelope:
    """Decode a backend ``{success, message, ...}`` body.

    Args:
        text: raw response body
        extraction: payload location for this endpoint
        parse: converter applied to a present payload (e.g. ``Niche.from_dict``)

    Returns:
        Envelope; ``value`` is None on failure or when the payload is absent

    Raises:
        DecodeError: body is not an object with a boolean ``success``, or
            ``parse`` rejected the payload
    """
    obj = _load_object(text)

    success = obj.get("success")
    if not isinstance(success, bool):
        raise DecodeError("missing boolean field 'success'", text)

    message = obj.get("message")
    if message is not None and not isinstance(message, str):
        message = str(message)

    if not success:
        return Envelope(ok=False, value=None, message=message)

    value = extraction.extract(obj)
    if value is not None and parse is not None:
        try:
            value = parse(value)
        except DecodeError as e:
            if e.body is not None:
                raise
            raise DecodeError(e.detail, text) from e
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise DecodeError(f"{type(e).__name__}: {e}", text) from e
    return Envelope(ok=True, value=value, message=message)


def decode_upstream_envelope(text: str) -> UpstreamEnvelope:
    """Decode a Shopee ``{error, error_msg, data}`` body."""
    obj = _load_object(text)

    error = obj.get("error")
    if isinstance(error, bool) or not isinstance(error, int):
        raise DecodeError("missing integer field 'error'", text)

    error_msg = obj.get("error_msg")
    if error_msg is not None and not isinstance(error_msg, str):
        error_msg = str(error_msg)

    return UpstreamEnvelope(error=error, error_msg=error_msg, data=obj.get("data"))


def parse_list(item_parser: Callable[[dict], Any]) -> Callable[[Any], list]:
    """Build a ``parse`` callable for endpoints returning a JSON array."""

    def _parse(value: Any) -> list:
        if not isinstance(value, list):
            raise TypeError(f"expected a list, got {type(value).__name__}")
        return [item_parser(item) for item in value]

    return _parse
