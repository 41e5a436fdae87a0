"""Envelope codec unit tests"""
import json

import pytest

from livebot.codec import (
    FLATTEN,
    NONE,
    decode_envelope,
    decode_flexible_id,
    decode_upstream_envelope,
    nested,
    parse_list,
)
from livebot.errors import DecodeError, MissingDataError, UpstreamError
from livebot.models.member import Niche


class TestDecodeFlexibleId:
    """string / number / null identifiers"""

    def test_string_verbatim(self):
        assert decode_flexible_id("abc-123", "session_id") == "abc-123"

    def test_empty_string_kept(self):
        assert decode_flexible_id("", "session_id") == ""

    def test_integer_as_decimal(self):
        assert decode_flexible_id(987654321, "session_id") == "987654321"

    def test_large_integer_no_scientific_notation(self):
        assert decode_flexible_id(12345678901234567890, "session_id") == "12345678901234567890"

    def test_integral_float_has_no_fraction(self):
        assert decode_flexible_id(987654321.0, "session_id") == "987654321"

    def test_null_is_absent(self):
        assert decode_flexible_id(None, "session_id") is None

    def test_non_integral_float_fails(self):
        with pytest.raises(DecodeError):
            decode_flexible_id(1.5, "session_id")

    @pytest.mark.parametrize("raw", [{"id": 1}, [1, 2], True, False])
    def test_other_kinds_fail_naming_field(self, raw):
        with pytest.raises(DecodeError) as exc:
            decode_flexible_id(raw, "session_id")
        assert "session_id" in exc.value.message

    def test_number_parsed_from_wire(self):
        raw = json.loads('{"session_id": 987654321}')["session_id"]
        assert decode_flexible_id(raw, "session_id") == "987654321"


class TestDecodeEnvelope:
    """backend {success, message, ...} bodies"""

    def test_failure_carries_message(self):
        envelope = decode_envelope('{"success": false, "message": "x"}', FLATTEN)
        assert envelope.ok is False
        assert envelope.value is None
        assert envelope.message == "x"
        with pytest.raises(UpstreamError) as exc:
            envelope.require_value("fallback")
        assert exc.value.message == "x"

    @pytest.mark.parametrize("extraction", [FLATTEN, NONE, nested("niche")])
    def test_failure_message_independent_of_extraction(self, extraction):
        envelope = decode_envelope('{"success": false, "message": "x", "niche": {}}', extraction)
        with pytest.raises(UpstreamError, match="^x$"):
            envelope.raise_for_failure("fallback")

    def test_failure_without_message_uses_fallback(self):
        envelope = decode_envelope('{"success": false}', FLATTEN)
        with pytest.raises(UpstreamError, match="Failed to get niches"):
            envelope.raise_for_failure("Failed to get niches")

    def test_flatten_merges_top_level_fields(self):
        text = '{"success": true, "email": "a@b.c", "machine_id": "m1", "app_identifier": "app"}'
        envelope = decode_envelope(text, FLATTEN)
        assert envelope.value == {"email": "a@b.c", "machine_id": "m1", "app_identifier": "app"}

    def test_flatten_with_nothing_left_is_absent(self):
        envelope = decode_envelope('{"success": true, "message": "ok"}', FLATTEN)
        assert envelope.ok is True
        assert envelope.value is None
        assert envelope.message == "ok"

    def test_nested_key(self):
        text = '{"success": true, "niche": {"id": 3, "name": "Kitchen"}}'
        envelope = decode_envelope(text, nested("niche"), Niche.from_dict)
        assert envelope.value == Niche(id=3, name="Kitchen")

    def test_nested_key_missing_is_missing_data(self):
        envelope = decode_envelope('{"success": true, "data": {"id": 3}}', nested("niche"), Niche.from_dict)
        assert envelope.value is None
        with pytest.raises(MissingDataError):
            envelope.require_value("Failed to create niche")

    def test_nested_key_null_is_missing_data(self):
        envelope = decode_envelope('{"success": true, "niche": null}', nested("niche"))
        with pytest.raises(MissingDataError):
            envelope.require_value("Failed to create niche")

    def test_none_extraction_ignores_payload(self):
        envelope = decode_envelope('{"success": true, "data": [1]}', NONE)
        assert envelope.ok is True
        assert envelope.value is None

    def test_parse_error_becomes_decode_error(self):
        text = '{"success": true, "niche": {"name": "no id"}}'
        with pytest.raises(DecodeError) as exc:
            decode_envelope(text, nested("niche"), Niche.from_dict)
        assert exc.value.body == text

    def test_parse_list(self):
        text = '{"success": true, "niches": [{"id": 1, "name": "A"}, {"id": 2, "name": "B"}]}'
        envelope = decode_envelope(text, nested("niches"), parse_list(Niche.from_dict))
        assert [n.name for n in envelope.value] == ["A", "B"]

    def test_parse_list_rejects_object(self):
        with pytest.raises(DecodeError):
            decode_envelope('{"success": true, "niches": {}}', nested("niches"), parse_list(Niche.from_dict))

    @pytest.mark.parametrize(
        "text",
        ["not json", "[]", '{"message": "x"}', '{"success": "true"}', '{"success": 1}'],
    )
    def test_missing_boolean_success_fails(self, text):
        with pytest.raises(DecodeError) as exc:
            decode_envelope(text, FLATTEN)
        assert exc.value.body == text


class TestDecodeUpstreamEnvelope:
    """Shopee {error, error_msg, data} bodies"""

    def test_success(self):
        envelope = decode_upstream_envelope('{"error": 0, "data": {"a": 1}}')
        assert envelope.ok is True
        assert envelope.require_data() == {"a": 1}

    def test_error_code(self):
        envelope = decode_upstream_envelope('{"error": 90309999, "error_msg": "expired"}')
        with pytest.raises(UpstreamError) as exc:
            envelope.require_data()
        assert exc.value.code == 90309999
        assert "expired" in exc.value.message

    def test_error_code_without_message(self):
        envelope = decode_upstream_envelope('{"error": 2}')
        with pytest.raises(UpstreamError, match="Unknown error"):
            envelope.raise_for_error()

    def test_zero_without_data_is_missing_data(self):
        envelope = decode_upstream_envelope('{"error": 0}')
        with pytest.raises(MissingDataError):
            envelope.require_data()

    @pytest.mark.parametrize("text", ['{"data": {}}', '{"error": "0"}', '{"error": false}', "<html>"])
    def test_bad_error_field_fails(self, text):
        with pytest.raises(DecodeError):
            decode_upstream_envelope(text)
