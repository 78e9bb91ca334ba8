"""Unit tests for Shippo webhook signature validation."""

import hashlib
import hmac

from heritage_hub.core.signature import (
    compute_signature,
    validate_webhook_request,
    verify_shippo_signature,
)

SECRET = "whsec_test"
BODY = b'{"event":"track_updated","data":{"tracking_number":"1Z999"}}'


def sign(body: bytes, secret: str = SECRET) -> str:
    return hmac.new(secret.encode("utf-8"), body, hashlib.sha256).hexdigest()


class TestComputeSignature:
    def test_hex_hmac_sha256(self):
        assert compute_signature(SECRET, BODY) == sign(BODY)

    def test_depends_on_exact_bytes(self):
        reformatted = b'{"event": "track_updated", "data": {"tracking_number": "1Z999"}}'
        assert compute_signature(SECRET, BODY) != compute_signature(SECRET, reformatted)


class TestVerifyShippoSignature:
    def test_valid(self):
        assert verify_shippo_signature(BODY, sign(BODY), SECRET) is True

    def test_uppercase_and_whitespace_tolerated(self):
        assert verify_shippo_signature(BODY, f"  {sign(BODY).upper()} ", SECRET) is True

    def test_wrong_secret(self):
        assert verify_shippo_signature(BODY, sign(BODY, "other"), SECRET) is False

    def test_tampered_body(self):
        assert verify_shippo_signature(BODY + b" ", sign(BODY), SECRET) is False

    def test_missing_header(self):
        assert verify_shippo_signature(BODY, None, SECRET) is False
        assert verify_shippo_signature(BODY, "", SECRET) is False


class TestValidateWebhookRequest:
    """Signature posture decisions."""

    def test_signed_request_accepted(self):
        assert validate_webhook_request(BODY, sign(BODY), SECRET) == (True, None)

    def test_bad_signature_rejected(self):
        assert validate_webhook_request(BODY, "deadbeef", SECRET) == (False, "Invalid signature")

    def test_missing_signature_rejected_when_secret_set(self):
        assert validate_webhook_request(BODY, None, SECRET) == (False, "Invalid signature")

    def test_no_secret_accepts_unsigned(self):
        assert validate_webhook_request(BODY, None, None) == (True, None)
        assert validate_webhook_request(BODY, "anything", "") == (True, None)

    def test_no_secret_with_required_signature_rejects(self):
        is_valid, error = validate_webhook_request(BODY, sign(BODY), None, require_signature=True)
        assert is_valid is False
        assert error == "Webhook secret not configured"

    def test_required_signature_with_secret_checks_normally(self):
        result = validate_webhook_request(BODY, sign(BODY), SECRET, require_signature=True)
        assert result == (True, None)


class TestNonAsciiSignatureHeader:
    """Header values are decoded as latin-1 and can hold any byte."""

    def test_verify_returns_false(self):
        assert verify_shippo_signature(BODY, "caf\xe9", SECRET) is False

    def test_validate_rejects(self):
        assert validate_webhook_request(BODY, "\xe9" * 64, SECRET) == (False, "Invalid signature")
