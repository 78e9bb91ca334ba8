"""Shippo Webhook Signature Verification.

Verifies that incoming tracking webhooks were signed by Shippo using
HMAC-SHA256 over the raw request body.
"""

import hashlib
import hmac
from typing import Optional

from heritage_hub.core.logger import setup_logger

logger = setup_logger(__name__)


def compute_signature(secret: str, request_body: bytes) -> str:
    """Hex HMAC-SHA256 digest of the raw body."""
    return hmac.new(
        secret.encode("utf-8"),
        request_body,
        hashlib.sha256,
    ).hexdigest()


def verify_shippo_signature(
    request_body: bytes,
    signature_header: Optional[str],
    secret: str,
) -> bool:
    """
    Verify a Shippo webhook signature.

    Args:
        request_body: Raw request body as bytes (NOT parsed JSON)
        signature_header: Value from X-Shippo-Signature header
        secret: Shared webhook secret

    Returns:
        True if the signature matches
    """
    if not signature_header:
        logger.warning("Webhook received without X-Shippo-Signature header")
        return False

    expected_signature = compute_signature(secret, request_body)

    # Starlette decodes headers as latin-1; compare bytes so non-ASCII input
    # is a mismatch rather than a TypeError
    provided = signature_header.strip().lower().encode("utf-8", "surrogateescape")
    is_valid = hmac.compare_digest(expected_signature.encode("ascii"), provided)

    if is_valid:
        logger.info("Valid Shippo webhook signature")
    else:
        logger.warning(f"Invalid Shippo webhook signature. Got: {signature_header[:16]}...")

    return is_valid


def validate_webhook_request(
    raw_body: bytes,
    signature_header: Optional[str],
    secret: Optional[str],
    require_signature: bool = False,
) -> tuple[bool, Optional[str]]:
    """
    Decide whether a tracking webhook may be processed.

    With no secret configured, the request is accepted unless
    ``require_signature`` is set. With a secret configured, the
    signature is always checked.

    Returns:
        Tuple of (is_valid: bool, error_message: Optional[str])
    """
    if not secret:
        if require_signature:
            logger.error("Signature required but SHIPPO_WEBHOOK_SECRET is not configured")
            return False, "Webhook secret not configured"

        logger.warning("No SHIPPO_WEBHOOK_SECRET configured - skipping validation")
        return True, None

    if not verify_shippo_signature(raw_body, signature_header, secret):
        return False, "Invalid signature"

    return True, None
