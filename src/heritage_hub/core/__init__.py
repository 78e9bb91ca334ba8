"""Core module - Logging, signature verification, and error monitoring."""

from heritage_hub.core.logger import setup_logger
from heritage_hub.core.signature import verify_shippo_signature, validate_webhook_request

__all__ = ["setup_logger", "verify_shippo_signature", "validate_webhook_request"]
