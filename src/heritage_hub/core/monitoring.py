"""
GlitchTip Error Monitoring Utilities

Helper functions for error tracking and context management.
"""

import logging
from typing import Any, Dict, Optional

import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.logging import LoggingIntegration

from heritage_hub.core.logger import setup_logger

logger = setup_logger(__name__)


def init_monitoring(dsn: Optional[str], environment: str) -> bool:
    """
    Initialize GlitchTip (Sentry-compatible) error monitoring.

    Returns:
        True if monitoring was initialized
    """
    if not dsn:
        logger.debug("GlitchTip DSN not set, error monitoring disabled")
        return False

    try:
        sentry_sdk.init(
            dsn=dsn,
            environment=environment,
            integrations=[
                FastApiIntegration(transaction_style="endpoint"),
                LoggingIntegration(
                    level=None,  # Capture all log levels as breadcrumbs
                    event_level=logging.ERROR,  # Send ERROR logs as events
                ),
            ],
            traces_sample_rate=0.1,
            profiles_sample_rate=0.0,
            send_default_pii=False,  # Customer emails stay out of events
        )
        logger.info("GlitchTip error monitoring initialized")
        return True
    except Exception as e:
        logger.error(f"Failed to initialize GlitchTip: {e}")
        return False


def set_webhook_context(
    endpoint: str,
    record_id: Optional[str] = None,
    tracking_number: Optional[str] = None,
    **extra_tags,
) -> None:
    """
    Set webhook-specific context for error tracking.

    Args:
        endpoint: Webhook name (e.g. "shippo-tracking")
        record_id: Airtable record ID
        tracking_number: Carrier tracking number
        **extra_tags: Additional tags to add
    """
    try:
        sentry_sdk.set_tag("webhook.endpoint", endpoint)
        if record_id:
            sentry_sdk.set_tag("webhook.record_id", record_id)
        if tracking_number:
            sentry_sdk.set_tag("webhook.tracking_number", tracking_number)

        for key, value in extra_tags.items():
            sentry_sdk.set_tag(key, value)

        context_data = {
            "endpoint": endpoint,
            "record_id": record_id,
            "tracking_number": tracking_number,
        }
        context_data.update(extra_tags)
        sentry_sdk.set_context("webhook", context_data)

    except Exception as e:
        logger.warning(f"Failed to set webhook context: {e}")


def capture_exception(
    error: Exception,
    context: Optional[Dict[str, Any]] = None,
    level: str = "error",
) -> None:
    """
    Capture an exception and send to GlitchTip.

    Args:
        error: The exception to capture
        context: Additional context data
        level: Error level (error, warning, info)
    """
    try:
        if context:
            with sentry_sdk.new_scope() as scope:
                scope.set_context("custom", context)
                scope.set_level(level)
                sentry_sdk.capture_exception(error)
        else:
            sentry_sdk.capture_exception(error)

    except Exception as e:
        logger.warning(f"Failed to capture exception in GlitchTip: {e}")
