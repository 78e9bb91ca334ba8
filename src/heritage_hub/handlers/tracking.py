"""Shippo tracking webhook handling."""

import json
from typing import Any, Dict

from pydantic import ValidationError

from heritage_hub.core.exceptions import WebhookValidationError
from heritage_hub.core.logger import log_context, setup_logger
from heritage_hub.core.monitoring import set_webhook_context
from heritage_hub.models.webhook import ShippoWebhookEvent
from heritage_hub.services.tracking_service import TrackingService

logger = setup_logger(__name__)


def parse_tracking_event(raw_body: bytes) -> ShippoWebhookEvent:
    """
    Parse and validate a Shippo webhook body.

    Raises:
        WebhookValidationError: Body is not JSON, or the tracking number
            or tracking status is missing
    """
    try:
        event = ShippoWebhookEvent.model_validate(json.loads(raw_body))
    except (ValueError, ValidationError) as e:
        raise WebhookValidationError(f"Invalid tracking payload: {e}") from e

    if not event.tracking_number:
        raise WebhookValidationError("Missing tracking_number")
    if not event.carrier_status:
        raise WebhookValidationError("Missing tracking_status.status")

    return event


async def handle_tracking_event(
    event: ShippoWebhookEvent,
    service: TrackingService,
) -> Dict[str, Any]:
    """Reconcile a validated tracking event with its order."""
    tracking_status = event.data.tracking_status

    set_webhook_context(
        endpoint="shippo-tracking",
        tracking_number=event.tracking_number,
        carrier_status=event.carrier_status,
    )

    logger.info(
        f"Tracking update: {event.tracking_number} -> {event.carrier_status} "
        f"(substatus={tracking_status.substatus}, date={tracking_status.status_date}, "
        f"test={event.test})",
        extra=log_context(
            endpoint="shippo-tracking",
            tracking_number=event.tracking_number,
            carrier_status=event.carrier_status,
        ),
    )

    return await service.process_tracking_update(event.tracking_number, event.carrier_status)
