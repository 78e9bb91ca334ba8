"""Order status webhook: customer email for the new Ops Status."""

from typing import Any, Dict

from heritage_hub.api.sendgrid import SendGridClient
from heritage_hub.config.constants import (
    FIELD_ACTIVE_TRACKING,
    FIELD_CUSTOMER_EMAIL,
    FIELD_CUSTOMER_NAME,
    FIELD_DROPBOX_LINK,
    FIELD_OPS_STATUS,
    FIELD_OPS_STATUS_KEY,
    FIELD_ORDER_NUMBER,
)
from heritage_hub.core.exceptions import WebhookValidationError
from heritage_hub.core.logger import log_context, setup_logger
from heritage_hub.models.webhook import AirtableWebhookPayload
from heritage_hub.services.email_templates import StatusEmailContext, render_status_email

logger = setup_logger(__name__)


async def handle_order_status_changed(
    payload: AirtableWebhookPayload,
    sendgrid: SendGridClient,
) -> Dict[str, Any]:
    """Send the status update email selected by "Ops Status Key"."""
    record = payload.record
    if record is None or not record.field(FIELD_CUSTOMER_EMAIL):
        raise WebhookValidationError("Missing customer email")

    ops_status = record.field(FIELD_OPS_STATUS)
    status_key = record.field(FIELD_OPS_STATUS_KEY)
    customer_email = record.field(FIELD_CUSTOMER_EMAIL)
    context = log_context(endpoint="order-status-changed", record_id=record.id)

    ctx = StatusEmailContext(
        customer_name=record.field(FIELD_CUSTOMER_NAME, "Valued Customer"),
        order_number=str(record.field(FIELD_ORDER_NUMBER, "N/A")),
        dropbox_link=record.field(FIELD_DROPBOX_LINK),
        tracking_number=record.field(FIELD_ACTIVE_TRACKING),
    )

    logger.info(
        f"Sending status update email for order {ctx.order_number} - Status: {ops_status}",
        extra=context,
    )

    email = render_status_email(status_key, ctx)
    if email is None:
        logger.info(f"No email template for status: {status_key}", extra=context)
        return {"success": True, "message": "No email template for this status"}

    await sendgrid.send_email(to=customer_email, subject=email.subject, html=email.html)
    logger.info(f"Status update email sent to {customer_email}", extra=context)

    return {"success": True, "status": ops_status}
