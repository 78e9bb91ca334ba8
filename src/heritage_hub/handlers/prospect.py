"""New prospect webhook: contact-form forwarding and marketing enrollment."""

from typing import Any, Dict, Optional

from heritage_hub.api.sendgrid import SendGridClient
from heritage_hub.config.constants import CONTACT_FORM_SOURCE
from heritage_hub.core.exceptions import WebhookValidationError
from heritage_hub.core.logger import setup_logger
from heritage_hub.models.webhook import AirtableWebhookPayload
from heritage_hub.services.email_templates import render_contact_form_notification

logger = setup_logger(__name__)


async def handle_new_prospect(
    payload: AirtableWebhookPayload,
    sendgrid: SendGridClient,
    notification_email: str,
    list_id: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Enroll a new prospect in SendGrid marketing.

    Contact-form submissions are also forwarded to the support inbox
    with the prospect as reply-to.

    Args:
        payload: Airtable webhook payload with the prospect record
        sendgrid: SendGrid client
        notification_email: Inbox receiving contact-form inquiries
        list_id: Marketing list to add the contact to (skipped when None)

    Returns:
        Response body
    """
    record = payload.record
    if record is None or not record.field("Email"):
        raise WebhookValidationError("Missing email field")

    email = record.field("Email")
    first_name = record.field("First Name", "")
    last_name = record.field("Last Name", "")
    source = record.field("Source", "Unknown")
    name = record.field("Name") or f"{first_name} {last_name}".strip() or "Unknown"

    logger.info(f"Enrolling {email} in marketing automation (source: {source})")

    if source == CONTACT_FORM_SOURCE:
        inquiry_type = record.field("Inquiry Type")
        notification = render_contact_form_notification(
            details={
                "Name": name,
                "Email": email,
                "Phone": record.field("Phone"),
                "Inquiry Type": inquiry_type,
                "Media Types": record.field("Media Types"),
                "Quantity": record.field("Quantity"),
            },
            inquiry_type=inquiry_type,
            notes=(
                record.field("Notes")
                or record.field("Message")
                or record.field("Customer Message")
            ),
            chat_transcript=(
                record.field("Chat Transcript") or record.field("Chat Transcript (from form)")
            ),
        )
        await sendgrid.send_email(
            to=notification_email,
            subject=notification.subject,
            html=notification.html,
            reply_to=email,
        )
        logger.info(f"Contact form forwarded to {notification_email} for {email}")

    if not list_id:
        logger.warning("SENDGRID_LIST_ID not configured - contact will not be added to list")
        return {
            "success": True,
            "warning": "SENDGRID_LIST_ID not configured",
            "email": email,
        }

    sendgrid_response = await sendgrid.add_contacts(
        list_id,
        [{"email": email, "first_name": first_name, "last_name": last_name}],
    )
    logger.info(f"Successfully enrolled {email}")

    return {"success": True, "email": email, "sendgridResponse": sendgrid_response}
