"""Dropbox folder webhook: per-order client folder and shared link."""

from typing import Any, Dict, Optional

from heritage_hub.api.airtable import AirtableClient
from heritage_hub.config.constants import FIELD_CUSTOMER_NAME, FIELD_DROPBOX_LINK, FIELD_ORDER_NUMBER
from heritage_hub.core.exceptions import (
    ConfigurationError,
    IntegrationError,
    WebhookValidationError,
)
from heritage_hub.core.logger import log_context, setup_logger
from heritage_hub.integrations.dropbox_storage import DropboxStorage
from heritage_hub.models.webhook import AirtableWebhookPayload

logger = setup_logger(__name__)


async def handle_create_dropbox_folder(
    payload: AirtableWebhookPayload,
    storage: Optional[DropboxStorage],
    airtable: AirtableClient,
) -> Dict[str, Any]:
    """
    Create the order's Dropbox folder and store its link on the record.

    A failed Airtable write is logged but does not fail the request,
    since the folder already exists at that point.
    """
    record = payload.record
    if record is None or not record.field(FIELD_CUSTOMER_NAME):
        raise WebhookValidationError("Missing customer name")

    context = log_context(endpoint="create-dropbox-folder", record_id=record.id)

    if storage is None:
        logger.error("Dropbox credentials not configured", extra=context)
        raise ConfigurationError("Dropbox credentials not configured in environment variables")

    customer_name = record.field(FIELD_CUSTOMER_NAME)
    order_number = record.field(FIELD_ORDER_NUMBER)
    logger.info(f"Customer: {customer_name}, Order: {order_number}", extra=context)

    folder_path, dropbox_link = await storage.create_client_folder(
        customer_name, str(order_number) if order_number is not None else None
    )

    if record.id:
        try:
            await airtable.update_fields(record.id, {FIELD_DROPBOX_LINK: dropbox_link})
            logger.info("Airtable updated with Dropbox link", extra=context)
        except IntegrationError as e:
            logger.warning(
                f"Could not update Airtable, but folder was created: {e}", extra=context
            )
    else:
        logger.warning("Record has no ID - Dropbox link not written back to Airtable", extra=context)

    return {"success": True, "folderPath": folder_path, "dropboxLink": dropbox_link}
