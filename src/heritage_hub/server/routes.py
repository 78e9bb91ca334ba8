"""API routes for the automation webhooks."""

from datetime import datetime, timezone
from typing import AsyncIterator, Dict, Optional

from fastapi import APIRouter, Depends, Header, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from heritage_hub.api.airtable import AirtableClient
from heritage_hub.api.sendgrid import SendGridClient
from heritage_hub.config.constants import SERVICE_NAME, SERVICE_VERSION, SHIPPO_SIGNATURE_HEADER
from heritage_hub.config.settings import Settings
from heritage_hub.core.exceptions import IntegrationError, WebhookValidationError
from heritage_hub.core.logger import setup_logger
from heritage_hub.core.monitoring import capture_exception, set_webhook_context
from heritage_hub.core.signature import validate_webhook_request
from heritage_hub.handlers.dropbox_folder import handle_create_dropbox_folder
from heritage_hub.handlers.order_status import handle_order_status_changed
from heritage_hub.handlers.prospect import handle_new_prospect
from heritage_hub.handlers.tracking import handle_tracking_event, parse_tracking_event
from heritage_hub.integrations.dropbox_storage import DropboxStorage
from heritage_hub.models.webhook import AirtableWebhookPayload
from heritage_hub.services.tracking_service import TrackingService

logger = setup_logger(__name__)
router = APIRouter()

WEBHOOK_ENDPOINTS = [
    "POST /webhook/new-prospect",
    "POST /webhook/order-status-changed",
    "POST /webhook/create-dropbox-folder",
    "POST /webhook/shippo-tracking",
]


# ==============================================================================
# DEPENDENCIES
# ==============================================================================


def get_settings(request: Request) -> Settings:
    """Settings the app was created with."""
    return request.app.state.settings


async def get_airtable_client(
    app_settings: Settings = Depends(get_settings),
) -> AsyncIterator[AirtableClient]:
    """Per-request Airtable client, closed after the response."""
    client = AirtableClient(
        api_key=app_settings.airtable_api_key,
        base_id=app_settings.airtable_base_id,
        table=app_settings.airtable_orders_table,
        api_url=app_settings.airtable_api_url,
    )
    try:
        yield client
    finally:
        await client.close()


async def get_sendgrid_client(
    app_settings: Settings = Depends(get_settings),
) -> AsyncIterator[SendGridClient]:
    """Per-request SendGrid client, closed after the response."""
    client = SendGridClient(
        api_key=app_settings.sendgrid_api_key,
        from_email=app_settings.sendgrid_from_email,
        api_url=app_settings.sendgrid_api_url,
    )
    try:
        yield client
    finally:
        await client.close()


def get_dropbox_storage(
    app_settings: Settings = Depends(get_settings),
) -> Optional[DropboxStorage]:
    """Dropbox storage, or None when credentials are missing."""
    if not app_settings.dropbox_configured:
        return None
    return DropboxStorage(
        app_key=app_settings.dropbox_app_key,
        app_secret=app_settings.dropbox_app_secret,
        refresh_token=app_settings.dropbox_refresh_token,
        root=app_settings.dropbox_root,
    )


def integration_checks(app_settings: Settings) -> Dict[str, str]:
    """Map each integration to "ok" or "missing"."""

    def state(configured) -> str:
        return "ok" if configured else "missing"

    return {
        "airtable": state(app_settings.airtable_api_key and app_settings.airtable_base_id),
        "sendgrid": state(app_settings.sendgrid_api_key and app_settings.sendgrid_from_email),
        "sendgrid_list": state(app_settings.sendgrid_list_id),
        "dropbox": state(app_settings.dropbox_configured),
        "shippo_webhook_secret": state(app_settings.shippo_webhook_secret),
    }


# ==============================================================================
# HELPERS
# ==============================================================================


async def _read_airtable_payload(request: Request) -> AirtableWebhookPayload:
    """Parse an Airtable automation payload ({"record": {...}})."""
    try:
        body = await request.json()
        return AirtableWebhookPayload.model_validate(body)
    except (ValueError, ValidationError) as e:
        raise WebhookValidationError(f"Invalid JSON payload: {e}") from e


def _failure_response(endpoint: str, error: Exception) -> JSONResponse:
    """500 response for a failed outbound call or unexpected error."""
    if isinstance(error, IntegrationError):
        logger.error(f"{endpoint} failed: {error.message} - {error.details}")
        content = {"error": error.message}
        if error.details is not None:
            content["details"] = error.details
    else:
        logger.error(f"{endpoint} failed unexpectedly: {error}", exc_info=True)
        content = {"error": str(error)}

    capture_exception(error, context={"endpoint": endpoint})
    return JSONResponse(content=content, status_code=500)


# ==============================================================================
# SERVICE ENDPOINTS
# ==============================================================================


@router.get("/")
async def root() -> dict:
    """Root endpoint with basic service info."""
    return {
        "name": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "status": "running",
        "endpoints": {
            "health": "GET /health",
            "webhooks": WEBHOOK_ENDPOINTS,
        },
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/health")
async def health_check(app_settings: Settings = Depends(get_settings)) -> dict:
    """Health check endpoint for monitoring."""
    checks = integration_checks(app_settings)
    missing = [name for name, state in checks.items() if state == "missing"]

    return {
        "status": "degraded" if missing else "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "checks": checks,
    }


# ==============================================================================
# WEBHOOKS
# ==============================================================================


@router.post("/webhook/new-prospect")
async def new_prospect(
    request: Request,
    sendgrid: SendGridClient = Depends(get_sendgrid_client),
    app_settings: Settings = Depends(get_settings),
) -> JSONResponse:
    """Enroll a new Airtable prospect in SendGrid marketing."""
    try:
        payload = await _read_airtable_payload(request)
        result = await handle_new_prospect(
            payload,
            sendgrid,
            notification_email=app_settings.notification_email,
            list_id=app_settings.sendgrid_list_id,
        )
        return JSONResponse(content=result)

    except WebhookValidationError as e:
        return JSONResponse(content={"error": e.message}, status_code=400)
    except Exception as e:
        return _failure_response("new-prospect", e)


@router.post("/webhook/order-status-changed")
async def order_status_changed(
    request: Request,
    sendgrid: SendGridClient = Depends(get_sendgrid_client),
) -> JSONResponse:
    """Email the customer when an order's Ops Status changes."""
    try:
        payload = await _read_airtable_payload(request)
        if payload.record:
            set_webhook_context(endpoint="order-status-changed", record_id=payload.record.id)
        result = await handle_order_status_changed(payload, sendgrid)
        return JSONResponse(content=result)

    except WebhookValidationError as e:
        return JSONResponse(content={"error": e.message}, status_code=400)
    except Exception as e:
        return _failure_response("order-status-changed", e)


@router.post("/webhook/create-dropbox-folder")
async def create_dropbox_folder(
    request: Request,
    storage: Optional[DropboxStorage] = Depends(get_dropbox_storage),
    airtable: AirtableClient = Depends(get_airtable_client),
) -> JSONResponse:
    """Create the order's Dropbox folder and save the shared link."""
    try:
        payload = await _read_airtable_payload(request)
        if payload.record:
            set_webhook_context(endpoint="create-dropbox-folder", record_id=payload.record.id)
        result = await handle_create_dropbox_folder(payload, storage, airtable)
        return JSONResponse(content=result)

    except WebhookValidationError as e:
        return JSONResponse(content={"error": e.message}, status_code=400)
    except Exception as e:
        return _failure_response("create-dropbox-folder", e)


@router.post("/webhook/shippo-tracking")
async def shippo_tracking(
    request: Request,
    x_shippo_signature: Optional[str] = Header(None, alias=SHIPPO_SIGNATURE_HEADER),
    airtable: AirtableClient = Depends(get_airtable_client),
    app_settings: Settings = Depends(get_settings),
) -> JSONResponse:
    """
    Shippo track_updated webhook - advances the order's Ops Status.

    Returns:
        403 on signature failure, 400 on missing tracking fields,
        500 on Airtable failure, 200 with the reconciliation outcome otherwise
    """
    logger.info("Shippo tracking webhook received")

    # Signature is computed over the raw body
    raw_body = await request.body()

    is_valid, error_msg = validate_webhook_request(
        raw_body,
        x_shippo_signature,
        secret=app_settings.shippo_webhook_secret,
        require_signature=app_settings.require_signature,
    )
    if not is_valid:
        logger.error(f"Rejected Shippo webhook: {error_msg}")
        return JSONResponse(content={"error": error_msg}, status_code=403)

    try:
        event = parse_tracking_event(raw_body)
        result = await handle_tracking_event(event, TrackingService(airtable))
        return JSONResponse(content=result)

    except WebhookValidationError as e:
        logger.warning(f"Invalid tracking payload: {e.message}")
        return JSONResponse(content={"error": e.message}, status_code=400)
    except Exception as e:
        return _failure_response("shippo-tracking", e)
