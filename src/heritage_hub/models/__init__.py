"""Data models - Airtable orders and webhook payloads."""

from heritage_hub.models.order import OrderSnapshot, OrderStatus
from heritage_hub.models.webhook import (
    AirtableRecord,
    AirtableWebhookPayload,
    ShippoWebhookEvent,
)

__all__ = [
    "OrderSnapshot",
    "OrderStatus",
    "AirtableRecord",
    "AirtableWebhookPayload",
    "ShippoWebhookEvent",
]
