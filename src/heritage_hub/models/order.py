"""Pydantic models for Airtable order data."""

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel

from heritage_hub.config.constants import (
    FIELD_ACTIVE_TRACKING,
    FIELD_LABEL_1_TRACKING,
    FIELD_LABEL_2_TRACKING,
    FIELD_LABEL_3_TRACKING,
    FIELD_OPS_STATUS,
    FIELD_ORDER_NUMBER,
)


class OrderStatus(str, Enum):
    """Order fulfillment lifecycle (Airtable "Ops Status").

    The member name doubles as the "Ops Status Key" used to pick
    customer email templates.
    """

    PENDING = "Pending"
    KIT_SENT = "Kit Sent"
    MEDIA_RECEIVED = "Media Received"
    DIGITIZING = "Digitizing"
    QUALITY_CHECK = "Quality Check"
    SHIPPING_BACK = "Shipping Back"
    COMPLETE = "Complete"
    CANCELED = "Canceled"

    @property
    def key(self) -> str:
        return self.name

    @property
    def is_terminal(self) -> bool:
        return self in (OrderStatus.COMPLETE, OrderStatus.CANCELED)

    @classmethod
    def parse(cls, value: Any) -> Optional["OrderStatus"]:
        """Return the matching status, or None for blank/unknown values."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None


class OrderSnapshot(BaseModel):
    """Read-only view of an Airtable order record.

    Tracking slots mirror the three label fields. Label 1 and Label 3
    are sometimes swapped during data entry, so slot position is only
    trusted for diagnostics.
    """

    record_id: str
    order_number: Optional[str] = None
    current_status: Optional[str] = None
    label_1_tracking: Optional[str] = None
    label_2_tracking: Optional[str] = None
    label_3_tracking: Optional[str] = None
    active_tracking_number: Optional[str] = None

    @classmethod
    def from_airtable(cls, record: Dict[str, Any]) -> "OrderSnapshot":
        """Build a snapshot from an Airtable API record dict."""
        fields = record.get("fields", {})
        order_number = fields.get(FIELD_ORDER_NUMBER)
        return cls(
            record_id=record["id"],
            order_number=str(order_number) if order_number is not None else None,
            current_status=fields.get(FIELD_OPS_STATUS),
            label_1_tracking=fields.get(FIELD_LABEL_1_TRACKING),
            label_2_tracking=fields.get(FIELD_LABEL_2_TRACKING),
            label_3_tracking=fields.get(FIELD_LABEL_3_TRACKING),
            active_tracking_number=fields.get(FIELD_ACTIVE_TRACKING),
        )

    @property
    def status(self) -> Optional[OrderStatus]:
        return OrderStatus.parse(self.current_status)

    @property
    def display_name(self) -> str:
        """Order number when present, record ID otherwise."""
        return self.order_number or self.record_id

    def tracking_slot(self, tracking_number: Optional[str]) -> Optional[str]:
        """Name of the label field holding this tracking number, if any."""
        if not tracking_number:
            return None
        if tracking_number == self.label_1_tracking:
            return "Label 1"
        if tracking_number == self.label_2_tracking:
            return "Label 2"
        if tracking_number == self.label_3_tracking:
            return "Label 3"
        return None
