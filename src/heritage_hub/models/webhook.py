"""Pydantic models for incoming webhook payloads."""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class AirtableRecord(BaseModel):
    """Record sent by an Airtable automation script."""

    id: Optional[str] = None
    fields: Dict[str, Any] = Field(default_factory=dict)

    class Config:
        extra = "allow"

    def field(self, name: str, default: Any = None) -> Any:
        """
        Field value as text, treating empty values as missing.

        Lookup and rollup fields arrive as lists and are joined with ", ".
        Numbers and other scalars are converted with str().
        """
        value = self.fields.get(name)
        if isinstance(value, list):
            parts = [str(item) for item in value if item is not None and item != ""]
            value = ", ".join(parts)
        if value is None or value == "":
            return default
        return value if isinstance(value, str) else str(value)


class AirtableWebhookPayload(BaseModel):
    """Envelope used by all Airtable-triggered webhooks: {"record": {...}}."""

    record: Optional[AirtableRecord] = None

    class Config:
        extra = "allow"


class ShippoTrackingStatus(BaseModel):
    """Current tracking status block from Shippo."""

    status: Optional[str] = Field(None, description="TRANSIT, IN_TRANSIT, DELIVERED, ...")
    substatus: Optional[Any] = None
    status_date: Optional[str] = None
    status_details: Optional[str] = None

    class Config:
        extra = "allow"


class ShippoTrackingData(BaseModel):
    """Track object inside a Shippo track_updated webhook."""

    tracking_number: Optional[str] = None
    carrier: Optional[str] = None
    tracking_status: Optional[ShippoTrackingStatus] = None

    class Config:
        extra = "allow"


class ShippoWebhookEvent(BaseModel):
    """Shippo webhook envelope."""

    event: Optional[str] = None
    test: bool = False
    data: Optional[ShippoTrackingData] = None

    class Config:
        extra = "allow"

    @property
    def tracking_number(self) -> Optional[str]:
        return self.data.tracking_number if self.data else None

    @property
    def carrier_status(self) -> Optional[str]:
        if self.data and self.data.tracking_status:
            return self.data.tracking_status.status
        return None
