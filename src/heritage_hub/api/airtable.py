"""Airtable REST API client for the Orders table."""

from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx

from heritage_hub.config.constants import (
    FIELD_ACTIVE_TRACKING,
    FIELD_OPS_STATUS,
    TRACKING_SLOT_FIELDS,
)
from heritage_hub.core.exceptions import AirtableError, ConfigurationError
from heritage_hub.core.logger import setup_logger
from heritage_hub.models.order import OrderStatus

logger = setup_logger(__name__)

REQUEST_TIMEOUT = 30.0


def build_tracking_formula(tracking_number: str) -> str:
    """
    Airtable formula matching any of the three label fields.

    Example:
        OR({Label 1 Tracking}='1Z..',{Label 2 Tracking}='1Z..',{Label 3 Tracking}='1Z..')
    """
    escaped = tracking_number.replace("\\", "\\\\").replace("'", "\\'")
    clauses = ",".join(f"{{{field}}}='{escaped}'" for field in TRACKING_SLOT_FIELDS)
    return f"OR({clauses})"


class AirtableClient:
    """Async HTTP client for one Airtable base."""

    def __init__(
        self,
        api_key: Optional[str],
        base_id: Optional[str],
        table: str = "Orders",
        api_url: str = "https://api.airtable.com/v0",
        client: Optional[httpx.AsyncClient] = None,
    ):
        """Initialize API client with credentials."""
        self.api_key = api_key
        self.base_id = base_id
        self.table = table
        self.api_url = api_url.rstrip("/")
        self.client = client or httpx.AsyncClient(timeout=REQUEST_TIMEOUT)

    @property
    def table_url(self) -> str:
        return f"{self.api_url}/{self.base_id}/{quote(self.table)}"

    async def _make_request(
        self,
        method: str,
        url: str,
        params: Optional[dict] = None,
        json: Optional[dict] = None,
    ) -> Dict[str, Any]:
        """
        Make an authenticated request to the Airtable API.

        Raises:
            ConfigurationError: API key or base ID missing
            AirtableError: HTTP or transport failure
        """
        if not self.api_key or not self.base_id:
            raise ConfigurationError("Airtable credentials not configured")

        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

        try:
            response = await self.client.request(
                method, url, params=params, json=json, headers=headers
            )
            response.raise_for_status()
            return response.json()

        except httpx.HTTPStatusError as e:
            details = _response_details(e.response)
            logger.error(
                f"Airtable API error {e.response.status_code} on {method} {url}: {details}"
            )
            raise AirtableError(
                f"Airtable request failed with status {e.response.status_code}",
                details=details,
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"HTTP error calling Airtable {method} {url}: {e}")
            raise AirtableError(f"Airtable request failed: {e}") from e

    async def find_order_by_tracking(self, tracking_number: str) -> Optional[Dict[str, Any]]:
        """
        Find the order holding this tracking number in any label field.

        Multiple matches are not disambiguated; the first record wins.

        Returns:
            Airtable record dict, or None if no order matches
        """
        formula = build_tracking_formula(tracking_number)
        data = await self._make_request(
            "GET", self.table_url, params={"filterByFormula": formula}
        )

        records = data.get("records", [])
        if not records:
            return None

        if len(records) > 1:
            logger.warning(
                f"{len(records)} orders match tracking {tracking_number}, "
                f"using {records[0].get('id')}"
            )
        return records[0]

    async def update_fields(self, record_id: str, fields: Dict[str, Any]) -> Dict[str, Any]:
        """PATCH the given fields on one record."""
        return await self._make_request(
            "PATCH", f"{self.table_url}/{record_id}", json={"fields": fields}
        )

    async def update_order_status(
        self,
        record_id: str,
        new_status: OrderStatus,
        tracking_number: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Set Ops Status, and Active Tracking Number when given."""
        fields: Dict[str, Any] = {FIELD_OPS_STATUS: OrderStatus(new_status).value}
        if tracking_number:
            fields[FIELD_ACTIVE_TRACKING] = tracking_number

        record = await self.update_fields(record_id, fields)
        logger.info(f"Airtable updated: {record_id} -> {fields[FIELD_OPS_STATUS]}")
        return record

    async def close(self) -> None:
        """Close HTTP client connection."""
        await self.client.aclose()


def _response_details(response: httpx.Response) -> Any:
    """Parsed error body when JSON, raw text otherwise."""
    try:
        return response.json()
    except ValueError:
        return response.text
