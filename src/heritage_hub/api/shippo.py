"""Shippo tracking API client."""

from typing import Any, Dict, Optional

import httpx

from heritage_hub.config.constants import DEFAULT_CARRIER
from heritage_hub.core.exceptions import ConfigurationError, ShippoError
from heritage_hub.core.logger import setup_logger

logger = setup_logger(__name__)

REQUEST_TIMEOUT = 30.0


class ShippoClient:
    """Async HTTP client for Shippo's /tracks endpoint."""

    def __init__(
        self,
        api_token: Optional[str],
        api_url: str = "https://api.goshippo.com",
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.api_token = api_token
        self.api_url = api_url.rstrip("/")
        self.client = client or httpx.AsyncClient(timeout=REQUEST_TIMEOUT)

    async def get_tracking(
        self,
        tracking_number: str,
        carrier: str = DEFAULT_CARRIER,
    ) -> Dict[str, Any]:
        """
        Fetch current status and history for a tracking number.

        Args:
            tracking_number: Carrier tracking number
            carrier: Shippo carrier token (ups, usps, fedex, dhl_express)

        Returns:
            Shippo track object
        """
        if not self.api_token:
            raise ConfigurationError("SHIPPO_API_TOKEN not configured")

        url = f"{self.api_url}/tracks/{carrier}/{tracking_number}"
        headers = {"Authorization": f"ShippoToken {self.api_token}"}

        try:
            logger.info(f"Fetching Shippo tracking for {carrier}/{tracking_number}")
            response = await self.client.get(url, headers=headers)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            try:
                details = e.response.json().get("detail")
            except (ValueError, AttributeError):
                details = e.response.text
            logger.error(f"Shippo error {e.response.status_code}: {details}")
            raise ShippoError(
                f"Shippo request failed with status {e.response.status_code}",
                details=details,
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"HTTP error calling Shippo: {e}")
            raise ShippoError(f"Shippo request failed: {e}") from e

    async def close(self) -> None:
        await self.client.aclose()
