"""SendGrid v3 API client for transactional mail and marketing contacts."""

from typing import Any, Dict, List, Optional

import httpx

from heritage_hub.core.exceptions import ConfigurationError, SendGridError
from heritage_hub.core.logger import setup_logger

logger = setup_logger(__name__)

REQUEST_TIMEOUT = 30.0


class SendGridClient:
    """Async HTTP client for the SendGrid v3 API."""

    def __init__(
        self,
        api_key: Optional[str],
        from_email: Optional[str] = None,
        api_url: str = "https://api.sendgrid.com",
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.api_key = api_key
        self.from_email = from_email
        self.api_url = api_url.rstrip("/")
        self.client = client or httpx.AsyncClient(timeout=REQUEST_TIMEOUT)

    async def _make_request(self, method: str, path: str, json: dict) -> httpx.Response:
        if not self.api_key:
            raise ConfigurationError("SendGrid API key not configured")

        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        url = f"{self.api_url}{path}"

        try:
            response = await self.client.request(method, url, json=json, headers=headers)
            response.raise_for_status()
            return response
        except httpx.HTTPStatusError as e:
            try:
                details = e.response.json()
            except ValueError:
                details = e.response.text
            logger.error(f"SendGrid error {e.response.status_code} on {path}: {details}")
            raise SendGridError(
                f"SendGrid request failed with status {e.response.status_code}",
                details=details,
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"HTTP error calling SendGrid {path}: {e}")
            raise SendGridError(f"SendGrid request failed: {e}") from e

    async def send_email(
        self,
        to: str,
        subject: str,
        html: str,
        reply_to: Optional[str] = None,
    ) -> None:
        """
        Send a single HTML email via /v3/mail/send.

        SendGrid answers 202 with an empty body on success.
        """
        if not self.from_email:
            raise ConfigurationError("SENDGRID_FROM_EMAIL not configured")

        message: Dict[str, Any] = {
            "personalizations": [{"to": [{"email": to}]}],
            "from": {"email": self.from_email},
            "subject": subject,
            "content": [{"type": "text/html", "value": html}],
        }
        if reply_to:
            message["reply_to"] = {"email": reply_to}

        await self._make_request("POST", "/v3/mail/send", json=message)
        logger.info(f"Email sent to {to}: {subject}")

    async def add_contacts(
        self,
        list_id: str,
        contacts: List[Dict[str, str]],
    ) -> Dict[str, Any]:
        """
        Upsert marketing contacts into a list.

        Returns:
            SendGrid response body (contains the async job_id)
        """
        payload = {"list_ids": [list_id], "contacts": contacts}
        logger.debug(f"SendGrid contacts request: {payload}")

        response = await self._make_request("PUT", "/v3/marketing/contacts", json=payload)
        return response.json() if response.content else {}

    async def close(self) -> None:
        await self.client.aclose()
