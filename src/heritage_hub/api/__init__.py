"""API clients - Airtable, SendGrid and Shippo."""

from heritage_hub.api.airtable import AirtableClient
from heritage_hub.api.sendgrid import SendGridClient
from heritage_hub.api.shippo import ShippoClient

__all__ = ["AirtableClient", "SendGridClient", "ShippoClient"]
