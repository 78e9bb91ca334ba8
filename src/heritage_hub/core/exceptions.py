"""Exceptions raised by the integration clients and webhook handlers."""

from typing import Any, Optional


class WebhookValidationError(Exception):
    """Incoming webhook payload is missing required fields (HTTP 400)."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class IntegrationError(Exception):
    """An outbound call to a third-party platform failed (HTTP 500)."""

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class ConfigurationError(IntegrationError):
    """Credentials for an integration are not configured."""


class AirtableError(IntegrationError):
    pass


class SendGridError(IntegrationError):
    pass


class DropboxError(IntegrationError):
    pass


class ShippoError(IntegrationError):
    pass
