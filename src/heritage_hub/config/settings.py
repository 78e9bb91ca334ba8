"""Configuration management using Pydantic Settings.

Loads configuration from environment variables with .env file support.
"""

from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application configuration."""

    # Airtable Configuration
    airtable_api_key: Optional[str] = None
    airtable_base_id: Optional[str] = None
    airtable_orders_table: str = "Orders"
    airtable_api_url: str = "https://api.airtable.com/v0"

    # SendGrid Configuration
    sendgrid_api_key: Optional[str] = None
    sendgrid_from_email: Optional[str] = None
    sendgrid_list_id: Optional[str] = None
    sendgrid_api_url: str = "https://api.sendgrid.com"
    notification_email: str = "info@heritagebox.com"

    # Dropbox Configuration
    dropbox_refresh_token: Optional[str] = None
    dropbox_app_key: Optional[str] = None
    dropbox_app_secret: Optional[str] = None
    dropbox_root: str = "/HeritageboxClientFiles"

    # Shippo Configuration
    shippo_api_token: Optional[str] = None
    shippo_webhook_secret: Optional[str] = None
    shippo_api_url: str = "https://api.goshippo.com"
    # When False and no secret is set, tracking webhooks are accepted unsigned
    require_signature: bool = False

    # Server Configuration
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"
    environment: str = "development"

    # GlitchTip Error Monitoring
    glitchtip_dsn: Optional[str] = None

    class Config:
        """Pydantic config."""

        env_file = ".env"
        case_sensitive = False
        extra = "ignore"

    @property
    def dropbox_configured(self) -> bool:
        """Whether all three Dropbox OAuth credentials are present."""
        return bool(
            self.dropbox_refresh_token and self.dropbox_app_key and self.dropbox_app_secret
        )


# Process-wide default, passed explicitly into create_app()
settings = Settings()
