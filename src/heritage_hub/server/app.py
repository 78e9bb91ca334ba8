"""FastAPI application setup and configuration."""

from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from heritage_hub.config.constants import SERVICE_NAME, SERVICE_VERSION
from heritage_hub.config.settings import Settings, settings as default_settings
from heritage_hub.core.logger import setup_logger
from heritage_hub.core.monitoring import init_monitoring

logger = setup_logger(__name__)


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure FastAPI application.

    Args:
        app_settings: Configuration for this app instance. Defaults to the
            process-wide settings loaded from the environment.
    """
    app_settings = app_settings or default_settings

    app = FastAPI(
        title=SERVICE_NAME,
        version=SERVICE_VERSION,
        description="Relays Airtable, SendGrid, Dropbox and Shippo webhooks",
    )
    app.state.settings = app_settings

    init_monitoring(app_settings.glitchtip_dsn, app_settings.environment)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from heritage_hub.server import routes

    app.include_router(routes.router)

    @app.on_event("startup")
    async def startup_handler():
        """Log which integrations are configured."""
        logger.info(f"{SERVICE_NAME} v{SERVICE_VERSION} starting ({app_settings.environment})")

        checks = routes.integration_checks(app_settings)
        missing = [name for name, state in checks.items() if state == "missing"]
        if missing:
            logger.warning(f"Integrations not configured: {', '.join(missing)}")

        if not app_settings.shippo_webhook_secret:
            if app_settings.require_signature:
                logger.warning("REQUIRE_SIGNATURE set without SHIPPO_WEBHOOK_SECRET - tracking webhooks will be rejected")
            else:
                logger.warning("SHIPPO_WEBHOOK_SECRET not set - tracking webhooks accepted unsigned")

        for endpoint in routes.WEBHOOK_ENDPOINTS:
            logger.info(f"Webhook endpoint: {endpoint}")

    return app
