"""Pytest configuration and fixtures."""

import os
import tempfile

import pytest

# Keep test runs from writing into the working tree's logs/ folder
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="heritage-hub-logs-"))

TEST_WEBHOOK_SECRET = "test-shippo-secret"

LABEL_1 = "1Z0Y3G510331997230"
LABEL_2 = "1Z0Y3G510329462642"
LABEL_3 = "1Z0Y3G510335105258"


@pytest.fixture
def test_settings():
    """Fully configured settings that ignore the local .env file."""
    from heritage_hub.config.settings import Settings

    return Settings(
        _env_file=None,
        airtable_api_key="key-test",
        airtable_base_id="appTEST",
        sendgrid_api_key="SG.test",
        sendgrid_from_email="orders@heritagebox.com",
        sendgrid_list_id="list-123",
        dropbox_refresh_token="refresh-token",
        dropbox_app_key="app-key",
        dropbox_app_secret="app-secret",
        shippo_api_token="shippo_test_token",
        shippo_webhook_secret=TEST_WEBHOOK_SECRET,
        require_signature=False,
        glitchtip_dsn=None,
        environment="test",
    )


@pytest.fixture
def make_order_record():
    """Factory for Airtable order records with three tracking labels."""

    def _make(status: str = "Pending", record_id: str = "recORDER1", **extra_fields) -> dict:
        fields = {
            "Order Number": 1042,
            "Ops Status": status,
            "Label 1 Tracking": LABEL_1,
            "Label 2 Tracking": LABEL_2,
            "Label 3 Tracking": LABEL_3,
        }
        fields.update(extra_fields)
        return {"id": record_id, "fields": fields}

    return _make


@pytest.fixture
def make_shippo_payload():
    """Factory for Shippo track_updated webhook bodies."""

    def _make(tracking_number: str = LABEL_1, status: str = "TRANSIT") -> dict:
        return {
            "event": "track_updated",
            "test": True,
            "data": {
                "tracking_number": tracking_number,
                "carrier": "ups",
                "tracking_status": {
                    "status": status,
                    "substatus": None,
                    "status_date": "2025-01-15T10:30:00Z",
                    "status_details": "Package scanned at facility",
                },
            },
        }

    return _make
