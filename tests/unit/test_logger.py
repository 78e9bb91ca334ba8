"""Unit tests for structured logging."""

import json
import logging
import sys
from unittest.mock import AsyncMock, MagicMock

import pytest

from heritage_hub.core.logger import JSONFormatter, log_context
from heritage_hub.services.tracking_service import TrackingService


def make_record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="heritage_hub.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="Updated order %s",
        args=("1042",),
        exc_info=None,
    )
    record.__dict__.update(extra)
    return record


class TestJSONFormatter:
    def test_base_fields(self):
        entry = json.loads(JSONFormatter().format(make_record()))

        assert entry["level"] == "INFO"
        assert entry["logger"] == "heritage_hub.test"
        assert entry["message"] == "Updated order 1042"
        assert "timestamp" in entry
        assert "record_id" not in entry

    def test_correlation_fields(self):
        record = make_record(**log_context(record_id="rec1", tracking_number="1Z999"))
        entry = json.loads(JSONFormatter().format(record))

        assert entry["record_id"] == "rec1"
        assert entry["tracking_number"] == "1Z999"
        assert "carrier_status" not in entry

    def test_exception_block(self):
        try:
            raise ValueError("boom")
        except ValueError:
            record = make_record()
            record.exc_info = sys.exc_info()

        entry = json.loads(JSONFormatter().format(record))
        assert entry["exception"]["type"] == "ValueError"
        assert entry["exception"]["message"] == "boom"


class TestLogContext:
    def test_drops_unset_fields(self):
        assert log_context(record_id="rec1", tracking_number=None) == {"record_id": "rec1"}


class TestTrackingServiceLogging:
    @pytest.mark.asyncio
    async def test_update_carries_record_and_tracking(self, caplog, make_order_record):
        airtable = MagicMock()
        airtable.find_order_by_tracking = AsyncMock(return_value=make_order_record("Pending"))
        airtable.update_order_status = AsyncMock(return_value={})

        with caplog.at_level(logging.INFO, logger="heritage_hub.services.tracking_service"):
            await TrackingService(airtable).process_tracking_update("1Z0Y3G510331997230", "TRANSIT")

        updated = [r for r in caplog.records if r.getMessage().startswith("Updated order")]
        assert len(updated) == 1
        assert updated[0].record_id == "recORDER1"
        assert updated[0].tracking_number == "1Z0Y3G510331997230"
