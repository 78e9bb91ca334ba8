#!/usr/bin/env python3
"""Send sample Shippo tracking webhooks to a running server.

Walks one order through the label lifecycle:
    Label 1 TRANSIT    Pending       -> Kit Sent
    Label 2 DELIVERED  Kit Sent      -> Media Received
    Label 3 TRANSIT    Quality Check -> Shipping Back
    Label 3 DELIVERED  Shipping Back -> Complete

Tracking numbers come from the environment so they match a real test
order in Airtable. Staff must move the order from Media Received to
Quality Check between steps 2 and 3.
"""

import hashlib
import hmac
import json
import os
import time
from datetime import datetime, timezone

import requests
from dotenv import load_dotenv

load_dotenv()

SERVER_URL = os.getenv("SERVER_URL", "http://localhost:3000")
WEBHOOK_URL = f"{SERVER_URL}/webhook/shippo-tracking"
WEBHOOK_SECRET = os.getenv("SHIPPO_WEBHOOK_SECRET")

LABEL_1 = os.getenv("TEST_LABEL_1_TRACKING", "1Z0Y3G510331997230")
LABEL_2 = os.getenv("TEST_LABEL_2_TRACKING", "1Z0Y3G510329462642")
LABEL_3 = os.getenv("TEST_LABEL_3_TRACKING", "1Z0Y3G510335105258")

SCENARIOS = [
    ("Label 1 - Kit to Customer", LABEL_1, "TRANSIT", "Pending -> Kit Sent"),
    ("Label 2 - Customer Returning Media", LABEL_2, "DELIVERED", "Kit Sent -> Media Received"),
    ("Label 3 - Returning Originals", LABEL_3, "TRANSIT", "Quality Check -> Shipping Back"),
    ("Label 3 - Originals Delivered", LABEL_3, "DELIVERED", "Shipping Back -> Complete"),
]


def build_payload(tracking_number: str, status: str) -> dict:
    return {
        "event": "track_updated",
        "test": True,
        "data": {
            "tracking_number": tracking_number,
            "carrier": "ups",
            "tracking_status": {
                "status": status,
                "substatus": "delivered_01" if status == "DELIVERED" else "in_transit_01",
                "status_date": datetime.now(timezone.utc).isoformat(),
                "status_details": "Package scanned at facility",
            },
            "tracking_history": [],
        },
    }


def send(tracking_number: str, status: str) -> None:
    body = json.dumps(build_payload(tracking_number, status)).encode("utf-8")
    headers = {"Content-Type": "application/json"}
    if WEBHOOK_SECRET:
        headers["X-Shippo-Signature"] = hmac.new(
            WEBHOOK_SECRET.encode("utf-8"), body, hashlib.sha256
        ).hexdigest()

    try:
        response = requests.post(WEBHOOK_URL, data=body, headers=headers, timeout=10)
        print(f"RESPONSE {response.status_code}: {response.text}")
    except requests.RequestException as e:
        print(f"Error: {e}")


if __name__ == "__main__":
    print(f"Sending Shippo test webhooks to {WEBHOOK_URL}")
    print(f"Signed: {'yes' if WEBHOOK_SECRET else 'no (SHIPPO_WEBHOOK_SECRET not set)'}\n")

    for title, tracking_number, status, expected in SCENARIOS:
        print("=" * 60)
        print(f"{title} ({status})")
        print(f"Expected: {expected}")
        print("=" * 60)
        send(tracking_number, status)
        print()
        time.sleep(2)
