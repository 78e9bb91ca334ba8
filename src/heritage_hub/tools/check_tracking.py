"""Print Shippo tracking status and history for one tracking number.

Usage:
    heritage-check-tracking 1Z0Y3G510331997230
    heritage-check-tracking 9400111899562537624747 usps

Supported carriers: ups, usps, fedex, dhl_express
"""

import argparse
import asyncio
import sys
from typing import Any, Dict, List, Optional

from heritage_hub.api.shippo import ShippoClient
from heritage_hub.config.constants import DEFAULT_CARRIER
from heritage_hub.config.settings import settings
from heritage_hub.core.exceptions import IntegrationError

RULE = "=" * 55


def _location(entry: Dict[str, Any]) -> Optional[str]:
    location = entry.get("location")
    if not location:
        return None
    return f"{location.get('city')}, {location.get('state')}"


def format_tracking(data: Dict[str, Any]) -> List[str]:
    """Human-readable lines for a Shippo track object."""
    status = data.get("tracking_status") or {}
    lines = [
        RULE,
        "TRACKING INFORMATION",
        RULE,
        f"Carrier: {data.get('carrier')}",
        f"Tracking Number: {data.get('tracking_number')}",
        f"Status: {status.get('status')}",
        f"Substatus: {status.get('substatus')}",
        f"Status Date: {status.get('status_date')}",
        f"Status Details: {status.get('status_details')}",
    ]

    location = _location(status)
    if location:
        lines.append(f"Location: {location}")
    if data.get("eta"):
        lines.append(f"Estimated Delivery: {data['eta']}")

    lines += ["", RULE, "TRACKING HISTORY", RULE, ""]

    history = data.get("tracking_history") or []
    if not history:
        lines.append("No tracking history available yet.")
    for i, event in enumerate(history, start=1):
        lines.append(f"{i}. {event.get('status')} - {event.get('status_date')}")
        lines.append(f"   {event.get('status_details')}")
        event_location = _location(event)
        if event_location:
            lines.append(f"   Location: {event_location}")
        lines.append("")

    lines.append(RULE)
    return lines


async def check_tracking(tracking_number: str, carrier: str) -> int:
    client = ShippoClient(settings.shippo_api_token, api_url=settings.shippo_api_url)
    try:
        data = await client.get_tracking(tracking_number, carrier)
    except IntegrationError as e:
        print(f"Error fetching tracking information: {e.message}", file=sys.stderr)
        if e.details:
            print(f"Details: {e.details}", file=sys.stderr)
        return 1
    finally:
        await client.close()

    print("\n".join(format_tracking(data)))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Shippo tracking checker")
    parser.add_argument("tracking_number")
    parser.add_argument("carrier", nargs="?", default=DEFAULT_CARRIER)
    args = parser.parse_args(argv)

    print(f"Checking tracking for: {args.tracking_number} ({args.carrier})")
    return asyncio.run(check_tracking(args.tracking_number, args.carrier))


if __name__ == "__main__":
    sys.exit(main())
