"""Applies Shippo tracking events to Airtable orders."""

from typing import Any, Dict

from heritage_hub.api.airtable import AirtableClient
from heritage_hub.core.logger import log_context, setup_logger
from heritage_hub.models.order import OrderSnapshot
from heritage_hub.services.reconciler import OUTCOME_INVALID_TRANSITION, reconcile

logger = setup_logger(__name__)


class TrackingService:
    """Looks up the order for a tracking event and advances its status.

    Business Rules:
    - Order lookup searches all three label fields, first match wins
    - The reconciler decides the next status from the current status
    - Airtable is only written when the transition is allowed
    - Airtable automations send the customer email after the update
    """

    def __init__(self, airtable: AirtableClient):
        self.airtable = airtable

    async def process_tracking_update(
        self,
        tracking_number: str,
        carrier_status: str,
    ) -> Dict[str, Any]:
        """
        Process one tracking update.

        Args:
            tracking_number: Tracking number from the Shippo event
            carrier_status: Shippo tracking_status.status

        Returns:
            JSON-serializable response body describing the outcome

        Raises:
            IntegrationError: Airtable lookup or update failed
        """
        record = await self.airtable.find_order_by_tracking(tracking_number)
        if not record:
            logger.info(
                f"No order found for tracking: {tracking_number}",
                extra=log_context(tracking_number=tracking_number),
            )
            return {
                "success": True,
                "message": "No order found",
                "trackingNumber": tracking_number,
            }

        order = OrderSnapshot.from_airtable(record)
        context = log_context(record_id=order.record_id, tracking_number=tracking_number)
        logger.info(f"Found order: {order.display_name}", extra=context)

        decision = reconcile(order, tracking_number, carrier_status)

        if decision.should_update:
            new_status = decision.proposed_status
            await self.airtable.update_order_status(order.record_id, new_status, tracking_number)

            logger.info(
                f"Updated order {order.display_name}: "
                f"{order.current_status} -> {new_status.value}",
                extra=context,
            )
            return {
                "success": True,
                "order": order.display_name,
                "previousStatus": order.current_status,
                "newStatus": new_status.value,
                "trackingNumber": tracking_number,
            }

        if decision.outcome == OUTCOME_INVALID_TRANSITION:
            return {
                "success": False,
                "message": "Invalid status transition",
                "order": order.display_name,
                "currentStatus": order.current_status,
                "attemptedStatus": decision.proposed_status.value,
            }

        logger.info(f"No status change needed for {order.display_name}", extra=context)
        return {
            "success": True,
            "message": "No status change needed",
            "order": order.display_name,
            "currentStatus": order.current_status,
        }
