"""
Order status reconciliation for Shippo tracking events.

Decides whether a carrier scan should advance an order's Ops Status.
The order's current lifecycle state, not the label field holding the
tracking number, determines what a scan means. This keeps the decision
correct when Label 1 and Label 3 were entered in each other's fields.

Everything here is pure: no I/O, no shared state.
"""

from dataclasses import dataclass
from typing import Dict, FrozenSet, Optional, Union

from heritage_hub.config.constants import DELIVERED_STATUS, TRANSIT_STATUSES
from heritage_hub.core.logger import setup_logger
from heritage_hub.models.order import OrderSnapshot, OrderStatus

logger = setup_logger(__name__)

# Transitions the tracking webhook may apply on its own.
# Media Received -> Digitizing -> Quality Check is done by staff in Airtable.
ALLOWED_TRANSITIONS: Dict[OrderStatus, FrozenSet[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.KIT_SENT}),
    OrderStatus.KIT_SENT: frozenset({OrderStatus.MEDIA_RECEIVED}),
    OrderStatus.QUALITY_CHECK: frozenset({OrderStatus.SHIPPING_BACK}),
    OrderStatus.SHIPPING_BACK: frozenset({OrderStatus.COMPLETE}),
}

OUTCOME_NO_CHANGE = "no_change"
OUTCOME_INVALID_TRANSITION = "invalid_transition"
OUTCOME_TRANSITION = "transition"


@dataclass(frozen=True)
class ReconcileDecision:
    """Result of reconciling one tracking event against one order."""

    outcome: str
    current_status: Optional[str]
    proposed_status: Optional[OrderStatus] = None

    @property
    def should_update(self) -> bool:
        return self.outcome == OUTCOME_TRANSITION


def classify_tracking_event(
    order: OrderSnapshot,
    tracking_number: Optional[str],
    carrier_status: Optional[str],
) -> Optional[OrderStatus]:
    """
    Map a carrier scan to the order status it implies.

    Args:
        order: Current order snapshot
        tracking_number: Tracking number from the event
        carrier_status: Shippo status (TRANSIT, IN_TRANSIT, DELIVERED, ...)

    Returns:
        The next status, or None when no rule applies
    """
    current = order.status
    slot = order.tracking_slot(tracking_number) or "Unknown"

    logger.info(
        f"Classifying {carrier_status} for order {order.display_name}: "
        f"current={order.current_status}, tracking found in {slot}"
    )

    if current is not None and current.is_terminal:
        logger.info(f"Order {order.display_name} is {current.value} - ignoring scan")
        return None

    if carrier_status in TRANSIT_STATUSES:
        # Only the outbound kit can be moving while the order is pending
        if current is OrderStatus.PENDING:
            logger.info("Detected: kit shipping to customer")
            return OrderStatus.KIT_SENT

        if current in (OrderStatus.QUALITY_CHECK, OrderStatus.DIGITIZING):
            logger.info("Detected: originals shipping back to customer")
            return OrderStatus.SHIPPING_BACK

        return None

    if carrier_status == DELIVERED_STATUS:
        if current is OrderStatus.KIT_SENT:
            if tracking_number and tracking_number == order.label_2_tracking:
                logger.info("Detected: media delivered to HeritageBox (Label 2)")
                return OrderStatus.MEDIA_RECEIVED

            logger.info("DELIVERED on non-Label-2 tracking while Kit Sent - ignoring")
            return None

        if current is OrderStatus.SHIPPING_BACK:
            logger.info("Detected: originals delivered to customer")
            return OrderStatus.COMPLETE

        return None

    return None


def is_allowed_transition(
    current_status: Union[OrderStatus, str, None],
    proposed_status: Union[OrderStatus, str, None],
) -> bool:
    """Whether the tracking webhook may move an order between these states."""
    current = OrderStatus.parse(current_status)
    proposed = OrderStatus.parse(proposed_status)
    if current is None or proposed is None:
        return False
    return proposed in ALLOWED_TRANSITIONS.get(current, frozenset())


def reconcile(
    order: OrderSnapshot,
    tracking_number: Optional[str],
    carrier_status: Optional[str],
) -> ReconcileDecision:
    """Classify the event, then check the transition table."""
    proposed = classify_tracking_event(order, tracking_number, carrier_status)

    if proposed is None:
        return ReconcileDecision(OUTCOME_NO_CHANGE, order.current_status)

    if not is_allowed_transition(order.current_status, proposed):
        logger.warning(
            f"Invalid transition for order {order.display_name}: "
            f"{order.current_status} -> {proposed.value}"
        )
        return ReconcileDecision(OUTCOME_INVALID_TRANSITION, order.current_status, proposed)

    return ReconcileDecision(OUTCOME_TRANSITION, order.current_status, proposed)
