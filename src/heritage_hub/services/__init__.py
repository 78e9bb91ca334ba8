"""Services - order status reconciliation and email content."""

from heritage_hub.services.reconciler import (
    classify_tracking_event,
    is_allowed_transition,
    reconcile,
)
from heritage_hub.services.tracking_service import TrackingService

__all__ = [
    "classify_tracking_event",
    "is_allowed_transition",
    "reconcile",
    "TrackingService",
]
