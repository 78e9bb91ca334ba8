"""Handlers module - one handler per incoming webhook."""

from heritage_hub.handlers.dropbox_folder import handle_create_dropbox_folder
from heritage_hub.handlers.order_status import handle_order_status_changed
from heritage_hub.handlers.prospect import handle_new_prospect
from heritage_hub.handlers.tracking import handle_tracking_event, parse_tracking_event

__all__ = [
    "handle_create_dropbox_folder",
    "handle_order_status_changed",
    "handle_new_prospect",
    "handle_tracking_event",
    "parse_tracking_event",
]
