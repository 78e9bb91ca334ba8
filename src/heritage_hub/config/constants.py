"""
Centralized application constants.

Single point of truth for Airtable field names and carrier status values
shared across the webhook handlers and the reconciler.
"""

# ==============================================================================
# AIRTABLE ORDER FIELDS
# ==============================================================================

FIELD_ORDER_NUMBER = "Order Number"
FIELD_OPS_STATUS = "Ops Status"
FIELD_OPS_STATUS_KEY = "Ops Status Key"
FIELD_LABEL_1_TRACKING = "Label 1 Tracking"
FIELD_LABEL_2_TRACKING = "Label 2 Tracking"
FIELD_LABEL_3_TRACKING = "Label 3 Tracking"
FIELD_ACTIVE_TRACKING = "Active Tracking Number"
FIELD_CUSTOMER_NAME = "Customer Name"
FIELD_CUSTOMER_EMAIL = "Customer Email"
FIELD_DROPBOX_LINK = "Dropbox Link"

# Tracking slots searched by the order lookup, in priority order
TRACKING_SLOT_FIELDS = [
    FIELD_LABEL_1_TRACKING,
    FIELD_LABEL_2_TRACKING,
    FIELD_LABEL_3_TRACKING,
]

# ==============================================================================
# SHIPPO CARRIER STATUSES
# ==============================================================================

# Any carrier status outside these is ignored by the reconciler
TRANSIT_STATUSES = frozenset({"TRANSIT", "IN_TRANSIT"})
DELIVERED_STATUS = "DELIVERED"

SHIPPO_SIGNATURE_HEADER = "X-Shippo-Signature"
DEFAULT_CARRIER = "ups"

# ==============================================================================
# OUTBOUND LINKS
# ==============================================================================

UPS_TRACKING_URL = "https://www.ups.com/track?tracknum={tracking_number}"

# Source value that triggers the contact-form notification email
CONTACT_FORM_SOURCE = "Contact Form"

SERVICE_NAME = "HeritageBox Automation Server"
SERVICE_VERSION = "1.1.0"
