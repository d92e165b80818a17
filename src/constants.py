"""Application-wide constants.

This module centralizes all magic numbers and fixed protocol values
to ensure a single source of truth and easier maintenance.
"""

# =============================================================================
# Graph API
# =============================================================================

# Base URL of the Meta Graph API
GRAPH_API_BASE_URL = "https://graph.facebook.com"

# Graph API version used for the WhatsApp Cloud API
GRAPH_API_VERSION = "v18.0"

# Timeout for Graph API calls (seconds)
GRAPH_API_TIMEOUT_SECONDS = 10.0

# Maximum response body length kept in error logs (chars)
MAX_LOGGED_RESPONSE_BODY_CHARS = 500

# =============================================================================
# WhatsApp Messaging
# =============================================================================

# Value of "messaging_product" in every outbound payload
MESSAGING_PRODUCT = "whatsapp"

# Only inbound messages of this type are echoed back
TEXT_MESSAGE_TYPE = "text"

# Prefix prepended to the original body in echo replies
ECHO_PREFIX = "Echo: "

# Status sent in read-receipt payloads
READ_STATUS = "read"

# =============================================================================
# Webhook Verification
# =============================================================================

# Expected value of hub.mode during the subscription handshake
SUBSCRIBE_MODE = "subscribe"

# =============================================================================
# Server
# =============================================================================

# Listen port used when PORT is empty
DEFAULT_PORT = 8000

# Informational page returned for every path other than the webhook
ROOT_PAGE_HTML = "<pre>Nothing to see here.\nCheckout README.md to start.</pre>"
