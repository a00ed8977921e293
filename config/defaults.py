"""
Configuration Defaults - Single source of truth for all default values.

Organization:
    - StorageDefaults: connection setting names, table/container/share names
    - QueueDefaults: order relay queue names
    - OrderDefaults: partition key, sentinel values, listing and reconciler knobs
    - AppDefaults: environment and debug flags

Setting names (OrdersQueueName, OrdersTableName, ...) are shared with the
web front end and with the queue trigger binding expressions in
function_app.py, so they keep their PascalCase form.

Usage:
    from config.defaults import QueueDefaults

    # In Pydantic Field definitions:
    orders_queue: str = Field(default=QueueDefaults.ORDERS_QUEUE, ...)
"""


# =============================================================================
# STORAGE DEFAULTS
# =============================================================================

class StorageDefaults:
    """
    Azure Storage defaults.

    STORAGE_CONNECTION_SETTING names the app setting that holds the
    connection string. The Functions host uses the same setting for its
    own queue trigger bindings.
    """

    STORAGE_CONNECTION_SETTING = "AzureWebJobsStorage"

    ORDERS_TABLE = "Orders"
    CUSTOMERS_TABLE = "Customers"
    PRODUCT_IMAGES_CONTAINER = "product-images"
    CONTRACTS_SHARE = "contracts"


# =============================================================================
# QUEUE DEFAULTS
# =============================================================================

class QueueDefaults:
    """Storage queue names for the two-stage order relay."""

    ORDERS_QUEUE = "orders"                    # Stage 1: gateway -> seed
    ORDERS_FINALIZE_QUEUE = "orders-finalize"  # Stage 2: seed -> finalize

    # Messages are base64 text, matching the queue trigger's default decoding
    MESSAGE_ENCODING = "base64"


# =============================================================================
# ORDER DEFAULTS
# =============================================================================

class OrderDefaults:
    """Order relay constants."""

    PARTITION_KEY = "ORDER"
    ANONYMOUS_CUSTOMER = "Anonymous"  # Gateway default for blank customer
    UNKNOWN_CUSTOMER = "Unknown"      # Seed default when a message has none

    LIST_DEFAULT_TOP = 25

    RECONCILE_ENABLED = True
    RECONCILE_AFTER_MINUTES = 15
    RECONCILE_BATCH_SIZE = 100
    RECONCILE_SCHEDULE = "0 */10 * * * *"  # Every 10 minutes


class CustomerDefaults:
    """Customer directory constants."""

    PARTITION_KEY = "CUST"


# =============================================================================
# APPLICATION DEFAULTS
# =============================================================================

class AppDefaults:
    """Application-wide defaults."""

    ENVIRONMENT = "dev"
    DEBUG_MODE = False
