"""
Azure Functions entry point for the ABC Retail back end.

HTTP endpoints over Azure Storage (tables, queues, blobs, file shares)
plus the asynchronous order relay.

Architecture:
    POST /api/orders/enqueue -> queue "orders" -> seed consumer
        -> Orders table (Pending) + queue "orders-finalize"
        -> finalize consumer -> Orders table (Processed)

    Pending orders that lost their finalize message are re-driven by
    the reconciler timer.

Exports:
    app: Azure Function App instance

Endpoints:
    Core System:
        GET  /api/ping - Liveness probe, plain "OK"
        GET  /api/health - Orders table and queue health

    Orders:
        POST /api/orders/enqueue - Accept an order (202)
        GET  /api/orders?top=&status= - Newest-first listing

    Customers:
        GET  /api/customers - List customers
        POST /api/customers - Create customer (201)
        GET  /api/customers/{partition}/{id} - Get customer

    Storage:
        POST /api/products/images - Upload a product image text blob
        POST /api/contracts/files - Save a contract file to the share

Queue Triggers:
    %OrdersQueueName% (default "orders"): seed consumer
    %OrdersFinalizeQueueName% (default "orders-finalize"): finalize consumer

Timer Triggers:
    Every 10 minutes: pending order reconciler

Environment Variables:
    AzureWebJobsStorage: Storage connection string (Functions runtime + app)
    StorageConnection: Optional connection string or name of the setting holding one
    STORAGE_ACCOUNT_NAME: Account for DefaultAzureCredential when no connection string
    OrdersQueueName / OrdersFinalizeQueueName: Relay queue names
    OrdersTableName / CustomersTableName: Table names
    BlobContainerName / ContractsShareName: Upload targets
    ORDERS_RECONCILE_*: Reconciler settings
"""

# ========================================================================
# IMPORTS - Categorized by source for maintainability
# ========================================================================

# Native Python modules
import logging
from typing import Optional

# Azure SDK modules (3rd party - Microsoft)
import azure.functions as func

# Suppress Azure Identity and Azure SDK authentication/HTTP logging
logging.getLogger("azure.identity").setLevel(logging.WARNING)
logging.getLogger("azure.identity._internal").setLevel(logging.WARNING)
logging.getLogger("azure.core.pipeline.policies.http_logging_policy").setLevel(logging.WARNING)
logging.getLogger("azure.storage").setLevel(logging.WARNING)
logging.getLogger("azure.data.tables").setLevel(logging.WARNING)
logging.getLogger("azure.core").setLevel(logging.WARNING)
logging.getLogger("msal").setLevel(logging.WARNING)  # Microsoft Authentication Library

# Application modules (our code)
from config import get_config
from config.defaults import OrderDefaults, StorageDefaults
from infrastructure import StorageClients
from triggers.container import TriggerContainer
from triggers.ping import ping_handler
from util_logger import LoggerFactory, ComponentType

logger = LoggerFactory.create_logger(ComponentType.TRIGGER, "function_app")


# ========================================================================
# COMPOSITION ROOT
# ========================================================================
# Built on first invocation, not at import: app settings and managed
# identity are only guaranteed once the host is serving triggers.

_container: Optional[TriggerContainer] = None


def get_container() -> TriggerContainer:
    global _container
    if _container is None:
        config = get_config()
        logger.info(f"🏗️ Building trigger container (environment={config.environment})")
        _container = TriggerContainer.build(config, StorageClients.from_config(config.storage))
    return _container


app = func.FunctionApp(http_auth_level=func.AuthLevel.ANONYMOUS)


# ========================================================================
# CORE SYSTEM
# ========================================================================

@app.route(route="ping", methods=["GET"], auth_level=func.AuthLevel.ANONYMOUS)
def ping(req: func.HttpRequest) -> func.HttpResponse:
    """Liveness probe: GET /api/ping (no dependencies)."""
    return ping_handler(req)


@app.route(route="health", methods=["GET"])
def health(req: func.HttpRequest) -> func.HttpResponse:
    """Component health: GET /api/health."""
    return get_container().health.handle_request(req)


# ========================================================================
# ORDERS
# ========================================================================

@app.route(route="orders/enqueue", methods=["POST"], auth_level=func.AuthLevel.FUNCTION)
def orders_enqueue(req: func.HttpRequest) -> func.HttpResponse:
    """Accept an order: POST /api/orders/enqueue -> 202."""
    return get_container().orders_enqueue.handle_request(req)


@app.route(route="orders", methods=["GET"], auth_level=func.AuthLevel.FUNCTION)
def orders_list(req: func.HttpRequest) -> func.HttpResponse:
    """List orders: GET /api/orders?top=25&status=Pending."""
    return get_container().orders_list.handle_request(req)


@app.queue_trigger(
    arg_name="msg",
    queue_name="%OrdersQueueName%",
    connection=StorageDefaults.STORAGE_CONNECTION_SETTING
)
def orders_seed(msg: func.QueueMessage) -> None:
    """Stage 1: upsert Pending row, forward to the finalize queue."""
    get_container().orders_seed.handle(msg)


@app.queue_trigger(
    arg_name="msg",
    queue_name="%OrdersFinalizeQueueName%",
    connection=StorageDefaults.STORAGE_CONNECTION_SETTING
)
def orders_finalize(msg: func.QueueMessage) -> None:
    """Stage 2: conditional merge to Processed."""
    get_container().orders_finalize.handle(msg)


@app.timer_trigger(
    schedule=OrderDefaults.RECONCILE_SCHEDULE,  # Every 10 minutes
    arg_name="timer",
    run_on_startup=False
)
def orders_reconcile_pending(timer: func.TimerRequest) -> None:
    """
    Re-drive orders stuck in Pending.

    Republishes a finalize message for every Pending row older than
    ORDERS_RECONCILE_AFTER_MINUTES (default 15).
    """
    get_container().pending_orders.handle(timer)


# ========================================================================
# CUSTOMERS
# ========================================================================

@app.route(route="customers", methods=["GET"])
def customers_list(req: func.HttpRequest) -> func.HttpResponse:
    return get_container().customers_list.handle_request(req)


@app.route(route="customers", methods=["POST"])
def customers_create(req: func.HttpRequest) -> func.HttpResponse:
    return get_container().customers_create.handle_request(req)


@app.route(route="customers/{partition}/{id}", methods=["GET"])
def customers_get(req: func.HttpRequest) -> func.HttpResponse:
    return get_container().customers_get.handle_request(req)


# ========================================================================
# STORAGE
# ========================================================================

@app.route(route="products/images", methods=["POST"], auth_level=func.AuthLevel.FUNCTION)
def product_image_upload(req: func.HttpRequest) -> func.HttpResponse:
    return get_container().product_image_upload.handle_request(req)


@app.route(route="contracts/files", methods=["POST"], auth_level=func.AuthLevel.FUNCTION)
def contract_file_save(req: func.HttpRequest) -> func.HttpResponse:
    return get_container().contract_file_save.handle_request(req)
