# ============================================================================
# CLAUDE CONTEXT - TRIGGER CONTAINER
# ============================================================================
# STATUS: Trigger layer - Composition root for the object graph
# PURPOSE: Build repositories, services and trigger instances explicitly
# EXPORTS: TriggerContainer
# DEPENDENCIES: config, infrastructure, services, triggers/*
# PATTERNS: Dependency Injection, built once per worker by function_app.py
# ============================================================================
"""
Trigger Container.

Holds every trigger instance the Function App exposes, wired onto one
set of repositories. function_app.py builds it on first invocation
(after app settings are available); tests build it with fake storage
clients.

Usage:
    container = TriggerContainer.build(get_config(), StorageClients.from_config(...))
    container.orders_enqueue.handle_request(req)
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from config import AppConfig
from config.defaults import CustomerDefaults
from infrastructure.factory import RepositoryFactory
from infrastructure.storage_clients import StorageClients
from services.order_pipeline import EnqueueGateway, SeedConsumer, FinalizeConsumer
from services.order_listing import OrderListingQuery
from services.order_reconciler import PendingOrderReconciler
from util_logger import LoggerFactory, ComponentType
from .customers import CustomerListTrigger, CustomerCreateTrigger, CustomerGetTrigger
from .health import HealthCheckTrigger
from .janitor.pending_orders import PendingOrderTimerHandler
from .order_queue import OrderQueueTrigger
from .orders import OrderEnqueueTrigger, OrderListTrigger
from .storage_upload import ProductImageUploadTrigger, ContractFileSaveTrigger

logger = LoggerFactory.create_logger(ComponentType.FACTORY, "TriggerContainer")


@dataclass
class TriggerContainer:
    """Every trigger instance, sharing one set of repositories."""

    repositories: Dict[str, Any]
    orders_enqueue: OrderEnqueueTrigger
    orders_list: OrderListTrigger
    orders_seed: OrderQueueTrigger
    orders_finalize: OrderQueueTrigger
    pending_orders: PendingOrderTimerHandler
    customers_list: CustomerListTrigger
    customers_create: CustomerCreateTrigger
    customers_get: CustomerGetTrigger
    product_image_upload: ProductImageUploadTrigger
    contract_file_save: ContractFileSaveTrigger
    health: HealthCheckTrigger

    @classmethod
    def build(cls, config: AppConfig, clients: StorageClients,
              repositories: Optional[Dict[str, Any]] = None) -> "TriggerContainer":
        """
        Wire the full object graph.

        Args:
            config: Application configuration
            clients: Storage service clients
            repositories: Pre-built repositories (skips RepositoryFactory)
        """
        repos = repositories or RepositoryFactory.create_repositories(clients, config)
        order_repo = repos['order_repo']
        queue_repo = repos['queue_repo']
        customer_repo = repos['customer_repo']

        queues = config.queues
        orders = config.orders

        gateway = EnqueueGateway(queue_repo, queues.orders_queue, orders)
        seed = SeedConsumer(order_repo, queue_repo, queues.orders_finalize_queue, orders)
        finalize = FinalizeConsumer(order_repo)
        reconciler = PendingOrderReconciler(order_repo, queue_repo, queues.orders_finalize_queue, orders)

        container = cls(
            repositories=repos,
            orders_enqueue=OrderEnqueueTrigger(gateway),
            orders_list=OrderListTrigger(OrderListingQuery(order_repo), default_top=orders.list_default_top),
            orders_seed=OrderQueueTrigger("seed", queues.orders_queue, seed),
            orders_finalize=OrderQueueTrigger("finalize", queues.orders_finalize_queue, finalize),
            pending_orders=PendingOrderTimerHandler(reconciler),
            customers_list=CustomerListTrigger(customer_repo),
            customers_create=CustomerCreateTrigger(customer_repo, partition_key=CustomerDefaults.PARTITION_KEY),
            customers_get=CustomerGetTrigger(customer_repo),
            product_image_upload=ProductImageUploadTrigger(
                repos['blob_repo'], config.storage.product_images_container
            ),
            contract_file_save=ContractFileSaveTrigger(repos['file_repo'], config.storage.contracts_share),
            health=HealthCheckTrigger(order_repo, queue_repo, config),
        )
        logger.info("✅ Trigger container built")
        return container
