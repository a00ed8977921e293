"""
Customer Table Repository.

Thin access to the Customers table. Customers are created in the "CUST"
partition with a random uuid row key and read back by (partition, id).

Exports:
    CustomerTableRepository
"""

from typing import List, Optional

from azure.core.exceptions import HttpResponseError, ResourceNotFoundError
from azure.data.tables import TableClient

from core.models import Customer
from exceptions import StorageOperationError
from infrastructure.interface_repository import ICustomerRepository
from util_logger import LoggerFactory, ComponentType

logger = LoggerFactory.create_logger(ComponentType.REPOSITORY, "CustomerTableRepository")


class CustomerTableRepository(ICustomerRepository):

    def __init__(self, table_client: TableClient):
        self.table_client = table_client

    def list_customers(self) -> List[Customer]:
        try:
            return [Customer.from_entity(e) for e in self.table_client.list_entities()]
        except HttpResponseError as e:
            raise StorageOperationError(f"Failed to list customers: {e}") from e

    def create_customer(self, customer: Customer) -> Customer:
        """Insert a new customer row (fails if the key already exists)."""
        try:
            self.table_client.create_entity(entity=customer.to_entity())
        except HttpResponseError as e:
            raise StorageOperationError(f"Failed to create customer {customer.id}: {e}") from e
        logger.info(f"👤 Created customer {customer.partition}/{customer.id}")
        return customer

    def get_customer(self, partition: str, customer_id: str) -> Optional[Customer]:
        try:
            entity = self.table_client.get_entity(partition_key=partition, row_key=customer_id)
        except ResourceNotFoundError:
            return None
        except HttpResponseError as e:
            raise StorageOperationError(f"Failed to read customer {partition}/{customer_id}: {e}") from e
        return Customer.from_entity(entity)
