# ============================================================================
# CLAUDE CONTEXT - ORDER TABLE REPOSITORY
# ============================================================================
# STATUS: Infrastructure - Azure Table Storage repository for orders
# PURPOSE: Keyed upsert / conditional merge / scan over the Orders table
# EXPORTS: OrderTableRepository
# INTERFACES: IOrderRepository
# PYDANTIC_MODELS: OrderRow
# DEPENDENCIES: azure-data-tables, azure-core
# PATTERNS: Repository, optimistic concurrency (ETag)
# ============================================================================

"""
Order Table Repository.

All orders share the partition "ORDER" and are distinguished by row key
(the order id). Three write paths exist:

    upsert_pending   REPLACE upsert, so a redelivered stage-1 message
                     rewrites the same Pending state instead of failing
    mark_processed   MERGE guarded by the ETag read just before; a changed
                     row raises OrderConcurrencyError
    (no deletes)

Queries use parameterized OData filters; values are never interpolated
into the filter string.
"""

from datetime import datetime
from typing import Dict, Any, List, Optional

from azure.core import MatchConditions
from azure.core.exceptions import HttpResponseError, ResourceModifiedError, ResourceNotFoundError
from azure.data.tables import TableClient, UpdateMode

from core.models import OrderRow, OrderStatus
from exceptions import ContractViolationError, OrderConcurrencyError, OrderStoreError
from infrastructure.interface_repository import IOrderRepository
from util_logger import LoggerFactory, ComponentType

logger = LoggerFactory.create_logger(ComponentType.REPOSITORY, "OrderTableRepository")


class OrderTableRepository(IOrderRepository):
    """
    Orders table access with ETag-checked finalization.
    """

    def __init__(self, table_client: TableClient, partition_key: str = "ORDER"):
        self.table_client = table_client
        self.partition_key = partition_key

    @property
    def table_name(self) -> str:
        return self.table_client.table_name

    # ========================================================================
    # WRITES
    # ========================================================================

    def upsert_pending(self, row: OrderRow) -> OrderRow:
        """
        Insert or replace the row as Pending.

        Args:
            row: Row to write; status is forced to Pending

        Returns:
            The row as written
        """
        pending = row.model_copy(update={'status': OrderStatus.PENDING})
        entity = pending.to_entity(self.partition_key)

        try:
            response = self.table_client.upsert_entity(entity=entity, mode=UpdateMode.REPLACE)
        except HttpResponseError as e:
            logger.error(f"❌ Upsert failed for order {row.order_id}: {e}")
            raise OrderStoreError(f"Failed to upsert order {row.order_id}: {e}") from e

        logger.debug(f"📝 Upserted PENDING order {row.order_id} into {self.table_name}")
        return pending.model_copy(update={'etag': _etag_from(response)})

    def mark_processed(self, row: OrderRow, processed_at: datetime) -> OrderRow:
        """
        Merge Status=Processed and ProcessedUtc, conditional on row.etag.

        Args:
            row: Row as read by get_order (must carry its ETag)
            processed_at: Finalization time

        Returns:
            Updated row with the new ETag

        Raises:
            ContractViolationError: Row was not read through get_order
            OrderConcurrencyError: Row changed or vanished since it was read
            OrderStoreError: Any other table failure
        """
        if not row.etag:
            raise ContractViolationError(
                f"mark_processed requires the ETag from get_order (order {row.order_id})"
            )

        processed = row.model_copy(update={
            'status': OrderStatus.PROCESSED,
            'processed_at': processed_at,
        })
        patch = {
            'PartitionKey': self.partition_key,
            'RowKey': row.order_id,
            'Status': OrderStatus.PROCESSED.value,
            'ProcessedUtc': processed.processed_at,
        }

        try:
            response = self.table_client.update_entity(
                entity=patch,
                mode=UpdateMode.MERGE,
                etag=row.etag,
                match_condition=MatchConditions.IfNotModified,
            )
        except (ResourceModifiedError, ResourceNotFoundError) as e:
            logger.warning(f"⚠️ Conditional merge rejected for order {row.order_id}: {e}")
            raise OrderConcurrencyError(row.order_id) from e
        except HttpResponseError as e:
            if e.status_code == 412:
                logger.warning(f"⚠️ Conditional merge rejected for order {row.order_id} (412)")
                raise OrderConcurrencyError(row.order_id) from e
            logger.error(f"❌ Merge failed for order {row.order_id}: {e}")
            raise OrderStoreError(f"Failed to finalize order {row.order_id}: {e}") from e

        return processed.model_copy(update={'etag': _etag_from(response)})

    # ========================================================================
    # READS
    # ========================================================================

    def get_order(self, order_id: str) -> Optional[OrderRow]:
        """
        Point read by order id.

        Returns:
            OrderRow carrying its ETag, or None when the row does not exist
        """
        try:
            entity = self.table_client.get_entity(partition_key=self.partition_key, row_key=order_id)
        except ResourceNotFoundError:
            return None
        except HttpResponseError as e:
            logger.error(f"❌ Read failed for order {order_id}: {e}")
            raise OrderStoreError(f"Failed to read order {order_id}: {e}") from e

        return OrderRow.from_entity(entity)

    def list_orders(self, status: Optional[OrderStatus] = None) -> List[OrderRow]:
        """
        Scan the order partition.

        Args:
            status: Optional exact status filter

        Returns:
            Rows in table order (callers sort)
        """
        query_filter = "PartitionKey eq @pk"
        parameters: Dict[str, Any] = {'pk': self.partition_key}
        if status is not None:
            if not isinstance(status, OrderStatus):
                raise ContractViolationError(f"status must be OrderStatus, got {type(status).__name__}")
            query_filter += " and Status eq @status"
            parameters['status'] = status.value

        return self._query(query_filter, parameters)

    def list_pending_before(self, cutoff: datetime, limit: int) -> List[OrderRow]:
        """
        Pending rows whose CreatedUtc is earlier than cutoff.

        Args:
            cutoff: Rows created before this instant qualify
            limit: Maximum rows returned
        """
        query_filter = "PartitionKey eq @pk and Status eq @status and CreatedUtc lt @cutoff"
        parameters = {
            'pk': self.partition_key,
            'status': OrderStatus.PENDING.value,
            'cutoff': cutoff,
        }
        return self._query(query_filter, parameters, limit=limit)

    def health_check(self) -> Dict[str, Any]:
        """Read at most one row to prove the table is reachable."""
        pager = self.table_client.query_entities(
            query_filter="PartitionKey eq @pk",
            parameters={'pk': self.partition_key},
            results_per_page=1,
        )
        sample = next(iter(pager), None)
        return {
            'table': self.table_name,
            'reachable': True,
            'empty': sample is None,
        }

    def _query(self, query_filter: str, parameters: Dict[str, Any],
               limit: Optional[int] = None) -> List[OrderRow]:
        rows: List[OrderRow] = []
        try:
            for entity in self.table_client.query_entities(query_filter=query_filter, parameters=parameters):
                rows.append(OrderRow.from_entity(entity))
                if limit is not None and len(rows) >= limit:
                    break
        except HttpResponseError as e:
            logger.error(f"❌ Query failed on {self.table_name}: {e}")
            raise OrderStoreError(f"Failed to query {self.table_name}: {e}") from e

        logger.debug(f"🔍 Query returned {len(rows)} rows from {self.table_name}")
        return rows


def _etag_from(response: Any) -> Optional[str]:
    if isinstance(response, dict):
        return response.get('etag')
    return None
