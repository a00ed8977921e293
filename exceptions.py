"""
Custom Exception Hierarchy

Distinguishes between:
1. Contract Violations (programming bugs that need fixing)
2. Business Logic Failures (expected runtime issues)

Queue consumers let business failures propagate so the Functions host
redelivers the message and eventually moves it to the poison queue.
HTTP triggers map ValueError subclasses to 400 responses.

Exports:
    ContractViolationError, ConfigurationError, BusinessLogicError,
    InvalidOrderMessageError, QueuePublishError, OrderStoreError,
    OrderConcurrencyError, StorageOperationError
"""


class ContractViolationError(TypeError):
    """
    Raised when component contracts are violated (programming bugs).

    These should NEVER be caught and handled - they indicate bugs
    that need to be fixed in the code.

    Examples:
        - Queue repository receives a dict instead of a pydantic model
        - Listing query receives a status that is not an OrderStatus
    """
    pass


class ConfigurationError(RuntimeError):
    """
    Raised when required settings are missing or unusable.

    Example: neither a storage connection string nor a storage account
    name is available.
    """
    pass


class BusinessLogicError(Exception):
    """
    Base class for expected runtime business logic failures.
    """
    pass


class InvalidOrderMessageError(ValueError):
    """
    Order payload could not be decoded.

    Raised for malformed JSON, non-object payloads and fields with the
    wrong type. Subclasses ValueError so HTTP triggers answer 400 and
    queue triggers re-raise into the poison path.
    """
    pass


class QueuePublishError(BusinessLogicError):
    """
    Storage queue send failed.

    Examples:
        - Queue service unavailable
        - Authentication failure
        - Message size exceeded
    """
    pass


class OrderStoreError(BusinessLogicError):
    """
    Orders table read or write failed for a reason other than a
    missing row or an ETag mismatch.
    """
    pass


class OrderConcurrencyError(OrderStoreError):
    """
    Conditional merge rejected because the row changed since it was read.

    The finalize consumer lets this propagate so the message is redelivered
    and the retry re-reads fresh state.
    """

    def __init__(self, order_id: str, message: str = None):
        self.order_id = order_id
        super().__init__(message or f"Order {order_id} was modified concurrently")


class StorageOperationError(BusinessLogicError):
    """
    Blob, file share or customer table operation failed.
    """
    pass
